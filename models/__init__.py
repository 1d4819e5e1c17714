# models/__init__.py

from .users import User
from .cases import Case
from .ob_entries import OBEntry
from .license_plates import LicensePlate
from .evidence import Evidence, CustodyEntry
from .geofiles import Geofile
from .officers import Officer
from .profiles import Profile
from .reports import Report
from .vehicles import PoliceVehicle
from .password_reset import PasswordResetToken

__all__ = [
    "User",
    "Case",
    "OBEntry",
    "LicensePlate",
    "Evidence",
    "CustodyEntry",
    "Geofile",
    "Officer",
    "Profile",
    "Report",
    "PoliceVehicle",
    "PasswordResetToken"
]
