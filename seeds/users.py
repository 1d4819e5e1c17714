import logging

from models.users import User

logger = logging.getLogger(__name__)

ADMIN = {
    "username": "admin",
    "email": "admin@police.gov",
    "password": "admin123",
    "firstName": "System",
    "lastName": "Administrator",
    "role": "admin",
    "badgeNumber": "ADMIN001",
    "department": "IT",
    "position": "System Administrator",
    "phone": "+1-555-0000",
}


def seed_admin():
    if User.find_by_username(ADMIN["username"]):
        logger.info("Admin user already exists, skipping seed")
        return None
    admin = User.create(dict(ADMIN))
    logger.info("Admin user created")
    return admin
