"""
seeds
-----------------
Development data loaded at startup when SEED_DATA is on. Each seeder only
writes into an empty collection, and a failing seeder never stops the app.
"""

import logging

from seeds.users import seed_admin
from seeds.evidence import seed_evidence
from seeds.geofiles import seed_geofiles
from seeds.reports import seed_reports

logger = logging.getLogger(__name__)

SEEDERS = (seed_admin, seed_evidence, seed_geofiles, seed_reports)


def seed_all():
    for seeder in SEEDERS:
        try:
            seeder()
        except Exception as e:
            logger.error("Seeding step %s failed: %s", seeder.__name__, e)
