"""
utils/db.py
-----------------
This module initializes and manages the MongoDB connection
for the entire Flask application.
"""

import logging
import re

from flask_pymongo import PyMongo
from pymongo import ASCENDING

from utils.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

# Create a global MongoDB instance
mongo = PyMongo()


def mask_mongo_uri(uri):
    """Hide the password part of a connection string for logging."""
    if not uri:
        return "[NOT SET]"
    return re.sub(r"://([^:/@]+):([^@]+)@", r"://\1:***@", uri)


def init_db_connection(app):
    """
    Initialize MongoDB connection with Flask app.
    Loads settings from app.config (MONGO_URI, MONGO_DBNAME).
    """
    uri = app.config.get("MONGO_URI")
    if not uri:
        raise ConfigurationError("MONGODB_URI is required! Please set it in your environment or .env file.")

    logger.info("Connecting to MongoDB at %s", mask_mongo_uri(uri))
    mongo.init_app(app, uri=uri)

    # URIs without a database path (common for Atlas) fall back to MONGO_DBNAME
    if mongo.db is None:
        mongo.db = mongo.cx[app.config.get("MONGO_DBNAME", "police")]

    logger.info("MongoDB connection initialized (database: %s)", mongo.db.name)
    return mongo


def ensure_indexes(db=None):
    """Create the unique and lookup indexes the models rely on."""
    db = db if db is not None else mongo.db

    db.users.create_index([("username", ASCENDING)], unique=True)
    db.users.create_index([("email", ASCENDING)], unique=True, sparse=True)
    db.cases.create_index([("caseNumber", ASCENDING)], unique=True, sparse=True)
    db.ob_entries.create_index([("obNumber", ASCENDING)], unique=True, sparse=True)
    db.evidence.create_index([("evidenceNumber", ASCENDING)], unique=True)
    db.evidence.create_index([("caseId", ASCENDING)])
    db.evidence.create_index([("obId", ASCENDING)])
    db.license_plates.create_index([("plateNumber", ASCENDING)], unique=True, sparse=True)
    db.officers.create_index([("badgeNumber", ASCENDING)], unique=True, sparse=True)
    db.reports.create_index([("reportNumber", ASCENDING)], unique=True, sparse=True)
    db.geofiles.create_index([("tags", ASCENDING)])
    db.password_reset_tokens.create_index([("token", ASCENDING)])

    logger.info("MongoDB indexes ensured")
