"""
config.py
-----------------
Application settings, read from the environment (and a local .env file).
"""

import os
from datetime import timedelta

from dotenv import load_dotenv

load_dotenv()


def _flag(name, default):
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Config:
    # MongoDB
    MONGO_URI = os.getenv("MONGODB_URI") or os.getenv("MONGO_URI")
    MONGO_DBNAME = os.getenv("MONGO_DBNAME", "police")

    # Session cookie
    SECRET_KEY = os.getenv("SESSION_SECRET", "police-management-secret-key")
    SESSION_COOKIE_NAME = "police.sid"
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = "Lax"
    SESSION_COOKIE_SECURE = False
    PERMANENT_SESSION_LIFETIME = timedelta(hours=24)

    PORT = int(os.getenv("PORT", "5000"))

    # Uploads
    UPLOAD_FOLDER = os.getenv("UPLOAD_FOLDER", os.path.join(os.getcwd(), "uploads"))
    MAX_CONTENT_LENGTH = 50 * 1024 * 1024
    GEOFILE_MAX_SIZE = 50 * 1024 * 1024
    MEDIA_MAX_SIZE = 10 * 1024 * 1024

    # Browser origins allowed to call the API with the session cookie. "*" reflects the caller.
    CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

    # Built single-page client, served for non-API paths when set
    CLIENT_BUILD_DIR = os.getenv("CLIENT_BUILD_DIR")

    SEED_DATA = _flag("SEED_DATA", True)
    EXPOSE_RESET_TOKEN = _flag("EXPOSE_RESET_TOKEN", True)
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


class TestingConfig(Config):
    TESTING = True
    MONGO_URI = "mongodb://localhost:27017/police_test"
    SECRET_KEY = "test-secret"
    SEED_DATA = False
