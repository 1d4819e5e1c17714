"""
utils/uploads.py
-----------------
Saving multipart uploads under UPLOAD_FOLDER with an extension allow-list
and a per-file size ceiling.
"""

import logging
import os
import secrets
import time

from flask import current_app
from werkzeug.utils import secure_filename

from utils.exceptions import ValidationError

logger = logging.getLogger(__name__)

GEOFILE_EXTENSIONS = {".shp", ".kml", ".geojson", ".csv", ".gpx", ".kmz", ".gml"}
MEDIA_EXTENSIONS = {".jpeg", ".jpg", ".png", ".gif", ".mp4", ".avi", ".mov", ".pdf", ".doc", ".docx"}


def file_extension(filename):
    return os.path.splitext(filename or "")[1].lower()


def upload_folder():
    folder = current_app.config["UPLOAD_FOLDER"]
    os.makedirs(folder, exist_ok=True)
    return folder


def file_size(storage):
    stream = storage.stream
    position = stream.tell()
    stream.seek(0, os.SEEK_END)
    size = stream.tell()
    stream.seek(position)
    return size


def check_upload(storage, allowed_extensions, max_size):
    """Extension and size checks for one werkzeug FileStorage. Returns the size in bytes."""
    original = storage.filename or ""
    ext = file_extension(original)
    if ext not in allowed_extensions:
        raise ValidationError(
            f"Invalid file type '{ext or original}'. Allowed: {', '.join(sorted(allowed_extensions))}"
        )

    size = file_size(storage)
    if size > max_size:
        raise ValidationError(f"File too large. Maximum size is {max_size // (1024 * 1024)}MB")
    return size


def save_upload(storage, allowed_extensions, max_size, field="file"):
    """
    Validate and store one werkzeug FileStorage.
    Returns (stored_filename, size_in_bytes).
    """
    size = check_upload(storage, allowed_extensions, max_size)
    ext = file_extension(storage.filename)
    # Stored as field-timestamp-random.ext
    stored_name = secure_filename(f"{field}-{int(time.time() * 1000)}-{secrets.randbelow(10 ** 9)}{ext}")
    storage.save(os.path.join(upload_folder(), stored_name))
    return stored_name, size


def media_kind(mimetype):
    mimetype = mimetype or ""
    if mimetype.startswith("image/"):
        return "photo"
    if mimetype.startswith("video/"):
        return "video"
    if mimetype.startswith("audio/"):
        return "audio"
    return "document"


def save_uploads(files, allowed_extensions, max_size, field="file"):
    """
    Store a batch of uploads. Every file is checked before any is written,
    and files already stored are removed again if a later save fails.
    Returns a list of (storage, stored_filename, size).
    """
    for storage in files:
        check_upload(storage, allowed_extensions, max_size)

    saved = []
    try:
        for storage in files:
            stored_name, size = save_upload(storage, allowed_extensions, max_size, field=field)
            saved.append((storage, stored_name, size))
    except Exception:
        remove_uploads([name for _, name, _ in saved])
        raise
    return saved


def remove_uploads(stored_names):
    folder = current_app.config["UPLOAD_FOLDER"]
    for name in stored_names:
        path = os.path.join(folder, name)
        if os.path.exists(path):
            os.remove(path)
            logger.info("Removed stored upload %s", name)
