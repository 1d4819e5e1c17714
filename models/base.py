"""
models/base.py
-----------------
Shared behaviour of the collection models: timestamps, id handling,
reference-number generation and the basic insert/find/update/delete calls.
"""

import logging
from datetime import datetime, timezone

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import DESCENDING
from pymongo.errors import DuplicateKeyError

from utils.db import mongo
from utils.exceptions import ValidationError
from utils.numbers import generate_reference_number

logger = logging.getLogger(__name__)

NUMBER_ATTEMPTS = 5


def utcnow():
    # Naive UTC, which is what pymongo hands back when reading dates
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_object_id(value):
    """ObjectId for a 24-char hex id, None for anything else."""
    if isinstance(value, ObjectId):
        return value
    try:
        return ObjectId(str(value))
    except (InvalidId, TypeError):
        return None


def serialize(doc):
    """Copy of a stored document with ``_id`` as a string plus an ``id`` alias."""
    if doc is None:
        return None
    out = dict(doc)
    if "_id" in out:
        out["_id"] = str(out["_id"])
        out["id"] = out["_id"]
    return out


def parse_date(value, field="date"):
    """Parse an ISO date/datetime string from a query parameter."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        raise ValidationError(f"Invalid {field}: {value}")
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def parse_flag(value):
    """Boolean from JSON or form input, where forms send "true"/"false" strings."""
    return value in (True, "true", "True", "1", 1)


def require_fields(data, *fields):
    missing = [f for f in fields if data.get(f) in (None, "") or (isinstance(data.get(f), str) and not data.get(f).strip())]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")


def check_choice(data, field, choices):
    value = data.get(field)
    if value is not None and value not in choices:
        raise ValidationError(f"Invalid {field}. Must be one of: {', '.join(choices)}")


class CollectionModel:
    collection_name = None

    # Reference number settings, e.g. caseNumber / CASE / 6
    number_field = None
    number_prefix = None
    number_length = 6

    # Never written by update()
    protected_fields = ("_id", "id", "createdAt")

    @classmethod
    def collection(cls):
        return mongo.db[cls.collection_name]

    # Hooks ------------------------------------------------------------

    @classmethod
    def validate(cls, data):
        pass

    @classmethod
    def validate_patch(cls, patch):
        pass

    @classmethod
    def prepare(cls, data):
        return data

    # CRUD -------------------------------------------------------------

    @classmethod
    def create(cls, data):
        doc = dict(data)
        doc.pop("_id", None)
        doc.pop("id", None)
        cls.validate(doc)
        doc = cls.prepare(doc)

        now = utcnow()
        doc["createdAt"] = now
        doc["updatedAt"] = now

        generated = bool(cls.number_field) and not doc.get(cls.number_field)
        attempts = NUMBER_ATTEMPTS if generated else 1
        for attempt in range(attempts):
            if generated:
                doc[cls.number_field] = generate_reference_number(cls.number_prefix, cls.number_length)
            try:
                result = cls.collection().insert_one(doc)
                break
            except DuplicateKeyError:
                # insert_one sets _id on the dict even when the write fails
                doc.pop("_id", None)
                if attempt == attempts - 1:
                    raise
                logger.warning("%s %s collided, regenerating", cls.number_field, doc.get(cls.number_field))

        logger.info("Inserted %s document %s", cls.collection_name, result.inserted_id)
        return cls.collection().find_one({"_id": result.inserted_id})

    @classmethod
    def find_by_id(cls, doc_id):
        oid = to_object_id(doc_id)
        if oid is None:
            return None
        return cls.collection().find_one({"_id": oid})

    @classmethod
    def find_all(cls, query=None, limit=0):
        cursor = cls.collection().find(query or {}).sort("createdAt", DESCENDING)
        if limit:
            cursor = cursor.limit(limit)
        return list(cursor)

    @classmethod
    def count(cls, query=None):
        return cls.collection().count_documents(query or {})

    @classmethod
    def clean_update(cls, data):
        return {k: v for k, v in data.items() if k not in cls.protected_fields}

    @classmethod
    def update(cls, doc_id, data):
        """$set the patch. Returns False when no document has that id."""
        oid = to_object_id(doc_id)
        if oid is None:
            return False
        patch = cls.clean_update(dict(data))
        cls.validate_patch(patch)
        patch["updatedAt"] = utcnow()
        result = cls.collection().update_one({"_id": oid}, {"$set": patch})
        return result.matched_count > 0

    @classmethod
    def delete(cls, doc_id):
        oid = to_object_id(doc_id)
        if oid is None:
            return False
        result = cls.collection().delete_one({"_id": oid})
        return result.deleted_count > 0
