import logging
import re

from models.base import CollectionModel, utcnow, to_object_id
from utils.exceptions import ConflictError, ValidationError
from utils.passwords import hash_password, check_password

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"\S+@\S+\.\S+")
MIN_PASSWORD_LENGTH = 6
ROLES = ("admin", "user")
OPTIONAL_FIELDS = ("badgeNumber", "department", "position", "phone")


class User(CollectionModel):
    collection_name = "users"

    @classmethod
    def validate(cls, data):
        missing = [f for f in ("username", "email", "password", "firstName", "lastName") if not data.get(f)]
        if missing:
            raise ValidationError(
                "Missing required fields: username, email, password, firstName, lastName",
                details=", ".join(missing),
            )
        validate_password(data["password"])
        if not EMAIL_PATTERN.search(data["email"]):
            raise ValidationError("Invalid email format")
        role = data.get("role", "user")
        if role not in ROLES:
            raise ValidationError(f"Invalid role. Must be one of: {', '.join(ROLES)}")

    @classmethod
    def validate_patch(cls, patch):
        if "password" in patch:
            validate_password(patch["password"])
        if patch.get("email") and not EMAIL_PATTERN.search(patch["email"]):
            raise ValidationError("Invalid email format")
        if "role" in patch and patch["role"] not in ROLES:
            raise ValidationError(f"Invalid role. Must be one of: {', '.join(ROLES)}")

    @classmethod
    def prepare(cls, data):
        doc = {
            "username": data["username"],
            "email": data["email"],
            "password": hash_password(data["password"]),
            "firstName": data["firstName"],
            "lastName": data["lastName"],
            "role": data.get("role", "user"),
            "isActive": data.get("isActive", True),
        }
        for field in OPTIONAL_FIELDS:
            if data.get(field):
                doc[field] = data[field]
        return doc

    # Register a new account. Duplicate username/email is rejected before insert.
    @classmethod
    def register(cls, data):
        cls.validate(data)
        if cls.find_by_username(data["username"]):
            raise ConflictError("Username already exists")
        if cls.find_by_email(data["email"]):
            raise ConflictError("Email already exists")
        return cls.create(data)

    # Find user by username
    @classmethod
    def find_by_username(cls, username):
        if not username:
            return None
        return cls.collection().find_one({"username": username})

    # Find user by email
    @classmethod
    def find_by_email(cls, email):
        if not email:
            return None
        return cls.collection().find_one({"email": email})

    @classmethod
    def update(cls, doc_id, data):
        patch = dict(data)
        if patch.get("password"):
            validate_password(patch["password"])
            patch["password"] = hash_password(patch["password"])
        else:
            patch.pop("password", None)

        oid = to_object_id(doc_id)
        for field in ("username", "email"):
            if patch.get(field):
                other = cls.collection().find_one({field: patch[field]})
                if other and other["_id"] != oid:
                    raise ConflictError(f"{field.capitalize()} already exists")
        return super().update(doc_id, patch)

    # Verify password; legacy plaintext passwords are re-hashed on success
    @classmethod
    def verify_password(cls, username, password):
        user = cls.find_by_username(username)
        if not user:
            return None

        valid, needs_rehash = check_password(user.get("password"), password)
        if not valid:
            return None

        if needs_rehash:
            logger.info("Upgrading legacy password for user %s to bcrypt", username)
            cls.collection().update_one(
                {"_id": user["_id"]},
                {"$set": {"password": hash_password(password), "updatedAt": utcnow()}}
            )
        return user

    @classmethod
    def set_password(cls, user_id, password):
        validate_password(password)
        oid = to_object_id(user_id)
        if oid is None:
            return False
        result = cls.collection().update_one(
            {"_id": oid},
            {"$set": {"password": hash_password(password), "updatedAt": utcnow()}}
        )
        return result.matched_count > 0

    @classmethod
    def touch_last_login(cls, user_id):
        now = utcnow()
        cls.collection().update_one({"_id": user_id}, {"$set": {"lastLoginAt": now}})
        return now

    @staticmethod
    def public(user):
        """User document without the password, with a string id."""
        if user is None:
            return None
        out = {k: v for k, v in user.items() if k != "password"}
        if "_id" in out:
            out["_id"] = str(out["_id"])
            out["id"] = out["_id"]
        out.setdefault("role", "user")
        out.setdefault("isActive", True)
        return out


def validate_password(password):
    if not isinstance(password, str) or len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long")
