"""
Password hashing helpers.

New and migrated accounts store a bcrypt hash. Older records may still hold
a plaintext password; those are accepted once and re-hashed by the caller.
"""

import hmac

import bcrypt

BCRYPT_ROUNDS = 10
_BCRYPT_PREFIXES = ("$2a$", "$2b$", "$2y$")


def hash_password(password):
    salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def is_bcrypt_hash(stored):
    return isinstance(stored, str) and stored.startswith(_BCRYPT_PREFIXES)


def check_password(stored, password):
    """
    Returns a tuple ``(valid, needs_rehash)``.

    ``needs_rehash`` is True when the stored value was a legacy plaintext
    password that matched.
    """
    if not stored or not isinstance(password, str):
        return False, False

    if is_bcrypt_hash(stored):
        try:
            return bcrypt.checkpw(password.encode("utf-8"), stored.encode("utf-8")), False
        except ValueError:
            return False, False

    matched = hmac.compare_digest(str(stored).encode("utf-8"), password.encode("utf-8"))
    return matched, matched
