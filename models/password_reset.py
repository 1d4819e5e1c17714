import secrets
from datetime import timedelta

from models.base import utcnow
from utils.db import mongo

TOKEN_LIFETIME = timedelta(hours=1)


class PasswordResetToken:

    @staticmethod
    def collection():
        return mongo.db.password_reset_tokens

    @staticmethod
    def create(user_id):
        token = secrets.token_hex(32)
        now = utcnow()
        PasswordResetToken.collection().insert_one({
            "token": token,
            "userId": str(user_id),
            "createdAt": now,
            "expiresAt": now + TOKEN_LIFETIME
        })
        return token

    # Returns the token document if it exists and has not expired
    @staticmethod
    def find_valid(token):
        if not token:
            return None
        record = PasswordResetToken.collection().find_one({"token": token})
        if not record:
            return None
        if record["expiresAt"] < utcnow():
            PasswordResetToken.delete(token)
            return None
        return record

    @staticmethod
    def delete(token):
        PasswordResetToken.collection().delete_many({"token": token})
