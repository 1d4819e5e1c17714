from models.base import CollectionModel

# Copied from the user document when a profile is first created
USER_FIELDS = ("username", "firstName", "lastName", "email", "badgeNumber",
               "department", "position", "phone", "role", "isActive", "lastLoginAt")

# Never changed through the profile form
LOCKED_FIELDS = ("password", "_id", "id", "userId")


class Profile(CollectionModel):
    collection_name = "profiles"
    protected_fields = ("_id", "id", "createdAt", "password")

    @classmethod
    def find_by_user_id(cls, user_id):
        return cls.collection().find_one({"userId": str(user_id)})

    @classmethod
    def find_by_username(cls, username):
        return cls.collection().find_one({"username": username})

    @classmethod
    def get_or_create_for_user(cls, user):
        profile = cls.find_by_user_id(user["_id"])
        if profile:
            return profile
        data = {"userId": str(user["_id"])}
        for field in USER_FIELDS:
            data[field] = user.get(field, "")
        data["department"] = data["department"] or "Police Department"
        data["position"] = data["position"] or user.get("role") or "Officer"
        return cls.create(data)

    @classmethod
    def update_for_user(cls, user, data):
        patch = {k: v for k, v in data.items() if k not in LOCKED_FIELDS}
        profile = cls.find_by_user_id(user["_id"])
        if profile is None:
            base = {
                "userId": str(user["_id"]),
                "username": user.get("username"),
                "role": user.get("role"),
                "isActive": user.get("isActive", True),
            }
            base.update(patch)
            return cls.create(base)
        cls.update(profile["_id"], patch)
        return cls.find_by_id(profile["_id"])
