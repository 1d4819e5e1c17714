from models.base import CollectionModel, require_fields


class Officer(CollectionModel):
    collection_name = "officers"
    number_field = "badgeNumber"
    number_prefix = "OFC"

    @classmethod
    def validate(cls, data):
        require_fields(data, "firstName", "lastName")

    @classmethod
    def prepare(cls, data):
        data["status"] = data.get("status") or "active"
        return data

    @classmethod
    def find_by_badge_number(cls, badge_number):
        return cls.collection().find_one({"badgeNumber": badge_number})

    @classmethod
    def find_by_department(cls, department):
        return cls.find_all({"department": department})
