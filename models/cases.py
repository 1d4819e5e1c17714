from models.base import CollectionModel, require_fields, check_choice

PRIORITIES = ("Low", "Medium", "High", "Critical")
STATUSES = ("Open", "In Progress", "Closed", "Suspended")


class Case(CollectionModel):
    collection_name = "cases"
    number_field = "caseNumber"
    number_prefix = "CASE"

    @classmethod
    def validate(cls, data):
        require_fields(data, "title", "type")
        cls.validate_patch(data)

    @classmethod
    def validate_patch(cls, patch):
        check_choice(patch, "priority", PRIORITIES)
        check_choice(patch, "status", STATUSES)

    @classmethod
    def prepare(cls, data):
        data["priority"] = data.get("priority") or "Medium"
        data["status"] = data.get("status") or "Open"
        return data

    @classmethod
    def find_by_status(cls, status):
        return cls.find_all({"status": status})

    @classmethod
    def find_by_officer(cls, officer_id):
        return cls.find_all({"assignedOfficer": officer_id})
