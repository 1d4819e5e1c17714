from models.base import CollectionModel, require_fields, check_choice

STATUSES = ("Pending", "Under Review", "Approved", "Completed", "Rejected")
PRIORITIES = ("Low", "Medium", "High", "Urgent")


class Report(CollectionModel):
    collection_name = "reports"
    number_field = "reportNumber"
    number_prefix = "RPT"

    @classmethod
    def validate(cls, data):
        require_fields(data, "title", "type")
        cls.validate_patch(data)

    @classmethod
    def validate_patch(cls, patch):
        check_choice(patch, "status", STATUSES)
        check_choice(patch, "priority", PRIORITIES)

    @classmethod
    def prepare(cls, data):
        data["status"] = data.get("status") or "Pending"
        data["priority"] = data.get("priority") or "Medium"
        data.setdefault("content", "")
        return data
