from models.base import CollectionModel, require_fields, utcnow


class OBEntry(CollectionModel):
    """Occurrence book entry: an incident logged at the desk, distinct from a case."""
    collection_name = "ob_entries"
    number_field = "obNumber"
    number_prefix = "OB"

    @classmethod
    def validate(cls, data):
        require_fields(data, "type", "description")

    @classmethod
    def prepare(cls, data):
        now = utcnow()
        if not data.get("dateTime"):
            data["dateTime"] = now.isoformat(timespec="seconds") + "Z"
        if not data.get("date"):
            data["date"] = now.strftime("%Y-%m-%d")
        if not data.get("time"):
            data["time"] = now.strftime("%H:%M:%S")
        data["status"] = data.get("status") or "Pending"
        data["officer"] = data.get("officer") or "Duty Officer"
        return data

    @classmethod
    def find_by_date_range(cls, start=None, end=None, status=None):
        query = {}
        if start or end:
            query["createdAt"] = {}
            if start:
                query["createdAt"]["$gte"] = start
            if end:
                query["createdAt"]["$lte"] = end
        if status:
            query["status"] = status
        return cls.find_all(query)
