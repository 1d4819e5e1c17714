from models.base import CollectionModel, require_fields, check_choice, to_object_id, utcnow
from utils.exceptions import ValidationError

STATUSES = ("available", "on_patrol", "responding", "out_of_service")


def parse_location(location):
    """[longitude, latitude] as floats, or ValidationError."""
    if not isinstance(location, (list, tuple)) or len(location) != 2:
        raise ValidationError("Invalid location format. Expected [longitude, latitude]")
    try:
        lng, lat = float(location[0]), float(location[1])
    except (TypeError, ValueError):
        raise ValidationError("Invalid location format. Expected [longitude, latitude]")
    if not (-180 <= lng <= 180 and -90 <= lat <= 90):
        raise ValidationError("Location out of range")
    return [lng, lat]


class PoliceVehicle(CollectionModel):
    collection_name = "police_vehicles"

    @classmethod
    def validate(cls, data):
        require_fields(data, "vehicleId")
        cls.validate_patch(data)

    @classmethod
    def validate_patch(cls, patch):
        check_choice(patch, "status", STATUSES)
        if patch.get("location") is not None:
            patch["location"] = parse_location(patch["location"])

    @classmethod
    def prepare(cls, data):
        data["status"] = data.get("status") or "available"
        return data

    @classmethod
    def find_by_vehicle_id(cls, vehicle_id):
        return cls.collection().find_one({"vehicleId": vehicle_id})

    @classmethod
    def find_by_status(cls, status):
        return cls.find_all({"status": status})

    @classmethod
    def update_location(cls, vehicle_id, location):
        oid = to_object_id(vehicle_id)
        location = parse_location(location)
        if oid is None:
            return False
        now = utcnow()
        result = cls.collection().update_one(
            {"_id": oid},
            {"$set": {"location": location, "lastLocationUpdate": now, "updatedAt": now}}
        )
        return result.matched_count > 0

    @classmethod
    def update_status(cls, vehicle_id, status):
        if status not in STATUSES:
            raise ValidationError(f"Invalid status. Must be one of: {', '.join(STATUSES)}")
        return cls.update(vehicle_id, {"status": status})
