from models.base import CollectionModel, require_fields, check_choice

STATUSES = ("Active", "Suspended", "Expired")


def normalize_plate(plate_number):
    return " ".join(str(plate_number).upper().split())


class LicensePlate(CollectionModel):
    collection_name = "license_plates"

    @classmethod
    def validate(cls, data):
        require_fields(data, "plateNumber")
        check_choice(data, "status", STATUSES)

    @classmethod
    def validate_patch(cls, patch):
        check_choice(patch, "status", STATUSES)
        if "plateNumber" in patch:
            require_fields(patch, "plateNumber")
            patch["plateNumber"] = normalize_plate(patch["plateNumber"])

    @classmethod
    def prepare(cls, data):
        data["plateNumber"] = normalize_plate(data["plateNumber"])
        data["status"] = data.get("status") or "Active"
        return data

    @classmethod
    def find_by_plate_number(cls, plate_number):
        return cls.collection().find_one({"plateNumber": normalize_plate(plate_number)})

    @classmethod
    def find_by_status(cls, status):
        return cls.find_all({"status": status})
