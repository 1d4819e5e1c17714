import logging

from pymongo import ASCENDING

from models.base import CollectionModel, require_fields, check_choice, parse_flag, to_object_id, utcnow

logger = logging.getLogger(__name__)

TYPES = ("Physical", "Digital", "Document", "Photo", "Video", "Audio", "Other")
STATUSES = ("Collected", "Analyzed", "Stored", "Released", "Disposed", "Missing")
CONDITIONS = ("Excellent", "Good", "Fair", "Poor", "Damaged")
PRIORITIES = ("Low", "Medium", "High", "Critical")
MEDIA_TYPES = ("photo", "video", "audio", "document")
FLAGS = ("isSealed", "bagsSealed", "photographed", "fingerprinted", "dnaCollected")


class CustodyEntry:
    """One chain-of-custody step. ``action`` is free text ('collected', 'transferred', ...)."""

    def __init__(self, action, officer, notes=None, location=None, timestamp=None):
        self.action = action
        self.officer = officer
        self.notes = notes or ""
        self.location = location or ""
        self.timestamp = timestamp or utcnow()

    def to_dict(self):
        return {
            "action": self.action,
            "officer": self.officer,
            "timestamp": self.timestamp,
            "notes": self.notes,
            "location": self.location
        }


class Evidence(CollectionModel):
    collection_name = "evidence"
    number_field = "evidenceNumber"
    number_prefix = "EVD"
    number_length = 8

    # The custody log only grows through add_custody_entry
    protected_fields = ("_id", "id", "createdAt", "custodyLog", "evidenceNumber")

    @classmethod
    def validate(cls, data):
        require_fields(data, "type", "description", "location")
        cls.validate_patch(data)

    @classmethod
    def validate_patch(cls, patch):
        check_choice(patch, "type", TYPES)
        check_choice(patch, "status", STATUSES)
        check_choice(patch, "condition", CONDITIONS)
        check_choice(patch, "priority", PRIORITIES)
        for flag in FLAGS:
            if flag in patch:
                patch[flag] = parse_flag(patch[flag])

    @classmethod
    def prepare(cls, data):
        data["collectedBy"] = data.get("collectedBy") or "Unknown Officer"
        data["custodyLog"] = [
            CustodyEntry(
                action="collected",
                officer=data["collectedBy"],
                notes="Initial evidence collection",
                location=data.get("location") or "Unknown Location"
            ).to_dict()
        ]
        data["media"] = data.get("media") or []
        data["tags"] = data.get("tags") or []
        data["priority"] = data.get("priority") or "Medium"
        data["condition"] = data.get("condition") or "Good"
        data["status"] = data.get("status") or "Collected"
        data["collectedAt"] = data.get("collectedAt") or utcnow()
        for flag in FLAGS:
            data[flag] = parse_flag(data.get(flag, False))
        return data

    @classmethod
    def find_by_evidence_number(cls, evidence_number):
        return cls.collection().find_one({"evidenceNumber": evidence_number})

    @classmethod
    def find_by_case_id(cls, case_id):
        return cls.find_all({"caseId": case_id})

    @classmethod
    def find_by_ob_id(cls, ob_id):
        return cls.find_all({"obId": ob_id})

    @classmethod
    def find_by_status(cls, status):
        return cls.find_all({"status": status})

    @classmethod
    def find_by_type(cls, evidence_type):
        return cls.find_all({"type": evidence_type})

    # Append a custody step. No ordering rules are enforced on ``action``.
    @classmethod
    def add_custody_entry(cls, evidence_id, entry):
        oid = to_object_id(evidence_id)
        if oid is None:
            return False
        if isinstance(entry, dict):
            entry = CustodyEntry(
                action=entry.get("action"),
                officer=entry.get("officer"),
                notes=entry.get("notes"),
                location=entry.get("location")
            )
        result = cls.collection().update_one(
            {"_id": oid},
            {
                "$push": {"custodyLog": entry.to_dict()},
                "$set": {"updatedAt": utcnow()}
            }
        )
        return result.matched_count > 0

    @classmethod
    def add_media(cls, evidence_id, media_files):
        oid = to_object_id(evidence_id)
        if oid is None:
            return False
        if isinstance(media_files, dict):
            media_files = [media_files]
        now = utcnow()
        items = []
        for media in media_files:
            item = dict(media)
            item.setdefault("uploadedAt", now)
            item["uploadedBy"] = item.get("uploadedBy") or "Unknown"
            items.append(item)
        result = cls.collection().update_one(
            {"_id": oid},
            {
                "$push": {"media": {"$each": items}},
                "$set": {"updatedAt": now}
            }
        )
        return result.matched_count > 0

    @classmethod
    def get_stats(cls):
        by_status = cls.collection().aggregate([
            {"$group": {"_id": "$status", "count": {"$sum": 1}}},
            {"$sort": {"_id": ASCENDING}}
        ])
        by_type = cls.collection().aggregate([
            {"$group": {"_id": "$type", "count": {"$sum": 1}}},
            {"$sort": {"_id": ASCENDING}}
        ])
        return {
            "total": cls.count(),
            "byStatus": [{"status": s["_id"], "count": s["count"]} for s in by_status],
            "byType": [{"type": t["_id"], "count": t["count"]} for t in by_type]
        }
