"""
models/geofiles.py
-----------------
Uploaded geographic data files (shapefile, KML, GeoJSON, CSV, GPX, ...)
with location metadata.

Older records keep ``tags``/``metadata``/``coordinates`` as JSON strings;
reads always hand back structured values.
"""

import json
import logging
import math
import re

from pymongo import ASCENDING

from models.base import CollectionModel, require_fields, check_choice, parse_flag, to_object_id, utcnow
from utils.exceptions import ValidationError

logger = logging.getLogger(__name__)

FILE_TYPES = ("shp", "kml", "geojson", "csv", "gpx", "kmz", "gml")
ACCESS_LEVELS = ("internal", "department", "public")
SEARCH_FIELDS = ("filename", "description", "address", "locationName")
EARTH_RADIUS_M = 6371000.0


def parse_tags(value):
    """Tags as a list. Accepts a list, a JSON array string or a comma separated string."""
    if value is None or value == "":
        return []
    if isinstance(value, (list, tuple)):
        return [str(t).strip() for t in value if str(t).strip()]
    if isinstance(value, str):
        try:
            parsed = json.loads(value)
        except ValueError:
            parsed = value.split(",")
        if isinstance(parsed, str):
            parsed = [parsed]
        if isinstance(parsed, list):
            return [str(t).strip() for t in parsed if str(t).strip()]
    raise ValidationError("Tags must be an array")


def parse_metadata(value):
    if value is None or value == "":
        return {}
    if isinstance(value, dict):
        return value
    if isinstance(value, str):
        try:
            parsed = json.loads(value)
        except ValueError:
            raise ValidationError("Metadata must be a JSON object")
        if isinstance(parsed, dict):
            return parsed
    raise ValidationError("Metadata must be a JSON object")


def parse_coordinates(value):
    """[lng, lat] pair or None."""
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except ValueError:
            return None
    if isinstance(value, (list, tuple)) and len(value) == 2:
        try:
            return [float(value[0]), float(value[1])]
        except (TypeError, ValueError):
            return None
    return None


def haversine_m(lat1, lng1, lat2, lng2):
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlmb = math.radians(lng2 - lng1)
    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlmb / 2) ** 2
    return 2 * EARTH_RADIUS_M * math.asin(math.sqrt(a))


def normalize(doc):
    """Stored geofile with structured tags/metadata and a string id."""
    if doc is None:
        return None
    out = dict(doc)
    out["_id"] = str(out["_id"])
    out["id"] = out["_id"]
    try:
        out["tags"] = parse_tags(out.get("tags"))
    except ValidationError:
        out["tags"] = []
    try:
        out["metadata"] = parse_metadata(out.get("metadata"))
    except ValidationError:
        out["metadata"] = {}
    return out


def build_query(filters):
    """Mongo query for the list filters: search, fileType, accessLevel, tags, dateFrom/dateTo."""
    filters = filters or {}
    query = {}

    search = filters.get("search")
    if search:
        pattern = {"$regex": re.escape(search), "$options": "i"}
        query["$or"] = [{field: pattern} for field in SEARCH_FIELDS]

    if filters.get("fileType"):
        query["fileType"] = {"$regex": f"^{re.escape(filters['fileType'])}$", "$options": "i"}

    if filters.get("accessLevel"):
        query["accessLevel"] = filters["accessLevel"]

    tags = filters.get("tags")
    if tags:
        query["tags"] = {"$in": list(tags)}

    date_from, date_to = filters.get("dateFrom"), filters.get("dateTo")
    if date_from or date_to:
        query["createdAt"] = {}
        if date_from:
            query["createdAt"]["$gte"] = date_from
        if date_to:
            query["createdAt"]["$lte"] = date_to

    return query


class Geofile(CollectionModel):
    collection_name = "geofiles"

    @classmethod
    def validate(cls, data):
        require_fields(data, "filename", "fileType")
        if str(data["fileType"]).lower() not in FILE_TYPES:
            raise ValidationError("Invalid file type. Allowed types: " + ", ".join(FILE_TYPES))
        check_choice(data, "accessLevel", ACCESS_LEVELS)

    @classmethod
    def validate_patch(cls, patch):
        check_choice(patch, "accessLevel", ACCESS_LEVELS)
        if "isPublic" in patch:
            patch["isPublic"] = parse_flag(patch["isPublic"])
        if "tags" in patch:
            patch["tags"] = parse_tags(patch["tags"])
        if "metadata" in patch:
            patch["metadata"] = parse_metadata(patch["metadata"])

    @classmethod
    def prepare(cls, data):
        data["downloadCount"] = int(data.get("downloadCount") or 0)
        data["lastAccessedAt"] = data.get("lastAccessedAt") or utcnow()
        data["isPublic"] = parse_flag(data.get("isPublic"))
        data["accessLevel"] = data.get("accessLevel") or "internal"
        data["tags"] = parse_tags(data.get("tags"))
        data["metadata"] = parse_metadata(data.get("metadata"))
        return data

    @classmethod
    def find_all(cls, filters=None, limit=0):
        return [normalize(doc) for doc in super().find_all(build_query(filters), limit=limit)]

    @classmethod
    def find_by_type(cls, file_type):
        return cls.find_all({"fileType": file_type})

    @classmethod
    def find_by_access_level(cls, access_level):
        return cls.find_all({"accessLevel": access_level})

    @classmethod
    def find_by_tags(cls, tags):
        return cls.find_all({"tags": tags if isinstance(tags, (list, tuple)) else [tags]})

    # Geofiles whose stored [lng, lat] lies within radius metres of the point
    @classmethod
    def find_near(cls, lat, lng, radius=1000.0):
        matches = []
        for doc in cls.find_all():
            coords = parse_coordinates(doc.get("coordinates"))
            if not coords:
                continue
            distance = haversine_m(lat, lng, coords[1], coords[0])
            if distance <= radius:
                doc["distance"] = round(distance, 1)
                matches.append(doc)
        matches.sort(key=lambda d: d["distance"])
        return matches

    @classmethod
    def update_access(cls, geofile_id):
        oid = to_object_id(geofile_id)
        if oid is None:
            return False
        result = cls.collection().update_one({"_id": oid}, {"$set": {"lastAccessedAt": utcnow()}})
        return result.matched_count > 0

    @classmethod
    def increment_download(cls, geofile_id):
        oid = to_object_id(geofile_id)
        if oid is None:
            return False
        result = cls.collection().update_one(
            {"_id": oid},
            {
                "$inc": {"downloadCount": 1},
                "$set": {"lastAccessedAt": utcnow()}
            }
        )
        return result.matched_count > 0

    @classmethod
    def link_case(cls, geofile_id, case_id):
        return cls.update(geofile_id, {"caseId": case_id})

    @classmethod
    def add_tags(cls, geofile_id, tags):
        oid = to_object_id(geofile_id)
        if oid is None:
            return False
        doc = cls.collection().find_one({"_id": oid})
        if doc is None:
            return False
        # Legacy string tags are rewritten as a list before the merge
        merged = parse_tags(doc.get("tags"))
        for tag in parse_tags(tags):
            if tag not in merged:
                merged.append(tag)
        result = cls.collection().update_one(
            {"_id": oid},
            {"$set": {"tags": merged, "updatedAt": utcnow()}}
        )
        return result.matched_count > 0

    @classmethod
    def get_stats(cls):
        by_type = cls.collection().aggregate([
            {"$group": {"_id": "$fileType", "count": {"$sum": 1}}},
            {"$sort": {"_id": ASCENDING}}
        ])
        by_access = cls.collection().aggregate([
            {"$group": {"_id": "$accessLevel", "count": {"$sum": 1}}},
            {"$sort": {"_id": ASCENDING}}
        ])
        downloads = list(cls.collection().aggregate([
            {"$group": {"_id": None, "total": {"$sum": "$downloadCount"}}}
        ]))
        return {
            "total": cls.count(),
            "byFileType": [{"fileType": t["_id"], "count": t["count"]} for t in by_type],
            "byAccessLevel": [{"accessLevel": a["_id"], "count": a["count"]} for a in by_access],
            "totalDownloads": downloads[0]["total"] if downloads else 0
        }
