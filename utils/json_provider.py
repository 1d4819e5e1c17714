from datetime import date, datetime

from bson import ObjectId
from flask.json.provider import DefaultJSONProvider


class MongoJSONProvider(DefaultJSONProvider):
    """Encodes ObjectId as its hex string and datetimes as ISO-8601."""

    @staticmethod
    def default(o):
        if isinstance(o, ObjectId):
            return str(o)
        if isinstance(o, datetime):
            if o.tzinfo is None:
                return o.isoformat(timespec="milliseconds") + "Z"
            return o.isoformat(timespec="milliseconds")
        if isinstance(o, date):
            return o.isoformat()
        return DefaultJSONProvider.default(o)
