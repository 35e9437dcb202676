from datetime import datetime, timezone

from bson.objectid import ObjectId


def _to_json_value(value):
    if isinstance(value, ObjectId):
        return str(value)  # Convert ObjectId to string for JSON serialization
    if isinstance(value, datetime):
        # pymongo hands back naive datetimes that are UTC
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.isoformat().replace("+00:00", "Z")
    if isinstance(value, dict):
        return {key: _to_json_value(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_json_value(item) for item in value]
    return value


def serialize_article(article: dict) -> dict:
    """Makes a Mongo article document (populated references included) JSON-safe."""
    return _to_json_value(article)
