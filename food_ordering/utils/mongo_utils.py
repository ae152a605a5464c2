from bson import ObjectId
from bson.errors import InvalidId


def to_object_id(value):
    """Return value as an ObjectId, or None when it is not a valid id"""
    if isinstance(value, ObjectId):
        return value
    # ObjectId(None) would mint a fresh id
    if value is None:
        return None
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        return None
