from food_ordering.core.exceptions import BadRequest


def clean_str(data, field):
    """Return data[field] stripped, rejecting values that are not strings (JSON bodies)"""
    value = data.get(field)
    if value is None:
        return None
    if not isinstance(value, str):
        raise BadRequest(code="INVALID_FIELD", message=f"{field} must be a string")
    return value.strip()
