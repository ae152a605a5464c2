from functools import wraps
from flask import g, session

from food_ordering.core.exceptions import Unauthorized
from food_ordering.models.user import User


def login_required(f):
    """Decorator to require user login"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if 'user_id' not in session:
            raise Unauthorized(code="AUTHENTICATION_REQUIRED", message="Authentication required")

        # Verify user still exists
        user = User.find_by_id(session['user_id'])
        if not user:
            session.clear()
            raise Unauthorized(code="USER_NOT_FOUND", message="User not found")

        g.user = user
        g.user_id = user["_id"]
        return f(*args, **kwargs)
    return decorated_function
