from food_ordering.client.user_store import ApiError, SessionState, UserStore

__all__ = ["ApiError", "SessionState", "UserStore"]
