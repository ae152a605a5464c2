"""
Session-holding API client for the user endpoints.

The store keeps the authenticated user in an explicit ``SessionState`` and
persists it as JSON through ``SessionState.to_dict`` / ``from_dict``.
User-facing outcomes are reported through a ``notify(level, message)``
callback (the toast equivalent); nothing is retried.
"""
import json
import logging
import os
from dataclasses import dataclass
from typing import Any, Callable, Optional

import requests

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:8000/api/v1/user"


class ApiError(Exception):
    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


@dataclass
class SessionState:
    user: Optional[dict] = None
    is_authenticated: bool = False
    is_checking_auth: bool = True
    loading: bool = False

    def to_dict(self) -> dict:
        # loading is transient and never persisted
        return {
            "user": self.user,
            "isAuthenticated": self.is_authenticated,
            "isCheckingAuth": self.is_checking_auth,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "SessionState":
        return cls(
            user=data.get("user"),
            is_authenticated=bool(data.get("isAuthenticated", False)),
            is_checking_auth=bool(data.get("isCheckingAuth", True)),
        )


def log_notification(level: str, message: str) -> None:
    logger.log(logging.ERROR if level == "error" else logging.INFO, "%s: %s", level, message)


class UserStore:
    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        http: Any = None,
        storage_path: Optional[str] = None,
        notify: Optional[Callable[[str, str], None]] = None,
        timeout: float = 10,
    ):
        self.base_url = base_url.rstrip("/")
        self.http = http if http is not None else requests.Session()
        self.storage_path = storage_path
        self.notify = notify or log_notification
        self.timeout = timeout
        self.state = self._load()

    # ------------------------------
    # Persistence
    # ------------------------------
    def _load(self) -> SessionState:
        if not self.storage_path or not os.path.exists(self.storage_path):
            return SessionState()
        try:
            with open(self.storage_path, encoding="utf-8") as f:
                return SessionState.from_dict(json.load(f))
        except (OSError, ValueError) as e:
            logger.warning("Discarding unreadable session file %s: %s", self.storage_path, e)
            return SessionState()

    def _save(self) -> None:
        if not self.storage_path:
            return
        with open(self.storage_path, "w", encoding="utf-8") as f:
            json.dump(self.state.to_dict(), f, default=str)

    def _set(self, **changes) -> None:
        for key, value in changes.items():
            setattr(self.state, key, value)
        self._save()

    # ------------------------------
    # Transport
    # ------------------------------
    def _request(self, method: str, path: str, payload: Optional[dict] = None) -> dict:
        try:
            response = self.http.request(method, f"{self.base_url}{path}", json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            raise ApiError(str(e)) from e

        try:
            body = response.json()
        except ValueError:
            body = {}
        if response.status_code >= 400:
            raise ApiError(body.get("message") or f"Request failed with status {response.status_code}",
                           response.status_code)
        return body

    def _run(self, path: str, fallback: str, method: str = "POST", payload: Optional[dict] = None) -> Optional[dict]:
        """Issue a call with the pending-flag guard; returns the body on success"""
        if self.state.loading:
            return None
        self._set(loading=True)
        try:
            body = self._request(method, path, payload)
        except ApiError as e:
            self.notify("error", e.message or fallback)
            return None
        finally:
            self._set(loading=False)
        if body.get("success") and body.get("message"):
            self.notify("success", body["message"])
        return body

    # ------------------------------
    # Operations
    # ------------------------------
    def signup(self, fullname: str, email: str, password: str, contact: str) -> bool:
        body = self._run("/signup", "Signup failed", payload={
            "fullname": fullname, "email": email, "password": password, "contact": contact,
        })
        if body and body.get("success"):
            self._set(user=body.get("user"), is_authenticated=True)
            return True
        return False

    def login(self, email: str, password: str) -> bool:
        body = self._run("/login", "Login failed", payload={"email": email, "password": password})
        if body and body.get("success"):
            self._set(user=body.get("user"), is_authenticated=True)
            return True
        return False

    def verify_email(self, verification_code: str) -> bool:
        body = self._run("/verify-email", "Verification failed", payload={"verificationCode": verification_code})
        if body and body.get("success"):
            self._set(user=body.get("user"), is_authenticated=True)
            return True
        return False

    def check_authentication(self) -> bool:
        """Never raises; any failure leaves the store unauthenticated"""
        self._set(is_checking_auth=True)
        try:
            body = self._request("GET", "/check-auth")
        except ApiError:
            self._set(user=None, is_authenticated=False, is_checking_auth=False)
            return False
        self._set(user=body.get("user"), is_authenticated=bool(body.get("success")), is_checking_auth=False)
        return self.state.is_authenticated

    def logout(self) -> bool:
        body = self._run("/logout", "Logout failed")
        if body and body.get("success"):
            self._set(user=None, is_authenticated=False)
            return True
        return False

    def forgot_password(self, email: str) -> bool:
        body = self._run("/forgot-password", "Something went wrong", payload={"email": email})
        return bool(body and body.get("success"))

    def reset_password(self, token: str, new_password: str) -> bool:
        body = self._run(f"/reset-password/{token}", "Reset failed", payload={"newPassword": new_password})
        return bool(body and body.get("success"))

    def update_profile(self, **fields) -> bool:
        body = self._run("/profile/update", "Update failed", method="PUT", payload=fields)
        if body and body.get("success"):
            self._set(user=body.get("user"), is_authenticated=True)
            return True
        return False
