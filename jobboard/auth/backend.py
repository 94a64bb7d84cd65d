"""Email/password and Google-profile auth against the platform backend.

The backend issues its own signed session token. Token and user are cached
in local storage (``opportuna_token`` / ``opportuna_user``) and the token is
sent as a bearer credential on protected calls. There is no refresh flow:
once the token expires protected calls come back failed and the user has to
sign in again.

Malformed input raises ``ValidationError`` before any request; everything
that goes over the wire comes back as a ``Result``.
"""
from __future__ import annotations

import json

import requests

from jobboard.api import BackendApi
from jobboard.errors import TransportError, ValidationError
from jobboard.log import get_logger
from jobboard.models import BackendUser, Result
from jobboard.storage import LocalStorage, MemoryStorage
from jobboard.validation import require_email, require_length, require_password

log = get_logger(__name__)

TOKEN_KEY = "opportuna_token"
USER_KEY = "opportuna_user"
LOGGED_OUT = "Logged out successfully."


class BackendAuthClient(BackendApi):
    def __init__(
        self,
        storage: LocalStorage | MemoryStorage,
        base_url: str = "http://localhost:5003/api",
        timeout: float = 15,
        session: requests.Session | None = None,
    ) -> None:
        super().__init__(base_url, timeout=timeout, session=session)
        self.storage = storage

    # -- cache ------------------------------------------------------------

    def get_token(self) -> str | None:
        return self.storage.get_item(TOKEN_KEY)

    def get_user(self) -> BackendUser | None:
        raw = self.storage.get_item(USER_KEY)
        if not raw:
            return None
        try:
            return BackendUser.from_dict(json.loads(raw))
        except (json.JSONDecodeError, TypeError) as exc:
            log.warning("Cached backend user is unreadable: %s", exc)
            return None

    def _set_session(self, token: str, user: dict) -> None:
        self.storage.set_item(TOKEN_KEY, token)
        self.storage.set_item(USER_KEY, json.dumps(user))

    def _set_user(self, user: dict) -> None:
        self.storage.set_item(USER_KEY, json.dumps(user))

    def clear_session(self) -> None:
        self.storage.remove_item(TOKEN_KEY)
        self.storage.remove_item(USER_KEY)

    def is_authenticated(self) -> bool:
        return bool(self.get_token() and self.get_user())

    def headers(self) -> dict[str, str]:
        headers = super().headers()
        token = self.get_token()
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    @staticmethod
    def _user_from(result: Result) -> dict | None:
        data = result.data if isinstance(result.data, dict) else {}
        user = data.get("user")
        return user if result.success and isinstance(user, dict) else None

    def _remember(self, result: Result) -> Result:
        data = result.data if isinstance(result.data, dict) else {}
        if self._user_from(result) and data.get("token"):
            self._set_session(data["token"], data["user"])
            log.info("Backend session stored for %s", data["user"].get("email"))
        return result

    # -- sign in ----------------------------------------------------------

    def register(self, name: str, email: str, password: str, confirm_password: str) -> Result:
        payload = {
            "name": require_length("Name", name, 2, 255),
            "email": require_email(email),
            "password": require_password(password, confirm_password),
            "confirmPassword": confirm_password,
        }
        log.info("Registering %s with backend", payload["email"])
        return self._remember(self.send(
            "POST", "/auth/register", json=payload,
            network_message="Registration failed. Please check your connection and try again.",
        ))

    def login(self, email: str, password: str) -> Result:
        payload = {"email": require_email(email), "password": password or ""}
        if not payload["password"]:
            raise ValidationError("Password is required")
        return self._remember(self.send(
            "POST", "/auth/login", json=payload,
            network_message="Login failed. Please check your connection and try again.",
        ))

    @staticmethod
    def google_payload(name: str, email: str, provider_id: str, avatar: str | None = None) -> dict[str, str]:
        """Validated body for ``google_auth``; raises ``ValidationError``."""
        payload = {
            "name": require_length("Name", name, 2, 255),
            "email": require_email(email),
            "provider_id": require_length("Provider id", provider_id, 1, 255),
        }
        if avatar:
            payload["avatar"] = avatar
        return payload

    def google_auth(self, name: str, email: str, provider_id: str, avatar: str | None = None) -> Result:
        payload = self.google_payload(name, email, provider_id, avatar)
        return self._remember(self.send(
            "POST", "/auth/google", json=payload,
            network_message="Google authentication failed. Please try again.",
        ))

    def sync_firebase_user(self, name: str, email: str, firebase_uid: str, provider: str = "google") -> Result:
        payload = {
            "name": name,
            "email": require_email(email),
            "firebaseUid": firebase_uid,
            "provider": provider,
        }
        return self._remember(self.send("POST", "/auth/sync-firebase-user", json=payload))

    # -- profile ----------------------------------------------------------

    def get_profile(self) -> Result:
        result = self.send("GET", "/auth/profile", network_message="Failed to get user profile.")
        user = self._user_from(result)
        if user:
            self._set_user(user)
        return result

    def update_profile(self, name: str | None = None, avatar: str | None = None) -> Result:
        payload: dict[str, str] = {}
        if name is not None:
            payload["name"] = require_length("Name", name, 2, 255)
        if avatar is not None:
            payload["avatar"] = avatar
        result = self.send("PATCH", "/auth/profile", json=payload, network_message="Failed to update profile.")
        user = self._user_from(result)
        if user:
            self._set_user(user)
        return result

    def logout(self) -> Result:
        try:
            result = self._to_result("POST", "/auth/logout", self._request("POST", "/auth/logout"))
        except TransportError as exc:
            log.warning("Backend logout error: %s", exc)
            result = Result.ok(message=LOGGED_OUT)
        finally:
            # local session goes regardless of what the server said
            self.clear_session()
        return result

    # -- accounts ---------------------------------------------------------

    def delete_user(self, email: str) -> Result:
        result = self.send("DELETE", "/auth/delete-user", json={"email": require_email(email)})
        if result.success:
            self.clear_session()
        return result

    def delete_user_from_database(self, email: str) -> Result:
        return self.send("DELETE", "/auth/delete-user-db", json={"email": require_email(email)})

    def list_users(self) -> Result:
        return self.send("GET", "/auth/users")
