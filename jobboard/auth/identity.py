"""Identity provider session (the Firebase side of sign-in).

Listeners registered with ``on_auth_state_changed`` are called right away
with the current user and then on every sign-in / sign-out, until the
returned unsubscribe function is called.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable

from jobboard.log import get_logger
from jobboard.models import IdentityUser

log = get_logger(__name__)

AuthListener = Callable[[IdentityUser | None], None]


class IdentityProvider(ABC):
    def __init__(self) -> None:
        self._current_user: IdentityUser | None = None
        self._listeners: list[AuthListener] = []

    @property
    def current_user(self) -> IdentityUser | None:
        return self._current_user

    def on_auth_state_changed(self, listener: AuthListener) -> Callable[[], None]:
        self._listeners.append(listener)
        listener(self._current_user)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _set_user(self, user: IdentityUser | None) -> None:
        self._current_user = user
        log.info("Identity session changed: %s", user.email if user else "signed out")
        for listener in list(self._listeners):
            listener(user)

    @abstractmethod
    def sign_in(self, user: IdentityUser) -> IdentityUser:
        pass

    @abstractmethod
    def sign_out(self) -> None:
        pass


class LocalIdentityProvider(IdentityProvider):
    """In-process provider: whoever the caller signs in becomes the session user."""

    def sign_in(self, user: IdentityUser) -> IdentityUser:
        if not user.uid:
            raise ValueError("Identity user needs a uid")
        self._set_user(user)
        return user

    def sign_out(self) -> None:
        if self._current_user is not None:
            self._set_user(None)
