"""One facade over the two sign-in systems.

The identity provider session and the backend token session are tracked
separately and may disagree (signed in to one, not the other); callers
read each state on its own.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from jobboard.auth.backend import BackendAuthClient
from jobboard.auth.identity import AuthListener, IdentityProvider
from jobboard.log import get_logger
from jobboard.models import BackendUser, IdentityUser, Result

log = get_logger(__name__)


@dataclass
class SignInOutcome:
    identity_user: IdentityUser | None
    backend: Result

    @property
    def fully_signed_in(self) -> bool:
        return self.identity_user is not None and self.backend.success


class AuthBridge:
    def __init__(self, identity: IdentityProvider, backend: BackendAuthClient) -> None:
        self.identity = identity
        self.backend = backend

    @property
    def identity_user(self) -> IdentityUser | None:
        return self.identity.current_user

    @property
    def backend_user(self) -> BackendUser | None:
        return self.backend.get_user()

    @property
    def backend_authenticated(self) -> bool:
        return self.backend.is_authenticated()

    def subscribe(self, listener: AuthListener) -> Callable[[], None]:
        return self.identity.on_auth_state_changed(listener)

    def sign_in_with_google(self, user: IdentityUser) -> SignInOutcome:
        """Sign in with the identity provider, then register the profile with the backend.

        The profile is validated first: a ``ValidationError`` leaves both
        sessions as they were.
        """
        payload = self.backend.google_payload(
            name=user.display_name or (user.email or "").split("@")[0],
            email=user.email,
            provider_id=user.uid,
            avatar=user.photo_url,
        )
        signed_in = self.identity.sign_in(user)
        backend = self.backend.google_auth(**payload)
        if not backend.success:
            log.warning("Identity sign-in ok but backend session failed: %s", backend.message)
        return SignInOutcome(identity_user=signed_in, backend=backend)

    def login(self, email: str, password: str) -> Result:
        """Backend-only email/password sign-in; the identity session is untouched."""
        return self.backend.login(email, password)

    def register(self, name: str, email: str, password: str, confirm_password: str) -> Result:
        return self.backend.register(name, email, password, confirm_password)

    def sign_out(self) -> Result:
        self.identity.sign_out()
        return self.backend.logout()
