from .identity import IdentityProvider, LocalIdentityProvider
from .backend import BackendAuthClient
from .bridge import AuthBridge, SignInOutcome

__all__ = [
    "IdentityProvider", "LocalIdentityProvider", "BackendAuthClient",
    "AuthBridge", "SignInOutcome",
]
