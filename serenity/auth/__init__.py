"""Session/auth gate over the managed identity service."""

from serenity.auth.identity import AuthError, IdentityAccount, IdentityClient
from serenity.auth.session import AuthService, Session

__all__ = ["AuthError", "AuthService", "IdentityAccount", "IdentityClient", "Session"]
