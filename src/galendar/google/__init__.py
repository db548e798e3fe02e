"""Google OAuth authentication for the Calendar API."""

from galendar.google.exceptions import (
    AuthorizationRequired,
    CredentialsNotFoundError,
    GoogleAuthError,
    InvalidCredentialsError,
    ScopeMismatchError,
    TokenError,
)
from galendar.google.oauth import GoogleOAuth

__all__ = [
    "GoogleOAuth",
    "GoogleAuthError",
    "AuthorizationRequired",
    "CredentialsNotFoundError",
    "InvalidCredentialsError",
    "TokenError",
    "ScopeMismatchError",
]
