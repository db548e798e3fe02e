"""Google authentication exceptions."""


class GoogleAuthError(Exception):
    """Base exception for Google authentication errors."""

    pass


class CredentialsNotFoundError(GoogleAuthError):
    """Raised when OAuth credentials file is not found."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(
            f"Client secret file not found at {path}. "
            "Please download OAuth credentials from Google Cloud Console."
        )


class TokenError(GoogleAuthError):
    """Raised when there's an issue with the OAuth token."""

    pass


class ScopeMismatchError(GoogleAuthError):
    """Raised when token scopes don't match required scopes."""

    def __init__(self, missing_scopes: set[str]):
        self.missing_scopes = missing_scopes
        super().__init__(f"Token missing required scopes: {missing_scopes}")


class AuthorizationRequired(GoogleAuthError):
    """Raised when an API call needs the user to authorize first."""

    def __init__(self, url: str, message: str = "OAuth authorization required"):
        self.url = url
        super().__init__(message)


class InvalidCredentialsError(GoogleAuthError):
    """Raised when the OAuth client secret file cannot be used."""

    def __init__(self, path: str, reason: str):
        self.path = path
        super().__init__(f"Invalid client secret file {path}: {reason}")
