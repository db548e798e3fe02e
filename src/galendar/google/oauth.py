"""Google OAuth management using Authlib.

This module provides OAuth 2.0 authentication for the Calendar API with:
- Automatic token refresh with scope preservation
- Token storage in Google's authorized-user format
- Google API service creation

Credentials are stored in the credentials directory by default:
    galendar_client_secret.json - OAuth client credentials
    galendar_client_token.json  - OAuth tokens
"""

import json
import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Any

from authlib.integrations.requests_client import OAuth2Session
from authlib.oauth2 import OAuth2Error
from google.oauth2.credentials import Credentials as GoogleCredentials
from googleapiclient.discovery import build

from galendar.config import GOOGLE_CREDENTIALS, GOOGLE_TOKEN
from galendar.google.exceptions import (
    CredentialsNotFoundError,
    InvalidCredentialsError,
    ScopeMismatchError,
    TokenError,
)

logger = logging.getLogger(__name__)


SCOPES = {
    "calendar_readonly": "https://www.googleapis.com/auth/calendar.readonly",
}


class GoogleOAuth:
    """Google OAuth management using Authlib.

    Handles OAuth 2.0 authorization flow, token management, and
    Google API service creation.

    Example:
        >>> auth = GoogleOAuth()
        >>> if not auth.is_authorized():
        ...     url = auth.get_authorization_url()
        ...     print(f"Visit: {url}")
        ...     redirect_url = input("Paste redirect URL: ")
        ...     auth.fetch_token(redirect_url)
        >>> calendar_service = auth.build_service("calendar", "v3")
    """

    AUTHORIZE_URL = "https://accounts.google.com/o/oauth2/auth"
    TOKEN_URL = "https://oauth2.googleapis.com/token"

    def __init__(
        self,
        scopes: list[str] | None = None,
        client_id: str | None = None,
        client_secret: str | None = None,
        token_path: str | Path | None = None,
        credentials_path: str | Path | None = None,
    ):
        """Initialize Google OAuth.

        Args:
            scopes: List of scope names (e.g., ["calendar_readonly"]) or full URLs.
                   If None, defaults to ["calendar_readonly"].
            client_id: OAuth client ID (loaded from credentials file if not provided).
            client_secret: OAuth client secret (loaded from credentials file if not provided).
            token_path: Path to store/load tokens. Defaults to galendar_client_token.json.
            credentials_path: Path to OAuth credentials file. Defaults to
                galendar_client_secret.json.
        """
        self.token_path = Path(token_path) if token_path else GOOGLE_TOKEN
        self.credentials_path = Path(credentials_path) if credentials_path else GOOGLE_CREDENTIALS

        # Resolve scope names to full URLs
        self.required_scopes = self._resolve_scopes(scopes or ["calendar_readonly"])

        if not client_id or not client_secret:
            client_id, client_secret = self._load_client_credentials()

        self.client_id = client_id
        self.client_secret = client_secret

        self.session = OAuth2Session(
            client_id=self.client_id,
            client_secret=self.client_secret,
            scope=" ".join(self.required_scopes),
            redirect_uri="http://localhost:0",
            token=self._load_token(),
            update_token=self._save_token,
            token_endpoint=self.TOKEN_URL,
            grant_type="refresh_token",
            token_endpoint_auth_method="client_secret_post",
        )

    def _resolve_scopes(self, scopes: list[str]) -> list[str]:
        """Resolve scope names to full URLs."""
        resolved = []
        for scope in scopes:
            if scope.startswith("https://"):
                resolved.append(scope)
            elif scope in SCOPES:
                resolved.append(SCOPES[scope])
            else:
                raise ValueError(
                    f"Unknown scope: {scope}. Use full URL or one of: {list(SCOPES.keys())}"
                )
        return resolved

    def _load_client_credentials(self) -> tuple[str, str]:
        """Load OAuth client credentials from file."""
        if not self.credentials_path.exists():
            raise CredentialsNotFoundError(str(self.credentials_path))

        path = str(self.credentials_path)
        try:
            with open(self.credentials_path) as f:
                creds = json.load(f)
        except json.JSONDecodeError as e:
            raise InvalidCredentialsError(path, f"invalid JSON: {e}") from e

        # Handle both web and installed app credential formats
        if "installed" in creds:
            app_creds = creds["installed"]
        elif "web" in creds:
            app_creds = creds["web"]
        else:
            raise InvalidCredentialsError(path, "expected 'installed' or 'web' key")

        try:
            return app_creds["client_id"], app_creds["client_secret"]
        except (KeyError, TypeError) as e:
            raise InvalidCredentialsError(path, f"missing {e}") from e

    def _load_token(self) -> dict[str, Any] | None:
        """Load token from storage."""
        if not self.token_path.exists():
            logger.info("No existing token found")
            return None

        try:
            with open(self.token_path) as f:
                token_data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Failed to load token: {e}")
            return None

        expiry = token_data.get("expiry")
        if expiry and isinstance(expiry, str):
            try:
                expires_at = datetime.fromisoformat(expiry.replace("Z", "+00:00")).timestamp()
            except ValueError as e:
                logger.error(f"Failed to load token: unreadable expiry {expiry!r}: {e}")
                return None
        else:
            expires_at = expiry

        # Convert Google token format to Authlib format
        authlib_token = {
            "access_token": token_data.get("token"),
            "refresh_token": token_data.get("refresh_token"),
            "token_type": token_data.get("type", "Bearer"),
            "expires_at": expires_at,
            "scope": " ".join(token_data.get("scopes", [])),
        }

        current_scopes = set(token_data.get("scopes", []))
        required_scopes = set(self.required_scopes)

        if not required_scopes.issubset(current_scopes):
            missing = required_scopes - current_scopes
            logger.warning(f"Token missing required scopes: {missing}")
            return None

        logger.info(f"Loaded token with scopes: {current_scopes}")
        return authlib_token

    def _save_token(
        self,
        token: dict[str, Any],
        refresh_token: str | None = None,
        access_token: str | None = None,
    ):
        """Save token to storage (Authlib callback)."""
        if access_token:
            token["access_token"] = access_token
        if refresh_token:
            token["refresh_token"] = refresh_token

        token_scopes = set(token.get("scope", "").split())
        required_scopes = set(self.required_scopes)

        if not required_scopes.issubset(token_scopes):
            missing = required_scopes - token_scopes
            raise ScopeMismatchError(missing)

        google_token = {
            "token": token["access_token"],
            "refresh_token": token.get("refresh_token"),
            "token_uri": self.TOKEN_URL,
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "scopes": sorted(token_scopes),
            "type": token.get("token_type", "Bearer"),
            "expiry": token.get("expires_at"),
        }

        self.token_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.token_path, "w") as f:
            json.dump(google_token, f, indent=2)
        os.chmod(self.token_path, 0o600)

        logger.info(f"Token saved to {self.token_path} with scopes: {token_scopes}")

    def is_authorized(self) -> bool:
        """Check if we have valid authorization with required scopes.

        Returns:
            True if authorized with all required scopes, False otherwise.
        """
        if not self.session.token:
            return False

        token_scopes = set(self.session.token.get("scope", "").split())
        required_scopes = set(self.required_scopes)

        return required_scopes.issubset(token_scopes)

    def get_authorization_url(self) -> str:
        """Start OAuth authorization flow.

        Returns:
            Authorization URL for user to visit.
        """
        authorization_url, _state = self.session.create_authorization_url(
            self.AUTHORIZE_URL,
            access_type="offline",
            prompt="consent",
        )
        return authorization_url

    def fetch_token(self, authorization_response: str) -> dict[str, Any]:
        """Complete authorization flow and fetch token.

        Args:
            authorization_response: The full redirect URL from OAuth callback.

        Returns:
            The fetched OAuth token dict.

        Raises:
            TokenError: If the authorization server rejects the code.
        """
        try:
            token = self.session.fetch_token(
                self.TOKEN_URL,
                authorization_response=authorization_response,
                client_secret=self.client_secret,
            )
        except OAuth2Error as e:
            raise TokenError(f"Failed to fetch token: {e}") from e

        self._save_token(token)
        return token

    def get_credentials(self) -> GoogleCredentials:
        """Get Google Credentials object for API client libraries.

        Returns:
            Google Credentials object with current token.

        Raises:
            TokenError: If not authorized or token refresh fails.
        """
        if not self.is_authorized():
            raise TokenError("Not authorized or missing required scopes")

        # Refresh if expired
        expires_at = self.session.token.get("expires_at", 0)
        if expires_at and expires_at < datetime.now().timestamp():
            logger.info("Token expired, refreshing...")
            try:
                self.session.refresh_token(
                    self.TOKEN_URL,
                    refresh_token=self.session.token.get("refresh_token"),
                )
            except OAuth2Error as e:
                raise TokenError(f"Failed to refresh token: {e}") from e

        return GoogleCredentials(
            token=self.session.token["access_token"],
            refresh_token=self.session.token.get("refresh_token"),
            token_uri=self.TOKEN_URL,
            client_id=self.client_id,
            client_secret=self.client_secret,
            scopes=self.required_scopes,
        )

    def build_service(self, service_name: str = "calendar", version: str = "v3"):
        """Build a Google API service with current credentials.

        Args:
            service_name: Name of the service.
            version: API version.

        Returns:
            Google API service object.
        """
        creds = self.get_credentials()
        return build(service_name, version, credentials=creds, cache_discovery=False)
