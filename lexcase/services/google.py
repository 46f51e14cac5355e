"""Verification of Google Sign-In ID tokens."""

from dataclasses import dataclass
from typing import Optional
import logging

from google.auth import exceptions as google_exceptions
from google.auth.transport import requests as google_requests
from google.oauth2 import id_token
from starlette.concurrency import run_in_threadpool

from lexcase.utils.errors import InternalError, InvalidCredentials

__all__ = ["GoogleIdentity", "GoogleVerifier"]

logger = logging.getLogger(__name__)


@dataclass
class GoogleIdentity:
    """Claims taken from a verified Google ID token"""
    google_id: str
    email: str
    name: str
    picture: str = ""


class GoogleVerifier:
    """Checks Google ID tokens against the configured OAuth client id."""

    def __init__(self, client_id: Optional[str]):
        self.client_id = client_id
        self._request = google_requests.Request()

    def _verify_sync(self, credential: str) -> dict:
        return id_token.verify_oauth2_token(credential, self._request, audience=self.client_id)

    async def verify(self, credential: str) -> GoogleIdentity:
        if not self.client_id:
            logger.error("[google] GOOGLE_CLIENT_ID is not configured")
            raise InternalError("Error authenticating with Google")

        try:
            claims = await run_in_threadpool(self._verify_sync, credential)
        except google_exceptions.TransportError as e:
            logger.error(f"[google] Could not reach Google to verify token: {e}")
            raise InternalError("Error authenticating with Google")
        except (ValueError, google_exceptions.GoogleAuthError) as e:
            logger.warning(f"[google] Rejected ID token: {e}")
            raise InvalidCredentials("Invalid Google credential")

        email = (claims.get("email") or "").strip().lower()
        if not claims.get("sub") or not email:
            raise InvalidCredentials("Invalid Google credential")

        return GoogleIdentity(
            google_id=claims["sub"],
            email=email,
            name=claims.get("name") or email.split("@")[0],
            picture=claims.get("picture") or "",
        )
