"""Identity Provider Client — verifies bearer session tokens into ExternalIdentity.

Invariants:
    - Missing, malformed, expired or badly-signed tokens resolve to None
      (unauthenticated), never to an exception
    - A token without a "sub" claim is rejected
    - Profile claims are optional; email may arrive as "email" or "email_addresses"

Design Decisions:
    - Networkless verification with PyJWT against a configured key (PEM public key
      for RS256, shared secret for HS256)
    - Session management stays with the provider; this client only reads identity
"""

import logging
from typing import Any

import jwt
from starlette.requests import Request

from fintrack.core.domain_types import ExternalIdentity, ExternalUserId

logger = logging.getLogger(__name__)


class JWTIdentityProvider:
    """Identity provider backed by signed session tokens."""

    def __init__(
        self,
        key: str | None,
        algorithms: list[str],
        issuer: str | None = None,
        leeway_seconds: int = 5,
    ):
        self._key = key
        self._algorithms = algorithms
        self._issuer = issuer
        self._leeway = leeway_seconds

    async def current_identity(self, request: Request) -> ExternalIdentity | None:
        token = _bearer_token(request)
        if token is None:
            return None
        return self.verify(token)

    def verify(self, token: str) -> ExternalIdentity | None:
        """Decode and verify a session token; None when it cannot be trusted."""
        if not self._key:
            logger.warning("Identity verification key not configured")
            return None
        try:
            claims = jwt.decode(
                token,
                self._key,
                algorithms=self._algorithms,
                issuer=self._issuer,
                leeway=self._leeway,
                options={"require": ["sub"], "verify_aud": False},
            )
        except jwt.ExpiredSignatureError:
            logger.info("Session token expired")
            return None
        except jwt.InvalidTokenError as e:
            logger.info(f"Session token rejected: {e}")
            return None
        return identity_from_claims(claims)


def identity_from_claims(claims: dict[str, Any]) -> ExternalIdentity:
    emails = claims.get("email_addresses") or []
    if isinstance(emails, str):
        emails = [emails]
    if claims.get("email"):
        emails = [claims["email"], *emails]
    return ExternalIdentity(
        external_user_id=ExternalUserId(str(claims["sub"])),
        first_name=claims.get("first_name"),
        last_name=claims.get("last_name"),
        email_addresses=tuple(e for e in emails if isinstance(e, str)),
        image_url=claims.get("image_url"),
    )


def _bearer_token(request: Request) -> str | None:
    header = request.headers.get("authorization", "")
    scheme, _, credentials = header.partition(" ")
    if scheme.lower() != "bearer" or not credentials.strip():
        return None
    return credentials.strip()
