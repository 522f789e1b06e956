"""Token Verifier — checks bearer tokens issued by the external identity provider.

Invariants:
    - verify() returns decoded claims or raises InvalidTokenError, nothing else
    - Expiry is always enforced; audience and issuer are enforced when configured
    - When a required capability claim is configured, a falsy or missing claim is rejected

Design Decisions:
    - PyJWT for decoding: HS256 shared secret for simple deployments, RS256 via a
      JWKS endpoint (PyJWKClient caches signing keys) for hosted identity providers
    - Protocol boundary so tests and other providers can substitute a verifier
"""

import logging
from typing import Any, Protocol

import jwt
from jwt import PyJWKClient

from events_api.config import Settings
from events_api.core.errors import InvalidTokenError

logger = logging.getLogger(__name__)


class TokenVerifier(Protocol):
    """Contract for bearer token verification."""
    def verify(self, token: str) -> dict[str, Any]: ...


class JWTTokenVerifier:
    """Verify JWTs with a shared secret or a JWKS key set."""

    def __init__(
        self,
        secret: str = "",
        jwks_url: str = "",
        algorithms: list[str] | None = None,
        audience: str | None = None,
        issuer: str | None = None,
        required_claim: str | None = None,
    ):
        if not secret and not jwks_url:
            raise ValueError("JWTTokenVerifier needs a secret or a JWKS URL")
        self._secret = secret
        self._jwks_client = PyJWKClient(jwks_url) if jwks_url else None
        self._algorithms = algorithms or (["RS256"] if jwks_url else ["HS256"])
        self._audience = audience
        self._issuer = issuer
        self._required_claim = required_claim

    @classmethod
    def from_settings(cls, settings: Settings) -> "JWTTokenVerifier":
        return cls(
            secret=settings.auth_jwt_secret,
            jwks_url=settings.auth_jwks_url,
            algorithms=settings.auth_algorithms,
            audience=settings.auth_audience,
            issuer=settings.auth_issuer,
            required_claim=settings.auth_required_claim,
        )

    def verify(self, token: str) -> dict[str, Any]:
        try:
            key = self._signing_key(token)
            claims = jwt.decode(
                token,
                key,
                algorithms=self._algorithms,
                audience=self._audience,
                issuer=self._issuer,
                options={
                    "require": ["exp"],
                    "verify_aud": self._audience is not None,
                },
            )
        except jwt.ExpiredSignatureError:
            raise InvalidTokenError("expired")
        except jwt.InvalidAudienceError:
            raise InvalidTokenError("audience mismatch")
        except jwt.PyJWTError as exc:
            raise InvalidTokenError(f"validation failed: {exc}") from exc

        if self._required_claim and not claims.get(self._required_claim):
            raise InvalidTokenError(f"missing claim '{self._required_claim}'")
        return claims

    def _signing_key(self, token: str) -> Any:
        if self._jwks_client is None:
            return self._secret
        return self._jwks_client.get_signing_key_from_jwt(token).key
