"""JWT authentication provider.

Two kinds of tokens are accepted:

- HS256 tokens signed with the shared ``jwt_secret_key`` (issued by this
  service's ``create_token`` and used in tests);
- ES256 tokens from an external identity provider, verified against the
  keys published at ``jwks_url``.

Expected claims::

    {
        "sub": "user-uuid",
        "email": "user@example.com",
        "name": "Jane",
        "picture": "https://...",
        "exp": 1234567890
    }
"""

import logging
from datetime import datetime, timedelta
from typing import Any, Optional
from uuid import UUID

import httpx
from jose import JWTError, jwt
from jose.backends import ECKey

from core.config import settings
from infrastructure.auth.provider import TokenUser

logger = logging.getLogger(__name__)

# kid -> JWK, shared by all provider instances
_jwks_cache: dict[str, Any] | None = None


async def _get_jwks_keys(jwks_url: str) -> dict[str, Any]:
    """Fetch the identity provider's signing keys once and cache them."""
    global _jwks_cache
    if _jwks_cache is not None:
        return _jwks_cache

    if not jwks_url:
        return {}

    try:
        async with httpx.AsyncClient() as client:
            response = await client.get(jwks_url, timeout=10.0)
            response.raise_for_status()
    except httpx.HTTPError:
        logger.exception("Failed to fetch JWKS from %s", jwks_url)
        return {}

    _jwks_cache = {
        key["kid"]: key for key in response.json().get("keys", []) if key.get("kid")
    }
    logger.info("Fetched %d JWKS keys", len(_jwks_cache))
    return _jwks_cache


class JWTAuthProvider:
    """JWT-based implementation of IAuthProvider."""

    def __init__(
        self,
        secret_key: str = settings.jwt_secret_key,
        algorithm: str = settings.jwt_algorithm,
        expire_minutes: int = settings.jwt_expire_minutes,
        jwks_url: str = settings.jwks_url,
    ) -> None:
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._expire_minutes = expire_minutes
        self._jwks_url = jwks_url

    async def validate_token(self, token: str) -> Optional[TokenUser]:
        """
        Verify a token and build the caller identity from its claims.

        Args:
            token: The encoded JWT

        Returns:
            TokenUser if the signature, expiry and claims check out, else None
        """
        try:
            header = jwt.get_unverified_header(token)
            if header.get("alg") == "ES256":
                payload = await self._decode_es256(token, header)
            else:
                payload = jwt.decode(
                    token,
                    self._secret_key,
                    algorithms=[self._algorithm],
                    options={"verify_aud": False},
                )
        except JWTError:
            return None

        if payload is None:
            return None

        subject = payload.get("sub")
        email = payload.get("email")
        if not subject or not email:
            return None

        try:
            user_id = UUID(subject)
        except ValueError:
            return None

        return TokenUser(
            id=user_id,
            email=email,
            display_name=payload.get("name"),
            avatar_url=payload.get("picture"),
        )

    async def _decode_es256(self, token: str, header: dict) -> Optional[dict]:
        kid = header.get("kid")
        if not kid:
            return None

        key_data = (await _get_jwks_keys(self._jwks_url)).get(kid)
        if not key_data:
            # Unknown kid: the provider may have rotated its keys
            global _jwks_cache
            _jwks_cache = None
            key_data = (await _get_jwks_keys(self._jwks_url)).get(kid)
            if not key_data:
                logger.warning("JWKS key not found for kid=%s", kid)
                return None

        return jwt.decode(
            token,
            ECKey(key_data, algorithm="ES256"),
            algorithms=["ES256"],
            options={"verify_aud": False},
        )

    def create_token(self, user: TokenUser) -> str:
        """Issue an HS256 token for a user."""
        payload: dict[str, Any] = {
            "sub": str(user.id),
            "email": user.email,
            "name": user.display_name,
            "picture": user.avatar_url,
            "exp": datetime.utcnow() + timedelta(minutes=self._expire_minutes),
        }
        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)
