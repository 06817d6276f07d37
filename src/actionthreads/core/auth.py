"""Bearer token verification utilities.

Provides a FastAPI dependency ``get_current_user`` that validates an incoming
``Authorization: Bearer <token>`` header and returns the local ``User`` the
token belongs to. There is no anonymous mode: a missing or unverifiable token
always raises ``AuthRequiredError``.

Two verification modes, picked from settings:

* shared secret (``auth_jwt_secret``): HS256 tokens such as Supabase access
  tokens, checked against ``auth_jwt_audience``.
* JWKS (``auth0_domain`` + ``auth0_api_audience``): RS256 tokens; keys are
  fetched from ``https://<domain>/.well-known/jwks.json`` and cached.

We use python-jose for JWT verification. The ``sub`` claim is treated as the
stable external user id; ``email`` is used to auto-provision a local user
record if one does not exist yet.
"""
from __future__ import annotations

import logging
import time
import httpx
from functools import lru_cache
from typing import Any, Optional
from jose import jwt, jwk, JWTError
from jose.utils import base64url_decode
from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from actionthreads.core.config import Settings, get_settings
from actionthreads.core.errors import AuthRequiredError
from actionthreads.db.session import get_db
from actionthreads.models.user import User
from actionthreads.services.user import get_or_provision_user

logger = logging.getLogger("actionthreads.auth")


class JWKSFetchError(Exception):
    """The issuer's key set could not be retrieved."""


class JWKSCache:
    def __init__(self, ttl_seconds: int) -> None:
        self._ttl = ttl_seconds
        self._expires_at = 0.0
        self._jwks: dict[str, Any] | None = None

    async def get(self, domain: str) -> dict[str, Any]:
        now = time.time()
        if self._jwks and now < self._expires_at:
            return self._jwks
        url = f"https://{domain.rstrip('/')}/.well-known/jwks.json"
        try:
            async with httpx.AsyncClient(timeout=10) as client:
                resp = await client.get(url)
        except httpx.HTTPError as exc:
            raise JWKSFetchError(f"Failed to fetch JWKS: {exc.__class__.__name__}") from exc
        if resp.status_code != 200:
            raise JWKSFetchError(f"Failed to fetch JWKS: {resp.status_code}")
        data = resp.json()
        self._jwks = data
        self._expires_at = now + self._ttl
        return data


@lru_cache
def _jwks_cache(ttl: int) -> JWKSCache:
    return JWKSCache(ttl)


def _verify_shared_secret(token: str, settings: Settings) -> dict[str, Any]:
    options = {"verify_aud": settings.auth_jwt_audience is not None}
    return jwt.decode(
        token,
        settings.auth_jwt_secret.get_secret_value(),
        algorithms=["HS256"],
        audience=settings.auth_jwt_audience,
        options=options,
    )


async def _verify_jwks(token: str, settings: Settings) -> dict[str, Any]:
    cache = _jwks_cache(settings.auth_jwks_cache_ttl_seconds)
    jwks = await cache.get(settings.auth0_host)
    kid = jwt.get_unverified_header(token).get("kid")
    if not kid:
        raise AuthRequiredError("Missing kid header")
    key = next((k for k in jwks.get("keys", []) if k.get("kid") == kid), None)
    if not key:
        raise AuthRequiredError("Unknown signing key")
    public_key = jwk.construct(key)
    message, encoded_signature = token.rsplit(".", 1)
    if not public_key.verify(message.encode(), base64url_decode(encoded_signature.encode())):
        raise AuthRequiredError("Invalid token signature")
    return jwt.decode(
        token,
        key,
        algorithms=settings.auth_algorithms,
        audience=settings.auth0_api_audience,
        issuer=settings.auth0_issuer,
    )


async def _verify_token(token: str, settings: Settings) -> dict[str, Any]:
    # Basic structural validation of JWT
    if token.count(".") != 2:
        raise AuthRequiredError("Malformed bearer token")
    try:
        if settings.auth_jwt_secret is not None:
            return _verify_shared_secret(token, settings)
        if settings.auth0_host and settings.auth0_api_audience:
            return await _verify_jwks(token, settings)
    except JWTError as exc:
        logger.info("auth.token.rejected", extra={"error_type": exc.__class__.__name__})
        raise AuthRequiredError("Invalid bearer token") from exc
    except JWKSFetchError as exc:
        logger.warning("auth.jwks.unavailable", extra={"error": str(exc)})
        raise AuthRequiredError("Token verification failed") from exc
    # neither mode configured: no token can ever be accepted
    logger.error("auth.not_configured")
    raise AuthRequiredError("Token verification is not configured")


async def get_current_user(
    authorization: Optional[str] = Header(None),
    session: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> User:
    """Validate the bearer token and return the associated local User."""
    if not authorization or not authorization.startswith("Bearer "):
        raise AuthRequiredError("Missing bearer token")
    token = authorization[len("Bearer "):].strip()
    claims = await _verify_token(token, settings)

    subject = claims.get("sub")
    if not subject:
        raise AuthRequiredError("Missing sub claim")
    return await get_or_provision_user(session, subject=str(subject), email=claims.get("email"))


__all__ = ["get_current_user"]
