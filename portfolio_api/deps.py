# portfolio_api/deps.py
import logging
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from portfolio_api.errors import ForbiddenError, UnauthorizedError
from portfolio_api.security import (
    CredentialVerifier, EnvCredentialVerifier, InvalidToken, Principal, decode_access_token,
)
from portfolio_api.services.github_service import GitHubService
from portfolio_api.services.stats_cache import StatsCache

log = logging.getLogger("deps")

# auto_error=False so every failure goes through the same 401 below
bearer = HTTPBearer(auto_error=False)


def get_current_principal(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer),
) -> Principal:
    """Decode the bearer token. Missing header, wrong scheme, bad signature and
    expiry all produce the same 401."""
    if credentials is None or (credentials.scheme or "").lower() != "bearer":
        raise UnauthorizedError()
    token = (credentials.credentials or "").strip()
    if not token:
        raise UnauthorizedError()
    try:
        return decode_access_token(token)
    except InvalidToken as exc:
        log.info("Rejected bearer token: %s", exc)
        raise UnauthorizedError()


def require_admin(principal: Principal = Depends(get_current_principal)) -> Principal:
    if principal.role != "admin":
        raise ForbiddenError("Admin access required")
    return principal


def get_credential_verifier() -> CredentialVerifier:
    return EnvCredentialVerifier()


# ---------- App-scoped services (set up in main.py) ----------
def get_stats_cache(request: Request) -> StatsCache:
    return request.app.state.stats_cache


def get_github_service(request: Request) -> GitHubService:
    return request.app.state.github_service
