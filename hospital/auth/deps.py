# hospital/auth/deps.py
from typing import Optional
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .identity import IdentityProvider, IdentitySession

_bearer = HTTPBearer(auto_error=False)


def get_identity_provider(request: Request) -> IdentityProvider:
    provider = getattr(request.app.state, "identity_provider", None)
    if provider is None:
        raise RuntimeError(
            "IdentityProvider not found in app.state. Ensure lifespan is configured."
        )
    return provider


def get_identity_session(
    provider: IdentityProvider = Depends(get_identity_provider),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer),
) -> IdentitySession:
    session = IdentitySession(provider)
    session.sign_in_with_token(credentials.credentials if credentials else None)
    return session


def require_admin(
    session: IdentitySession = Depends(get_identity_session),
) -> IdentitySession:
    """Router dependency for every /admin endpoint: 401 signed out, 403 not admin."""
    session.require_admin()
    return session


__all__ = ["get_identity_provider", "get_identity_session", "require_admin"]
