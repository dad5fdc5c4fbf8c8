"""Authentication dependencies.

Public interface:
    ``require_auth``  — returns the caller's AuthContext or raises 401.
    ``optional_auth`` — AuthContext when a valid token is present, else None.
    ``require_admin`` — AuthContext, raises 403 unless the caller is an admin.

The AuthContext is the explicit session object for a request. It replaces
any process-global "current user".
"""

import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from .config import settings
from .token_factory import TokenPayload, decode_token
from ..database import get_db
from ..exceptions import AuthenticationError, ForbiddenError

logger = logging.getLogger(__name__)

_bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class AuthContext:
    """Resolved identity of the caller."""

    user_id: str
    role: str
    email: str = ""
    name: str = ""

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


def require_auth(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer_scheme),
    db: Session = Depends(get_db),
) -> AuthContext:
    """Require a valid session token."""
    if credentials is None:
        raise AuthenticationError("Missing authentication token")

    payload = decode_token(
        credentials.credentials, settings.jwt_secret_key, settings.jwt_algorithm
    )
    if payload is None:
        raise AuthenticationError("Invalid or expired token")

    return _load_auth_context(payload, db)


def optional_auth(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer_scheme),
    db: Session = Depends(get_db),
) -> Optional[AuthContext]:
    """Resolve the caller when a valid token is sent. Never raises."""
    if credentials is None:
        return None

    payload = decode_token(
        credentials.credentials, settings.jwt_secret_key, settings.jwt_algorithm
    )
    if payload is None:
        return None

    try:
        return _load_auth_context(payload, db)
    except AuthenticationError:
        return None


def require_admin(
    auth: AuthContext = Depends(require_auth),
) -> AuthContext:
    """Require the authenticated user to be an admin. Raises 403 otherwise."""
    if not auth.is_admin:
        raise ForbiddenError("Admin access required")
    return auth


def _load_auth_context(payload: TokenPayload, db: Session) -> AuthContext:
    """Turn verified claims into an AuthContext.

    The bootstrap admin has no users row; its claims are trusted as long
    as the bootstrap account is still configured with the same email.
    """
    from ..services import auth_service

    if auth_service.is_bootstrap_subject(payload.sub, payload.email):
        return AuthContext(
            user_id=payload.sub,
            role="admin",
            email=payload.email,
            name=settings.bootstrap_admin_name,
        )

    user = auth_service.get_user_by_id(db, payload.sub)
    if user is None:
        raise AuthenticationError("User not found")
    if not user.is_active:
        raise AuthenticationError("Account is deactivated")

    return AuthContext(user_id=user.id, role=user.role, email=user.email, name=user.name)
