"""Authentication service — registration, login, user lookup.

Passwords are hashed with bcrypt via passlib and never stored or logged
in plaintext. Two configured secrets take part in authentication:

* the bootstrap admin (``BOOTSTRAP_ADMIN_EMAIL`` / ``BOOTSTRAP_ADMIN_PASSWORD``),
  checked before the users table so it works on any database state;
* the admin registration code (``ADMIN_REGISTRATION_CODE``), which lets a
  new account sign up with the admin role.

Both are compared in constant time.
"""

import hmac
import logging
import uuid
from dataclasses import dataclass
from typing import Optional

import sqlalchemy.exc
from passlib.hash import bcrypt
from sqlalchemy.orm import Session

from ..core.config import settings
from ..exceptions import AuthenticationError, ValidationError
from ..models.user import User

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 8


@dataclass(frozen=True)
class SessionUser:
    """The identity a successful login resolves to."""
    id: str
    email: str
    name: str
    role: str


def _secret_equals(given: str, expected: str) -> bool:
    return hmac.compare_digest(given.encode(), expected.encode())


def bootstrap_admin_id(email: Optional[str] = None) -> str:
    """Deterministic UUID for the bootstrap admin.

    A real UUID keeps the account inside the identifier gate, so its
    favorites and events behave like any other user's.
    """
    email = (email if email is not None else settings.bootstrap_admin_email).strip().lower()
    return str(uuid.uuid5(uuid.NAMESPACE_URL, f"labdash:bootstrap-admin:{email}"))


def is_bootstrap_subject(user_id: str, email: str) -> bool:
    if not settings.bootstrap_admin_enabled:
        return False
    return email == settings.bootstrap_admin_email and user_id == bootstrap_admin_id()


def _bootstrap_login(email: str, password: str) -> Optional[SessionUser]:
    if not settings.bootstrap_admin_enabled or email != settings.bootstrap_admin_email:
        return None
    if not _secret_equals(password, settings.bootstrap_admin_password):
        return None
    return SessionUser(
        id=bootstrap_admin_id(),
        email=settings.bootstrap_admin_email,
        name=settings.bootstrap_admin_name,
        role="admin",
    )


def register_user(
    db: Session,
    name: str,
    email: str,
    password: str,
    admin_code: Optional[str] = None,
) -> User:
    """Create a new account.

    The role is ``admin`` only when ``admin_code`` matches the configured
    registration code; otherwise ``user``. A code that is supplied but
    wrong (or admin registration disabled) is rejected rather than
    silently downgraded.

    Raises ValidationError on bad input or an email already in use.
    """
    email = email.strip().lower()
    if not email or "@" not in email:
        raise ValidationError("Valid email address required", field="email")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters", field="password"
        )
    if not name.strip():
        raise ValidationError("Name required", field="name")
    if settings.bootstrap_admin_enabled and email == settings.bootstrap_admin_email:
        raise ValidationError("Email already registered", field="email")

    role = "user"
    if admin_code:
        configured = settings.admin_registration_code
        if not configured or not _secret_equals(admin_code, configured):
            raise ValidationError("Invalid admin code", field="admin_code")
        role = "admin"

    if db.query(User).filter(User.email == email).first() is not None:
        raise ValidationError("Email already registered", field="email")

    user = User(
        name=name.strip(),
        email=email,
        password_hash=bcrypt.hash(password),
        role=role,
        is_active=True,
    )
    db.add(user)
    try:
        db.commit()
    except sqlalchemy.exc.IntegrityError:
        # Lost a race with a concurrent registration of the same email.
        db.rollback()
        raise ValidationError("Email already registered", field="email")

    db.refresh(user)
    logger.info("Registered %s account", role, extra={"user_id": user.id})
    return user


def authenticate(db: Session, email: str, password: str) -> SessionUser:
    """Validate credentials.

    The bootstrap admin is checked first and never touches the database.
    Raises AuthenticationError on unknown email, wrong password or an
    inactive account.
    """
    email = email.strip().lower()

    bootstrap = _bootstrap_login(email, password)
    if bootstrap is not None:
        logger.info("Bootstrap admin login")
        return bootstrap

    user = db.query(User).filter(User.email == email).first()
    if user is None or not bcrypt.verify(password, user.password_hash):
        logger.info("Failed login attempt")
        raise AuthenticationError("Invalid email or password")

    if not user.is_active:
        raise AuthenticationError("Account is deactivated")

    return SessionUser(id=user.id, email=user.email, name=user.name, role=user.role)


def get_user_by_id(db: Session, user_id: str) -> Optional[User]:
    return db.query(User).filter(User.id == user_id).first()


def list_users(db: Session) -> list[User]:
    return db.query(User).order_by(User.created_at).all()
