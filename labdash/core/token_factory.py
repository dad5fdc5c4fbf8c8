"""Pure functions for issuing and verifying session tokens.

A session token is an HS256-signed JWT carrying the user id, role, email
and display name, so a request can rebuild its principal without a
database round trip for the bootstrap admin.
"""

import base64
import hashlib
import hmac
import json
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

_ISSUER = "labdash"


@dataclass(frozen=True)
class TokenPayload:
    """Decoded session claims. Immutable."""
    sub: str
    role: str
    email: str
    name: str
    exp: datetime


def create_token(
    subject: str,
    role: str,
    secret: str,
    email: str = "",
    name: str = "",
    algorithm: str = "HS256",
    expires_hours: int = 24,
) -> str:
    """Create a signed session token.

    Args:
        subject: User id.
        role: ``"admin"`` or ``"user"``.
        secret: HMAC signing key.
        email: User email, echoed back in ``/api/auth/me``.
        name: Display name.
        algorithm: Only HS256 supported.
        expires_hours: Hours until expiry (negative values yield an expired token).
    """
    if algorithm != "HS256":
        raise ValueError(f"Unsupported algorithm: {algorithm}")

    now = time.time()
    claims = {
        "sub": subject,
        "role": role,
        "email": email,
        "name": name,
        "iat": int(now),
        "exp": int(now + expires_hours * 3600),
        "iss": _ISSUER,
    }

    segments = [
        _b64encode(json.dumps({"alg": "HS256", "typ": "JWT"}).encode()),
        _b64encode(json.dumps(claims).encode()),
    ]
    segments.append(_b64encode(_sign(secret, b".".join(segments))))
    return b".".join(segments).decode()


def decode_token(token: str, secret: str, algorithm: str = "HS256") -> Optional[TokenPayload]:
    """Verify a session token.

    Returns ``None`` for a bad signature, foreign issuer, expiry or
    malformed input; callers decide what absence means.
    """
    if algorithm != "HS256" or not token:
        return None

    try:
        header, body, signature = token.encode().split(b".")
        if not hmac.compare_digest(_sign(secret, header + b"." + body), _b64decode(signature)):
            return None

        claims = json.loads(_b64decode(body))
        if claims.get("iss") != _ISSUER:
            return None

        exp = claims.get("exp", 0)
        if time.time() > exp:
            return None

        return TokenPayload(
            sub=claims.get("sub", ""),
            role=claims.get("role", ""),
            email=claims.get("email", ""),
            name=claims.get("name", ""),
            exp=datetime.fromtimestamp(exp, tz=timezone.utc),
        )
    except (json.JSONDecodeError, ValueError, TypeError):
        return None


def _sign(secret: str, signing_input: bytes) -> bytes:
    return hmac.new(secret.encode(), signing_input, hashlib.sha256).digest()


# --- base64url helpers (no padding, URL-safe) ---

def _b64encode(data: bytes) -> bytes:
    return base64.urlsafe_b64encode(data).rstrip(b"=")


def _b64decode(data: bytes) -> bytes:
    return base64.urlsafe_b64decode(data + b"=" * (-len(data) % 4))
