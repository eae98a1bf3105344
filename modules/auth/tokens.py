"""Bearer token issuing and verification."""

from datetime import datetime, timedelta, timezone

from flask import current_app
from jose import jwt


def issue_token(user) -> str:
    """Signed token carrying the user's id and role, valid for JWT_EXPIRES_DAYS."""
    now = datetime.now(timezone.utc)
    claims = {
        "sub": str(user.id),
        "role": user.role,
        "iat": now,
        "exp": now + timedelta(days=current_app.config["JWT_EXPIRES_DAYS"]),
    }
    return jwt.encode(
        claims,
        current_app.config["JWT_SECRET"],
        algorithm=current_app.config["JWT_ALGORITHM"],
    )


def decode_token(token: str) -> dict:
    """Verified claims. Raises ``jose.JWTError`` on a bad signature, expiry or shape."""
    return jwt.decode(
        token,
        current_app.config["JWT_SECRET"],
        algorithms=[current_app.config["JWT_ALGORITHM"]],
    )
