"""Account registration and credential checks."""

import logging

from flask import current_app
from werkzeug.security import check_password_hash, generate_password_hash

from errors import AuthError, ConflictError, ValidationError
from extensions import db
from models import ROLES, User
from utils import clean_str

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


def normalize_email(email: str) -> str:
    return str(email).strip().lower()


def hash_password(password: str) -> str:
    return generate_password_hash(
        str(password).strip(), method=current_app.config["PASSWORD_HASH_METHOD"]
    )


def register_user(username, email, password, role=None) -> User:
    username = clean_str(username)
    email = normalize_email(email) if email is not None else ""
    if not username or not email or not clean_str(password):
        raise ValidationError("All fields are required")

    role = role or "user"
    if role not in ROLES:
        raise ValidationError(f"Role must be one of: {', '.join(ROLES)}")

    if User.query.filter_by(email=email).first() is not None:
        raise ConflictError("Email already registered")

    user = User(
        username=username,
        email=email,
        password=hash_password(password),
        role=role,
    )
    db.session.add(user)
    db.session.commit()
    logger.info("Registered user %s as %s", user.id, user.role)
    return user


def authenticate(email, password) -> User:
    """
    Resolve credentials to a user.

    Unknown email and wrong password raise the same AuthError so callers
    cannot tell which accounts exist.
    """
    if not email or not password:
        raise ValidationError("Email and password required")

    user = User.query.filter_by(email=normalize_email(email)).first()
    if user is None or not check_password_hash(user.password, str(password).strip()):
        logger.warning("Failed login attempt")
        raise AuthError(INVALID_CREDENTIALS)
    return user
