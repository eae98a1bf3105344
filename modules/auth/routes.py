"""HTTP routes for registration/login and the bearer-token request loader."""

import logging

from flask import g, jsonify
from jose import JWTError

from errors import AuthError
from extensions import db, login_manager
from models import User
from utils import json_body

from . import bp
from .accounts import authenticate, register_user
from .tokens import decode_token, issue_token

logger = logging.getLogger(__name__)


@login_manager.request_loader
def load_user_from_request(req) -> User | None:
    """Resolve ``Authorization: Bearer <token>`` to a stored ``User``."""

    header = req.headers.get("Authorization", "")
    if not header.startswith("Bearer ") or not header[7:].strip():
        g.auth_error = "Unauthorized: No token"
        return None

    try:
        claims = decode_token(header[7:].strip())
        user_id = int(claims["sub"])
    except (JWTError, KeyError, TypeError, ValueError) as exc:
        logger.warning("Token verification failed: %s", exc)
        g.auth_error = "Unauthorized: Invalid or expired token"
        return None

    user = db.session.get(User, user_id)
    if user is None:
        logger.warning("Valid token points to missing user %s", user_id)
        g.auth_error = "Unauthorized: User not found"
        return None
    return user


@login_manager.unauthorized_handler
def unauthorized():
    raise AuthError(g.pop("auth_error", "Unauthorized"))


def _auth_response(user: User, message: str) -> dict:
    return {"message": message, "token": issue_token(user), "user": user.public_dict()}


@bp.route("/register", methods=["POST"])
def register():
    data = json_body()
    user = register_user(
        data.get("username"),
        data.get("email"),
        data.get("password"),
        data.get("role"),
    )
    return jsonify(_auth_response(user, f"User registered successfully as {user.role}")), 201


@bp.route("/login", methods=["POST"])
def login():
    data = json_body()
    user = authenticate(data.get("email"), data.get("password"))
    return jsonify(_auth_response(user, "Login successful")), 200
