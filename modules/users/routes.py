"""HTTP routes for user administration."""

from flask import jsonify

from models import User
from permissions import admin_required

from . import bp


@bp.route("/", methods=["GET"], strict_slashes=False)
@admin_required
def list_users():
    users = User.query.order_by(User.created_at.desc(), User.id.desc()).all()
    return jsonify([u.to_dict() for u in users])
