"""HTTP routes for blog posts."""

from flask import jsonify
from flask_login import current_user

from permissions import manager_or_admin_required
from utils import json_body

from . import bp
from .models import create_post, get_post, list_posts


@bp.route("/", methods=["GET"], strict_slashes=False)
def index():
    return jsonify([p.to_dict() for p in list_posts()])


@bp.route("/<post_id>", methods=["GET"])
def view_post(post_id):
    return jsonify(get_post(post_id).to_dict())


@bp.route("/", methods=["POST"], strict_slashes=False)
@manager_or_admin_required
def add_post():
    post = create_post(json_body(), current_user)
    return jsonify(message="Post created successfully", post=post.to_dict()), 201
