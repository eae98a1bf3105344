"""HTTP routes for comments."""

from flask import jsonify
from flask_login import current_user, login_required

from permissions import admin_required, manager_or_admin_required
from utils import json_body

from . import bp
from .models import (
    ContentType,
    add_comment_warning,
    create_comment,
    delete_comment,
    list_all_comments,
    list_comments,
    list_comments_by_post,
    toggle_comments_disabled,
)


@bp.route("/", methods=["GET"], strict_slashes=False)
@admin_required
def all_comments():
    return jsonify([c.to_dict(populate=True) for c in list_all_comments()])


@bp.route("/", methods=["POST"], strict_slashes=False)
@login_required
def add_comment():
    data = json_body()
    comment = create_comment(
        data.get("contentType"),
        data.get("contentId"),
        data.get("content"),
        current_user,
    )
    return jsonify(comment.to_dict()), 201


@bp.route("/<comment_id>/warning", methods=["PUT"])
@manager_or_admin_required
def warn_comment(comment_id):
    comment = add_comment_warning(comment_id, json_body().get("warning"), current_user)
    return jsonify(message="Warning added to comment", comment=comment.to_dict())


@bp.route("/<content_type>/<content_id>/toggle-disable", methods=["PUT"])
@manager_or_admin_required
def toggle_disable(content_type, content_id):
    target = toggle_comments_disabled(content_type, content_id)
    state = "disabled" if target.comments_disabled else "enabled"
    return jsonify(
        message=f"Comments {state} for {ContentType.parse(content_type).value}",
        commentsDisabled=target.comments_disabled,
    )


@bp.route("/<comment_id>", methods=["DELETE"])
@login_required
def remove_comment(comment_id):
    delete_comment(comment_id, current_user)
    return jsonify(message="Comment deleted")


@bp.route("/<content_type>/<content_id>", methods=["GET"])
def comments_for_content(content_type, content_id):
    return jsonify([c.to_dict() for c in list_comments(content_type, content_id)])


# legacy single-segment form: /api/comments/<postId>
@bp.route("/<post_id>", methods=["GET"])
def comments_for_post(post_id):
    return jsonify([c.to_dict() for c in list_comments_by_post(post_id)])
