"""HTTP routes for book reviews."""

from flask import jsonify
from flask_login import current_user, login_required

from permissions import manager_or_admin_required
from utils import json_body

from . import bp
from .models import (
    add_review_warning,
    create_review,
    delete_review,
    list_reviews,
    review_stats,
    toggle_reviews_disabled,
)


@bp.route("/", methods=["POST"], strict_slashes=False)
@login_required
def add_review():
    data = json_body()
    review = create_review(data.get("bookId"), data.get("rating"), data.get("content"), current_user)
    return jsonify(message="Review posted successfully", review=review.to_dict()), 201


@bp.route("/book/<book_id>", methods=["GET"])
def reviews_for_book(book_id):
    return jsonify([r.to_dict(populate=True) for r in list_reviews(book_id)])


@bp.route("/book/<book_id>/stats", methods=["GET"])
def stats_for_book(book_id):
    return jsonify(review_stats(book_id))


@bp.route("/<review_id>/warning", methods=["PUT"])
@manager_or_admin_required
def warn_review(review_id):
    review = add_review_warning(review_id, json_body().get("warning"), current_user)
    return jsonify(message="Warning added to review", review=review.to_dict())


@bp.route("/<book_id>/toggle-disable", methods=["PUT"])
@manager_or_admin_required
def toggle_disable(book_id):
    book = toggle_reviews_disabled(book_id)
    state = "disabled" if book.reviews_disabled else "enabled"
    return jsonify(message=f"Reviews {state} for book", reviewsDisabled=book.reviews_disabled)


@bp.route("/<review_id>", methods=["DELETE"])
@login_required
def remove_review(review_id):
    delete_review(review_id, current_user)
    return jsonify(message="Review deleted successfully")
