"""HTTP routes for the book catalog."""

from flask import jsonify, request
from flask_login import current_user

from permissions import admin_required
from utils import json_body

from . import bp
from .models import create_book, delete_book, get_book, list_books, update_book


@bp.route("/", methods=["GET"], strict_slashes=False)
def index():
    args = request.args
    books = list_books(
        category=args.get("category"),
        min_price=args.get("minPrice"),
        max_price=args.get("maxPrice"),
        condition=args.get("condition"),
        search=args.get("search"),
    )
    return jsonify([b.to_dict() for b in books])


@bp.route("/<book_id>", methods=["GET"])
def view_book(book_id):
    return jsonify(get_book(book_id).to_dict(populate=True))


@bp.route("/", methods=["POST"], strict_slashes=False)
@admin_required
def add_book():
    book = create_book(json_body(), current_user)
    return jsonify(message="Book created successfully", book=book.to_dict()), 201


@bp.route("/<book_id>", methods=["PUT"])
@admin_required
def edit_book(book_id):
    book = update_book(book_id, json_body())
    return jsonify(message="Book updated successfully", book=book.to_dict())


@bp.route("/<book_id>", methods=["DELETE"])
@admin_required
def remove_book(book_id):
    delete_book(book_id)
    return jsonify(message="Book deleted successfully")
