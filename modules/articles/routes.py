"""HTTP routes for articles."""

from flask import jsonify
from flask_login import current_user

from permissions import admin_required, manager_or_admin_required
from utils import json_body

from . import bp
from .models import create_article, delete_article, get_article, list_articles, update_article


@bp.route("/", methods=["GET"], strict_slashes=False)
def index():
    return jsonify([a.to_dict() for a in list_articles()])


@bp.route("/<article_id>", methods=["GET"])
def view_article(article_id):
    return jsonify(get_article(article_id).to_dict())


@bp.route("/", methods=["POST"], strict_slashes=False)
@manager_or_admin_required
def add_article():
    article = create_article(json_body(), current_user)
    return jsonify(article.to_dict()), 201


# Update/delete are gated on role alone; authorship grants nothing extra.
@bp.route("/<article_id>", methods=["PUT"])
@admin_required
def edit_article(article_id):
    return jsonify(update_article(article_id, json_body()).to_dict())


@bp.route("/<article_id>", methods=["DELETE"])
@admin_required
def remove_article(article_id):
    delete_article(article_id)
    return jsonify(message="Article deleted")
