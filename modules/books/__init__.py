"""Book catalog module package."""

from flask import Blueprint

bp = Blueprint("books", __name__, url_prefix="/api/books")

from . import models  # noqa: E402  pylint: disable=wrong-import-position
from . import routes  # noqa: E402  pylint: disable=wrong-import-position

__all__ = ["bp", "models", "routes"]
