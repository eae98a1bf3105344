"""Blog posts module package."""

from flask import Blueprint

bp = Blueprint("blog", __name__, url_prefix="/api/blog")

from . import models  # noqa: E402  pylint: disable=wrong-import-position
from . import routes  # noqa: E402  pylint: disable=wrong-import-position

__all__ = ["bp", "models", "routes"]
