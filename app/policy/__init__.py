"""CORS policy blueprint module."""

from __future__ import annotations

from flask_smorest import Blueprint

blp = Blueprint("CORS", __name__, description="Effective cross-origin policy")

from . import routes  # noqa: E402,F401
