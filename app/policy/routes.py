"""Expose the CORS policy the service is running with."""

from __future__ import annotations

from flask import current_app
from flask.views import MethodView

from app.cors import CORS_EXTENSION, describe_policy
from app.schemas import CorsPolicySchema

from . import blp


@blp.route("/policy")
class CorsPolicy(MethodView):
    @blp.response(200, CorsPolicySchema())
    def get(self):
        engine = current_app.extensions[CORS_EXTENSION]
        return describe_policy(engine.policy)
