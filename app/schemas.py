"""Schemas for API responses."""

from __future__ import annotations

from marshmallow import Schema, fields


class HealthStatusSchema(Schema):
    status = fields.String(required=True)
    app = fields.String()


class CorsPolicySchema(Schema):
    origins = fields.Raw(required=True, metadata={"description": '"*", a list of origins or "<predicate>"'})
    methods = fields.List(fields.String(), required=True)
    request_headers = fields.List(fields.String(), required=True)
    response_headers = fields.List(fields.String(), required=True)
    exposed_headers = fields.List(fields.String(), required=True)
    supports_credentials = fields.Boolean(required=True)
    max_age = fields.Integer(allow_none=True)
    end_preflight_requests = fields.Boolean(required=True)
