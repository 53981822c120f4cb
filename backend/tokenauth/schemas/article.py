"""Article resource schemas."""

from __future__ import annotations

from marshmallow import Schema, fields


class ArticleSchema(Schema):
    """Public representation of an article."""

    id = fields.UUID(required=True)
    title = fields.String(required=True)
    content = fields.String(required=True)
