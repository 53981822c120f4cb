"""Article endpoints."""

from __future__ import annotations

from flask import Blueprint

from tokenauth.api.deps import article_service, json_response, require_auth, timing
from tokenauth.schemas import ArticleSchema
from tokenauth.security import SecurityContext

bp = Blueprint("articles", __name__)

article_list_schema = ArticleSchema(many=True)


@bp.get("")
@require_auth
@timing
def list_articles(*, ctx: SecurityContext):
    """Return the article catalogue to any authenticated caller."""

    return json_response(article_list_schema.dump(article_service(ctx).find_all()))
