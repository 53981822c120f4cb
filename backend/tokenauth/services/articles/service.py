"""Article read service."""

from __future__ import annotations

from tokenauth.models.article import Article
from tokenauth.repositories.article import ArticleRepository
from tokenauth.security.context import SecurityContext
from tokenauth.services._shared.base import BaseService


class ArticleService(BaseService):
    """Expose the article catalogue to authenticated callers."""

    def __init__(self, *, repo: ArticleRepository, ctx: SecurityContext | None = None) -> None:
        super().__init__(ctx=ctx)
        self.repo = repo

    def find_all(self) -> list[Article]:
        return self.repo.find_all()
