"""Read-only article repository backed by a fixed in-memory catalogue."""

from __future__ import annotations

from collections.abc import Iterable
from uuid import uuid4

from tokenauth.models.article import Article


def default_articles() -> list[Article]:
    """Return the articles published at startup."""
    return [
        Article(id=uuid4(), title="Article1", content="Content1"),
        Article(id=uuid4(), title="Article2", content="Content2"),
    ]


class ArticleRepository:
    """Persistence-only access to articles.

    The catalogue is immutable after construction, so no locking is needed.
    """

    def __init__(self, articles: Iterable[Article] | None = None) -> None:
        self._articles: tuple[Article, ...] = tuple(
            default_articles() if articles is None else articles
        )

    def find_all(self) -> list[Article]:
        """Return every article in catalogue order."""
        return list(self._articles)
