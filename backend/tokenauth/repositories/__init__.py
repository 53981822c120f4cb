"""Persistence helpers that are not behind a service port."""

from .article import ArticleRepository, default_articles

__all__ = ["ArticleRepository", "default_articles"]
