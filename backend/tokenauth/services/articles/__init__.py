"""Article catalogue service."""

from .service import ArticleService

__all__ = ["ArticleService"]
