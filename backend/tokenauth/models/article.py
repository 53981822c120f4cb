"""Article value object served by the read-only articles endpoint."""

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True, slots=True)
class Article:
    """
    Published article.

    :ivar id: Article identifier.
    :ivar title: Headline.
    :ivar content: Body text.
    """

    id: UUID
    title: str
    content: str
