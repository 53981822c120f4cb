"""Reusable SQLAlchemy mixins shared by persisted records (typed 2.0)."""

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column


def _utcnow() -> datetime:
    return datetime.now(UTC)


class TimestampMixin:
    """Provide a ``created_at`` timestamp column.

    Filled on the application side with microsecond precision so listing by
    ``created_at`` preserves insertion order. Users are never updated in
    place, so no ``updated_at`` column is kept.
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
    )


class UUIDPKMixin:
    """Expose a textual UUID primary key column named ``id``.

    The value is generated by the application (``uuid4``) rather than the
    database so memory and SQL backends hand out identical identifiers.
    """

    id: Mapped[str] = mapped_column(String(36), primary_key=True)


class ReprMixin:
    """Provide a concise ``__repr__`` including the class name and id."""

    def __repr__(self) -> str:
        """Return a short and useful string representation.

        :returns: Debug-friendly ``<ClassName id=...>``.
        :rtype: str
        """
        cls = self.__class__.__name__
        key = getattr(self, "id", None)
        return f"<{cls} id={key}>"
