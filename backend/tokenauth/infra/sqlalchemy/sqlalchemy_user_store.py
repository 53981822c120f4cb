"""SQL-backed credential store built on Flask-SQLAlchemy."""

from __future__ import annotations

from dataclasses import dataclass, field
from uuid import UUID

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from tokenauth.models.user import User, UserRecord, normalize_email
from tokenauth.services._shared.errors import ConflictError, violates
from tokenauth.services._shared.ports import UserStore


@dataclass(slots=True)
class SQLAlchemyUserStore(UserStore):
    """
    Persist users in the ``users`` table.

    Each write commits its own transaction; reads return detached
    :class:`User` snapshots, never ORM rows.

    .. note::
       Requires an active Flask app context (the session is app-scoped).
    """

    db: SQLAlchemy = field(repr=False)

    @property
    def session(self):
        return self.db.session

    def save(self, user: User) -> bool:
        self.session.add(UserRecord.from_domain(user))
        try:
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            if violates(exc, "uq_users_email"):
                raise ConflictError("User", "email already in use") from exc
            raise  # unknown integrity error -> bubble up
        return True

    def find_by_email(self, email: str) -> User | None:
        try:
            key = normalize_email(email)
        except ValueError:
            return None
        stmt = select(UserRecord).where(UserRecord.email == key)
        row = self.session.execute(stmt).scalars().first()
        return row.to_domain() if row is not None else None

    def find_by_id(self, user_id: UUID) -> User | None:
        row = self.session.get(UserRecord, str(user_id))
        return row.to_domain() if row is not None else None

    def find_all(self) -> list[User]:
        stmt = select(UserRecord).order_by(UserRecord.created_at, UserRecord.id)
        return [row.to_domain() for row in self.session.execute(stmt).scalars()]

    def delete_by_id(self, user_id: UUID) -> bool:
        row = self.session.get(UserRecord, str(user_id))
        if row is None:
            return False
        self.session.delete(row)
        self.session.commit()
        return True
