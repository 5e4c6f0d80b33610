"""
Chirper Backend: User SQLAlchemy Model
======================================

What:  ORM model for the `users` table.
Who:   Owned by the authentication collaborator. The backend reads it to
       resolve the caller identity and to hydrate a tweet's author; it never
       creates or edits users through the API.

Table Design:
    - Integer autoincrement id (BIGINT on PostgreSQL, INTEGER on SQLite so
      that SQLite keeps its rowid autoincrement behavior)
    - email is unique; name is the public display name
"""

from datetime import datetime, timezone

from sqlalchemy import BigInteger, Integer, String, UniqueConstraint, text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.types import TIMESTAMP

from chirper.database import Base

# BIGINT primary key that still autoincrements on SQLite.
BigIntegerId = BigInteger().with_variant(Integer(), "sqlite")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    """A registered account. Tweets reference it through tweets.user_id."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(BigIntegerId, primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    email: Mapped[str] = mapped_column(String(255), nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )

    updated_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )

    __table_args__ = (
        UniqueConstraint("email", name="users_email_unique"),
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, name='{self.name}')>"
