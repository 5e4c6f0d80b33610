"""
Chirper Backend: Tweet SQLAlchemy Model
=======================================

What:  ORM model representing the `tweets` table.
How:   Inherits from the shared DeclarativeBase; Alembic migration
       002_create_tweets_table mirrors these columns.
Who:   Written by TweetService; read back by future timeline queries.

Table Design:
    - UUID primary key generated in Python at flush time (random, not
      sequential), immutable once assigned
    - user_id → users.id with ON DELETE CASCADE: deleting a user deletes
      their tweets
    - body: TEXT; the 280-character limit is enforced by the validation
      policy, not by the column
    - posted_at: logical post time, set once by the creation service from the
      server clock. Distinct from the created_at/updated_at audit columns,
      which the persistence layer maintains.

    Composite index (user_id, posted_at):
        Serves per-user timelines ordered by post time
        (WHERE user_id = :id ORDER BY posted_at DESC).
"""

import uuid
from datetime import datetime

from sqlalchemy import ForeignKey, Index, Text, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.types import TIMESTAMP

from chirper.database import Base
from chirper.models.user import BigIntegerId, utcnow


class Tweet(Base):
    """
    A short text post owned by exactly one User.

    Lifecycle:
        Created only through TweetService.create_tweet(). No update or delete
        path exists in the backend; rows disappear only via the user cascade.

    Construction:
        Only user_id, body and posted_at can be supplied. id and the audit
        timestamps are filled in by column defaults.
    """

    __tablename__ = "tweets"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    user_id: Mapped[int] = mapped_column(
        BigIntegerId,
        ForeignKey("users.id", ondelete="CASCADE", name="tweets_user_id_foreign"),
        nullable=False,
    )

    body: Mapped[str] = mapped_column(Text, nullable=False)

    posted_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
    )

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
        Index("tweets_user_id_posted_at_index", "user_id", "posted_at"),
    )

    def __init__(self, *, user_id: int, body: str, posted_at: datetime) -> None:
        super().__init__(user_id=user_id, body=body, posted_at=posted_at)

    def __repr__(self) -> str:
        return (
            f"<Tweet(id={self.id}, user_id={self.user_id}, "
            f"posted_at='{self.posted_at}')>"
        )
