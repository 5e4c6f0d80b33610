"""
Chirper Backend: Tweet Service (Business Logic Orchestrator)
============================================================

What:  Creates a tweet for the authenticated caller and shapes the response.
How:   Inserts one Tweet row, reads the owning User back with a plain
       SELECT, and builds a TweetView from both.
Who:   Called by the POST /api/tweets route handler.

Orchestration Flow:
    ┌────────────┐    ┌──────────────┐    ┌──────────────┐    ┌──────────┐
    │ Validated  │───▶│ INSERT tweet │───▶│ SELECT user  │───▶│ TweetView│
    │ input      │    │ (flush)      │    │ by id        │    │          │
    └────────────┘    └──────────────┘    └──────────────┘    └──────────┘

    The transaction is committed by get_db_session once the handler returns.
    There is no retry and no deduplication: submitting the same body twice
    creates two tweets with two ids.

Error Handling:
    Any SQLAlchemyError (connection loss, FK violation for a user_id that
    does not exist) is re-raised as DatabaseError. An author missing after
    the insert is reported the same way.
"""

import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from chirper.exceptions import DatabaseError
from chirper.models.tweet import Tweet
from chirper.models.user import User
from chirper.schemas.tweet import CreateTweetInput, TweetView, UserSummary, to_iso8601

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TweetService:
    """
    Business logic layer for tweet creation.

    Stateless apart from the clock, which supplies posted_at and can be
    replaced in tests.
    """

    def __init__(self, clock: Optional[Clock] = None):
        self.clock = clock or utc_now

    async def create_tweet(
        self,
        db: AsyncSession,
        user_id: int,
        data: CreateTweetInput,
    ) -> TweetView:
        """
        Persist a new tweet authored by `user_id`.

        Workflow Steps:
            1. Build the Tweet from the allow-listed fields and flush it
               (assigns the UUID and audit timestamps)
            2. Look up the author by id
            3. Return the view

        Args:
            db: Async database session (injected by FastAPI)
            user_id: Id of the authenticated caller
            data: Output of the validation policy

        Returns:
            TweetView with id, body, author id/name, created_at and posted_at

        Raises:
            DatabaseError: insert or lookup failed (→ 500)
        """
        try:
            tweet = Tweet(user_id=user_id, body=data.body, posted_at=self.clock())
            db.add(tweet)
            await db.flush()

            result = await db.execute(select(User).where(User.id == tweet.user_id))
            author = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error(
                "Database error creating tweet for user %s: %s", user_id, str(e),
                exc_info=True,
            )
            raise DatabaseError(
                message="Could not save the tweet.",
                context={"user_id": user_id, "error_type": type(e).__name__},
            ) from e

        if author is None:
            logger.error("Author %s vanished after tweet %s was inserted", user_id, tweet.id)
            raise DatabaseError(
                message="Could not load the tweet author.",
                context={"user_id": user_id, "tweet_id": str(tweet.id)},
            )

        logger.info(
            "Tweet %s created by user %s (%d chars)", tweet.id, author.id, len(tweet.body),
        )

        return TweetView(
            id=str(tweet.id),
            body=tweet.body,
            user=UserSummary(id=author.id, name=author.name),
            created_at=to_iso8601(tweet.created_at),
            posted_at=to_iso8601(tweet.posted_at),
        )


# ── Singleton Instance ────────────────────────────────────────────────────
tweet_service = TweetService()
