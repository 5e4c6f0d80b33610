"""
Chirper Backend: Tweet Route Handlers
=====================================

What:  Handles POST /api/tweets (create a tweet for the logged-in user).
How:   Resolves the caller, validates the raw JSON body, delegates to
       TweetService, returns 201 with the tweet view.
Who:   Called by the frontend tweetService.createTweet().

Request Flow:
    1. get_current_user resolves the caller (401 if absent); the body has
       not been read yet at this point
    2. The JSON body is parsed leniently: invalid JSON counts as {}
    3. The validation policy checks `body` (422 with per-field messages)
    4. TweetService inserts the row and hydrates the author
    5. 201 Created with the TweetView

Only creation exists. Listing and deleting tweets have no backend contract.
"""

import json
import logging

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from chirper.auth import get_current_user
from chirper.database import get_db_session
from chirper.models.user import User
from chirper.schemas.tweet import ErrorResponse, TweetView, ValidationErrorResponse
from chirper.services.tweet_policy import validate_create_tweet
from chirper.services.tweet_service import tweet_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Tweets"])


async def read_json_payload(request: Request):
    """Parsed JSON body, or {} when the body is empty or not valid JSON."""
    raw = await request.body()
    if not raw:
        return {}
    try:
        return json.loads(raw)
    except (UnicodeDecodeError, json.JSONDecodeError):
        logger.debug("Request body is not valid JSON; treating it as empty")
        return {}


@router.post(
    "/tweets",
    status_code=201,
    response_model=TweetView,
    responses={
        201: {"description": "Tweet created", "model": TweetView},
        401: {"description": "No authenticated caller", "model": ErrorResponse},
        422: {"description": "Invalid tweet body", "model": ValidationErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Post a tweet",
    description=(
        "Creates a tweet of at most 280 characters for the authenticated user. "
        "Request body: {\"body\": string}."
    ),
)
async def store_tweet(
    request: Request,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> TweetView:
    payload = await read_json_payload(request)
    data = validate_create_tweet(payload)

    return await tweet_service.create_tweet(db=db, user_id=current_user.id, data=data)
