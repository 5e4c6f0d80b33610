"""
Chirper Backend: Current User Route
===================================

What:  GET /api/user returns the authenticated caller's profile.
Who:   Used by the frontend to check whether its stored token is still valid.
"""

from fastapi import APIRouter, Depends

from chirper.auth import get_current_user
from chirper.models.user import User
from chirper.schemas.tweet import CurrentUserResponse, ErrorResponse, to_iso8601

router = APIRouter(prefix="/api", tags=["Users"])


@router.get(
    "/user",
    response_model=CurrentUserResponse,
    responses={401: {"description": "No authenticated caller", "model": ErrorResponse}},
    summary="Get the authenticated user",
)
async def show_current_user(current_user: User = Depends(get_current_user)) -> CurrentUserResponse:
    return CurrentUserResponse(
        id=current_user.id,
        name=current_user.name,
        email=current_user.email,
        created_at=to_iso8601(current_user.created_at),
        updated_at=to_iso8601(current_user.updated_at),
    )
