# Schemas package init
"""
Chirper Backend: Pydantic Schemas
=================================

Request and response shapes for the API. Route handlers return these,
never ORM models.

Schema Inventory:
    - tweet.py: CreateTweetInput, TweetView, UserSummary, CurrentUserResponse,
                HealthResponse, and the error bodies
"""
