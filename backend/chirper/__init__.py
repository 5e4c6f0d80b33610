"""
Chirper Backend: Application Package Initializer
================================================

Backend for a minimal Twitter clone: authenticated users post short text
tweets through POST /api/tweets.

Architecture:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │  Services (Validation, Creation)    │  ← tweet_policy, TweetService
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

Caller identity comes from chirper.auth and is resolved before any route
logic runs.
"""

__version__ = "1.0.0"
