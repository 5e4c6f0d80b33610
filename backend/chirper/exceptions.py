"""
Chirper Backend: Custom Exception Hierarchy
===========================================

What:  Application-specific exceptions for each error scenario.
How:   Each exception carries a user-facing message and an optional context
       dict. Global exception handlers (registered in main.py) catch these and
       return JSON error responses with the matching HTTP status code.
Who:   Raised by services and the auth dependency; caught by global handlers.

Exception Hierarchy:
    ChirperError (base)
    ├── AuthenticationError  → 401 Unauthorized
    ├── ValidationError      → 422 Unprocessable Entity (per-field messages)
    └── InternalError        → 500 Internal Server Error
        └── DatabaseError    → 500 Internal Server Error

None of these are retried by the backend. Context is logged server-side and
never returned to the client.
"""

from typing import Any, Dict, List, Optional


class ChirperError(Exception):
    """
    Base exception for all Chirper application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class AuthenticationError(ChirperError):
    """
    Raised when the request carries no valid caller identity.

    When:    Missing or malformed Authorization header, bad signature,
             expired token, or a token for a user that no longer exists.
    HTTP:    401 Unauthorized, body {"message": "Unauthenticated."}

    `reason` is for the log line only; every variant looks the same to the
    client.
    """

    def __init__(
        self,
        reason: str = "missing credentials",
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["reason"] = reason
        super().__init__(message="Unauthenticated.", context=ctx)
        self.reason = reason


class ValidationError(ChirperError):
    """
    Raised when client input fails one or more field rules.

    HTTP:    422 Unprocessable Entity

    `errors` maps each failing field to its list of messages, in rule order.
    The top-level message is the first message, suffixed with how many more
    failures exist.

    Example response:
        {
            "message": "The tweet body is required.",
            "errors": {"body": ["The tweet body is required."]}
        }
    """

    def __init__(
        self,
        errors: Dict[str, List[str]],
        context: Optional[Dict[str, Any]] = None,
    ):
        self.errors = errors
        super().__init__(message=self._summarize(errors), context=context)

    @staticmethod
    def _summarize(errors: Dict[str, List[str]]) -> str:
        messages = [message for field_messages in errors.values() for message in field_messages]
        if not messages:
            return "The given data was invalid."
        summary = messages[0]
        remaining = len(messages) - 1
        if remaining:
            noun = "error" if remaining == 1 else "errors"
            summary += f" (and {remaining} more {noun})"
        return summary


class InternalError(ChirperError):
    """
    Raised when a collaborator (persistence, identity lookup) fails.

    HTTP:    500 Internal Server Error, body {"message": "Server Error"}
    """

    def __init__(
        self,
        message: str = "Server Error",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(InternalError):
    """
    Raised when a database operation fails.

    When:    Connection lost mid-query, constraint violation (for example a
             dangling user_id), deadlock.

    The client always sees the generic InternalError body. SQL, constraint
    names and driver messages stay in `context` and the server log.
    """

    def __init__(
        self,
        message: str = "A database error occurred.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
