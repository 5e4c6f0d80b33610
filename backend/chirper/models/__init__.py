# Models package init
"""
Chirper Backend: ORM Models
===========================

Importing this package registers every table with Base.metadata, which
Alembic and the test suite rely on.
"""

from chirper.models.tweet import Tweet
from chirper.models.user import User

__all__ = ["Tweet", "User"]
