"""
Error types raised by the storage and search layers.
"""

from typing import Optional


class KnowledgeBaseError(Exception):
    """Base class for knowledge base errors."""


class NotFoundError(KnowledgeBaseError):
    """A mutation targeted a row that does not exist."""

    def __init__(self, kind: str, key: str):
        super().__init__(f"{kind} not found: {key}")
        self.kind = kind
        self.key = key


class BackendQueryError(KnowledgeBaseError):
    """
    The backing store rejected a search statement.

    The message is the backend's own error text. These errors are not
    retried; callers get either the full result set or this error.
    """

    def __init__(self, message: str, sql: Optional[str] = None):
        super().__init__(message)
        self.sql = sql
