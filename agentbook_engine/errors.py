"""
Domain exceptions for AgentBook.

Notes
-----
Engine code avoids raising generic exceptions. Every expected failure mode maps
to one of the classes below so that the CLI and GUI can translate it into a
user-visible message.
"""

from __future__ import annotations


class AgentBookError(RuntimeError):
    """Base exception for all AgentBook domain failures."""


class InvalidArgumentError(AgentBookError):
    """Raised when a model operation receives None or a malformed value."""


class DuplicateEntityError(AgentBookError):
    """Raised when an insertion or replacement would create a duplicate entity."""


class EntityNotFoundError(AgentBookError):
    """Raised when a removal or replacement target is not in the collection."""


class DataLoadingError(AgentBookError):
    """Raised when a data file exists but cannot be decoded into valid entities."""


class ParseError(AgentBookError):
    """Raised when command arguments are malformed."""
