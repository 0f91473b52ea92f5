"""Argument checks shared by the model layer."""

from __future__ import annotations

from .errors import InvalidArgumentError


def require_non_null(*values: object) -> None:
    """
    Reject None arguments.

    Parameters
    ----------
    values:
        Arguments that must all be provided.

    Raises
    ------
    InvalidArgumentError
        If any value is None.
    """
    for position, value in enumerate(values):
        if value is None:
            raise InvalidArgumentError(f"Argument {position} must not be None.")
