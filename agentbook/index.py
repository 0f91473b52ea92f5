"""
One-based list indexes typed by the user.

Commands address entries by their position in the displayed list. Only plain
unsigned decimal digits are accepted, and the value must fit a signed 32-bit
integer: ``"1"`` and ``"2147483647"`` parse; ``"0"``, ``"-1"``, ``"+1"``,
``"1b"`` and ``"2147483648"`` do not.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from agentbook_engine.errors import ParseError

MAX_INDEX = 2**31 - 1
MESSAGE_INVALID_INDEX = "Index is not a non-zero unsigned integer."

_DIGITS_RE = re.compile(r"^[0-9]+$")


@dataclass(frozen=True, slots=True)
class Index:
    """A list position, stored zero-based."""

    zero_based: int

    def __post_init__(self) -> None:
        if self.zero_based < 0:
            raise ValueError("Index must not be negative")

    @property
    def one_based(self) -> int:
        return self.zero_based + 1

    @classmethod
    def from_one_based(cls, value: int) -> "Index":
        return cls(zero_based=value - 1)


def parse_index(text: str) -> Index:
    """
    Parse a user-typed one-based index.

    Parameters
    ----------
    text:
        Raw argument. Surrounding whitespace is ignored.

    Returns
    -------
    Index
        The parsed index.

    Raises
    ------
    ParseError
        If ``text`` is not an unsigned integer in ``1..MAX_INDEX``.
    """
    cleaned = text.strip()
    if not _DIGITS_RE.match(cleaned):
        raise ParseError(MESSAGE_INVALID_INDEX)
    value = int(cleaned)
    if value < 1 or value > MAX_INDEX:
        raise ParseError(MESSAGE_INVALID_INDEX)
    return Index.from_one_based(value)
