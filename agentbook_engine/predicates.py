"""
Filter predicates for the filtered client and seller views.

Predicates are plain callables. The ones defined here are frozen dataclasses so
that two predicates built from the same input compare equal.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, TypeVar

from .data_models import Client, Seller
from .errors import InvalidArgumentError

T = TypeVar("T")

Predicate = Callable[[T], bool]


def show_all(_entity: object) -> bool:
    """Predicate that keeps every entity."""
    return True


@dataclass(frozen=True, slots=True)
class NameContainsKeywordsPredicate:
    """
    Keep entities whose name contains any of the keywords as a whole word.

    Matching is case-insensitive.
    """

    keywords: tuple[str, ...]

    def __post_init__(self) -> None:
        cleaned = tuple(k.strip() for k in self.keywords if k.strip())
        if not cleaned:
            raise InvalidArgumentError("At least one non-blank keyword is required.")
        if any(" " in k for k in cleaned):
            raise InvalidArgumentError("Keywords must be single words.")
        object.__setattr__(self, "keywords", cleaned)

    def __call__(self, entity: Client | Seller) -> bool:
        words = {w.casefold() for w in entity.name.split()}
        return any(k.casefold() in words for k in self.keywords)


@dataclass(frozen=True, slots=True)
class RolePredicate:
    """Keep clients holding one role (used to list buyers only)."""

    buyers_only: bool = True

    def __call__(self, entity: Client) -> bool:
        return entity.is_buyer is self.buyers_only
