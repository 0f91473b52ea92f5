"""Data models for AgentBook.

This module defines the entity records held by the address books: clients
(plain clients and buyers) and sellers.

Identity
--------
Entities carry two notions of equality. Dataclass equality (``==``) compares
every field and is what snapshots and tests compare. Domain identity
(``is_same_client`` / ``is_same_seller``) compares names only and is what the
collections use to reject duplicates and to look entries up.

A buyer is not a subclass: it is a :class:`Client` tagged with
:attr:`ClientRole.BUYER`, so it lives in the client collection and answers both
client and buyer membership tests.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Mapping, Self

from .errors import InvalidArgumentError

_NAME_RE = re.compile(r"^[A-Za-z0-9]+( [A-Za-z0-9]+)*$")
_PHONE_RE = re.compile(r"^\d{3,}$")
_EMAIL_RE = re.compile(
    r"^[A-Za-z0-9]+(?:[+_.-][A-Za-z0-9]+)*"
    r"@(?:[A-Za-z0-9]+(?:-[A-Za-z0-9]+)*\.)*"
    r"[A-Za-z0-9]{2,}(?:-[A-Za-z0-9]+)*$"
)
_TAG_RE = re.compile(r"^[A-Za-z0-9]+$")


class ClientRole(str, Enum):
    """Role tag distinguishing plain clients from buyers."""

    CLIENT = "client"
    BUYER = "buyer"


def validate_name(value: str) -> str:
    """Return the stripped name, or raise if it is not alphanumeric words."""
    cleaned = str(value).strip()
    if not _NAME_RE.match(cleaned):
        raise InvalidArgumentError(
            f"Names should only contain alphanumeric characters and single spaces: {value!r}"
        )
    return cleaned


def validate_phone(value: str) -> str:
    """Return the stripped phone number, or raise if it is not 3+ digits."""
    cleaned = str(value).strip()
    if not _PHONE_RE.match(cleaned):
        raise InvalidArgumentError(
            f"Phone numbers should only contain digits and be at least 3 digits long: {value!r}"
        )
    return cleaned


def validate_email(value: str) -> str:
    """Return the stripped email, or raise if it is not local@domain."""
    cleaned = str(value).strip()
    if not _EMAIL_RE.match(cleaned):
        raise InvalidArgumentError(f"Emails should be of the format local-part@domain: {value!r}")
    return cleaned


def validate_address(value: str) -> str:
    """Return the stripped address, or raise if it is blank."""
    cleaned = str(value).strip()
    if not cleaned:
        raise InvalidArgumentError("Addresses can take any values, but must not be blank.")
    return cleaned


def validate_tags(values: Iterable[str]) -> frozenset[str]:
    """
    Validate tag names.

    Parameters
    ----------
    values:
        Raw tag names.

    Returns
    -------
    frozenset[str]
        Stripped tag names.

    Raises
    ------
    InvalidArgumentError
        If any tag is not a single alphanumeric word.
    """
    if isinstance(values, str):
        raise InvalidArgumentError("Tags must be given as a collection of names, not a string.")
    out: set[str] = set()
    for raw in values:
        cleaned = str(raw).strip()
        if not _TAG_RE.match(cleaned):
            raise InvalidArgumentError(f"Tag names should be alphanumeric: {raw!r}")
        out.add(cleaned)
    return frozenset(out)


def _require_keys(payload: Mapping[str, Any], keys: set[str], *, context: str) -> None:
    missing = keys.difference(payload.keys())
    if missing:
        missing_str = ", ".join(sorted(missing))
        raise ValueError(f"Missing required keys in {context}: {missing_str}")


_CONTACT_KEYS = {"name", "phone", "email", "address"}


def _contact_fields(payload: Mapping[str, Any], *, context: str) -> dict[str, Any]:
    """Pull the shared contact fields out of a decoded JSON object."""
    _require_keys(payload, _CONTACT_KEYS, context=context)
    fields: dict[str, Any] = {}
    for key in sorted(_CONTACT_KEYS):
        value = payload[key]
        if not isinstance(value, str):
            raise ValueError(
                f"{context} field {key!r} must be a string, got {type(value).__name__}"
            )
        fields[key] = value
    tags = payload.get("tags", [])
    if not isinstance(tags, list) or not all(isinstance(t, str) for t in tags):
        raise ValueError(f"{context} field 'tags' must be a list of strings")
    fields["tags"] = frozenset(tags)
    return fields


@dataclass(frozen=True, slots=True)
class Client:
    """A client of the agent. Buyers are clients with the BUYER role."""

    name: str
    phone: str
    email: str
    address: str
    tags: frozenset[str] = field(default_factory=frozenset)
    role: ClientRole = ClientRole.CLIENT

    def __post_init__(self) -> None:
        object.__setattr__(self, "name", validate_name(self.name))
        object.__setattr__(self, "phone", validate_phone(self.phone))
        object.__setattr__(self, "email", validate_email(self.email))
        object.__setattr__(self, "address", validate_address(self.address))
        object.__setattr__(self, "tags", validate_tags(self.tags))
        if not isinstance(self.role, ClientRole):
            try:
                object.__setattr__(self, "role", ClientRole(str(self.role)))
            except ValueError as exc:
                raise InvalidArgumentError(f"Unknown client role: {self.role!r}") from exc

    @classmethod
    def buyer(
        cls,
        name: str,
        phone: str,
        email: str,
        address: str,
        tags: Iterable[str] = (),
    ) -> Self:
        """Construct a client tagged as a buyer."""
        return cls(
            name=name,
            phone=phone,
            email=email,
            address=address,
            tags=frozenset(tags),
            role=ClientRole.BUYER,
        )

    @property
    def is_buyer(self) -> bool:
        return self.role is ClientRole.BUYER

    def is_same_client(self, other: object) -> bool:
        """Return True if ``other`` is a client with the same name."""
        if other is self:
            return True
        return isinstance(other, Client) and other.name == self.name

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> Self:
        """Construct a :class:`Client` from a mapping."""
        fields = _contact_fields(payload, context="client")
        return cls(role=ClientRole(str(payload.get("role", ClientRole.CLIENT.value))), **fields)

    def to_dict(self) -> dict[str, Any]:
        """Convert this model to a JSON-serializable dict."""
        return {
            "name": self.name,
            "phone": self.phone,
            "email": self.email,
            "address": self.address,
            "tags": sorted(self.tags),
            "role": self.role.value,
        }


@dataclass(frozen=True, slots=True)
class Seller:
    """A seller listing a property with the agent."""

    name: str
    phone: str
    email: str
    address: str
    tags: frozenset[str] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        object.__setattr__(self, "name", validate_name(self.name))
        object.__setattr__(self, "phone", validate_phone(self.phone))
        object.__setattr__(self, "email", validate_email(self.email))
        object.__setattr__(self, "address", validate_address(self.address))
        object.__setattr__(self, "tags", validate_tags(self.tags))

    def is_same_seller(self, other: object) -> bool:
        """Return True if ``other`` is a seller with the same name."""
        if other is self:
            return True
        return isinstance(other, Seller) and other.name == self.name

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> Self:
        """Construct a :class:`Seller` from a mapping."""
        return cls(**_contact_fields(payload, context="seller"))

    def to_dict(self) -> dict[str, Any]:
        """Convert this model to a JSON-serializable dict."""
        return {
            "name": self.name,
            "phone": self.phone,
            "email": self.email,
            "address": self.address,
            "tags": sorted(self.tags),
        }


def name_sort_key(entity: Client | Seller) -> tuple[str, str]:
    """Canonical ordering: case-insensitive name, ties broken by exact name."""
    return (entity.name.casefold(), entity.name)
