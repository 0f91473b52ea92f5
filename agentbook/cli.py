"""
Command-line interface for AgentBook.

Notes
-----
The CLI is intentionally thin. It parses arguments, runs the shared startup
sequence, calls one ModelManager operation and saves the book it changed.

Exit codes
----------
- 0: success
- 1: the model rejected the command (duplicate, not found, index out of range)
- 2: malformed arguments or unreadable data
"""

from __future__ import annotations

import argparse
from dataclasses import replace
from pathlib import Path
from typing import Callable, Sequence

from agentbook.index import parse_index
from agentbook_engine.bootstrap import AppContext, init_app
from agentbook_engine.data_models import Client, ClientRole, Seller
from agentbook_engine.errors import (
    DataLoadingError,
    DuplicateEntityError,
    EntityNotFoundError,
    InvalidArgumentError,
    ParseError,
)
from agentbook_engine.paths import app_paths_as_text, resolve_app_paths
from agentbook_engine.predicates import NameContainsKeywordsPredicate, RolePredicate

MESSAGE_INVALID_COMMAND_FORMAT = "Invalid command format! \n%s"
MESSAGE_INVALID_CLIENT_INDEX = "The client index provided is invalid"
MESSAGE_INVALID_SELLER_INDEX = "The seller index provided is invalid"
MESSAGE_NOT_EDITED = "At least one field to edit must be provided."


def _add_contact_arguments(p: argparse.ArgumentParser, *, required: bool) -> None:
    p.add_argument("--name", required=required, help="Full name")
    p.add_argument("--phone", required=required, help="Phone number (digits only)")
    p.add_argument("--email", required=required, help="Email address")
    p.add_argument("--address", required=required, help="Postal address")
    p.add_argument(
        "--tag",
        action="append",
        default=None,
        help="Tag name. Repeatable. When editing, replaces all existing tags.",
    )


def build_parser() -> argparse.ArgumentParser:
    """
    Build and return the top-level argument parser.

    Returns
    -------
    argparse.ArgumentParser
        Configured parser.
    """
    parser = argparse.ArgumentParser(
        prog="agentbook",
        description="AgentBook: clients, buyers and sellers for property agents",
    )
    parser.add_argument(
        "--data-root",
        default=None,
        help="Override the AgentBook data root. If omitted, defaults are used.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("paths", help="Print resolved data paths")

    list_c = sub.add_parser("list-clients", help="List all clients")
    list_c.add_argument("--buyers-only", action="store_true", help="Only list buyers")
    sub.add_parser("list-sellers", help="List all sellers")

    find_c = sub.add_parser("find-clients", help="List clients whose name contains a keyword")
    find_c.add_argument("keywords", nargs="+", help="Whole-word, case-insensitive keywords")
    find_s = sub.add_parser("find-sellers", help="List sellers whose name contains a keyword")
    find_s.add_argument("keywords", nargs="+", help="Whole-word, case-insensitive keywords")

    for name, help_text in (
        ("add-client", "Add a client"),
        ("add-buyer", "Add a client tagged as a buyer"),
        ("add-seller", "Add a seller"),
    ):
        _add_contact_arguments(sub.add_parser(name, help=help_text), required=True)

    for name, help_text in (
        ("edit-client", "Edit the client at INDEX"),
        ("edit-seller", "Edit the seller at INDEX"),
    ):
        p = sub.add_parser(name, help=help_text)
        p.add_argument("index", help="One-based index as shown by the list command")
        _add_contact_arguments(p, required=False)

    for name, help_text in (
        ("delete-client", "Delete the client at INDEX"),
        ("delete-seller", "Delete the seller at INDEX"),
    ):
        p = sub.add_parser(name, help=help_text)
        p.add_argument("index", help="One-based index as shown by the list command")

    sub.add_parser("sort-clients", help="Sort clients by name")

    return parser


def format_client(position: int, client: Client) -> str:
    tags = ", ".join(sorted(client.tags)) or "-"
    return (
        f"{position}. {client.name} [{client.role.value}] | {client.phone} | "
        f"{client.email} | {client.address} | tags: {tags}"
    )


def format_seller(position: int, seller: Seller) -> str:
    tags = ", ".join(sorted(seller.tags)) or "-"
    return (
        f"{position}. {seller.name} | {seller.phone} | {seller.email} | "
        f"{seller.address} | tags: {tags}"
    )


def _print_listing(entries: Sequence[object], fmt: Callable[[int, object], str], noun: str) -> None:
    for position, entry in enumerate(entries, start=1):
        print(fmt(position, entry))
    print(f"{len(entries)} {noun} listed!")


def _contact_fields(args: argparse.Namespace) -> dict[str, object]:
    fields: dict[str, object] = {}
    for key in ("name", "phone", "email", "address"):
        value = getattr(args, key)
        if value is not None:
            fields[key] = value
    if args.tag is not None:
        fields["tags"] = frozenset(args.tag)
    return fields


def _pick(entries: Sequence[object], raw_index: str, message: str) -> object:
    index = parse_index(raw_index)
    if index.zero_based >= len(entries):
        raise EntityNotFoundError(message)
    return entries[index.zero_based]


def _run(args: argparse.Namespace, ctx: AppContext) -> int:
    model = ctx.model
    command = args.command

    if command == "list-clients":
        if args.buyers_only:
            model.update_filtered_client_list(RolePredicate(buyers_only=True))
        _print_listing(model.get_filtered_client_list(), format_client, "clients")
        return 0

    if command == "list-sellers":
        _print_listing(model.get_filtered_seller_list(), format_seller, "sellers")
        return 0

    if command == "find-clients":
        model.update_filtered_client_list(NameContainsKeywordsPredicate(tuple(args.keywords)))
        _print_listing(model.get_filtered_client_list(), format_client, "clients")
        return 0

    if command == "find-sellers":
        model.update_filtered_seller_list(NameContainsKeywordsPredicate(tuple(args.keywords)))
        _print_listing(model.get_filtered_seller_list(), format_seller, "sellers")
        return 0

    if command in ("add-client", "add-buyer"):
        role = ClientRole.BUYER if command == "add-buyer" else ClientRole.CLIENT
        client = Client(role=role, **_contact_fields(args))  # type: ignore[arg-type]
        if client.is_buyer:
            model.add_buyer(client)
        else:
            model.add_client(client)
        ctx.storage.save_address_book(model.get_address_book())
        print(f"New {role.value} added: {client.name}")
        return 0

    if command == "add-seller":
        seller = Seller(**_contact_fields(args))  # type: ignore[arg-type]
        model.add_seller(seller)
        ctx.storage.save_seller_address_book(model.get_seller_address_book())
        print(f"New seller added: {seller.name}")
        return 0

    if command == "edit-client":
        target = _pick(model.get_filtered_client_list(), args.index, MESSAGE_INVALID_CLIENT_INDEX)
        changes = _contact_fields(args)
        if not changes:
            raise ParseError(MESSAGE_NOT_EDITED)
        assert isinstance(target, Client)
        edited = replace(target, **changes)
        model.set_client(target, edited)
        ctx.storage.save_address_book(model.get_address_book())
        print(f"Edited client: {edited.name}")
        return 0

    if command == "edit-seller":
        target = _pick(model.get_filtered_seller_list(), args.index, MESSAGE_INVALID_SELLER_INDEX)
        changes = _contact_fields(args)
        if not changes:
            raise ParseError(MESSAGE_NOT_EDITED)
        assert isinstance(target, Seller)
        edited_seller = replace(target, **changes)
        model.set_seller(target, edited_seller)
        ctx.storage.save_seller_address_book(model.get_seller_address_book())
        print(f"Edited seller: {edited_seller.name}")
        return 0

    if command == "delete-client":
        target = _pick(model.get_filtered_client_list(), args.index, MESSAGE_INVALID_CLIENT_INDEX)
        assert isinstance(target, Client)
        model.delete_client(target)
        ctx.storage.save_address_book(model.get_address_book())
        print(f"Deleted client: {target.name}")
        return 0

    if command == "delete-seller":
        target = _pick(model.get_filtered_seller_list(), args.index, MESSAGE_INVALID_SELLER_INDEX)
        assert isinstance(target, Seller)
        model.delete_seller(target)
        ctx.storage.save_seller_address_book(model.get_seller_address_book())
        print(f"Deleted seller: {target.name}")
        return 0

    if command == "sort-clients":
        model.sort_filtered_client_list()
        ctx.storage.save_address_book(model.get_address_book())
        print("Sorted all clients by name.")
        return 0

    raise ParseError(f"Unknown command: {command}")


def main(argv: list[str] | None = None) -> int:
    """
    CLI entry point.

    Parameters
    ----------
    argv:
        Optional argument vector. If None, argparse uses sys.argv.

    Returns
    -------
    int
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    data_root = Path(args.data_root) if args.data_root else None

    if args.command == "paths":
        print(app_paths_as_text(resolve_app_paths(data_root)))
        return 0

    try:
        ctx = init_app(data_root)
        return _run(args, ctx)
    except ParseError as exc:
        print("ERROR: " + MESSAGE_INVALID_COMMAND_FORMAT % exc)
        return 2
    except (InvalidArgumentError, DataLoadingError, OSError) as exc:
        print(f"ERROR: {exc}")
        return 2
    except (DuplicateEntityError, EntityNotFoundError) as exc:
        print(f"ERROR: {exc}")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
