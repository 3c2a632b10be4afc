"""CLI helpers for building services and resolving books."""

from __future__ import annotations

import click

from forexledger.domain.book import BookService
from forexledger.domain.entry import EntryService
from forexledger.domain.errors import DomainError
from forexledger.domain.exchange_rate import DatabaseRateSource
from forexledger.cli.error_handling import handle_domain_error
from forexledger.utils.book_resolver import resolve_book


def book_service_from_context(ctx: click.Context) -> BookService:
    """Build a BookService for the database and user on the CLI context."""
    db = ctx.obj["db"]
    return BookService(db, creator=ctx.obj["user"], rate_source=DatabaseRateSource(db))


def entry_service_from_context(ctx: click.Context) -> EntryService:
    """Build an EntryService sharing the context's database and user."""
    return EntryService(ctx.obj["db"], creator=ctx.obj["user"], book_service=book_service_from_context(ctx))


def resolve_book_or_exit(ctx: click.Context, book_service: BookService, book: str) -> str:
    """Resolve book name or ID, or exit with a CLI error.

    This keeps error messaging and exit behavior consistent across commands.
    """
    try:
        return resolve_book(book_service, book)
    except DomainError as exc:
        handle_domain_error(ctx, exc)
