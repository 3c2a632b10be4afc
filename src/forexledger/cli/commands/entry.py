"""Entry commands."""

import click

from forexledger.cli.error_handling import handle_domain_error
from forexledger.cli.services import (
    book_service_from_context,
    entry_service_from_context,
    resolve_book_or_exit,
)
from forexledger.domain.entities import CreateEntryRequest
from forexledger.domain.errors import DomainError
from forexledger.domain.transaction_type import TransactionType
from forexledger.utils.amount_parser import parse_amount, parse_twd_amount
from forexledger.utils.date_parser import parse_date

TYPE_CHOICES = [member.name for member in TransactionType]


@click.group()
def entry_group():
    """Record and list entries."""
    pass


@entry_group.command("add")
@click.option("--book", required=True, help="Book name or ID")
@click.option(
    "--type",
    "transaction_type",
    required=True,
    type=click.Choice(TYPE_CHOICES, case_sensitive=False),
    help="Transaction type",
)
@click.option("--amount", required=True, help="Foreign amount moved in or out of the book")
@click.option("--twd", help="TWD amount (TWD transfers, or foreign transfers without a related book)")
@click.option("--related-book", help="Other book of a transfer between books (name or ID)")
@click.option("--related-amount", help="Foreign amount moved in or out of the related book")
@click.option("--date", "date_str", default="today", help="Transaction date (YYYY-MM-DD or 'today', 'yesterday')")
@click.pass_context
def add_entry(
    ctx,
    book: str,
    transaction_type: str,
    amount: str,
    twd: str | None,
    related_book: str | None,
    related_amount: str | None,
    date_str: str,
):
    """Record an entry against a book.

    A transfer between two books also records the mirrored entry on the
    related book.

    Examples:
        forexledger entry add --book "USD savings" --type TRANSFER_IN_FROM_TWD --amount 1000 --twd 31000
        forexledger entry add --book "USD savings" --type TRANSFER_OUT_TO_FOREIGN --amount 50 \\
            --related-book "USD broker" --related-amount 50
    """
    book_service = book_service_from_context(ctx)
    entry_service = entry_service_from_context(ctx)

    book_id = resolve_book_or_exit(ctx, book_service, book)
    related_book_id = None
    if related_book:
        related_book_id = resolve_book_or_exit(ctx, book_service, related_book)

    try:
        foreign_amount = parse_amount(amount)
        twd_amount = parse_twd_amount(twd) if twd is not None else None
        related_book_foreign_amount = parse_amount(related_amount) if related_amount is not None else None
        transaction_date = parse_date(date_str)
    except ValueError as e:
        click.echo(f"Error: Invalid input: {e}", err=True)
        ctx.exit(1)

    request = CreateEntryRequest(
        book_id=book_id,
        transaction_type=TransactionType.parse(transaction_type),
        foreign_amount=foreign_amount,
        transaction_date=transaction_date,
        twd_amount=twd_amount,
        related_book_id=related_book_id,
        related_book_foreign_amount=related_book_foreign_amount,
    )

    try:
        entry_id = entry_service.create_entry(request)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created entry {entry_id}")
    click.echo(f"  Type: {request.transaction_type.name}")
    click.echo(f"  Date: {transaction_date}")
    click.echo(f"  Amount: {foreign_amount:,}")
    if related_book_id:
        click.echo(f"  Related book: {related_book_id}")


@entry_group.command("list")
@click.option("--book", help="Only entries of this book (name or ID)")
@click.option("--start-date", help="Earliest transaction date")
@click.option("--end-date", help="Latest transaction date")
@click.pass_context
def list_entries(ctx, book: str | None, start_date: str | None, end_date: str | None):
    """List entries, oldest first."""
    book_service = book_service_from_context(ctx)
    entry_service = entry_service_from_context(ctx)

    book_id = resolve_book_or_exit(ctx, book_service, book) if book else None

    try:
        start = parse_date(start_date) if start_date else None
        end = parse_date(end_date) if end_date else None
    except ValueError as e:
        click.echo(f"Error: Invalid date: {e}", err=True)
        ctx.exit(1)

    try:
        entries = entry_service.list_entries(book_id=book_id, start_date=start, end_date=end)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not entries:
        click.echo("No entries found.")
        return

    for entry in entries:
        twd = "" if entry.twd_amount is None else f" | TWD {entry.twd_amount:,d}"
        related = "" if entry.related_book_id is None else f" | Related: {entry.related_book_id}"
        click.echo(
            f"{entry.transaction_date} | {entry.book_id} | {entry.transaction_type.name:26s} | "
            f"{entry.foreign_amount:>12,.2f}{twd}{related}"
        )


def register_commands(cli):
    """Register entry commands with main CLI."""
    cli.add_command(entry_group, name="entry")
