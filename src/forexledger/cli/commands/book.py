"""Book management commands."""

import click

from forexledger.cli.error_handling import handle_domain_error
from forexledger.cli.services import book_service_from_context, resolve_book_or_exit
from forexledger.domain.entities import CreateBookRequest
from forexledger.domain.errors import DomainError


def _format_profit(twd_profit, profit_rate) -> str:
    if twd_profit is None:
        return "n/a"
    if profit_rate is None:
        return f"{twd_profit:+,d} TWD"
    return f"{twd_profit:+,d} TWD ({profit_rate * 100:+.2f}%)"


@click.group()
def book_group():
    """Manage foreign-currency books."""
    pass


@book_group.command("create")
@click.argument("name", metavar="BOOK_NAME")
@click.option("--bank", required=True, help="Bank holding the currency (e.g., FUBON)")
@click.option("--currency", required=True, help="Currency code (e.g., USD)")
@click.pass_context
def create_book(ctx, name: str, bank: str, currency: str):
    """Create a new book with zero balance.

    Examples:
        forexledger book create "USD savings" --bank FUBON --currency USD
        forexledger book create "Yen trip fund" --bank CATHAY --currency JPY
    """
    service = book_service_from_context(ctx)

    try:
        book_id = service.create_book(CreateBookRequest(name=name, bank=bank, currency_type=currency))
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created book '{name}' (ID: {book_id})")


@book_group.command("list")
@click.pass_context
def list_books(ctx):
    """List your books with profit at the latest buying rates."""
    service = book_service_from_context(ctx)

    books = service.load_my_books()
    if not books:
        click.echo("No books found.")
        return

    click.echo("\nBooks:")
    click.echo("-" * 90)
    for book in books:
        click.echo(
            f"{book.id} | {book.name:20s} | {book.currency_type} {book.balance:>14,.2f} | "
            f"Profit: {_format_profit(book.twd_profit, book.profit_rate)}"
        )


@book_group.command("show")
@click.argument("book", metavar="BOOK")
@click.pass_context
def show_book(ctx, book: str):
    """Show one book's balance, cost basis and profit.

    BOOK can be a book name or ID.
    """
    service = book_service_from_context(ctx)
    book_id = resolve_book_or_exit(ctx, service, book)

    try:
        detail = service.load_book_detail(book_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Book: {detail.name} (ID: {detail.id})")
    click.echo(f"  Bank: {detail.bank}")
    click.echo(f"  Balance: {detail.currency_type} {detail.balance:,.2f}")
    click.echo(f"  Remaining TWD fund: {detail.remaining_twd_fund:,d}")
    if detail.break_even_point is not None:
        click.echo(f"  Break-even point: {detail.break_even_point:.4f}")
    if detail.buying_rate is not None:
        click.echo(f"  Buying rate: {detail.buying_rate}")
        click.echo(f"  Current value: {detail.twd_current_value:,d} TWD")
    click.echo(f"  Profit: {_format_profit(detail.twd_profit, detail.profit_rate)}")


def register_commands(cli):
    """Register book commands with main CLI."""
    cli.add_command(book_group, name="book")
