"""Exchange rate commands."""

import click

from forexledger.utils.amount_parser import parse_amount


@click.group()
def rate_group():
    """Manage buying rates used to value books."""
    pass


@rate_group.command("set")
@click.argument("bank")
@click.argument("currency")
@click.argument("buying_rate", metavar="BUYING_RATE")
@click.option("--selling", help="Selling rate")
@click.pass_context
def set_rate(ctx, bank: str, currency: str, buying_rate: str, selling: str | None):
    """Store the latest rate a bank quotes for a currency.

    Examples:
        forexledger rate set FUBON USD 31.2 --selling 31.7
    """
    db = ctx.obj["db"]

    try:
        buying = parse_amount(buying_rate)
        selling_rate = parse_amount(selling) if selling is not None else None
    except ValueError as e:
        click.echo(f"Error: Invalid rate: {e}", err=True)
        ctx.exit(1)

    if buying <= 0 or (selling_rate is not None and selling_rate <= 0):
        click.echo("Error: Rates must be positive", err=True)
        ctx.exit(1)

    db.set_exchange_rate(bank.upper(), currency.upper(), buying, selling_rate)
    click.echo(f"Set {currency.upper()} buying rate at {bank.upper()} to {buying}")


@rate_group.command("list")
@click.pass_context
def list_rates(ctx):
    """List stored rates."""
    db = ctx.obj["db"]

    rates = db.get_exchange_rates()
    if not rates:
        click.echo("No exchange rates found.")
        return

    for rate in rates:
        selling = "-" if rate.selling_rate is None else f"{rate.selling_rate}"
        click.echo(f"{rate.bank:10s} | {rate.currency_type} | Buying: {rate.buying_rate} | Selling: {selling}")


def register_commands(cli):
    """Register rate commands with main CLI."""
    cli.add_command(rate_group, name="rate")
