"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, so the domain entities stay free of
column types and session state.
"""

from decimal import Decimal
from typing import Optional

from forexledger.domain import entities as domain
from forexledger.domain.transaction_type import TransactionType
from forexledger.database.models import (
    Book as ORMBook,
    Entry as ORMEntry,
    ExchangeRate as ORMExchangeRate,
)


def _decimal(value) -> Optional[Decimal]:
    # SQLite hands Numeric columns back as Decimal, other drivers may not
    if value is None:
        return None
    return value if isinstance(value, Decimal) else Decimal(str(value))


def book_to_domain(orm_book: ORMBook) -> domain.Book:
    """Convert SQLAlchemy Book model to a detached domain Book snapshot."""
    return domain.Book(
        id=orm_book.id,
        name=orm_book.name,
        bank=orm_book.bank,
        currency_type=orm_book.currency_type,
        creator=orm_book.creator,
        created_time=orm_book.created_time,
        balance=_decimal(orm_book.balance),
        remaining_twd_fund=orm_book.remaining_twd_fund,
        twd_profit=orm_book.twd_profit,
        profit_rate=_decimal(orm_book.profit_rate),
    )


def copy_book_metadata(book: domain.Book, orm_book: ORMBook) -> None:
    """Copy the fields the metadata updaters change onto the ORM row."""
    orm_book.balance = book.balance
    orm_book.remaining_twd_fund = book.remaining_twd_fund
    orm_book.twd_profit = book.twd_profit
    orm_book.profit_rate = book.profit_rate


def entry_to_domain(orm_entry: ORMEntry) -> domain.Entry:
    """Convert SQLAlchemy Entry model to domain Entry entity."""
    return domain.Entry(
        id=orm_entry.id,
        book_id=orm_entry.book_id,
        transaction_type=TransactionType[orm_entry.transaction_type],
        transaction_date=orm_entry.transaction_date,
        foreign_amount=_decimal(orm_entry.foreign_amount),
        twd_amount=orm_entry.twd_amount,
        related_book_id=orm_entry.related_book_id,
        related_book_foreign_amount=_decimal(orm_entry.related_book_foreign_amount),
        creator=orm_entry.creator,
        created_time=orm_entry.created_time,
    )


def entry_to_orm(entry: domain.Entry) -> ORMEntry:
    """Build an unsaved SQLAlchemy Entry row from a domain entry draft."""
    return ORMEntry(
        book_id=entry.book_id,
        transaction_type=entry.transaction_type.name,
        transaction_date=entry.transaction_date,
        foreign_amount=entry.foreign_amount,
        twd_amount=entry.twd_amount,
        related_book_id=entry.related_book_id,
        related_book_foreign_amount=entry.related_book_foreign_amount,
        creator=entry.creator,
        created_time=entry.created_time,
    )


def exchange_rate_to_domain(orm_rate: ORMExchangeRate) -> domain.ExchangeRate:
    """Convert SQLAlchemy ExchangeRate model to domain ExchangeRate entity."""
    return domain.ExchangeRate(
        bank=orm_rate.bank,
        currency_type=orm_rate.currency_type,
        buying_rate=_decimal(orm_rate.buying_rate),
        selling_rate=_decimal(orm_rate.selling_rate),
        updated_time=orm_rate.updated_time,
    )
