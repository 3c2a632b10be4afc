"""Domain model entities for forexledger.

These are plain data classes representing business concepts, independent of
database schema. Entries and requests are frozen; a Book is mutable because
the metadata updaters adjust its balance and profit fields in place on a
snapshot that is only persisted when the surrounding unit of work commits.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from typing import Optional

from forexledger.domain.transaction_type import TransactionType


@dataclass
class Book:
    """Foreign-currency book domain entity."""

    id: str
    name: str
    bank: str
    currency_type: str
    creator: str
    created_time: datetime
    balance: Decimal = Decimal("0")
    remaining_twd_fund: int = 0
    twd_profit: Optional[int] = None
    profit_rate: Optional[Decimal] = None

    @property
    def break_even_point(self) -> Optional[Decimal]:
        """TWD paid per unit of the current balance, or None for an empty book."""
        if self.balance <= 0:
            return None
        return Decimal(self.remaining_twd_fund) / self.balance


@dataclass(frozen=True)
class Entry:
    """Entry domain entity.

    A draft produced by the expander has ``id=None`` until it is inserted.
    """

    id: Optional[str]
    book_id: str
    transaction_type: TransactionType
    transaction_date: date
    foreign_amount: Decimal
    twd_amount: Optional[int]
    related_book_id: Optional[str]
    related_book_foreign_amount: Optional[Decimal]
    creator: str
    created_time: datetime


@dataclass(frozen=True)
class CreateEntryRequest:
    """Input for creating an entry against a book."""

    book_id: str
    transaction_type: TransactionType
    foreign_amount: Decimal
    transaction_date: date = field(default_factory=date.today)
    twd_amount: Optional[int] = None
    related_book_id: Optional[str] = None
    related_book_foreign_amount: Optional[Decimal] = None

    @property
    def has_related_book(self) -> bool:
        """Whether a non-blank related book id was supplied."""
        return bool(self.related_book_id and self.related_book_id.strip())


@dataclass(frozen=True)
class CreateBookRequest:
    """Input for creating a book."""

    name: str
    bank: str
    currency_type: str


@dataclass(frozen=True)
class BookSummary:
    """Book list item with profit evaluated at the current buying rate."""

    id: str
    name: str
    currency_type: str
    balance: Decimal
    twd_current_value: Optional[int]
    twd_profit: Optional[int]
    profit_rate: Optional[Decimal]


@dataclass(frozen=True)
class BookDetail:
    """Single book view with cost basis and current valuation."""

    id: str
    name: str
    bank: str
    currency_type: str
    balance: Decimal
    remaining_twd_fund: int
    break_even_point: Optional[Decimal]
    buying_rate: Optional[Decimal]
    twd_current_value: Optional[int]
    twd_profit: Optional[int]
    profit_rate: Optional[Decimal]
    created_time: datetime


@dataclass(frozen=True)
class ExchangeRate:
    """Exchange rate quoted by a bank for one currency against TWD."""

    bank: str
    currency_type: str
    buying_rate: Decimal
    selling_rate: Optional[Decimal]
    updated_time: datetime
