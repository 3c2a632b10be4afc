"""Recompute a book's balance, cost basis and profit after an entry.

The updaters mutate the in-memory Book snapshot only; persisting it is up to
the caller. Applying the same entry twice counts it twice, so each entry must
be applied exactly once.
"""

from decimal import Decimal
from typing import Optional

from forexledger.domain.entities import Book, Entry
from forexledger.utils.money import round_twd, to_twd


def apply_profit(book: Book, buying_rate: Optional[Decimal]) -> None:
    """Set profit fields from the balance, cost basis and a buying rate.

    Without a rate the profit is unknown and both fields are cleared.
    """
    if buying_rate is None:
        book.twd_profit = None
        book.profit_rate = None
        return

    book.twd_profit = round_twd(book.balance * buying_rate) - book.remaining_twd_fund
    if book.remaining_twd_fund == 0:
        book.profit_rate = None
    else:
        book.profit_rate = Decimal(book.twd_profit) / Decimal(book.remaining_twd_fund)


class SingleBookMetadataUpdater:
    """Applies one entry to the book it belongs to."""

    def __init__(self, book: Book):
        self.book = book

    def update(self, entry: Entry, buying_rate: Optional[Decimal] = None) -> None:
        """Apply an entry's foreign amount and TWD cost to the book.

        Args:
            entry: Entry owned by this book
            buying_rate: Current buying rate for the book's currency, used for
                the profit fields
        """
        book = self.book
        if entry.book_id != book.id:
            raise ValueError(f"Entry for book {entry.book_id} applied to book {book.id}")

        if entry.transaction_type.is_transfer_in:
            book.balance += entry.foreign_amount
            book.remaining_twd_fund += entry.twd_amount or 0
        else:
            # Withdrawn units leave at the average cost of what the book holds
            break_even_point = book.break_even_point
            cost = 0 if break_even_point is None else to_twd(entry.foreign_amount, break_even_point)
            book.balance -= entry.foreign_amount
            book.remaining_twd_fund -= cost

        if book.balance <= 0:
            book.remaining_twd_fund = 0

        apply_profit(book, buying_rate)


class DoubleBookMetadataUpdater:
    """Applies the two halves of a cross-book transfer to their books."""

    def __init__(self, transfer_out_book: Book, transfer_in_book: Book):
        self.transfer_out_book = transfer_out_book
        self.transfer_in_book = transfer_in_book

    def update(
        self,
        transfer_out_entry: Entry,
        transfer_in_entry: Entry,
        out_buying_rate: Optional[Decimal] = None,
        in_buying_rate: Optional[Decimal] = None,
    ) -> None:
        """Apply the outgoing and incoming entries independently."""
        SingleBookMetadataUpdater(self.transfer_out_book).update(transfer_out_entry, out_buying_rate)
        SingleBookMetadataUpdater(self.transfer_in_book).update(transfer_in_entry, in_buying_rate)
