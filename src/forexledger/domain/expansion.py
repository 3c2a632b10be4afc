"""Expansion of a create-entry request into persisted entry drafts.

A request against a single book yields one entry. A transfer between two
books yields two: the primary entry for the requested book and a mirrored
entry for the related book. Each points back at the other book, and both
carry the same related-book foreign amount. The drafts are returned together
so they can be written in one batch.
"""

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Mapping, Optional

from forexledger.domain.entities import Book, CreateEntryRequest, Entry
from forexledger.domain.errors import InsufficientBalanceError
from forexledger.utils.money import to_twd


@dataclass(frozen=True)
class EntryExpansion:
    """Entries produced for one request, primary entry first."""

    entries: tuple[Entry, ...]
    transfer_out_book_id: Optional[str] = None

    @property
    def primary(self) -> Entry:
        return self.entries[0]

    @property
    def mirrored(self) -> Optional[Entry]:
        return self.entries[1] if len(self.entries) > 1 else None


def involved_book_ids(request: CreateEntryRequest) -> list[str]:
    """Return the primary book id, followed by the related book id if any."""
    ids = [request.book_id]
    if request.has_related_book:
        ids.append(request.related_book_id)
    return ids


def to_primary_entry(request: CreateEntryRequest, creator: str, now: datetime) -> Entry:
    """Build the primary entry draft straight from the request fields."""
    return Entry(
        id=None,
        book_id=request.book_id,
        transaction_type=request.transaction_type,
        transaction_date=request.transaction_date,
        foreign_amount=request.foreign_amount,
        twd_amount=request.twd_amount,
        related_book_id=request.related_book_id if request.has_related_book else None,
        related_book_foreign_amount=request.related_book_foreign_amount,
        creator=creator,
        created_time=now,
    )


def to_related_book_entry(transfer_out_book: Book, primary: Entry) -> Entry:
    """Build the mirrored entry for the related book of a transfer.

    The TWD value follows the primary entry when it has one; otherwise it is
    the cost of the units leaving the transfer-out book, valued at that
    book's break-even point.
    """
    twd_amount = primary.twd_amount
    if twd_amount is None:
        if primary.transaction_type.is_transfer_in:
            outgoing_amount = primary.related_book_foreign_amount
        else:
            outgoing_amount = primary.foreign_amount
        break_even_point = transfer_out_book.break_even_point
        twd_amount = 0 if break_even_point is None else to_twd(outgoing_amount, break_even_point)

    return Entry(
        id=None,
        book_id=primary.related_book_id,
        transaction_type=primary.transaction_type.related_type,
        transaction_date=primary.transaction_date,
        foreign_amount=primary.related_book_foreign_amount,
        twd_amount=twd_amount,
        related_book_id=primary.book_id,
        related_book_foreign_amount=primary.related_book_foreign_amount,
        creator=primary.creator,
        created_time=primary.created_time,
    )


def expand_entry(
    request: CreateEntryRequest,
    books: Mapping[str, Book],
    creator: str,
    now: datetime,
) -> EntryExpansion:
    """Turn a validated request into one or two entry drafts.

    Args:
        request: Validated create-entry request
        books: Involved books keyed by id
        creator: Id of the user creating the entry
        now: Creation timestamp stamped on every draft

    Returns:
        EntryExpansion with the primary entry first

    Raises:
        InsufficientBalanceError: If money is pulled from a related book that
            holds less than the requested foreign amount
    """
    primary = to_primary_entry(request, creator, now)
    if primary.related_book_id is None:
        return EntryExpansion(entries=(primary,))

    if primary.transaction_type.is_transfer_in:
        transfer_out_book = books[primary.related_book_id]
        requested = primary.related_book_foreign_amount
        if transfer_out_book.balance < requested:
            raise InsufficientBalanceError(transfer_out_book.balance, requested)
    else:
        transfer_out_book = books[primary.book_id]

    mirrored = to_related_book_entry(transfer_out_book, primary)
    if primary.twd_amount is None:
        primary = replace(primary, twd_amount=mirrored.twd_amount)

    return EntryExpansion(entries=(primary, mirrored), transfer_out_book_id=transfer_out_book.id)
