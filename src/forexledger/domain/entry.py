"""Entry domain service."""

import logging
from datetime import date, datetime, UTC
from typing import Optional

from forexledger.database.base import Database
from forexledger.domain.book import BookService
from forexledger.domain.entities import Book, CreateEntryRequest, Entry
from forexledger.domain.errors import ValidationError, incorrect_entry_data
from forexledger.domain.expansion import EntryExpansion, expand_entry, involved_book_ids
from forexledger.domain.validation import (
    validate_entry_request,
    validate_related_book_side,
    validate_transfer_amounts,
)

logger = logging.getLogger(__name__)


class EntryService:
    """Service for recording entries against books."""

    def __init__(self, db: Database, creator: str, book_service: BookService):
        """Initialize entry service.

        Args:
            db: Database instance
            creator: Id of the user the service acts for
            book_service: Book service used to load and update books
        """
        self.db = db
        self.creator = creator
        self.book_service = book_service

    def create_entry(self, request: CreateEntryRequest) -> str:
        """Record an entry, plus its mirror on the related book for transfers.

        Entries are inserted and the affected books updated in one unit of
        work, so a failure at any step leaves nothing written.

        Args:
            request: Create-entry request

        Returns:
            ID of the entry for the requested book

        Raises:
            ValidationError: If the request fields do not fit its transaction type,
                or a same-currency transfer moves unequal amounts
            NotFoundError: If a referenced book does not exist
            InsufficientBalanceError: If the transfer-out book cannot cover
                the transfer
        """
        self.validate(request)

        with self.db.unit_of_work():
            books = self.book_service.load_books_by_ids(involved_book_ids(request))
            if request.has_related_book:
                self._check_transfer_amounts(request, books)
            expansion = expand_entry(request, books, self.creator, datetime.now(UTC))
            entry_ids = self.db.insert_entries(expansion.entries)
            self._update_books(books, expansion)

        logger.info(
            "Created %s entry %s on book %s (%d entries written)",
            request.transaction_type.name,
            entry_ids[0],
            request.book_id,
            len(entry_ids),
        )
        return entry_ids[0]

    def validate(self, request: CreateEntryRequest) -> None:
        """Reject a request whose fields do not fit its transaction type.

        Raises:
            ValidationError: Naming the request's transaction type
        """
        ok, reason = validate_entry_request(request)
        if ok and request.has_related_book:
            ok, reason = validate_related_book_side(request)
            if ok and request.related_book_id == request.book_id:
                ok, reason = False, "A book cannot transfer to itself"

        if not ok:
            self._reject(request, reason)

    def _check_transfer_amounts(self, request: CreateEntryRequest, books: dict[str, Book]) -> None:
        ok, reason = validate_transfer_amounts(
            request, books[request.book_id], books[request.related_book_id]
        )
        if not ok:
            self._reject(request, reason)

    def _reject(self, request: CreateEntryRequest, reason: str) -> None:
        logger.debug("Rejected %s request: %s", request.transaction_type.name, reason)
        raise ValidationError(incorrect_entry_data(request.transaction_type.name))

    def list_entries(
        self,
        book_id: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[Entry]:
        """List entries, optionally for one book and a date range.

        Raises:
            NotFoundError: If book_id is given and does not exist
        """
        if book_id is not None:
            self.book_service.load_book_by_id(book_id)
        return self.db.list_entries(book_id=book_id, start_date=start_date, end_date=end_date)

    def _update_books(self, books: dict[str, Book], expansion: EntryExpansion) -> None:
        primary = expansion.primary
        mirrored = expansion.mirrored
        if mirrored is None:
            self.book_service.update_metadata({primary.book_id: (books[primary.book_id], primary)})
            return

        if expansion.transfer_out_book_id == primary.book_id:
            out_entry, in_entry = primary, mirrored
        else:
            out_entry, in_entry = mirrored, primary
        self.book_service.update_transfer_metadata(
            books[out_entry.book_id], out_entry, books[in_entry.book_id], in_entry
        )
