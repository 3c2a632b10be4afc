"""Book domain service."""

import logging
from decimal import Decimal
from typing import Iterable, Mapping, Optional

from forexledger.database.base import Database
from forexledger.domain.entities import (
    Book,
    BookDetail,
    BookSummary,
    CreateBookRequest,
    Entry,
)
from forexledger.domain.errors import NotFoundError, ValidationError, book_not_found
from forexledger.domain.exchange_rate import RateSource
from forexledger.domain.metadata import (
    DoubleBookMetadataUpdater,
    SingleBookMetadataUpdater,
    apply_profit,
)
from forexledger.utils.money import to_twd

logger = logging.getLogger(__name__)


class BookService:
    """Service for managing books."""

    def __init__(self, db: Database, creator: str, rate_source: Optional[RateSource] = None):
        """Initialize book service.

        Args:
            db: Database instance
            creator: Id of the user the service acts for
            rate_source: Optional source of buying rates for profit figures
        """
        self.db = db
        self.creator = creator
        self.rate_source = rate_source

    def create_book(self, request: CreateBookRequest) -> str:
        """Create a new, empty book owned by the current user.

        Raises:
            ValidationError: If name, bank or currency is blank
        """
        name = request.name.strip()
        bank = request.bank.strip().upper()
        currency_type = request.currency_type.strip().upper()
        if not name or not bank or not currency_type:
            raise ValidationError("Book name, bank and currency are required")

        book_id = self.db.insert_book(
            name=name, bank=bank, currency_type=currency_type, creator=self.creator
        )
        logger.info("Created book %s (%s %s) for %s", book_id, bank, currency_type, self.creator)
        return book_id

    def load_my_books(self) -> list[BookSummary]:
        """List the current user's books valued at the latest buying rates."""
        books = self.db.find_books_by_creator(self.creator)
        rates = self._buying_rates(books)

        summaries = []
        for book in books:
            rate = rates.get((book.bank, book.currency_type))
            apply_profit(book, rate)
            summaries.append(
                BookSummary(
                    id=book.id,
                    name=book.name,
                    currency_type=book.currency_type,
                    balance=book.balance,
                    twd_current_value=None if rate is None else to_twd(book.balance, rate),
                    twd_profit=book.twd_profit,
                    profit_rate=book.profit_rate,
                )
            )
        return summaries

    def load_book_detail(self, book_id: str) -> BookDetail:
        """Load one book with its cost basis and current valuation.

        Raises:
            NotFoundError: If the book does not exist
        """
        book = self.load_book_by_id(book_id)
        rate = None
        if self.rate_source is not None:
            try:
                rate = self.rate_source.get_buying_rate(book.bank, book.currency_type)
            except NotFoundError:
                logger.info("No buying rate for %s at %s; profit unknown", book.currency_type, book.bank)
        apply_profit(book, rate)

        return BookDetail(
            id=book.id,
            name=book.name,
            bank=book.bank,
            currency_type=book.currency_type,
            balance=book.balance,
            remaining_twd_fund=book.remaining_twd_fund,
            break_even_point=book.break_even_point,
            buying_rate=rate,
            twd_current_value=None if rate is None else to_twd(book.balance, rate),
            twd_profit=book.twd_profit,
            profit_rate=book.profit_rate,
            created_time=book.created_time,
        )

    def load_book_by_id(self, book_id: str) -> Book:
        """Get a book snapshot by ID.

        Raises:
            NotFoundError: If the book does not exist
        """
        book = self.db.find_book_by_id(book_id)
        if book is None:
            raise NotFoundError(book_not_found(book_id))
        return book

    def load_books_by_ids(self, book_ids: Iterable[str]) -> dict[str, Book]:
        """Get book snapshots keyed by ID.

        Raises:
            NotFoundError: If any of the IDs is unknown
        """
        book_ids = list(dict.fromkeys(book_ids))
        books = {book.id: book for book in self.db.find_books_by_ids(book_ids)}
        for book_id in book_ids:
            if book_id not in books:
                raise NotFoundError(book_not_found(book_id))
        return books

    def update_metadata(self, book_to_entry: Mapping[str, tuple[Book, Entry]]) -> None:
        """Apply each entry to its book, then save all books in one call.

        Args:
            book_to_entry: Book snapshot and the new entry for it, keyed by book ID
        """
        rates = self._buying_rates(book for book, _ in book_to_entry.values())
        for book, entry in book_to_entry.values():
            SingleBookMetadataUpdater(book).update(entry, rates.get((book.bank, book.currency_type)))
        self.db.save_books(book for book, _ in book_to_entry.values())

    def update_transfer_metadata(
        self,
        transfer_out_book: Book,
        transfer_out_entry: Entry,
        transfer_in_book: Book,
        transfer_in_entry: Entry,
    ) -> None:
        """Apply both halves of a cross-book transfer, then save both books."""
        rates = self._buying_rates([transfer_out_book, transfer_in_book])
        DoubleBookMetadataUpdater(transfer_out_book, transfer_in_book).update(
            transfer_out_entry,
            transfer_in_entry,
            out_buying_rate=rates.get((transfer_out_book.bank, transfer_out_book.currency_type)),
            in_buying_rate=rates.get((transfer_in_book.bank, transfer_in_book.currency_type)),
        )
        self.db.save_books([transfer_out_book, transfer_in_book])

    def _buying_rates(self, books: Iterable[Book]) -> dict[tuple[str, str], Decimal]:
        if self.rate_source is None:
            return {}
        return self.rate_source.get_buying_rates({(book.bank, book.currency_type) for book in books})
