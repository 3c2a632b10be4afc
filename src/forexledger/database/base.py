"""Abstract database interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

# Import entities directly to avoid circular import through domain/__init__.py
from forexledger.domain.entities import Book, Entry, ExchangeRate


class Database(ABC):
    """Abstract database interface for forexledger."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    @abstractmethod
    def unit_of_work(self) -> AbstractContextManager[None]:
        """Group writes so they commit together or not at all.

        Writes made inside the block are committed when it exits normally and
        rolled back when it raises.
        """
        pass

    # Book operations
    @abstractmethod
    def insert_book(self, name: str, bank: str, currency_type: str, creator: str) -> str:
        """Create a new book with zero balance. Returns book ID."""
        pass

    @abstractmethod
    def find_book_by_id(self, book_id: str) -> Optional[Book]:
        """Get book by ID."""
        pass

    @abstractmethod
    def find_books_by_creator(self, creator: str) -> list[Book]:
        """List books owned by a creator."""
        pass

    @abstractmethod
    def find_books_by_ids(self, book_ids: Iterable[str]) -> list[Book]:
        """Get the books with the given IDs; unknown IDs are skipped."""
        pass

    @abstractmethod
    def save_books(self, books: Iterable[Book]) -> None:
        """Write balance and profit fields of existing books."""
        pass

    # Entry operations
    @abstractmethod
    def insert_entry(self, entry: Entry) -> str:
        """Insert one entry draft. Returns entry ID."""
        pass

    @abstractmethod
    def insert_entries(self, entries: Iterable[Entry]) -> list[str]:
        """Insert entry drafts in one batch. Returns IDs in input order."""
        pass

    @abstractmethod
    def get_entry(self, entry_id: str) -> Optional[Entry]:
        """Get entry by ID."""
        pass

    @abstractmethod
    def list_entries(
        self,
        book_id: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[Entry]:
        """List entries with optional filters, oldest first."""
        pass

    # Exchange rate operations
    @abstractmethod
    def set_exchange_rate(
        self,
        bank: str,
        currency_type: str,
        buying_rate: Decimal,
        selling_rate: Optional[Decimal] = None,
    ) -> None:
        """Insert or replace the rate for a bank/currency pair."""
        pass

    @abstractmethod
    def get_exchange_rate(self, bank: str, currency_type: str) -> Optional[ExchangeRate]:
        """Get the rate for a bank/currency pair."""
        pass

    @abstractmethod
    def get_exchange_rates(self, pairs: Optional[Iterable[tuple[str, str]]] = None) -> list[ExchangeRate]:
        """Get rates for the given pairs, or every stored rate when pairs is None."""
        pass
