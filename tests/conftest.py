"""Shared pytest fixtures for forexledger tests."""

import tempfile
import os
from decimal import Decimal
import pytest

from forexledger.database.factories import create_sqlite_database
from forexledger.domain.book import BookService
from forexledger.domain.entities import CreateBookRequest, CreateEntryRequest
from forexledger.domain.entry import EntryService
from forexledger.domain.exchange_rate import DatabaseRateSource
from forexledger.domain.transaction_type import TransactionType

TEST_USER = "alice"


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def rate_source(temp_db):
    """Create a rate source reading the temporary database."""
    return DatabaseRateSource(temp_db)


@pytest.fixture
def book_service(temp_db, rate_source):
    """Create a BookService acting for the test user."""
    return BookService(temp_db, creator=TEST_USER, rate_source=rate_source)


@pytest.fixture
def entry_service(temp_db, book_service):
    """Create an EntryService acting for the test user."""
    return EntryService(temp_db, creator=TEST_USER, book_service=book_service)


@pytest.fixture
def usd_book(book_service, entry_service):
    """USD book funded with 100 USD bought for 3000 TWD."""
    book_id = book_service.create_book(
        CreateBookRequest(name="USD savings", bank="FUBON", currency_type="USD")
    )
    entry_service.create_entry(
        CreateEntryRequest(
            book_id=book_id,
            transaction_type=TransactionType.TRANSFER_IN_FROM_TWD,
            foreign_amount=Decimal("100"),
            twd_amount=3000,
        )
    )
    return book_service.load_book_by_id(book_id)


@pytest.fixture
def empty_usd_book(book_service):
    """Second USD book with no entries."""
    book_id = book_service.create_book(
        CreateBookRequest(name="USD broker", bank="FUBON", currency_type="USD")
    )
    return book_service.load_book_by_id(book_id)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
