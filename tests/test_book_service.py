"""Tests for BookService."""

import pytest
from decimal import Decimal

from forexledger.domain.book import BookService
from forexledger.domain.entities import CreateBookRequest, CreateEntryRequest
from forexledger.domain.errors import NotFoundError, ValidationError
from forexledger.domain.transaction_type import TransactionType


def test_create_book_normalizes_codes(book_service):
    book_id = book_service.create_book(
        CreateBookRequest(name=" Travel ", bank="fubon", currency_type="jpy")
    )

    book = book_service.load_book_by_id(book_id)
    assert book.name == "Travel"
    assert book.bank == "FUBON"
    assert book.currency_type == "JPY"
    assert book.balance == Decimal("0")
    assert book.remaining_twd_fund == 0
    assert book.twd_profit is None
    assert book.creator == "alice"


@pytest.mark.parametrize(
    "request_fields",
    [
        {"name": "", "bank": "FUBON", "currency_type": "USD"},
        {"name": "USD", "bank": "  ", "currency_type": "USD"},
        {"name": "USD", "bank": "FUBON", "currency_type": ""},
    ],
)
def test_create_book_requires_fields(book_service, request_fields):
    with pytest.raises(ValidationError):
        book_service.create_book(CreateBookRequest(**request_fields))


def test_load_book_by_id_not_found(book_service):
    with pytest.raises(NotFoundError, match="Book missing not found"):
        book_service.load_book_by_id("missing")


def test_load_books_by_ids(book_service, usd_book, empty_usd_book):
    books = book_service.load_books_by_ids([usd_book.id, empty_usd_book.id, usd_book.id])
    assert set(books) == {usd_book.id, empty_usd_book.id}

    with pytest.raises(NotFoundError):
        book_service.load_books_by_ids([usd_book.id, "ghost"])


def test_load_my_books_only_lists_own_books(temp_db, book_service, usd_book):
    other = BookService(temp_db, creator="bob")
    other.create_book(CreateBookRequest(name="Bob USD", bank="FUBON", currency_type="USD"))

    names = [summary.name for summary in book_service.load_my_books()]
    assert names == ["USD savings"]


def test_load_my_books_values_at_buying_rate(temp_db, book_service, usd_book):
    temp_db.set_exchange_rate("FUBON", "USD", Decimal("32.5"))

    [summary] = book_service.load_my_books()

    assert summary.balance == Decimal("100")
    assert summary.twd_current_value == 3250
    assert summary.twd_profit == 250
    assert summary.profit_rate == Decimal(250) / Decimal(3000)


def test_load_my_books_without_rate(book_service, usd_book):
    [summary] = book_service.load_my_books()
    assert summary.twd_current_value is None
    assert summary.twd_profit is None
    assert summary.profit_rate is None


def test_load_book_detail(temp_db, book_service, usd_book):
    temp_db.set_exchange_rate("FUBON", "USD", Decimal("29"))

    detail = book_service.load_book_detail(usd_book.id)

    assert detail.name == "USD savings"
    assert detail.remaining_twd_fund == 3000
    assert detail.break_even_point == Decimal("30")
    assert detail.buying_rate == Decimal("29")
    assert detail.twd_current_value == 2900
    assert detail.twd_profit == -100


def test_update_metadata_saves_books(book_service, usd_book, temp_db):
    book = book_service.load_book_by_id(usd_book.id)
    entry = temp_db.list_entries(book_id=usd_book.id)[0]

    # Re-applying an already counted entry double counts it
    book_service.update_metadata({book.id: (book, entry)})

    reloaded = book_service.load_book_by_id(usd_book.id)
    assert reloaded.balance == Decimal("200")
    assert reloaded.remaining_twd_fund == 6000


def test_entries_and_rates_are_independent_of_creator(temp_db, usd_book):
    bob_books = BookService(temp_db, creator="bob")
    assert bob_books.load_my_books() == []
    assert bob_books.load_book_by_id(usd_book.id).name == "USD savings"


def test_funding_through_twd_keeps_rounded_profit(temp_db, book_service, entry_service):
    temp_db.set_exchange_rate("FUBON", "USD", Decimal("30.555"))
    book_id = book_service.create_book(CreateBookRequest(name="Odd", bank="FUBON", currency_type="USD"))
    entry_service.create_entry(
        CreateEntryRequest(
            book_id=book_id,
            transaction_type=TransactionType.TRANSFER_IN_FROM_TWD,
            foreign_amount=Decimal("10"),
            twd_amount=305,
        )
    )

    [summary] = book_service.load_my_books()
    # 10 * 30.555 = 305.55, rounded half up to 306
    assert summary.twd_current_value == 306
    assert summary.twd_profit == 1
