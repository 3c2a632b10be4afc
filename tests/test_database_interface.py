"""Tests for Database interface returning domain models."""

import pytest
from datetime import date, datetime, UTC
from decimal import Decimal

from forexledger.domain import entities
from forexledger.domain.transaction_type import TransactionType


def make_entry(book_id, **overrides):
    fields = dict(
        id=None,
        book_id=book_id,
        transaction_type=TransactionType.TRANSFER_IN_FROM_OTHER,
        transaction_date=date(2024, 1, 15),
        foreign_amount=Decimal("12.5"),
        twd_amount=None,
        related_book_id=None,
        related_book_foreign_amount=None,
        creator="alice",
        created_time=datetime.now(UTC),
    )
    fields.update(overrides)
    return entities.Entry(**fields)


class TestDatabaseInterface:
    """Tests to verify Database interface returns domain models."""

    def test_insert_and_find_book(self, temp_db):
        book_id = temp_db.insert_book(name="USD", bank="FUBON", currency_type="USD", creator="alice")

        book = temp_db.find_book_by_id(book_id)

        assert isinstance(book, entities.Book)
        assert isinstance(book.id, str)
        assert book.id == book_id
        assert book.balance == Decimal("0")
        assert isinstance(book.created_time, datetime)

    def test_find_book_by_id_missing(self, temp_db):
        assert temp_db.find_book_by_id("missing") is None

    def test_find_books_by_creator(self, temp_db):
        temp_db.insert_book(name="A", bank="FUBON", currency_type="USD", creator="alice")
        temp_db.insert_book(name="B", bank="FUBON", currency_type="JPY", creator="alice")
        temp_db.insert_book(name="C", bank="FUBON", currency_type="EUR", creator="bob")

        books = temp_db.find_books_by_creator("alice")

        assert sorted(book.name for book in books) == ["A", "B"]
        assert all(isinstance(book, entities.Book) for book in books)

    def test_find_books_by_ids_skips_unknown(self, temp_db):
        book_id = temp_db.insert_book(name="A", bank="FUBON", currency_type="USD", creator="alice")
        books = temp_db.find_books_by_ids([book_id, "unknown"])
        assert [book.id for book in books] == [book_id]
        assert temp_db.find_books_by_ids([]) == []

    def test_book_snapshot_is_detached(self, temp_db):
        book_id = temp_db.insert_book(name="A", bank="FUBON", currency_type="USD", creator="alice")
        book = temp_db.find_book_by_id(book_id)

        book.balance = Decimal("999")

        assert temp_db.find_book_by_id(book_id).balance == Decimal("0")

    def test_save_books(self, temp_db):
        book_id = temp_db.insert_book(name="A", bank="FUBON", currency_type="USD", creator="alice")
        book = temp_db.find_book_by_id(book_id)
        book.balance = Decimal("42.5")
        book.remaining_twd_fund = 1300
        book.twd_profit = 20
        book.profit_rate = Decimal("0.015385")

        temp_db.save_books([book])

        saved = temp_db.find_book_by_id(book_id)
        assert saved.balance == Decimal("42.5")
        assert saved.remaining_twd_fund == 1300
        assert saved.twd_profit == 20
        assert saved.profit_rate == Decimal("0.015385")

    def test_insert_entries_returns_ids_in_order(self, temp_db):
        a = temp_db.insert_book(name="A", bank="FUBON", currency_type="USD", creator="alice")
        b = temp_db.insert_book(name="B", bank="FUBON", currency_type="USD", creator="alice")

        ids = temp_db.insert_entries([make_entry(a), make_entry(b, foreign_amount=Decimal("3"))])

        assert len(ids) == 2
        assert temp_db.get_entry(ids[0]).book_id == a
        assert temp_db.get_entry(ids[1]).book_id == b
        assert temp_db.get_entry(ids[1]).foreign_amount == Decimal("3")

    def test_insert_entry_round_trips_fields(self, temp_db):
        a = temp_db.insert_book(name="A", bank="FUBON", currency_type="USD", creator="alice")
        b = temp_db.insert_book(name="B", bank="FUBON", currency_type="USD", creator="alice")

        entry_id = temp_db.insert_entry(
            make_entry(
                a,
                transaction_type=TransactionType.TRANSFER_OUT_TO_FOREIGN,
                twd_amount=375,
                related_book_id=b,
                related_book_foreign_amount=Decimal("12.5"),
            )
        )

        entry = temp_db.get_entry(entry_id)
        assert isinstance(entry, entities.Entry)
        assert entry.id == entry_id
        assert entry.transaction_type == TransactionType.TRANSFER_OUT_TO_FOREIGN
        assert entry.twd_amount == 375
        assert entry.related_book_id == b
        assert entry.related_book_foreign_amount == Decimal("12.5")

    def test_unit_of_work_commits(self, temp_db):
        with temp_db.unit_of_work():
            book_id = temp_db.insert_book(name="A", bank="FUBON", currency_type="USD", creator="alice")
            temp_db.insert_entry(make_entry(book_id))

        temp_db.disconnect()
        assert temp_db.find_book_by_id(book_id) is not None
        assert len(temp_db.list_entries(book_id=book_id)) == 1

    def test_unit_of_work_rolls_back_on_error(self, temp_db):
        book_id = temp_db.insert_book(name="A", bank="FUBON", currency_type="USD", creator="alice")

        with pytest.raises(RuntimeError):
            with temp_db.unit_of_work():
                temp_db.insert_entry(make_entry(book_id))
                book = temp_db.find_book_by_id(book_id)
                book.balance = Decimal("12.5")
                temp_db.save_books([book])
                raise RuntimeError("boom")

        assert temp_db.list_entries(book_id=book_id) == []
        assert temp_db.find_book_by_id(book_id).balance == Decimal("0")

    def test_unit_of_work_rolls_back_on_interrupt(self, temp_db):
        book_id = temp_db.insert_book(name="A", bank="FUBON", currency_type="USD", creator="alice")

        with pytest.raises(KeyboardInterrupt):
            with temp_db.unit_of_work():
                temp_db.insert_entry(make_entry(book_id))
                raise KeyboardInterrupt

        # A later commit must not carry the interrupted writes along
        temp_db.insert_book(name="B", bank="FUBON", currency_type="USD", creator="alice")
        temp_db.disconnect()
        assert temp_db.list_entries(book_id=book_id) == []

    def test_exchange_rates(self, temp_db):
        temp_db.set_exchange_rate("FUBON", "USD", Decimal("31.1"), Decimal("31.6"))
        temp_db.set_exchange_rate("FUBON", "JPY", Decimal("0.21"))
        temp_db.set_exchange_rate("FUBON", "USD", Decimal("31.2"))

        usd = temp_db.get_exchange_rate("FUBON", "USD")
        assert isinstance(usd, entities.ExchangeRate)
        assert usd.buying_rate == Decimal("31.2")
        assert usd.selling_rate is None
        assert temp_db.get_exchange_rate("CATHAY", "USD") is None

        assert len(temp_db.get_exchange_rates()) == 2
        rates = temp_db.get_exchange_rates([("FUBON", "JPY"), ("CATHAY", "USD")])
        assert [(r.bank, r.currency_type) for r in rates] == [("FUBON", "JPY")]
        assert temp_db.get_exchange_rates([]) == []
