"""Exchange rate lookup for valuing books in TWD."""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Iterable

from forexledger.database.base import Database
from forexledger.domain.errors import NotFoundError, exchange_rate_not_found

BankCurrencyPair = tuple[str, str]


class RateSource(ABC):
    """Source of buying rates keyed by (bank, currency)."""

    @abstractmethod
    def get_buying_rate(self, bank: str, currency_type: str) -> Decimal:
        """Return the buying rate for one pair.

        Raises:
            NotFoundError: If no rate is known for the pair
        """
        pass

    @abstractmethod
    def get_buying_rates(self, pairs: Iterable[BankCurrencyPair]) -> dict[BankCurrencyPair, Decimal]:
        """Return buying rates for the given pairs, skipping unknown ones."""
        pass


class DatabaseRateSource(RateSource):
    """Rate source reading the exchange rate table."""

    def __init__(self, db: Database):
        """Initialize rate source.

        Args:
            db: Database instance
        """
        self.db = db

    def get_buying_rate(self, bank: str, currency_type: str) -> Decimal:
        rate = self.db.get_exchange_rate(bank, currency_type)
        if rate is None:
            raise NotFoundError(exchange_rate_not_found(bank, currency_type))
        return rate.buying_rate

    def get_buying_rates(self, pairs: Iterable[BankCurrencyPair]) -> dict[BankCurrencyPair, Decimal]:
        rates = self.db.get_exchange_rates(set(pairs))
        return {(rate.bank, rate.currency_type): rate.buying_rate for rate in rates}
