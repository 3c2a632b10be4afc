"""Shared domain error messages and error types."""

from decimal import Decimal


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class InsufficientBalanceError(DomainError):
    """A transfer needs more foreign currency than the source book holds."""

    def __init__(self, available: Decimal, requested: Decimal):
        super().__init__(insufficient_balance(available, requested))
        self.available = available
        self.requested = requested


def book_not_found(book_id: str) -> str:
    """Return message for missing book."""
    return f"Book {book_id} not found"


def exchange_rate_not_found(bank: str, currency_type: str) -> str:
    """Return message for a bank/currency pair without a stored rate."""
    return f"No exchange rate for {currency_type} at {bank}"


def incorrect_entry_data(transaction_type_name: str) -> str:
    """Return message for an entry request that fails validation."""
    return f"Incorrect data for entry of {transaction_type_name} type."


def insufficient_balance(available: Decimal, requested: Decimal) -> str:
    """Return message when the transfer-out book cannot cover a transfer."""
    return f"Insufficient balance: available {available}, requested {requested}"
