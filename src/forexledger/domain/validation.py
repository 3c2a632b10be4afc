"""Field-combination rules for create-entry requests.

Each transaction type family has one rule function; ``validate_entry_request``
dispatches on the request's type. Rules are pure and return ``(ok, reason)``
so callers decide how to report a failure.
"""

from decimal import Decimal
from typing import Callable, Optional

from forexledger.domain.entities import Book, CreateEntryRequest
from forexledger.domain.transaction_type import TransactionType
from forexledger.utils.money import FOREIGN_AMOUNT_PLACES, fits_foreign_scale

ValidationResult = tuple[bool, str]

VALID: ValidationResult = (True, "")


def _is_positive(value: Optional[Decimal | int]) -> bool:
    return value is not None and value > 0


def _validate_twd_transfer(request: CreateEntryRequest) -> ValidationResult:
    if not _is_positive(request.twd_amount):
        return False, "TWD amount must be present and positive"
    if request.has_related_book or request.related_book_foreign_amount is not None:
        return False, "TWD transfers cannot reference a related book"
    return VALID


def _validate_foreign_transfer(request: CreateEntryRequest) -> ValidationResult:
    has_related_book = request.has_related_book
    has_related_amount = request.related_book_foreign_amount is not None

    if has_related_book != has_related_amount:
        return False, "Related book and related book foreign amount must be given together"

    if has_related_book:
        if not _is_positive(request.related_book_foreign_amount):
            return False, "Related book foreign amount must be positive"
        return VALID

    # No related book: the transfer is valued in TWD instead
    if not _is_positive(request.twd_amount):
        return False, "TWD amount must be positive when no related book is given"
    return VALID


def _validate_book_internal(request: CreateEntryRequest) -> ValidationResult:
    if (
        request.twd_amount is not None
        or request.has_related_book
        or request.related_book_foreign_amount is not None
    ):
        return False, "Entry cannot carry a TWD amount or a related book"
    return VALID


_RULES: dict[TransactionType, Callable[[CreateEntryRequest], ValidationResult]] = {
    TransactionType.TRANSFER_IN_FROM_TWD: _validate_twd_transfer,
    TransactionType.TRANSFER_OUT_TO_TWD: _validate_twd_transfer,
    TransactionType.TRANSFER_IN_FROM_FOREIGN: _validate_foreign_transfer,
    TransactionType.TRANSFER_OUT_TO_FOREIGN: _validate_foreign_transfer,
    TransactionType.TRANSFER_IN_FROM_INTEREST: _validate_book_internal,
    TransactionType.TRANSFER_IN_FROM_OTHER: _validate_book_internal,
    TransactionType.TRANSFER_OUT_TO_OTHER: _validate_book_internal,
}


def validate_entry_request(request: CreateEntryRequest) -> ValidationResult:
    """Check that a request's fields are legal for its transaction type.

    Args:
        request: Create-entry request

    Returns:
        Tuple of (ok, reason); reason is empty when ok is True
    """
    if not _is_positive(request.foreign_amount):
        return False, "Foreign amount must be positive"
    for amount in (request.foreign_amount, request.related_book_foreign_amount):
        if _is_positive(amount) and not fits_foreign_scale(amount):
            return False, f"Foreign amounts are limited to {FOREIGN_AMOUNT_PLACES} decimal places"
    return _RULES[request.transaction_type](request)


def validate_related_book_side(request: CreateEntryRequest) -> ValidationResult:
    """Check the related-book half of a transfer request.

    The TWD value of a cross-book transfer is derived from the transfer-out
    book, so the request may not state one. The related book id and its
    foreign amount must be given together, and the amount must be positive.
    """
    if request.twd_amount is not None:
        return False, "TWD amount is derived for transfers between books"

    has_related_book = request.has_related_book
    has_related_amount = request.related_book_foreign_amount is not None
    if has_related_book != has_related_amount:
        return False, "Related book and related book foreign amount must be given together"

    if has_related_book and not _is_positive(request.related_book_foreign_amount):
        return False, "Related book foreign amount must be positive"
    return VALID


def validate_transfer_amounts(
    request: CreateEntryRequest, book: Book, related_book: Book
) -> ValidationResult:
    """Check that a transfer between same-currency books moves one amount.

    Both sides of such a transfer must agree on the units moved, or the
    transfer would create or destroy money.
    """
    if (
        book.currency_type == related_book.currency_type
        and request.foreign_amount != request.related_book_foreign_amount
    ):
        return False, "Transfers between books of the same currency must move equal amounts"
    return VALID
