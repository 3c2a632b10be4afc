"""Utility for resolving book names to IDs."""

from forexledger.domain.book import BookService
from forexledger.domain.errors import NotFoundError, ValidationError


def resolve_book(book_service: BookService, book: str) -> str:
    """Resolve a book name or ID to a book ID.

    Only the current user's books are searched, by ID first and then by name.

    Args:
        book_service: BookService instance
        book: Book name or ID

    Returns:
        Book ID

    Raises:
        NotFoundError: If none of the user's books matches
        ValidationError: If the name matches more than one book
    """
    book = book.strip()
    found = book_service.db.find_book_by_id(book)
    if found is not None and found.creator == book_service.creator:
        return book

    matches = [b for b in book_service.db.find_books_by_creator(book_service.creator) if b.name == book]
    if not matches:
        raise NotFoundError(f"Book '{book}' not found")
    if len(matches) > 1:
        raise ValidationError(f"Book name '{book}' is ambiguous; use the book ID instead")
    return matches[0].id
