"""
Mapping from stored documents to domain entities.

Pure functions: no IO. The repository loads the referenced books
and passes them in.
"""

from collections.abc import Mapping

from bookshelf.domain.library.entities import Book, User
from bookshelf.infrastructure.library.documents import BookDocument, UserDocument


def book_from_document(document: BookDocument) -> Book:
    """Convert a stored book into the API-facing Book."""
    return Book(
        id=str(document["_id"]),
        title=document["title"],
        pages=document["pages"],
    )


def user_from_document(
    document: UserDocument, books_by_id: Mapping[str, BookDocument]
) -> User:
    """Convert a stored user into a User with its books expanded.

    Args:
        document: The stored user.
        books_by_id: Stored books keyed by string identifier.

    Returns:
        The user. Books keep the order of the stored reference list;
        references with no entry in ``books_by_id`` are skipped.
    """
    books = [
        book_from_document(books_by_id[str(ref)])
        for ref in document.get("books") or []
        if str(ref) in books_by_id
    ]
    return User(
        id=str(document["_id"]),
        name=document["name"],
        age=document["age"],
        email=document["email"],
        books=books,
    )
