"""
Use cases: books.

Failure cases: MissingFieldsError, BookNotFoundError, BookAlreadyExistsError.
"""

import logging

from bookshelf.application.library.dtos import (
    CreateBookCommand,
    DeleteBookCommand,
    GetBookQuery,
    ListBooksQuery,
    UpdateBookCommand,
)
from bookshelf.application.library.validation import require_fields
from bookshelf.domain.library.entities import Book
from bookshelf.domain.library.errors import BookNotFoundError
from bookshelf.domain.library.ports import BookRepository

logger = logging.getLogger(__name__)


class ListBooksUseCase:
    def __init__(self, book_repo: BookRepository) -> None:
        self._book_repo = book_repo

    def execute(self, query: ListBooksQuery) -> list[Book]:
        return self._book_repo.find_books(title=query.title or None)


class GetBookUseCase:
    def __init__(self, book_repo: BookRepository) -> None:
        self._book_repo = book_repo

    def execute(self, query: GetBookQuery) -> Book:
        """Fetch a book by identifier.

        Raises:
            MissingFieldsError: If no identifier is given.
            BookNotFoundError: If no book has that identifier.
        """
        require_fields(id=query.book_id)
        book = self._book_repo.find_by_id(query.book_id)
        if book is None:
            raise BookNotFoundError(query.book_id)
        return book


class CreateBookUseCase:
    """Creates a book. Title uniqueness is enforced by the repository."""

    def __init__(self, book_repo: BookRepository) -> None:
        self._book_repo = book_repo

    def execute(self, command: CreateBookCommand) -> Book:
        """Run the create book use case.

        Raises:
            MissingFieldsError: If title or pages is missing or falsy.
            BookAlreadyExistsError: If the title is taken.
        """
        require_fields(title=command.title, pages=command.pages)
        book = self._book_repo.create(title=command.title, pages=command.pages)
        logger.info("Created book id=%s", book.id)
        return book


class UpdateBookUseCase:
    def __init__(self, book_repo: BookRepository) -> None:
        self._book_repo = book_repo

    def execute(self, command: UpdateBookCommand) -> None:
        """Replace title and pages of a book.

        Raises:
            MissingFieldsError: If id, title or pages is missing or falsy.
            BookNotFoundError: If no book has that identifier.
        """
        require_fields(id=command.book_id, title=command.title, pages=command.pages)
        matched = self._book_repo.update(
            book_id=command.book_id, title=command.title, pages=command.pages
        )
        if not matched:
            raise BookNotFoundError(command.book_id)
        logger.info("Updated book id=%s", command.book_id)


class DeleteBookUseCase:
    """Deletes a book and detaches it from every user that references it.

    Both writes are one repository call. Whether they share a
    transaction depends on the storage configuration; see
    ReconcileBookReferencesUseCase for the repair pass.
    """

    def __init__(self, book_repo: BookRepository) -> None:
        self._book_repo = book_repo

    def execute(self, command: DeleteBookCommand) -> None:
        """Run the delete book use case.

        Raises:
            MissingFieldsError: If no identifier is given.
            BookNotFoundError: If nothing was deleted.
        """
        require_fields(id=command.book_id)
        if not self._book_repo.delete_and_detach(command.book_id):
            raise BookNotFoundError(command.book_id)
        logger.info("Deleted book id=%s", command.book_id)
