"""
Port interfaces (ABCs) for the library bounded context.

Ports define the contracts that the use cases require from storage.
Infrastructure adapters implement these interfaces.
The domain layer never depends on concrete implementations.
"""

from abc import ABC, abstractmethod
from typing import Optional

from bookshelf.domain.library.entities import Book, User


class UserRepository(ABC):
    """Port for persisting and retrieving users."""

    @abstractmethod
    def find_users(self, name: Optional[str] = None) -> list[User]:
        """Return all users, or those whose name equals ``name`` exactly.

        Each user's book references are expanded into full books.
        """
        raise NotImplementedError

    @abstractmethod
    def find_by_name(self, name: str) -> Optional[User]:
        """Return the first user with this exact name, or None."""
        raise NotImplementedError

    @abstractmethod
    def create(self, name: str, age: int | float, email: str) -> User:
        """Insert a user with an empty books list.

        Raises:
            UserAlreadyExistsError: If the email is already taken.
        """
        raise NotImplementedError

    @abstractmethod
    def update_by_email(
        self,
        email: str,
        name: str,
        age: int | float,
        books: Optional[list[str]] = None,
    ) -> bool:
        """Replace name, age and (when given) books of the user with ``email``.

        Returns:
            True if a user matched, False otherwise.
        """
        raise NotImplementedError

    @abstractmethod
    def delete(self, user_id: str) -> bool:
        """Delete the user with this identifier. Returns True if one was deleted."""
        raise NotImplementedError

    @abstractmethod
    def referenced_book_ids(self) -> list[str]:
        """Return every distinct book identifier referenced by any user."""
        raise NotImplementedError

    @abstractmethod
    def remove_book_references(self, book_ids: list[str]) -> int:
        """Pull the given book identifiers from every user's books list.

        Returns:
            Number of users whose books list changed.
        """
        raise NotImplementedError


class BookRepository(ABC):
    """Port for persisting and retrieving books."""

    @abstractmethod
    def find_books(self, title: Optional[str] = None) -> list[Book]:
        """Return all books, or those whose title equals ``title`` exactly."""
        raise NotImplementedError

    @abstractmethod
    def find_by_id(self, book_id: str) -> Optional[Book]:
        """Return a book by its identifier, or None if not found."""
        raise NotImplementedError

    @abstractmethod
    def create(self, title: str, pages: int | float) -> Book:
        """Insert a book.

        Raises:
            BookAlreadyExistsError: If the title is already taken.
        """
        raise NotImplementedError

    @abstractmethod
    def update(self, book_id: str, title: str, pages: int | float) -> bool:
        """Replace title and pages of a book. Returns True if one matched.

        Raises:
            BookAlreadyExistsError: If the new title belongs to another book.
        """
        raise NotImplementedError

    @abstractmethod
    def delete_and_detach(self, book_id: str) -> bool:
        """Delete a book and remove its identifier from every user.

        The detach step only runs when the delete removed a book.

        Returns:
            True if a book was deleted.
        """
        raise NotImplementedError

    @abstractmethod
    def find_missing(self, book_ids: list[str]) -> list[str]:
        """Return the identifiers in ``book_ids`` with no stored book, in input order."""
        raise NotImplementedError
