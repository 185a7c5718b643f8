"""
Data Transfer Objects for the library application layer.

DTOs carry data between the interface and application layers.
They are plain dataclasses with no behavior. Fields stay optional
because presence is decided by the use cases, not by the transport.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ListUsersQuery:
    """Input DTO for listing users, optionally filtered by exact name."""

    name: Optional[str] = None


@dataclass(frozen=True)
class GetUserQuery:
    """Input DTO for fetching a single user by exact name."""

    name: Optional[str] = None


@dataclass(frozen=True)
class CreateUserCommand:
    """Input DTO for creating a user.

    Attributes:
        name: Display name.
        email: Email address, unique across users.
        age: Age in years.
    """

    name: Optional[str] = None
    email: Optional[str] = None
    age: Optional[int | float] = None


@dataclass(frozen=True)
class UpdateUserCommand:
    """Input DTO for replacing a user's fields, matched by email.

    Attributes:
        name: New display name.
        email: Email of the user to update.
        age: New age.
        books: New list of book identifiers. None leaves the stored list as is.
    """

    name: Optional[str] = None
    email: Optional[str] = None
    age: Optional[int | float] = None
    books: Optional[list[str]] = None


@dataclass(frozen=True)
class DeleteUserCommand:
    user_id: Optional[str] = None


@dataclass(frozen=True)
class ListBooksQuery:
    """Input DTO for listing books, optionally filtered by exact title."""

    title: Optional[str] = None


@dataclass(frozen=True)
class GetBookQuery:
    book_id: Optional[str] = None


@dataclass(frozen=True)
class CreateBookCommand:
    """Input DTO for creating a book.

    Attributes:
        title: Title, unique across books.
        pages: Page count.
    """

    title: Optional[str] = None
    pages: Optional[int | float] = None


@dataclass(frozen=True)
class UpdateBookCommand:
    book_id: Optional[str] = None
    title: Optional[str] = None
    pages: Optional[int | float] = None


@dataclass(frozen=True)
class DeleteBookCommand:
    book_id: Optional[str] = None
