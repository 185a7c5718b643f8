"""
Pydantic schemas for library API request/response validation.

Request fields are all optional: a body that parses but omits a field
reaches the use case, which answers 400 for it. Type mismatches are
rejected by Pydantic and also answered with 400.
No business logic belongs here.
"""

from typing import Optional

from pydantic import BaseModel, Field

from bookshelf.domain.library.entities import Book, User

Number = int | float


class UserCreateRequest(BaseModel):
    """Request schema for POST /user."""

    name: Optional[str] = None
    email: Optional[str] = None
    age: Optional[Number] = None


class UserUpdateRequest(UserCreateRequest):
    """Request schema for PUT /user.

    Attributes:
        books: Book identifiers to store on the user. Omit to keep the
            current list.
    """

    books: Optional[list[str]] = Field(
        default=None, description="Identifiers of existing books"
    )


class BookCreateRequest(BaseModel):
    """Request schema for POST /book."""

    title: Optional[str] = None
    pages: Optional[Number] = None


class BookUpdateRequest(BookCreateRequest):
    """Request schema for PUT /book."""

    id: Optional[str] = None


class BookResponse(BaseModel):
    id: str
    title: str
    pages: Number


class UserResponse(BaseModel):
    """A user with referenced books expanded into full objects."""

    id: str
    name: str
    age: Number
    email: str
    books: list[BookResponse]


class HealthResponse(BaseModel):
    """Process and storage status reported by GET /health."""

    status: str
    storage: str
    version: str


def book_to_response(book: Book) -> BookResponse:
    """Convert domain Book to API response."""
    return BookResponse(id=book.id, title=book.title, pages=book.pages)


def user_to_response(user: User) -> UserResponse:
    """Convert domain User to API response."""
    return UserResponse(
        id=user.id,
        name=user.name,
        age=user.age,
        email=user.email,
        books=[book_to_response(book) for book in user.books],
    )
