"""
Shared fixtures.

API tests run against in-memory implementations of the repository
ports, wired in through FastAPI dependency overrides. No database needed.
"""

import os

os.environ["RATE_LIMIT_ENABLED"] = "false"

from typing import Optional
from unittest.mock import MagicMock

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from bookshelf.core.config import settings
from bookshelf.domain.library.entities import Book, User
from bookshelf.domain.library.errors import (
    BookAlreadyExistsError,
    UserAlreadyExistsError,
)
from bookshelf.domain.library.ports import BookRepository, UserRepository
from bookshelf.infrastructure.library.mongo_gateway import MongoGateway
from bookshelf.interfaces.library.dependencies import (
    get_book_repository,
    get_gateway,
    get_user_repository,
)
from bookshelf.main import app
from bookshelf.shared.security.rate_limiting import limiter


class InMemoryStore:
    """Two dict-backed collections keyed by string identifier."""

    def __init__(self) -> None:
        self.users: dict[str, dict] = {}
        self.books: dict[str, dict] = {}


class InMemoryBookRepository(BookRepository):
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    def find_books(self, title: Optional[str] = None) -> list[Book]:
        return [
            Book(**book)
            for book in self._store.books.values()
            if not title or book["title"] == title
        ]

    def find_by_id(self, book_id: str) -> Optional[Book]:
        book = self._store.books.get(book_id)
        return Book(**book) if book else None

    def create(self, title: str, pages: int | float) -> Book:
        if any(book["title"] == title for book in self._store.books.values()):
            raise BookAlreadyExistsError(title)
        book_id = str(ObjectId())
        self._store.books[book_id] = {"id": book_id, "title": title, "pages": pages}
        return Book(id=book_id, title=title, pages=pages)

    def update(self, book_id: str, title: str, pages: int | float) -> bool:
        if book_id not in self._store.books:
            return False
        if any(
            other_id != book_id and book["title"] == title
            for other_id, book in self._store.books.items()
        ):
            raise BookAlreadyExistsError(title)
        self._store.books[book_id].update(title=title, pages=pages)
        return True

    def delete_and_detach(self, book_id: str) -> bool:
        if self._store.books.pop(book_id, None) is None:
            return False
        for user in self._store.users.values():
            user["books"] = [ref for ref in user["books"] if ref != book_id]
        return True

    def find_missing(self, book_ids: list[str]) -> list[str]:
        return [book_id for book_id in book_ids if book_id not in self._store.books]


class InMemoryUserRepository(UserRepository):
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    def _to_user(self, user: dict) -> User:
        books = [
            Book(**self._store.books[ref])
            for ref in user["books"]
            if ref in self._store.books
        ]
        return User(
            id=user["id"],
            name=user["name"],
            age=user["age"],
            email=user["email"],
            books=books,
        )

    def find_users(self, name: Optional[str] = None) -> list[User]:
        return [
            self._to_user(user)
            for user in self._store.users.values()
            if not name or user["name"] == name
        ]

    def find_by_name(self, name: str) -> Optional[User]:
        for user in self._store.users.values():
            if user["name"] == name:
                return self._to_user(user)
        return None

    def create(self, name: str, age: int | float, email: str) -> User:
        if any(user["email"] == email for user in self._store.users.values()):
            raise UserAlreadyExistsError(email)
        user_id = str(ObjectId())
        self._store.users[user_id] = {
            "id": user_id,
            "name": name,
            "age": age,
            "email": email,
            "books": [],
        }
        return self._to_user(self._store.users[user_id])

    def update_by_email(
        self,
        email: str,
        name: str,
        age: int | float,
        books: Optional[list[str]] = None,
    ) -> bool:
        for user in self._store.users.values():
            if user["email"] == email:
                user.update(name=name, age=age)
                if books is not None:
                    user["books"] = list(books)
                return True
        return False

    def delete(self, user_id: str) -> bool:
        return self._store.users.pop(user_id, None) is not None

    def referenced_book_ids(self) -> list[str]:
        return sorted({ref for user in self._store.users.values() for ref in user["books"]})

    def remove_book_references(self, book_ids: list[str]) -> int:
        drop = set(book_ids)
        modified = 0
        for user in self._store.users.values():
            kept = [ref for ref in user["books"] if ref not in drop]
            if kept != user["books"]:
                user["books"] = kept
                modified += 1
        return modified


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def user_repo(store: InMemoryStore) -> InMemoryUserRepository:
    return InMemoryUserRepository(store)


@pytest.fixture
def book_repo(store: InMemoryStore) -> InMemoryBookRepository:
    return InMemoryBookRepository(store)


@pytest.fixture
def gateway_stub() -> MagicMock:
    """Stands in for the MongoDB gateway; only GET /health touches it."""
    return MagicMock(spec=MongoGateway)


@pytest.fixture
def client(
    user_repo: InMemoryUserRepository,
    book_repo: InMemoryBookRepository,
    gateway_stub: MagicMock,
):
    """TestClient with repositories replaced by the in-memory store.

    Used without a context manager so the MongoDB lifespan never runs.
    """
    app.dependency_overrides[get_user_repository] = lambda: user_repo
    app.dependency_overrides[get_book_repository] = lambda: book_repo
    app.dependency_overrides[get_gateway] = lambda: gateway_stub
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def rate_limit(monkeypatch):
    """Enable the limiter at two requests per minute for one test."""
    monkeypatch.setattr(settings, "rate_limit_default", "2/minute")
    monkeypatch.setattr(limiter, "enabled", True)
    limiter.reset()
    yield
    limiter.reset()
