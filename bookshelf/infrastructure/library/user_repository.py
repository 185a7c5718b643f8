"""
Adapter: User persistence.

Implements UserRepository on the ``users`` collection. Reads expand
book references with one batched query on the ``books`` collection.
"""

import logging
from typing import Optional

from pymongo.errors import DuplicateKeyError

from bookshelf.domain.library.entities import User
from bookshelf.domain.library.errors import UserAlreadyExistsError
from bookshelf.domain.library.ports import UserRepository
from bookshelf.infrastructure.library.documents import (
    BookDocument,
    UserDocument,
    to_object_id,
    to_object_ids,
)
from bookshelf.infrastructure.library.mapper import user_from_document
from bookshelf.infrastructure.library.mongo_gateway import MongoGateway

logger = logging.getLogger(__name__)


class UserRepositoryAdapter(UserRepository):
    """MongoDB adapter for the UserRepository port."""

    def __init__(self, gateway: MongoGateway) -> None:
        self._gateway = gateway

    def find_users(self, name: Optional[str] = None) -> list[User]:
        query = {"name": name} if name else {}
        documents = list(self._gateway.users.find(query))
        books_by_id = self._load_books(documents)
        return [user_from_document(document, books_by_id) for document in documents]

    def find_by_name(self, name: str) -> Optional[User]:
        document = self._gateway.users.find_one({"name": name})
        if document is None:
            return None
        return user_from_document(document, self._load_books([document]))

    def create(self, name: str, age: int | float, email: str) -> User:
        document = {"name": name, "age": age, "email": email, "books": []}
        if not self._gateway.unique_emails and self._gateway.users.find_one(
            {"email": email}, {"_id": 1}
        ):
            raise UserAlreadyExistsError(email)
        try:
            result = self._gateway.users.insert_one(document)
        except DuplicateKeyError as exc:
            raise UserAlreadyExistsError(email) from exc
        return User(id=str(result.inserted_id), name=name, age=age, email=email, books=[])

    def update_by_email(
        self,
        email: str,
        name: str,
        age: int | float,
        books: Optional[list[str]] = None,
    ) -> bool:
        fields: dict[str, object] = {"name": name, "age": age, "email": email}
        if books is not None:
            fields["books"] = to_object_ids(books)
        result = self._gateway.users.update_one({"email": email}, {"$set": fields})
        return result.matched_count > 0

    def delete(self, user_id: str) -> bool:
        oid = to_object_id(user_id)
        if oid is None:
            return False
        result = self._gateway.users.delete_one({"_id": oid})
        return result.deleted_count > 0

    def referenced_book_ids(self) -> list[str]:
        return sorted({str(ref) for ref in self._gateway.users.distinct("books")})

    def remove_book_references(self, book_ids: list[str]) -> int:
        # Legacy documents may hold string references.
        refs: list[object] = [*to_object_ids(book_ids), *book_ids]
        result = self._gateway.users.update_many(
            {"books": {"$in": refs}},
            {"$pull": {"books": {"$in": refs}}},
        )
        return result.modified_count

    def _load_books(self, documents: list[UserDocument]) -> dict[str, BookDocument]:
        """Fetch every book referenced by ``documents`` in one query."""
        refs = {str(ref) for document in documents for ref in document.get("books") or []}
        oids = to_object_ids(sorted(refs))
        if not oids:
            return {}
        return {
            str(book["_id"]): book
            for book in self._gateway.books.find({"_id": {"$in": oids}})
        }
