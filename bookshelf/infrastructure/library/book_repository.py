"""
Adapter: Book persistence.

Implements BookRepository on the ``books`` collection. Deleting a book
also pulls its identifier from the ``users`` collection, inside a
transaction when the gateway is configured for one.
"""

import logging
from typing import Optional

from bson import ObjectId
from pymongo.client_session import ClientSession
from pymongo.errors import DuplicateKeyError

from bookshelf.domain.library.entities import Book
from bookshelf.domain.library.errors import BookAlreadyExistsError
from bookshelf.domain.library.ports import BookRepository
from bookshelf.infrastructure.library.documents import to_object_id, to_object_ids
from bookshelf.infrastructure.library.mapper import book_from_document
from bookshelf.infrastructure.library.mongo_gateway import MongoGateway

logger = logging.getLogger(__name__)


class BookRepositoryAdapter(BookRepository):
    """MongoDB adapter for the BookRepository port."""

    def __init__(self, gateway: MongoGateway) -> None:
        self._gateway = gateway

    def find_books(self, title: Optional[str] = None) -> list[Book]:
        query = {"title": title} if title else {}
        return [book_from_document(document) for document in self._gateway.books.find(query)]

    def find_by_id(self, book_id: str) -> Optional[Book]:
        oid = to_object_id(book_id)
        if oid is None:
            return None
        document = self._gateway.books.find_one({"_id": oid})
        return book_from_document(document) if document else None

    def create(self, title: str, pages: int | float) -> Book:
        if self._title_taken(title):
            raise BookAlreadyExistsError(title)
        try:
            result = self._gateway.books.insert_one({"title": title, "pages": pages})
        except DuplicateKeyError as exc:
            raise BookAlreadyExistsError(title) from exc
        return Book(id=str(result.inserted_id), title=title, pages=pages)

    def update(self, book_id: str, title: str, pages: int | float) -> bool:
        oid = to_object_id(book_id)
        if oid is None:
            return False
        if self._title_taken(title, exclude=oid):
            raise BookAlreadyExistsError(title)
        try:
            result = self._gateway.books.update_one(
                {"_id": oid}, {"$set": {"title": title, "pages": pages}}
            )
        except DuplicateKeyError as exc:
            raise BookAlreadyExistsError(title) from exc
        return result.matched_count > 0

    def delete_and_detach(self, book_id: str) -> bool:
        """Delete a book and pull it from every user's books list.

        With transactions enabled both writes commit or abort together.
        Without them a crash between the writes can leave dangling
        references, which ReconcileBookReferencesUseCase repairs.
        """
        oid = to_object_id(book_id)
        if oid is None:
            return False
        if not self._gateway.use_transactions:
            return self._delete_and_detach(oid, session=None)
        with self._gateway.client.start_session() as session:
            return session.with_transaction(
                lambda s: self._delete_and_detach(oid, session=s)
            )

    def find_missing(self, book_ids: list[str]) -> list[str]:
        oids = to_object_ids(book_ids)
        found: set[ObjectId] = set()
        if oids:
            found = {
                document["_id"]
                for document in self._gateway.books.find({"_id": {"$in": oids}}, {"_id": 1})
            }
        return [book_id for book_id in book_ids if to_object_id(book_id) not in found]

    def _delete_and_detach(self, oid: ObjectId, session: Optional[ClientSession]) -> bool:
        deleted = self._gateway.books.delete_one({"_id": oid}, session=session)
        if deleted.deleted_count == 0:
            return False
        refs = [oid, str(oid)]
        detached = self._gateway.users.update_many(
            {"books": {"$in": refs}},
            {"$pull": {"books": {"$in": refs}}},
            session=session,
        )
        logger.info("Detached book id=%s from %d user(s)", oid, detached.modified_count)
        return True

    def _title_taken(self, title: str, exclude: Optional[ObjectId] = None) -> bool:
        """Lookup used only while storage lacks the unique title index."""
        if self._gateway.unique_titles:
            return False
        query: dict[str, object] = {"title": title}
        if exclude is not None:
            query["_id"] = {"$ne": exclude}
        return self._gateway.books.find_one(query, {"_id": 1}) is not None
