"""
Tests for the document-to-entity mapper.

Pure functions; no database.
"""

from bson import ObjectId

from bookshelf.domain.library.entities import Book
from bookshelf.infrastructure.library.mapper import book_from_document, user_from_document


def _book_doc(title: str, pages: int = 100) -> dict:
    return {"_id": ObjectId(), "title": title, "pages": pages}


def test_book_from_document_stringifies_id() -> None:
    doc = _book_doc("Dune", 412)
    assert book_from_document(doc) == Book(id=str(doc["_id"]), title="Dune", pages=412)


def test_user_books_follow_reference_order() -> None:
    dune, emma = _book_doc("Dune"), _book_doc("Emma")
    user_doc = {
        "_id": ObjectId(),
        "name": "Ana",
        "age": 30,
        "email": "a@example.com",
        "books": [emma["_id"], dune["_id"]],
    }
    books_by_id = {str(dune["_id"]): dune, str(emma["_id"]): emma}

    user = user_from_document(user_doc, books_by_id)

    assert user.id == str(user_doc["_id"])
    assert [book.title for book in user.books] == ["Emma", "Dune"]


def test_dangling_and_legacy_references() -> None:
    dune = _book_doc("Dune")
    user_doc = {
        "_id": ObjectId(),
        "name": "Ana",
        "age": 30,
        "email": "a@example.com",
        "books": [ObjectId(), str(dune["_id"])],
    }

    user = user_from_document(user_doc, {str(dune["_id"]): dune})

    assert [book.title for book in user.books] == ["Dune"]


def test_user_without_books_field() -> None:
    user_doc = {"_id": ObjectId(), "name": "Ana", "age": 30, "email": "a@example.com"}
    assert user_from_document(user_doc, {}).books == []
