"""
Stored document shapes and identifier conversion.

Documents keep ObjectId keys and, for users, raw book identifiers
instead of expanded books.
"""

from typing import Optional, TypedDict

from bson import ObjectId


class BookDocument(TypedDict):
    _id: ObjectId
    title: str
    pages: int | float


class UserDocument(TypedDict):
    _id: ObjectId
    name: str
    age: int | float
    email: str
    books: list[ObjectId]


def to_object_id(value: object) -> Optional[ObjectId]:
    """Convert an API identifier to an ObjectId, or None if it is not one."""
    if isinstance(value, ObjectId):
        return value
    if isinstance(value, str) and ObjectId.is_valid(value):
        return ObjectId(value)
    return None


def to_object_ids(values: list[str]) -> list[ObjectId]:
    """Convert identifiers, silently dropping any that are not ObjectIds."""
    converted = (to_object_id(value) for value in values)
    return [oid for oid in converted if oid is not None]
