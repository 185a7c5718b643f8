"""
Domain entities for the library bounded context.

These are the API-facing shapes. Identifiers are opaque strings here;
storage-native keys never leave the infrastructure layer.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Book:
    """A book in the catalog. Titles are unique across books."""

    id: str
    title: str
    pages: int | float


@dataclass(frozen=True)
class User:
    """A library user with the books they reference, fully expanded.

    Emails are unique across users. ``books`` follows the order of the
    stored reference list.
    """

    id: str
    name: str
    age: int | float
    email: str
    books: list[Book] = field(default_factory=list)
