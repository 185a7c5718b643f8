"""
Domain-specific errors for the library bounded context.

All errors raised from the domain and application layers are defined here.
They are mapped to HTTP responses at the interface layer.
No framework imports allowed.
"""


class LibraryDomainError(Exception):
    """Base error for all library domain errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class MissingFieldsError(LibraryDomainError):
    """Raised when required input fields are absent or falsy."""

    def __init__(self, fields: list[str]) -> None:
        super().__init__(f"Missing required fields: {', '.join(fields)}")
        self.fields = fields


class UserNotFoundError(LibraryDomainError):
    """Raised when no user matches a lookup, update or delete."""

    def __init__(self, identifier: str) -> None:
        super().__init__(f"User not found: {identifier}")
        self.identifier = identifier


class BookNotFoundError(LibraryDomainError):
    """Raised when no book matches a lookup, update or delete."""

    def __init__(self, identifier: str) -> None:
        super().__init__(f"Book not found: {identifier}")
        self.identifier = identifier


class UserAlreadyExistsError(LibraryDomainError):
    """Raised when a user with the same email is already stored."""

    def __init__(self, email: str) -> None:
        super().__init__(f"User already exists with email: {email}")
        self.email = email


class BookAlreadyExistsError(LibraryDomainError):
    """Raised when a book with the same title is already stored."""

    def __init__(self, title: str) -> None:
        super().__init__(f"Book already exists with title: {title}")
        self.title = title
