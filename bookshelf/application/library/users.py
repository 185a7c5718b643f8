"""
Use cases: users.

Each use case validates its input, delegates to the ports and
raises domain errors for the interface layer to map.

Failure cases: MissingFieldsError, UserNotFoundError,
UserAlreadyExistsError, BookNotFoundError.
"""

import logging

from bookshelf.application.library.dtos import (
    CreateUserCommand,
    DeleteUserCommand,
    GetUserQuery,
    ListUsersQuery,
    UpdateUserCommand,
)
from bookshelf.application.library.validation import require_fields
from bookshelf.domain.library.entities import User
from bookshelf.domain.library.errors import BookNotFoundError, UserNotFoundError
from bookshelf.domain.library.ports import BookRepository, UserRepository

logger = logging.getLogger(__name__)


class ListUsersUseCase:
    """Lists users with their books expanded. Read-only."""

    def __init__(self, user_repo: UserRepository) -> None:
        self._user_repo = user_repo

    def execute(self, query: ListUsersQuery) -> list[User]:
        return self._user_repo.find_users(name=query.name or None)


class GetUserUseCase:
    """Fetches the first user whose name matches exactly."""

    def __init__(self, user_repo: UserRepository) -> None:
        self._user_repo = user_repo

    def execute(self, query: GetUserQuery) -> User:
        """Run the get user use case.

        Raises:
            MissingFieldsError: If no name is given.
            UserNotFoundError: If no user has that name.
        """
        require_fields(name=query.name)
        user = self._user_repo.find_by_name(query.name)
        if user is None:
            raise UserNotFoundError(query.name)
        return user


class CreateUserUseCase:
    """Creates a user with an empty books list.

    Email uniqueness is enforced by the repository so that the check
    and the insert happen in one storage call.
    """

    def __init__(self, user_repo: UserRepository) -> None:
        self._user_repo = user_repo

    def execute(self, command: CreateUserCommand) -> User:
        """Run the create user use case.

        Args:
            command: Name, email and age of the new user.

        Returns:
            The created user, always with no books.

        Raises:
            MissingFieldsError: If name, email or age is missing or falsy.
            UserAlreadyExistsError: If the email is taken.
        """
        require_fields(name=command.name, email=command.email, age=command.age)
        user = self._user_repo.create(
            name=command.name, age=command.age, email=command.email
        )
        logger.info("Created user id=%s", user.id)
        return user


class UpdateUserUseCase:
    """Replaces a user's fields, matched by email.

    When a books list is supplied every referenced book must exist,
    otherwise nothing is written.
    """

    def __init__(self, user_repo: UserRepository, book_repo: BookRepository) -> None:
        """Initialize the use case.

        Args:
            user_repo: Repository holding the user to update.
            book_repo: Repository used to check the referenced books exist.
        """
        self._user_repo = user_repo
        self._book_repo = book_repo

    def execute(self, command: UpdateUserCommand) -> None:
        """Run the update user use case.

        Raises:
            MissingFieldsError: If name, email or age is missing or falsy.
            BookNotFoundError: If a referenced book does not exist.
            UserNotFoundError: If no user has that email.
        """
        require_fields(name=command.name, email=command.email, age=command.age)

        books = command.books
        if books is not None:
            missing = self._book_repo.find_missing(list(dict.fromkeys(books)))
            if missing:
                logger.warning("Rejected user update: %d unknown book(s)", len(missing))
                raise BookNotFoundError(missing[0])

        matched = self._user_repo.update_by_email(
            email=command.email,
            name=command.name,
            age=command.age,
            books=books,
        )
        if not matched:
            raise UserNotFoundError(command.email)
        logger.info("Updated user matched by email")


class DeleteUserUseCase:
    def __init__(self, user_repo: UserRepository) -> None:
        self._user_repo = user_repo

    def execute(self, command: DeleteUserCommand) -> None:
        """Delete a user by identifier.

        Raises:
            MissingFieldsError: If no identifier is given.
            UserNotFoundError: If nothing was deleted.
        """
        require_fields(id=command.user_id)
        if not self._user_repo.delete(command.user_id):
            raise UserNotFoundError(command.user_id)
        logger.info("Deleted user id=%s", command.user_id)
