"""
Dependency injection for the library bounded context.

Provides FastAPI dependency functions that wire the shared MongoGateway
into repository adapters, and repositories into use cases.
Tests override ``get_user_repository`` and ``get_book_repository``.
"""

from fastapi import Depends, Request

from bookshelf.application.library.books import (
    CreateBookUseCase,
    DeleteBookUseCase,
    GetBookUseCase,
    ListBooksUseCase,
    UpdateBookUseCase,
)
from bookshelf.application.library.users import (
    CreateUserUseCase,
    DeleteUserUseCase,
    GetUserUseCase,
    ListUsersUseCase,
    UpdateUserUseCase,
)
from bookshelf.domain.library.ports import BookRepository, UserRepository
from bookshelf.infrastructure.library.book_repository import BookRepositoryAdapter
from bookshelf.infrastructure.library.mongo_gateway import MongoGateway
from bookshelf.infrastructure.library.user_repository import UserRepositoryAdapter


def get_gateway(request: Request) -> MongoGateway:
    """Return the gateway opened by the application lifespan."""
    return request.app.state.mongo


def get_user_repository(gateway: MongoGateway = Depends(get_gateway)) -> UserRepository:
    return UserRepositoryAdapter(gateway)


def get_book_repository(gateway: MongoGateway = Depends(get_gateway)) -> BookRepository:
    return BookRepositoryAdapter(gateway)


def get_list_users_use_case(
    user_repo: UserRepository = Depends(get_user_repository),
) -> ListUsersUseCase:
    return ListUsersUseCase(user_repo=user_repo)


def get_user_use_case(
    user_repo: UserRepository = Depends(get_user_repository),
) -> GetUserUseCase:
    return GetUserUseCase(user_repo=user_repo)


def get_create_user_use_case(
    user_repo: UserRepository = Depends(get_user_repository),
) -> CreateUserUseCase:
    return CreateUserUseCase(user_repo=user_repo)


def get_update_user_use_case(
    user_repo: UserRepository = Depends(get_user_repository),
    book_repo: BookRepository = Depends(get_book_repository),
) -> UpdateUserUseCase:
    """Build UpdateUserUseCase; it needs books to validate references."""
    return UpdateUserUseCase(user_repo=user_repo, book_repo=book_repo)


def get_delete_user_use_case(
    user_repo: UserRepository = Depends(get_user_repository),
) -> DeleteUserUseCase:
    return DeleteUserUseCase(user_repo=user_repo)


def get_list_books_use_case(
    book_repo: BookRepository = Depends(get_book_repository),
) -> ListBooksUseCase:
    return ListBooksUseCase(book_repo=book_repo)


def get_book_use_case(
    book_repo: BookRepository = Depends(get_book_repository),
) -> GetBookUseCase:
    return GetBookUseCase(book_repo=book_repo)


def get_create_book_use_case(
    book_repo: BookRepository = Depends(get_book_repository),
) -> CreateBookUseCase:
    return CreateBookUseCase(book_repo=book_repo)


def get_update_book_use_case(
    book_repo: BookRepository = Depends(get_book_repository),
) -> UpdateBookUseCase:
    return UpdateBookUseCase(book_repo=book_repo)


def get_delete_book_use_case(
    book_repo: BookRepository = Depends(get_book_repository),
) -> DeleteBookUseCase:
    return DeleteBookUseCase(book_repo=book_repo)
