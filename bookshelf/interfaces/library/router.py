"""
FastAPI router for the library bounded context.

Each (method, path) pair maps to exactly one use case. Anything else
falls through to the 404 "Endpoint not found" handler.

    GET    /users   list users, optional exact ``name`` filter
    GET    /user    first user with exact ``name``
    GET    /books   list books, optional exact ``title`` filter
    GET    /book    book by ``id``
    POST   /user    create user
    POST   /book    create book
    PUT    /user    replace user fields, matched by email
    PUT    /book    replace book fields, matched by id
    DELETE /user    delete user by ``id``
    DELETE /book    delete book by ``id`` and detach it from users

All routes delegate to use cases. No business logic here.
Every route is rate limited per client address.
Error mapping is handled by centralized error handlers.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import PlainTextResponse

from bookshelf.application.library.books import (
    CreateBookUseCase,
    DeleteBookUseCase,
    GetBookUseCase,
    ListBooksUseCase,
    UpdateBookUseCase,
)
from bookshelf.application.library.dtos import (
    CreateBookCommand,
    CreateUserCommand,
    DeleteBookCommand,
    DeleteUserCommand,
    GetBookQuery,
    GetUserQuery,
    ListBooksQuery,
    ListUsersQuery,
    UpdateBookCommand,
    UpdateUserCommand,
)
from bookshelf.application.library.users import (
    CreateUserUseCase,
    DeleteUserUseCase,
    GetUserUseCase,
    ListUsersUseCase,
    UpdateUserUseCase,
)
from bookshelf.interfaces.library.dependencies import (
    get_book_use_case,
    get_create_book_use_case,
    get_create_user_use_case,
    get_delete_book_use_case,
    get_delete_user_use_case,
    get_list_books_use_case,
    get_list_users_use_case,
    get_update_book_use_case,
    get_update_user_use_case,
    get_user_use_case,
)
from bookshelf.interfaces.library.schemas import (
    BookCreateRequest,
    BookResponse,
    BookUpdateRequest,
    UserCreateRequest,
    UserResponse,
    UserUpdateRequest,
    book_to_response,
    user_to_response,
)
from bookshelf.shared.security.rate_limiting import rate_limited

router = APIRouter(tags=["library"])

BAD_REQUEST = {400: {"description": "Bad Request"}}
USER_NOT_FOUND = {404: {"description": "User not found"}}
BOOK_NOT_FOUND = {404: {"description": "Book not found"}}


# ------------------------------------------------------------------
# Users
# ------------------------------------------------------------------


@router.get(
    "/users",
    response_model=list[UserResponse],
    summary="List users",
    description="List users with their books expanded, optionally filtered by exact name.",
)
@rate_limited
def list_users(
    request: Request,
    name: Optional[str] = None,
    use_case: ListUsersUseCase = Depends(get_list_users_use_case),
) -> list[UserResponse]:
    users = use_case.execute(ListUsersQuery(name=name))
    return [user_to_response(user) for user in users]


@router.get(
    "/user",
    response_model=UserResponse,
    responses={**BAD_REQUEST, **USER_NOT_FOUND},
    summary="Get a user by name",
)
@rate_limited
def get_user(
    request: Request,
    name: Optional[str] = None,
    use_case: GetUserUseCase = Depends(get_user_use_case),
) -> UserResponse:
    """Return the first user whose name matches exactly."""
    return user_to_response(use_case.execute(GetUserQuery(name=name)))


@router.post(
    "/user",
    response_model=UserResponse,
    status_code=201,
    responses={**BAD_REQUEST, 409: {"description": "User already exist"}},
    summary="Create a user",
)
@rate_limited
def create_user(
    request: Request,
    payload: UserCreateRequest,
    use_case: CreateUserUseCase = Depends(get_create_user_use_case),
) -> UserResponse:
    """Create a user. The created user never has books."""
    command = CreateUserCommand(name=payload.name, email=payload.email, age=payload.age)
    return user_to_response(use_case.execute(command))


@router.put(
    "/user",
    response_class=PlainTextResponse,
    responses={**BAD_REQUEST, 404: {"description": "User not found / Book not found"}},
    summary="Replace a user's fields",
)
@rate_limited
def update_user(
    request: Request,
    payload: UserUpdateRequest,
    use_case: UpdateUserUseCase = Depends(get_update_user_use_case),
) -> str:
    """Replace name, age and books of the user matched by email."""
    use_case.execute(
        UpdateUserCommand(
            name=payload.name,
            email=payload.email,
            age=payload.age,
            books=payload.books,
        )
    )
    return "OK"


@router.delete(
    "/user",
    response_class=PlainTextResponse,
    responses={**BAD_REQUEST, **USER_NOT_FOUND},
    summary="Delete a user",
)
@rate_limited
def delete_user(
    request: Request,
    identifier: Optional[str] = Query(default=None, alias="id"),
    use_case: DeleteUserUseCase = Depends(get_delete_user_use_case),
) -> str:
    use_case.execute(DeleteUserCommand(user_id=identifier))
    return "User deleted"


# ------------------------------------------------------------------
# Books
# ------------------------------------------------------------------


@router.get(
    "/books",
    response_model=list[BookResponse],
    summary="List books",
    description="List books, optionally filtered by exact title.",
)
@rate_limited
def list_books(
    request: Request,
    title: Optional[str] = None,
    use_case: ListBooksUseCase = Depends(get_list_books_use_case),
) -> list[BookResponse]:
    books = use_case.execute(ListBooksQuery(title=title))
    return [book_to_response(book) for book in books]


@router.get(
    "/book",
    response_model=BookResponse,
    responses={**BAD_REQUEST, **BOOK_NOT_FOUND},
    summary="Get a book by id",
)
@rate_limited
def get_book(
    request: Request,
    identifier: Optional[str] = Query(default=None, alias="id"),
    use_case: GetBookUseCase = Depends(get_book_use_case),
) -> BookResponse:
    return book_to_response(use_case.execute(GetBookQuery(book_id=identifier)))


@router.post(
    "/book",
    response_model=BookResponse,
    status_code=201,
    responses={**BAD_REQUEST, 409: {"description": "Book already exist"}},
    summary="Create a book",
)
@rate_limited
def create_book(
    request: Request,
    payload: BookCreateRequest,
    use_case: CreateBookUseCase = Depends(get_create_book_use_case),
) -> BookResponse:
    command = CreateBookCommand(title=payload.title, pages=payload.pages)
    return book_to_response(use_case.execute(command))


@router.put(
    "/book",
    response_class=PlainTextResponse,
    responses={**BAD_REQUEST, **BOOK_NOT_FOUND, 409: {"description": "Book already exist"}},
    summary="Replace a book's fields",
)
@rate_limited
def update_book(
    request: Request,
    payload: BookUpdateRequest,
    use_case: UpdateBookUseCase = Depends(get_update_book_use_case),
) -> str:
    use_case.execute(
        UpdateBookCommand(book_id=payload.id, title=payload.title, pages=payload.pages)
    )
    return "OK"


@router.delete(
    "/book",
    response_class=PlainTextResponse,
    responses={**BAD_REQUEST, **BOOK_NOT_FOUND},
    summary="Delete a book",
    description="Delete a book and remove its identifier from every user's books list.",
)
@rate_limited
def delete_book(
    request: Request,
    identifier: Optional[str] = Query(default=None, alias="id"),
    use_case: DeleteBookUseCase = Depends(get_delete_book_use_case),
) -> str:
    use_case.execute(DeleteBookCommand(book_id=identifier))
    return "Book deleted"
