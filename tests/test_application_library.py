"""
Tests for the library application layer (use cases).

Tests use cases with in-memory or mocked ports. No real infrastructure needed.
"""

from unittest.mock import MagicMock

import pytest

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
from bookshelf.application.library.reconcile_book_references import (
    ReconcileBookReferencesUseCase,
)
from bookshelf.application.library.users import (
    CreateUserUseCase,
    DeleteUserUseCase,
    GetUserUseCase,
    ListUsersUseCase,
    UpdateUserUseCase,
)
from bookshelf.application.library.validation import require_fields
from bookshelf.domain.library.errors import (
    BookNotFoundError,
    MissingFieldsError,
    UserAlreadyExistsError,
    UserNotFoundError,
)
from bookshelf.domain.library.ports import BookRepository, UserRepository


class TestRequireFields:
    def test_all_present(self) -> None:
        require_fields(name="Ana", age=30)

    def test_falsy_values_count_as_missing(self) -> None:
        with pytest.raises(MissingFieldsError) as exc_info:
            require_fields(name="", age=0, email="a@example.com", title=None)
        assert exc_info.value.fields == ["name", "age", "title"]


class TestUserUseCases:
    def test_create_rejects_missing_fields_before_storage(self) -> None:
        repo = MagicMock(spec=UserRepository)
        with pytest.raises(MissingFieldsError):
            CreateUserUseCase(repo).execute(CreateUserCommand(name="Ana", age=30))
        repo.create.assert_not_called()

    def test_create_conflict_propagates(self, user_repo) -> None:
        use_case = CreateUserUseCase(user_repo)
        use_case.execute(CreateUserCommand(name="Ana", email="a@example.com", age=30))
        with pytest.raises(UserAlreadyExistsError):
            use_case.execute(CreateUserCommand(name="B", email="a@example.com", age=3))

    def test_list_treats_empty_name_as_no_filter(self) -> None:
        repo = MagicMock(spec=UserRepository)
        repo.find_users.return_value = []
        ListUsersUseCase(repo).execute(ListUsersQuery(name=""))
        repo.find_users.assert_called_once_with(name=None)

    def test_get_missing_user(self, user_repo) -> None:
        with pytest.raises(UserNotFoundError):
            GetUserUseCase(user_repo).execute(GetUserQuery(name="Nobody"))

    def test_update_checks_books_before_writing(self) -> None:
        user_repo = MagicMock(spec=UserRepository)
        book_repo = MagicMock(spec=BookRepository)
        book_repo.find_missing.return_value = ["b2"]

        command = UpdateUserCommand(
            name="Ana", email="a@example.com", age=30, books=["b1", "b2", "b1"]
        )
        with pytest.raises(BookNotFoundError) as exc_info:
            UpdateUserUseCase(user_repo, book_repo).execute(command)

        assert exc_info.value.identifier == "b2"
        book_repo.find_missing.assert_called_once_with(["b1", "b2"])
        user_repo.update_by_email.assert_not_called()

    def test_update_without_books_skips_book_check(self) -> None:
        user_repo = MagicMock(spec=UserRepository)
        user_repo.update_by_email.return_value = True
        book_repo = MagicMock(spec=BookRepository)

        UpdateUserUseCase(user_repo, book_repo).execute(
            UpdateUserCommand(name="Ana", email="a@example.com", age=30)
        )

        book_repo.find_missing.assert_not_called()
        user_repo.update_by_email.assert_called_once_with(
            email="a@example.com", name="Ana", age=30, books=None
        )

    def test_update_unmatched_email(self) -> None:
        user_repo = MagicMock(spec=UserRepository)
        user_repo.update_by_email.return_value = False
        book_repo = MagicMock(spec=BookRepository)
        book_repo.find_missing.return_value = []
        with pytest.raises(UserNotFoundError):
            UpdateUserUseCase(user_repo, book_repo).execute(
                UpdateUserCommand(name="Ana", email="a@example.com", age=30, books=[])
            )

    def test_delete_requires_id(self, user_repo) -> None:
        with pytest.raises(MissingFieldsError):
            DeleteUserUseCase(user_repo).execute(DeleteUserCommand())

    def test_delete_unknown(self, user_repo) -> None:
        with pytest.raises(UserNotFoundError):
            DeleteUserUseCase(user_repo).execute(DeleteUserCommand(user_id="nope"))


class TestBookUseCases:
    def test_create_and_get(self, book_repo) -> None:
        book = CreateBookUseCase(book_repo).execute(
            CreateBookCommand(title="Dune", pages=412)
        )
        assert GetBookUseCase(book_repo).execute(GetBookQuery(book_id=book.id)) == book

    def test_zero_pages_is_missing(self, book_repo) -> None:
        with pytest.raises(MissingFieldsError) as exc_info:
            CreateBookUseCase(book_repo).execute(CreateBookCommand(title="Dune", pages=0))
        assert exc_info.value.fields == ["pages"]

    def test_list_by_title(self, book_repo) -> None:
        create = CreateBookUseCase(book_repo)
        create.execute(CreateBookCommand(title="Dune", pages=1))
        create.execute(CreateBookCommand(title="Emma", pages=2))
        books = ListBooksUseCase(book_repo).execute(ListBooksQuery(title="Emma"))
        assert [book.title for book in books] == ["Emma"]

    def test_update_unknown(self, book_repo) -> None:
        with pytest.raises(BookNotFoundError):
            UpdateBookUseCase(book_repo).execute(
                UpdateBookCommand(book_id="nope", title="Dune", pages=1)
            )

    def test_delete_runs_single_cascade_call(self) -> None:
        repo = MagicMock(spec=BookRepository)
        repo.delete_and_detach.return_value = True
        DeleteBookUseCase(repo).execute(DeleteBookCommand(book_id="b1"))
        repo.delete_and_detach.assert_called_once_with("b1")

    def test_delete_unknown(self) -> None:
        repo = MagicMock(spec=BookRepository)
        repo.delete_and_detach.return_value = False
        with pytest.raises(BookNotFoundError):
            DeleteBookUseCase(repo).execute(DeleteBookCommand(book_id="b1"))


class TestReconcileBookReferences:
    def test_prunes_dangling_references(self, store, user_repo, book_repo) -> None:
        book = book_repo.create(title="Dune", pages=412)
        user = user_repo.create(name="Ana", age=30, email="a@example.com")
        store.users[user.id]["books"] = [book.id, "deleted-book"]
        user_repo.create(name="Bob", age=40, email="b@example.com")

        pruned = ReconcileBookReferencesUseCase(book_repo, user_repo).execute()

        assert pruned == 1
        assert store.users[user.id]["books"] == [book.id]

    def test_book_attached_during_pass_is_kept(self, store, user_repo, book_repo) -> None:
        user = user_repo.create(name="Ana", age=30, email="a@example.com")
        store.users[user.id]["books"] = ["deleted-book"]
        snapshot = user_repo.referenced_book_ids

        def referenced_then_attach() -> list[str]:
            referenced = snapshot()
            book = book_repo.create(title="Dune", pages=412)
            user_repo.update_by_email(
                email="a@example.com", name="Ana", age=30, books=["deleted-book", book.id]
            )
            return referenced

        user_repo.referenced_book_ids = referenced_then_attach

        ReconcileBookReferencesUseCase(book_repo, user_repo).execute()

        [dune] = book_repo.find_books(title="Dune")
        assert store.users[user.id]["books"] == [dune.id]

    def test_removes_only_missing_ids(self) -> None:
        book_repo = MagicMock(spec=BookRepository)
        book_repo.find_missing.return_value = ["b2"]
        user_repo = MagicMock(spec=UserRepository)
        user_repo.referenced_book_ids.return_value = ["b1", "b2"]
        user_repo.remove_book_references.return_value = 3

        assert ReconcileBookReferencesUseCase(book_repo, user_repo).execute() == 3
        book_repo.find_missing.assert_called_once_with(["b1", "b2"])
        user_repo.remove_book_references.assert_called_once_with(["b2"])

    def test_nothing_dangling_writes_nothing(self) -> None:
        book_repo = MagicMock(spec=BookRepository)
        book_repo.find_missing.return_value = []
        user_repo = MagicMock(spec=UserRepository)
        user_repo.referenced_book_ids.return_value = ["b1"]

        assert ReconcileBookReferencesUseCase(book_repo, user_repo).execute() == 0
        user_repo.remove_book_references.assert_not_called()
