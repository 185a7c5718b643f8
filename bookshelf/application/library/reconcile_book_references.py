"""
Use case: Repair dangling book references.

Input: none
Output: number of users whose books list was pruned
Side effects: Removes identifiers of deleted books from users.
Failure cases: None (storage errors propagate).

A book delete and the detach from users are two writes unless the
storage runs them in a transaction. If the process dies between them,
users keep a reference to a book that no longer exists. Reads already
skip such references; this pass removes them from storage.

Only identifiers confirmed missing are pulled. A deleted identifier is
never reused, so books created while the pass runs are left alone.
"""

import logging

from bookshelf.domain.library.ports import BookRepository, UserRepository

logger = logging.getLogger(__name__)


class ReconcileBookReferencesUseCase:
    """Prunes book identifiers with no stored book from every user."""

    def __init__(self, book_repo: BookRepository, user_repo: UserRepository) -> None:
        self._book_repo = book_repo
        self._user_repo = user_repo

    def execute(self) -> int:
        """Run the reconciliation pass.

        Returns:
            Number of users modified.
        """
        referenced = self._user_repo.referenced_book_ids()
        dangling = self._book_repo.find_missing(referenced) if referenced else []
        if not dangling:
            logger.info("No dangling book references found")
            return 0

        pruned = self._user_repo.remove_book_references(dangling)
        logger.warning(
            "Pruned %d dangling book reference(s) from %d user(s)",
            len(dangling),
            pruned,
        )
        return pruned
