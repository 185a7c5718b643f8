"""
Adapter: MongoDB storage gateway.

Owns the single process-wide MongoClient and the two collections.
Created once when the application starts and closed when it stops.
"""

import logging
from typing import Optional

from pymongo import ASCENDING, MongoClient
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, OperationFailure

from bookshelf.core.config import Settings

logger = logging.getLogger(__name__)

USERS_COLLECTION = "users"
BOOKS_COLLECTION = "books"
SERVER_SELECTION_TIMEOUT_MS = 5000
DUPLICATE_KEY_CODE = 11000


class StorageConfigurationError(RuntimeError):
    """Raised when the storage connection string is not configured."""


class MongoGateway:
    """Handle on the users and books collections.

    Attributes:
        client: The shared MongoClient.
        database: The configured database.
        users: The ``users`` collection.
        books: The ``books`` collection.
        use_transactions: Whether multi-document writes run in a transaction.
        unique_emails: Whether storage enforces unique user emails.
        unique_titles: Whether storage enforces unique book titles.
    """

    def __init__(
        self,
        client: MongoClient,
        database: Database,
        use_transactions: bool = False,
    ) -> None:
        self.client = client
        self.database = database
        self.users: Collection = database[USERS_COLLECTION]
        self.books: Collection = database[BOOKS_COLLECTION]
        self.use_transactions = use_transactions
        self.unique_emails = False
        self.unique_titles = False

    @classmethod
    def connect(
        cls, settings: Settings, client: Optional[MongoClient] = None
    ) -> "MongoGateway":
        """Open the client and verify the server is reachable.

        Args:
            settings: Application settings carrying the connection string.
            client: Pre-built client, mainly for tests.

        Raises:
            StorageConfigurationError: If MONGO_URL is not set.
        """
        if not settings.mongo_url:
            raise StorageConfigurationError("MONGO_URL is not set")

        if client is None:
            client = MongoClient(
                settings.mongo_url,
                serverSelectionTimeoutMS=SERVER_SELECTION_TIMEOUT_MS,
            )
        client.admin.command("ping")
        logger.info("Connected successfully to server (db=%s)", settings.mongo_db_name)
        return cls(
            client=client,
            database=client[settings.mongo_db_name],
            use_transactions=settings.mongo_use_transactions,
        )

    def ensure_indexes(self) -> None:
        """Create the unique indexes backing email and title uniqueness.

        Existing duplicates make an index build fail. The service then
        starts without that index and the repositories fall back to a
        lookup before each write.
        """
        self.unique_emails = self._ensure_unique_index(self.users, "email", "email_unique")
        self.unique_titles = self._ensure_unique_index(self.books, "title", "title_unique")

    @staticmethod
    def _ensure_unique_index(collection: Collection, field: str, name: str) -> bool:
        try:
            collection.create_index([(field, ASCENDING)], unique=True, name=name)
        except OperationFailure as exc:
            if not isinstance(exc, DuplicateKeyError) and exc.code != DUPLICATE_KEY_CODE:
                raise
            logger.error(
                "Duplicate %s values in collection %r; unique index %s not created",
                field,
                collection.name,
                name,
            )
            return False
        logger.info("Unique index %s ensured on %s.%s", name, collection.name, field)
        return True

    def ping(self) -> None:
        """Round-trip to the server. Raises PyMongoError when unreachable."""
        self.client.admin.command("ping")

    def close(self) -> None:
        self.client.close()
        logger.info("MongoDB client closed")
