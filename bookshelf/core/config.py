"""
Application configuration.

Loads settings from environment variables and .env file.
All configuration is centralized here, no scattered magic strings.
"""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

LISTEN_PORT = 3000


class Settings(BaseSettings):
    """Application settings loaded from environment.

    Attributes:
        project_name: Display name for the API.
        version: Current API version string.
        debug: Enable debug mode. Must be False in production.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR).
        host: Interface the HTTP server binds to.
        rate_limit_enabled: Turn per-client rate limiting on or off.
        rate_limit_default: Default rate limit for all endpoints.
        mongo_url: MongoDB connection string. Required to serve requests.
        mongo_db_name: Database holding the users and books collections.
        mongo_use_transactions: Run the book delete cascade in a
            multi-document transaction. Needs a replica set.
        reconcile_on_startup: Prune dangling book references when the
            application starts.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    project_name: str = "Bookshelf"
    version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    rate_limit_enabled: bool = True
    rate_limit_default: str = "60/minute"

    mongo_url: Optional[str] = None
    mongo_db_name: str = "nebrijadb"
    mongo_use_transactions: bool = False
    reconcile_on_startup: bool = True


settings = Settings()
