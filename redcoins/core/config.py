"""
Application configuration.

Loads settings from environment variables and .env file.
All configuration is centralized here.

Connection settings are frozen into a DatabaseConfig once at process
start and passed to the components that need them.
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


@dataclass(frozen=True)
class DatabaseConfig:
    """Immutable store configuration injected into the Database adapter.

    Attributes:
        dsn: Full SQLAlchemy URL of the application database.
        test_database_name: The only database name tests may drop.
        pool_pre_ping: Check pooled connections before use.
        echo: Log emitted SQL.
    """

    dsn: str
    test_database_name: str = "redcoins_teste"
    pool_pre_ping: bool = True
    echo: bool = False

    @property
    def is_sqlite(self) -> bool:
        return self.dsn.startswith("sqlite")


class Settings(BaseSettings):
    """Application settings loaded from environment.

    Attributes:
        project_name: Display name for the API.
        version: Current API version string.
        debug: Enable debug mode. Must be False in production.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR).
        rate_limit_default: Default rate limit for all endpoints.
        bootstrap_schema: Create the database and tables at startup.
        price_quote_url: Ticker endpoint returning the asset quote.
        price_quote_currency: Quote currency key inside the ticker payload.
        price_quote_timeout: HTTP timeout in seconds for the ticker call.
    """

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", env_prefix="REDCOINS_"
    )

    project_name: str = "RedCoins"
    version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"
    rate_limit_default: str = "60/minute"
    bootstrap_schema: bool = True

    # Postgres settings
    database_dsn: Optional[str] = None
    postgres_user: str = "postgres"
    postgres_password: str = "postgres"
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_db: str = "redcoins"
    postgres_test_db: str = "redcoins_teste"
    pool_pre_ping: bool = True
    sql_echo: bool = False

    price_quote_url: str = "https://api.coinmarketcap.com/v2/ticker/1/?convert=BRL"
    price_quote_currency: str = "BRL"
    price_quote_timeout: float = 10.0

    def get_database_dsn(self) -> str:
        """Return the effective DSN for the application database.

        Priority:
        1. Explicit `REDCOINS_DATABASE_DSN`
        2. Build DSN from postgres_* values (useful for Docker Compose or local setups)
        """
        if self.database_dsn:
            return self.database_dsn
        return (
            f"postgresql+psycopg2://{self.postgres_user}:{self.postgres_password}@"
            f"{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )

    def database_config(self) -> DatabaseConfig:
        """Freeze the store settings into a DatabaseConfig."""
        return DatabaseConfig(
            dsn=self.get_database_dsn(),
            test_database_name=self.postgres_test_db,
            pool_pre_ping=self.pool_pre_ping,
            echo=self.sql_echo,
        )


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings, built once on first use."""
    return Settings()
