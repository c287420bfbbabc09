"""
CLI entry point for the RedCoins service.

Usage:
    # Serve the API
    python -m redcoins.cli serve --port 8000

    # Create the database and tables if they are missing
    python -m redcoins.cli init-db

    # Drop the test database (refuses any other database)
    python -m redcoins.cli drop-test-db
"""

import argparse
import logging
import sys

from redcoins.core.config import get_settings
from redcoins.shared.logging import configure_logging

logger = logging.getLogger(__name__)


def cmd_serve(args: argparse.Namespace) -> None:
    """Start the API server."""
    import uvicorn

    logger.info("Starting RedCoins API at http://%s:%d", args.host, args.port)
    uvicorn.run("redcoins.main:app", host=args.host, port=args.port, reload=False)


def cmd_init_db(_args: argparse.Namespace) -> None:
    """Provision the application database."""
    from redcoins.infrastructure.database import Database
    from redcoins.infrastructure.ledger.schema import (
        bootstrap_schema,
        create_database_if_missing,
    )

    config = get_settings().database_config()
    create_database_if_missing(config)
    database = Database(config)
    try:
        created = bootstrap_schema(database)
    finally:
        database.dispose()
    logger.info("Schema %s", "created" if created else "already present")


def cmd_drop_test_db(args: argparse.Namespace) -> None:
    """Drop the configured test database."""
    from redcoins.core.config import DatabaseConfig
    from redcoins.infrastructure.ledger.schema import drop_test_database

    config = get_settings().database_config()
    if args.dsn:
        config = DatabaseConfig(
            dsn=args.dsn, test_database_name=config.test_database_name
        )
    drop_test_database(config)


def main() -> None:
    configure_logging(get_settings().log_level)

    parser = argparse.ArgumentParser(description="RedCoins ledger service CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default="0.0.0.0")
    serve_parser.add_argument("--port", type=int, default=8000)
    serve_parser.set_defaults(func=cmd_serve)

    init_parser = subparsers.add_parser(
        "init-db", help="Create the database and tables if missing"
    )
    init_parser.set_defaults(func=cmd_init_db)

    drop_parser = subparsers.add_parser(
        "drop-test-db", help="Drop the test database"
    )
    drop_parser.add_argument(
        "--dsn", default=None, help="Test database URL (defaults to settings)"
    )
    drop_parser.set_defaults(func=cmd_drop_test_db)

    args = parser.parse_args()
    try:
        args.func(args)
    except ValueError as exc:
        logger.error("%s", exc)
        sys.exit(1)


if __name__ == "__main__":
    main()
