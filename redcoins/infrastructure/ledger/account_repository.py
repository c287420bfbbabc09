"""
Adapter: Account registry persistence.

Implements AccountRepository port.
Reads/writes the account table.
"""

import logging
from typing import Optional

from sqlalchemy import func, insert, select
from sqlalchemy.engine import Connection
from sqlalchemy.exc import IntegrityError

from redcoins.domain.ledger.entities import Account
from redcoins.domain.ledger.errors import DuplicateAccountError
from redcoins.domain.ledger.ports import AccountRepository
from redcoins.infrastructure.database import Database
from redcoins.infrastructure.ledger.schema import account_table

logger = logging.getLogger(__name__)


class AccountRepositoryAdapter(AccountRepository):
    """SQLAlchemy adapter for the account table."""

    def __init__(self, database: Database) -> None:
        self._database = database

    def count_by_email(self, tx: Connection, email: str) -> int:
        query = (
            select(func.count())
            .select_from(account_table)
            .where(account_table.c.email == email)
        )
        return tx.execute(query).scalar_one()

    def insert(self, tx: Connection, account: Account) -> int:
        """Insert an account row and return its id.

        A unique-constraint hit means a concurrent registration won the
        race past the count check; it is reported as a duplicate.
        """
        statement = insert(account_table).values(
            email=account.email,
            password_hash=account.password_hash,
            name=account.name,
            birth_date=account.birth_date,
        )
        try:
            result = tx.execute(statement)
        except IntegrityError as exc:
            raise DuplicateAccountError(account.email) from exc
        account_id = result.inserted_primary_key[0]
        logger.debug("Inserted account id=%s", account_id)
        return account_id

    def find_id(
        self, tx: Connection, email: str, lock: bool = False
    ) -> Optional[int]:
        query = select(account_table.c.id).where(account_table.c.email == email)
        if lock:
            query = query.with_for_update()
        return tx.execute(query).scalar_one_or_none()

    def lookup_id(self, email: str) -> Optional[int]:
        query = select(account_table.c.id).where(account_table.c.email == email)
        with self._database.connect() as conn:
            return conn.execute(query).scalar_one_or_none()

    def get_password_hash(self, email: str) -> Optional[bytes]:
        query = select(account_table.c.password_hash).where(
            account_table.c.email == email
        )
        with self._database.connect() as conn:
            stored = conn.execute(query).scalar_one_or_none()
        return bytes(stored) if stored is not None else None
