"""
Adapter: password hashing.

Implements PasswordHasher port with scrypt. The stored value is
``salt || derived_key`` and always PASSWORD_HASH_LENGTH bytes long,
which is the width of the account.password_hash column.
"""

import hashlib
import hmac
import os

from redcoins.domain.ledger.ports import PasswordHasher
from redcoins.infrastructure.ledger.schema import PASSWORD_HASH_LENGTH

SALT_LENGTH = 16
KEY_LENGTH = PASSWORD_HASH_LENGTH - SALT_LENGTH


class ScryptPasswordHasher(PasswordHasher):
    """scrypt-based hasher producing fixed-length 60-byte blobs.

    Args:
        n: CPU/memory cost. Tests lower it to keep hashing fast.
        r: Block size.
        p: Parallelization factor.
    """

    def __init__(self, n: int = 2**14, r: int = 8, p: int = 1) -> None:
        self._n = n
        self._r = r
        self._p = p

    def _derive(self, raw_password: str, salt: bytes) -> bytes:
        return hashlib.scrypt(
            raw_password.encode("utf-8"),
            salt=salt,
            n=self._n,
            r=self._r,
            p=self._p,
            dklen=KEY_LENGTH,
        )

    def hash(self, raw_password: str) -> bytes:
        salt = os.urandom(SALT_LENGTH)
        return salt + self._derive(raw_password, salt)

    def verify(self, raw_password: str, password_hash: bytes) -> bool:
        if len(password_hash) != PASSWORD_HASH_LENGTH:
            return False
        salt, expected = password_hash[:SALT_LENGTH], password_hash[SALT_LENGTH:]
        return hmac.compare_digest(self._derive(raw_password, salt), expected)
