"""
Password hashing module using raw Argon2id from argon2-cffi.

Stored records have the form ``<salt>.<hex derived key>`` where the salt is
a fresh hex string per password-set event and its ASCII bytes are fed to
the KDF. Hashing is CPU and memory bound, so the async entry points run it
on a small thread pool.
"""

from asyncio import get_running_loop
from concurrent.futures import ThreadPoolExecutor
from secrets import compare_digest, token_hex

from argon2.exceptions import HashingError
from argon2.low_level import Type, hash_secret_raw

from blog_api.configs import AuthConfig
from blog_api.errors import PasswordHashingError
from blog_api.monitoring import get_logger

executor = ThreadPoolExecutor(max_workers=4, thread_name_prefix="argon2")
logger = get_logger(__name__)

RECORD_SEPARATOR = "."


class PasswordHasher:
    """
    Salted Argon2id password hashing and verification.

    The cost parameters come from `AuthConfig`, so records produced under
    one security level only verify under the same level.
    """

    def __init__(self, config: AuthConfig) -> None:
        self.memory_cost = config.memory_cost
        self.time_cost = config.time_cost
        self.parallelism = config.parallelism
        self.hash_length = config.hash_length
        self.salt_bytes = config.salt_bytes
        logger.info(
            "password_hasher_initialized",
            memory_cost=self.memory_cost,
            time_cost=self.time_cost,
            parallelism=self.parallelism,
        )

    def _derive(self, password: str, salt: str) -> str:
        raw = hash_secret_raw(
            secret=password.encode(),
            salt=salt.encode(),
            time_cost=self.time_cost,
            memory_cost=self.memory_cost,
            parallelism=self.parallelism,
            hash_len=self.hash_length,
            type=Type.ID,
        )
        return raw.hex()

    def hash(self, password: str) -> str:
        """
        Hash a plaintext password with a fresh salt.

        Args:
            password: The plaintext password to hash

        Returns:
            str: The password record ``salt.hex``

        Raises:
            ValueError: If password is empty
            PasswordHashingError: If the Argon2 backend fails
        """
        if not password:
            msg = "Password cannot be empty"
            raise ValueError(msg) from None

        salt = token_hex(self.salt_bytes)
        try:
            derived = self._derive(password, salt)
        except (HashingError, UnicodeError) as e:
            logger.exception("password_hash_failed")
            raise PasswordHashingError from e
        return f"{salt}{RECORD_SEPARATOR}{derived}"

    def verify(self, password: str, record: str) -> bool:
        """
        Verify a plaintext password against a stored record.

        Malformed records never match.

        Example:
            >>> hasher = PasswordHasher(config)
            >>> hasher.verify("Str0ng!!Pw", hasher.hash("Str0ng!!Pw"))
            True
            >>> hasher.verify("Str0ng!!Pw", "no-separator")
            False
        """
        if not isinstance(record, str):
            return False
        salt, sep, expected = record.partition(RECORD_SEPARATOR)
        if not sep or not salt or not expected:
            logger.warning("password_record_malformed")
            return False

        try:
            derived = self._derive(password, salt)
        except (HashingError, UnicodeError):
            logger.exception("password_verify_failed")
            return False

        return compare_digest(derived.encode(), expected.encode())

    async def hash_async(self, password: str) -> str:
        """Hash on the worker pool."""
        return await get_running_loop().run_in_executor(executor, self.hash, password)

    async def verify_async(self, password: str, record: str) -> bool:
        """Verify on the worker pool."""
        return await get_running_loop().run_in_executor(
            executor,
            self.verify,
            password,
            record,
        )
