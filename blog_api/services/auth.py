"""Authentication service: credential hashing, signup, signin and session tokens."""

from datetime import datetime

from blog_api.configs import AuthConfig
from blog_api.errors import (
    DuplicateEntryError,
    DuplicateIdentityError,
    InvalidCredentialsError,
    UnauthorizedError,
)
from blog_api.managers.password_manager import PasswordHasher
from blog_api.managers.token_manager import TokenManager
from blog_api.models import UserDB
from blog_api.monitoring import get_logger
from blog_api.repositories.protocols import UserDirectory
from blog_api.schemas.auth import SignUp, Token, TokenData

logger = get_logger(__name__)


class AuthService:
    """
    Service for credential authentication and token handling.

    Verification failures differ by cause unless
    `AuthConfig.uniform_credential_errors` is set: an unknown email raises
    `InvalidCredentialsError`, a wrong password raises `UnauthorizedError`.
    """

    def __init__(
        self,
        user_repo: UserDirectory,
        config: AuthConfig,
        hasher: PasswordHasher | None = None,
        token_manager: TokenManager | None = None,
    ) -> None:
        """
        Initialize the auth service.

        Args:
            user_repo: Identity storage
            config: Signing and hashing configuration
            hasher: Optional prebuilt password hasher
            token_manager: Optional prebuilt token manager
        """
        self.user_repo = user_repo
        self.config = config
        self.hasher = hasher or PasswordHasher(config)
        self.token_manager = token_manager or TokenManager(config)

    async def hash_password(self, password: str) -> str:
        return await self.hasher.hash_async(password)

    async def verify_password(self, password: str, record: str) -> bool:
        return await self.hasher.verify_async(password, record)

    async def sign_up(self, candidate: SignUp) -> Token:
        """
        Register a new identity and return a session token for it.

        Args:
            candidate: Validated signup data

        Returns:
            Token: Access token for the new identity

        Raises:
            DuplicateIdentityError: If the email is already registered
        """
        if await self.user_repo.get_by_email(candidate.email):
            logger.info("signup_rejected", reason="duplicate_email")
            raise DuplicateIdentityError

        password_hash = await self.hash_password(candidate.password.get_secret_value())
        try:
            user = await self.user_repo.create(
                name=candidate.name,
                email=candidate.email,
                password_hash=password_hash,
            )
        except DuplicateEntryError as e:
            # lost a race with a concurrent signup for the same email
            logger.info("signup_rejected", reason="duplicate_entry")
            raise DuplicateIdentityError from e

        logger.info("user_signed_up", user_id=str(user.id))
        return self.issue_token(user)

    async def sign_in(self, email: str, password: str) -> Token:
        """
        Authenticate by email and password.

        Args:
            email: Account email (exact match)
            password: Plaintext password

        Returns:
            Token: Access token

        Raises:
            InvalidCredentialsError: If no identity has this email
            UnauthorizedError: If the password does not match
        """
        user = await self.user_repo.get_by_email(email)
        if not user:
            logger.info("signin_failed", reason="unknown_email")
            raise InvalidCredentialsError

        if not await self.verify_password(password, user.password_hash):
            logger.info("signin_failed", reason="wrong_password", user_id=str(user.id))
            if self.config.uniform_credential_errors:
                raise InvalidCredentialsError
            raise UnauthorizedError

        logger.info("user_signed_in", user_id=str(user.id))
        return self.issue_token(user)

    def issue_token(self, user: UserDB, now: datetime | None = None) -> Token:
        """Sign a token for `user` that expires one lifetime after `now`."""
        access_token = self.token_manager.issue(user.email, user.id, now=now)
        return Token(access_token=access_token, token_type="bearer")

    def verify_token(self, token: str | None) -> TokenData | None:
        """
        Check a token's signature and expiry.

        Returns None for absent, malformed, expired or incomplete tokens;
        never raises.
        """
        if not token:
            return None
        return self.token_manager.decode(token)

    async def resolve_identity(self, token: str | None) -> UserDB | None:
        """Map a bearer token to the identity it names, or None for anonymous."""
        token_data = self.verify_token(token)
        if token_data is None:
            return None
        return await self.user_repo.get_by_email(token_data.email)
