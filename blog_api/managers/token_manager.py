"""Token manager for issuing and verifying HS256 session tokens."""

from datetime import UTC, datetime, timedelta
from uuid import UUID

from jose import JWTError, jwt

from blog_api.configs import AuthConfig
from blog_api.monitoring import get_logger
from blog_api.schemas.auth import TokenData

logger = get_logger(__name__)


class TokenManager:
    """
    Stateless JWT issuing and verification.

    Tokens carry ``{email, sub, iat, exp}``. There is no server-side store:
    signature and expiry are the whole validity check.
    """

    def __init__(self, config: AuthConfig) -> None:
        self._secret = config.secret_key
        self.algorithm = config.algorithm
        self.lifetime = timedelta(minutes=config.token_lifetime_minutes)

    def issue(self, email: str, user_id: UUID, now: datetime | None = None) -> str:
        """
        Create a signed access token.

        Args:
            email: Subject email
            user_id: Subject id
            now: Issue time; defaults to the current UTC time

        Returns:
            str: Encoded JWT
        """
        issued_at = now or datetime.now(UTC)
        to_encode = {
            "email": email,
            "sub": str(user_id),
            "iat": issued_at,
            "exp": issued_at + self.lifetime,
        }
        return jwt.encode(
            to_encode,
            self._secret.get_secret_value(),
            algorithm=self.algorithm,
        )

    def decode(self, token: str) -> TokenData | None:
        """
        Decode and validate a token.

        Args:
            token: JWT token string

        Returns:
            TokenData | None: Decoded token data or None if invalid, expired
            or missing a subject claim
        """
        try:
            payload = jwt.decode(
                token,
                self._secret.get_secret_value(),
                algorithms=[self.algorithm],
            )
        except JWTError as e:
            logger.debug("token_rejected", reason=type(e).__name__)
            return None

        email: str | None = payload.get("email")
        sub: str | None = payload.get("sub")
        if not email or not sub:
            return None
        return TokenData(email=email, sub=sub)
