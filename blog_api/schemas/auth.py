"""Request and token schemas for signup and signin."""

from typing import Annotated

from email_validator import EmailNotValidError, validate_email
from pydantic import AfterValidator, BaseModel, ConfigDict, Field, SecretStr, field_validator

from blog_api.configs.settings import MAX_NAME_LENGTH, MIN_NAME_LENGTH, MIN_PASSWORD_LENGTH

MIN_LOWERCASE = 2
MIN_UPPERCASE = 1
MIN_DIGITS = 2
MIN_SYMBOLS = 1


def password_weaknesses(password: str) -> list[str]:
    """
    List the strength rules a password breaks.

    Rules: at least 8 characters, 2 lowercase letters, 1 uppercase letter,
    2 digits and 1 symbol (any non-alphanumeric character).

    Examples
    --------
    >>> password_weaknesses("Str0ng!!Pw")
    ['at least 2 digits']
    >>> password_weaknesses("Str0ng!!Pw9")
    []
    """
    rules = [
        (len(password) >= MIN_PASSWORD_LENGTH, f"at least {MIN_PASSWORD_LENGTH} characters"),
        (sum(c.islower() for c in password) >= MIN_LOWERCASE, "at least 2 lowercase letters"),
        (sum(c.isupper() for c in password) >= MIN_UPPERCASE, "at least 1 uppercase letter"),
        (sum(c.isdigit() for c in password) >= MIN_DIGITS, "at least 2 digits"),
        (sum(not c.isalnum() for c in password) >= MIN_SYMBOLS, "at least 1 symbol"),
    ]
    return [message for ok, message in rules if not ok]


def check_email_format(value: str) -> str:
    """
    Reject malformed addresses but return the input unchanged.

    Stored emails are matched exactly, so the normalized form produced by
    ``email_validator`` (lowercased domain, IDNA) is discarded.
    """
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError as e:
        mssg = f"value is not a valid email address: {e}"
        raise ValueError(mssg) from e
    return value


EmailAddress = Annotated[str, AfterValidator(check_email_format)]


class SignUp(BaseModel):
    """Signup request body."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(
        ...,
        min_length=MIN_NAME_LENGTH,
        max_length=MAX_NAME_LENGTH,
        description="A valid name",
        examples=["John"],
    )
    email: EmailAddress = Field(
        ..., description="A valid email address", examples=["test@test.com"]
    )
    password: SecretStr = Field(
        ...,
        description="At least 2 lowercase, 1 uppercase, 2 digits and 1 symbol",
        examples=["Password123!"],
    )

    @field_validator("password")
    @classmethod
    def check_strength(cls, value: SecretStr) -> SecretStr:
        if problems := password_weaknesses(value.get_secret_value()):
            mssg = f"Password is weak: needs {', '.join(problems)}"
            raise ValueError(mssg)
        return value


class SignIn(BaseModel):
    """Signin request body. Strength is not re-checked here."""

    model_config = ConfigDict(frozen=True)

    email: EmailAddress = Field(
        ..., description="A valid email address", examples=["test@test.com"]
    )
    password: SecretStr = Field(..., min_length=1, description="Account password")


class Token(BaseModel):
    """Token schema for JWT access tokens."""

    access_token: str
    token_type: str = "bearer"


class TokenData(BaseModel):
    """Verified token payload."""

    email: str
    sub: str
