"""Authentication routes for signup, signin and the current identity."""

from fastapi import APIRouter, Request
from fastapi.responses import ORJSONResponse
from starlette.responses import Response
from starlette.status import HTTP_201_CREATED

from blog_api.dependencies import AuthServiceDep, BlogServiceDep, CurrentUserDep
from blog_api.managers import SIGNIN_LIMIT, SIGNUP_LIMIT, limiter
from blog_api.schemas.auth import SignIn, SignUp, Token
from blog_api.schemas.user import UserResponse

router = APIRouter(prefix="/auth", tags=["🔐 Auth"])

TOKEN_EXAMPLE = {
    "access_token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
    "token_type": "bearer",
}


@router.post(
    "/signup",
    response_class=ORJSONResponse,
    response_model=Token,
    status_code=HTTP_201_CREATED,
    summary="Sign up",
    description="Register a new user and receive an access token.",
    responses={
        201: {"content": {"application/json": {"example": TOKEN_EXAMPLE}}},
        409: {
            "description": "Conflict",
            "content": {"application/json": {"example": {"detail": "Email already in use"}}},
        },
        429: {
            "description": "Rate limit exceeded",
            "content": {"application/json": {"example": {"detail": "Rate limit exceeded"}}},
        },
    },
    operation_id="auth_signup",
)
@limiter.limit(SIGNUP_LIMIT)
async def signup(
    request: Request,
    response: Response,
    body: SignUp,
    auth_service: AuthServiceDep,
) -> Token:
    """
    Register a new user.

    Parameters
    ----------
    request : Request
        Current request context.
    response : Response
        Response object for middleware/decorators.
    body : SignUp
        Name, email and password.
    auth_service : AuthService
        Authentication service dependency.

    Returns
    -------
    Token
        Access token for the new user.

    Raises
    ------
    DuplicateIdentityError
        If the email is already registered.
    """
    return await auth_service.sign_up(body)


@router.post(
    "/signin",
    response_class=ORJSONResponse,
    response_model=Token,
    summary="Sign in",
    description="Authenticate with email and password to obtain an access token.",
    responses={
        200: {"content": {"application/json": {"example": TOKEN_EXAMPLE}}},
        400: {
            "description": "Unknown email",
            "content": {"application/json": {"example": {"detail": "Invalid credentials"}}},
        },
        401: {
            "description": "Wrong password",
            "content": {"application/json": {"example": {"detail": "Unauthorized"}}},
        },
        429: {
            "description": "Rate limit exceeded",
            "content": {"application/json": {"example": {"detail": "Rate limit exceeded"}}},
        },
    },
    operation_id="auth_signin",
)
@limiter.limit(SIGNIN_LIMIT)
async def signin(
    request: Request,
    response: Response,
    body: SignIn,
    auth_service: AuthServiceDep,
) -> Token:
    """
    Sign in with email and password.

    Raises
    ------
    InvalidCredentialsError
        If no user has this email.
    UnauthorizedError
        If the password is wrong.
    """
    return await auth_service.sign_in(body.email, body.password.get_secret_value())


@router.get(
    "/whoami",
    response_class=ORJSONResponse,
    response_model=UserResponse,
    summary="Current user",
    description="Return the authenticated user with the blogs they own.",
    responses={
        401: {
            "description": "Unauthorized",
            "content": {"application/json": {"example": {"detail": "Unauthorized"}}},
        },
    },
    operation_id="auth_whoami",
)
async def whoami(user: CurrentUserDep, blog_service: BlogServiceDep) -> UserResponse:
    return UserResponse.from_db(user, await blog_service.owned_blogs(user))
