"""Public signup and login endpoints."""

from fastapi import APIRouter, Depends

from afrisight.auth import CredentialService
from afrisight.errors import AuthenticationError, ConflictError
from afrisight.users import UserDirectory, validate_creator_type
from afrisight.utils.logger import LoggerManager
from app.api.dependencies import get_credentials, get_user_directory
from app.api.models import LoginRequest, SignupRequest, TokenResponse

router = APIRouter(prefix="/auth", tags=["auth"])

logger = LoggerManager.get_logger("api.auth")


@router.post("/signup", response_model=TokenResponse)
def signup(
    request: SignupRequest,
    directory: UserDirectory = Depends(get_user_directory),
    credentials: CredentialService = Depends(get_credentials),
):
    """Register an account and return a bearer token for it."""
    validate_creator_type(request.creator_type)
    if directory.find_by_email(request.email) is not None:
        raise ConflictError("Email already exists")

    user = directory.create(
        email=request.email,
        password_hash=credentials.hash_password(request.password),
        name=request.name,
        creator_type=request.creator_type,
    )
    return TokenResponse(token=credentials.issue_token(user))


@router.post("/login", response_model=TokenResponse)
def login(
    request: LoginRequest,
    directory: UserDirectory = Depends(get_user_directory),
    credentials: CredentialService = Depends(get_credentials),
):
    """Exchange email and password for a bearer token.

    Unknown email and wrong password produce the same error.
    """
    user = directory.find_by_email(request.email)
    if user is None or not credentials.verify_password(request.password, user.password_hash):
        logger.info("Failed login attempt")
        raise AuthenticationError("Invalid credentials")
    return TokenResponse(token=credentials.issue_token(user))
