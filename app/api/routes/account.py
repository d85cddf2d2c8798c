"""Account settings endpoints under /settings for the calling identity."""

import re

from fastapi import APIRouter, Depends

from afrisight.auth import CredentialService, Identity
from afrisight.errors import ConflictError, NotFoundError, ValidationError
from afrisight.users import UserDirectory, UserRecord, validate_creator_type
from afrisight.users.models import MAX_AGE, MAX_BIO_LENGTH, MIN_AGE
from afrisight.utils.logger import LoggerManager
from app.api.dependencies import get_credentials, get_user_directory, require_identity
from app.api.errors import upstream_failure
from app.api.models import (
    AccountDeleteRequest,
    CreatorOut,
    MessageResponse,
    PasswordChangeRequest,
    ProfileResponse,
    ProfileUpdateRequest,
    ProfileUpdateResponse,
)

router = APIRouter(prefix="/settings", tags=["settings"])

logger = LoggerManager.get_logger("api.settings")

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MIN_PASSWORD_LENGTH = 6
DELETE_CONFIRMATION = "DELETE_MY_ACCOUNT"

# request attribute -> response field name
_UPDATABLE = {
    "name": "name",
    "email": "email",
    "creator_type": "creatorType",
    "bio": "bio",
    "age": "age",
}


def _current_user(directory: UserDirectory, identity: Identity) -> UserRecord:
    user = directory.find_by_id(identity.user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


@router.get("/profile", response_model=ProfileResponse)
def get_profile(
    identity: Identity = Depends(require_identity),
    directory: UserDirectory = Depends(get_user_directory),
):
    with upstream_failure("Failed to get profile information"):
        user = _current_user(directory, identity)
    return ProfileResponse(profile=CreatorOut(**user.model_dump()))


@router.put("/profile", response_model=ProfileUpdateResponse)
def update_profile(
    payload: ProfileUpdateRequest,
    identity: Identity = Depends(require_identity),
    directory: UserDirectory = Depends(get_user_directory),
):
    """Update any of name, email, creatorType, bio and age.

    Raises:
        ValidationError: If no field is given or a value is invalid
        ConflictError: If the new email belongs to another account
        NotFoundError: If the caller's account no longer exists
    """
    changes = {
        attr: getattr(payload, attr)
        for attr in _UPDATABLE
        if getattr(payload, attr) not in (None, "")
    }
    if not changes:
        raise ValidationError(
            "At least one field (name, email, creatorType, bio, age) must be provided"
        )

    if "creator_type" in changes:
        validate_creator_type(changes["creator_type"])
    if "email" in changes and not EMAIL_PATTERN.match(changes["email"]):
        raise ValidationError("Invalid email format")
    if "bio" in changes and len(changes["bio"]) > MAX_BIO_LENGTH:
        raise ValidationError(f"Bio must be at most {MAX_BIO_LENGTH} characters")
    if "age" in changes and not MIN_AGE <= changes["age"] <= MAX_AGE:
        raise ValidationError(f"Age must be between {MIN_AGE} and {MAX_AGE}")
    if "name" in changes:
        changes["name"] = changes["name"].strip()

    with upstream_failure("Failed to update profile"):
        user = _current_user(directory, identity)
        if "email" in changes and changes["email"].strip().lower() != user.email:
            existing = directory.find_by_email(changes["email"])
            if existing is not None and existing.id != user.id:
                raise ConflictError("Email already exists")
        updated = directory.update(user.id, **changes)

    if updated is None:
        raise NotFoundError("User not found")
    return ProfileUpdateResponse(
        message="Profile updated successfully",
        profile=CreatorOut(**updated.model_dump()),
        updated_fields=[_UPDATABLE[attr] for attr in changes],
    )


@router.put("/password", response_model=MessageResponse)
def change_password(
    payload: PasswordChangeRequest,
    identity: Identity = Depends(require_identity),
    directory: UserDirectory = Depends(get_user_directory),
    credentials: CredentialService = Depends(get_credentials),
):
    if not payload.current_password or not payload.new_password:
        raise ValidationError("Both currentPassword and newPassword are required")
    if len(payload.new_password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"New password must be at least {MIN_PASSWORD_LENGTH} characters long"
        )

    with upstream_failure("Failed to change password"):
        user = _current_user(directory, identity)
        if not credentials.verify_password(payload.current_password, user.password_hash):
            raise ValidationError("Current password is incorrect")
        if credentials.verify_password(payload.new_password, user.password_hash):
            raise ValidationError("New password must be different from current password")
        directory.update(user.id, password_hash=credentials.hash_password(payload.new_password))

    logger.info("Password changed", extra={"extra_data": {"user_id": user.id}})
    return MessageResponse(message="Password changed successfully")


@router.delete("/account", response_model=MessageResponse)
def delete_account(
    payload: AccountDeleteRequest,
    identity: Identity = Depends(require_identity),
    directory: UserDirectory = Depends(get_user_directory),
    credentials: CredentialService = Depends(get_credentials),
):
    """Delete the caller's account after password and phrase confirmation.

    Tokens already issued stay valid until they expire.
    """
    if not payload.password or not payload.confirm_deletion:
        raise ValidationError("Password and confirmDeletion are required")
    if payload.confirm_deletion != DELETE_CONFIRMATION:
        raise ValidationError(f'confirmDeletion must be exactly "{DELETE_CONFIRMATION}"')

    with upstream_failure("Failed to delete account"):
        user = _current_user(directory, identity)
        if not credentials.verify_password(payload.password, user.password_hash):
            raise ValidationError("Password is incorrect")
        directory.delete(user.id)

    return MessageResponse(message="Account deleted successfully")
