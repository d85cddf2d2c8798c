from afrisight.users.directory import UserDirectory
from afrisight.users.models import CREATOR_TYPES, UserRecord, validate_creator_type

__all__ = ["UserDirectory", "UserRecord", "CREATOR_TYPES", "validate_creator_type"]
