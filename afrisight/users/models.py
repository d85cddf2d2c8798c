"""User account record as stored in the ``users`` collection."""

from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, Field

from afrisight.errors import ValidationError

CREATOR_TYPES = ("Content Creator", "Musician", "Producer", "Event Planner", "Other")

CreatorType = Literal["Content Creator", "Musician", "Producer", "Event Planner", "Other"]

MAX_BIO_LENGTH = 500
MIN_AGE = 13
MAX_AGE = 120


class UserRecord(BaseModel):
    """Account record.

    Attributes:
        id: Hex string of the document ObjectId
        email: Unique, lower-cased login email
        password_hash: bcrypt hash; never serialized
        name: Display name
        creator_type: One of ``CREATOR_TYPES``
        bio: Optional profile text
        age: Optional age in years
    """

    id: str
    email: str
    password_hash: str = Field(repr=False, exclude=True)
    name: str
    creator_type: str
    bio: Optional[str] = None
    age: Optional[int] = None

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "UserRecord":
        return cls(
            id=str(doc["_id"]),
            email=doc["email"],
            password_hash=doc.get("password", ""),
            name=doc["name"],
            creator_type=doc["creatorType"],
            bio=doc.get("bio"),
            age=doc.get("age"),
        )


def normalize_email(email: str) -> str:
    return email.strip().lower()


def validate_creator_type(creator_type: str) -> None:
    if creator_type not in CREATOR_TYPES:
        raise ValidationError(
            f"Invalid creatorType. Must be one of: {', '.join(CREATOR_TYPES)}"
        )
