"""User directory backed by a MongoDB ``users`` collection.

Documents look like::

    {"_id": ObjectId, "email": str, "password": str, "name": str,
     "creatorType": str, "bio": str?, "age": int?}

Emails are stored lower-cased and carry a unique index. Any driver failure
is raised as ``DirectoryError``; a duplicate email as ``ConflictError``.
"""

import math
import re
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional, Tuple

from bson import ObjectId
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from pymongo import ASCENDING, MongoClient, ReturnDocument
from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError, PyMongoError

from afrisight.errors import ConflictError, DirectoryError
from afrisight.users.models import UserRecord, normalize_email
from afrisight.utils.logger import LoggerManager

USERS_COLLECTION = "users"

# record attribute -> document key
_DOCUMENT_KEYS = {
    "email": "email",
    "password_hash": "password",
    "name": "name",
    "creator_type": "creatorType",
    "bio": "bio",
    "age": "age",
}


class CreatorTypeCount(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    creator_type: Optional[str]
    count: int
    percentage: int


def _object_id(user_id: str) -> Optional[ObjectId]:
    return ObjectId(user_id) if ObjectId.is_valid(user_id) else None


class UserDirectory:
    """CRUD, search and statistics over user accounts.

    Attributes:
        collection: pymongo collection holding user documents
    """

    def __init__(self, collection: Collection):
        self.collection = collection
        self.logger = LoggerManager.get_logger("user_directory")

    @classmethod
    def connect(cls, uri: str, database: str) -> "UserDirectory":
        """Open a client for ``uri`` and bind to ``database.users``."""
        client = MongoClient(uri)
        return cls(client[database][USERS_COLLECTION])

    @contextmanager
    def _store_errors(self, operation: str) -> Iterator[None]:
        try:
            yield
        except DuplicateKeyError as e:
            self.logger.warning(f"Duplicate key on {operation}")
            raise ConflictError("Email already exists", original_error=e) from e
        except PyMongoError as e:
            self.logger.error(
                f"User directory {operation} failed",
                extra={"extra_data": {"error": str(e)}},
            )
            raise DirectoryError.from_store_error(e) from e

    def ping(self) -> None:
        """Round-trip to the server.

        Raises:
            DirectoryError: If the server is unreachable
        """
        with self._store_errors("ping"):
            self.collection.database.client.admin.command("ping")

    def ensure_indexes(self) -> None:
        with self._store_errors("ensure_indexes"):
            self.collection.create_index([("email", ASCENDING)], unique=True)

    def create(
        self,
        email: str,
        password_hash: str,
        name: str,
        creator_type: str,
        bio: Optional[str] = None,
        age: Optional[int] = None,
    ) -> UserRecord:
        """Insert a new account.

        Raises:
            ConflictError: If the email is already registered
            DirectoryError: On any other store failure
        """
        doc: Dict[str, Any] = {
            "email": normalize_email(email),
            "password": password_hash,
            "name": name,
            "creatorType": creator_type,
        }
        if bio is not None:
            doc["bio"] = bio
        if age is not None:
            doc["age"] = age

        with self._store_errors("create"):
            result = self.collection.insert_one(doc)
        doc["_id"] = result.inserted_id

        self.logger.info(
            "Created user",
            extra={"extra_data": {"user_id": str(result.inserted_id), "creator_type": creator_type}},
        )
        return UserRecord.from_document(doc)

    def find_by_email(self, email: str) -> Optional[UserRecord]:
        with self._store_errors("find_by_email"):
            doc = self.collection.find_one({"email": normalize_email(email)})
        return UserRecord.from_document(doc) if doc else None

    def find_by_id(self, user_id: str) -> Optional[UserRecord]:
        """Look up an account; a malformed id is treated as absent."""
        oid = _object_id(user_id)
        if oid is None:
            return None
        with self._store_errors("find_by_id"):
            doc = self.collection.find_one({"_id": oid})
        return UserRecord.from_document(doc) if doc else None

    def update(self, user_id: str, **fields: Any) -> Optional[UserRecord]:
        """Set the given record attributes and return the updated record.

        Args:
            user_id: Account id
            **fields: Any of email, password_hash, name, creator_type, bio, age

        Returns:
            Updated record, or None if the account does not exist

        Raises:
            ConflictError: If the new email belongs to another account
        """
        oid = _object_id(user_id)
        if oid is None:
            return None

        changes = {}
        for attr, value in fields.items():
            if attr not in _DOCUMENT_KEYS:
                raise ValueError(f"Unknown user field: {attr}")
            if attr == "email":
                value = normalize_email(value)
            changes[_DOCUMENT_KEYS[attr]] = value
        if not changes:
            return self.find_by_id(user_id)

        with self._store_errors("update"):
            doc = self.collection.find_one_and_update(
                {"_id": oid},
                {"$set": changes},
                return_document=ReturnDocument.AFTER,
            )
        if doc is None:
            return None

        self.logger.info(
            "Updated user",
            extra={
                "extra_data": {
                    "user_id": user_id,
                    "fields": sorted(k for k in changes if k != "password"),
                }
            },
        )
        return UserRecord.from_document(doc)

    def delete(self, user_id: str) -> bool:
        oid = _object_id(user_id)
        if oid is None:
            return False
        with self._store_errors("delete"):
            result = self.collection.delete_one({"_id": oid})
        if result.deleted_count:
            self.logger.info("Deleted user", extra={"extra_data": {"user_id": user_id}})
        return bool(result.deleted_count)

    def search(
        self,
        creator_type: Optional[str] = None,
        name: Optional[str] = None,
        page: int = 1,
        limit: int = 50,
    ) -> Tuple[List[UserRecord], int]:
        """Page through accounts sorted by name.

        Args:
            creator_type: Exact creator type filter
            name: Case-insensitive substring of the name (matched literally)
            page: 1-based page number
            limit: Page size

        Returns:
            (records on this page, total matching count)
        """
        query: Dict[str, Any] = {}
        if creator_type:
            query["creatorType"] = creator_type
        if name:
            query["name"] = {"$regex": re.escape(name), "$options": "i"}

        skip = (max(page, 1) - 1) * limit
        with self._store_errors("search"):
            total = self.collection.count_documents(query)
            cursor = (
                self.collection.find(query)
                .sort("name", ASCENDING)
                .skip(skip)
                .limit(limit)
            )
            records = [UserRecord.from_document(doc) for doc in cursor]
        return records, total

    def creator_stats(self) -> Tuple[int, List[CreatorTypeCount]]:
        """Account counts per creator type, most common first.

        Returns:
            (total accounts, per-type counts with rounded percentages)
        """
        pipeline = [
            {"$group": {"_id": "$creatorType", "count": {"$sum": 1}}},
            {"$sort": {"count": -1}},
        ]
        with self._store_errors("creator_stats"):
            groups = list(self.collection.aggregate(pipeline))
            total = self.collection.count_documents({})

        stats = [
            CreatorTypeCount(
                creator_type=group["_id"],
                count=group["count"],
                percentage=math.floor(group["count"] / total * 100 + 0.5) if total else 0,
            )
            for group in groups
        ]
        return total, stats
