"""Tests for the MongoDB user directory, run against mongomock.

These tests verify:
- Account creation with normalized, unique emails
- Lookup, update and delete by id
- Paged name/type search and per-type statistics
- Driver failures surfaced as DirectoryError
"""

import mongomock
import pytest
from pymongo.errors import ServerSelectionTimeoutError

from afrisight.errors import ConflictError, DirectoryError, ValidationError
from afrisight.users import UserDirectory, validate_creator_type


@pytest.fixture
def directory():
    directory = UserDirectory(mongomock.MongoClient()["afrisight"]["users"])
    directory.ensure_indexes()
    return directory


def _add(directory, email, name, creator_type="Musician", **extra):
    return directory.create(email, "hashed", name, creator_type, **extra)


def test_create_and_find(directory):
    """Created accounts are found by email (any case) and by id."""
    user = _add(directory, "Ada@Example.com ", "Ada", bio="Producer from Lagos", age=27)

    assert user.email == "ada@example.com"
    assert user.bio == "Producer from Lagos"
    assert user.age == 27

    by_email = directory.find_by_email("ADA@example.com")
    assert by_email.id == user.id
    assert by_email.password_hash == "hashed"
    assert directory.find_by_id(user.id).name == "Ada"


def test_optional_fields_not_stored_when_absent(directory):
    """bio and age stay unset unless given."""
    user = _add(directory, "tobi@example.com", "Tobi")

    doc = directory.collection.find_one({"email": "tobi@example.com"})
    assert "bio" not in doc
    assert "age" not in doc
    assert user.bio is None


def test_password_hash_never_serialized(directory):
    """The hash is excluded from model dumps."""
    user = _add(directory, "ada@example.com", "Ada")
    assert "password_hash" not in user.model_dump()


def test_duplicate_email_conflicts(directory):
    """The unique index turns a second signup into ConflictError."""
    _add(directory, "ada@example.com", "Ada")

    with pytest.raises(ConflictError) as exc_info:
        _add(directory, "ADA@example.com", "Impostor")

    assert exc_info.value.message == "Email already exists"
    assert exc_info.value.status_code == 400


def test_find_by_malformed_id(directory):
    """Ids that are not ObjectIds are treated as absent."""
    assert directory.find_by_id("not-an-id") is None
    assert directory.update("not-an-id", name="X") is None
    assert directory.delete("not-an-id") is False


def test_update_fields(directory):
    """Updates return the new record and normalize emails."""
    user = _add(directory, "ada@example.com", "Ada")

    updated = directory.update(user.id, name="Ada L.", email="ADA.L@Example.com", age=30)

    assert updated.name == "Ada L."
    assert updated.email == "ada.l@example.com"
    assert updated.age == 30
    assert directory.find_by_email("ada@example.com") is None


def test_update_password_hash(directory):
    user = _add(directory, "ada@example.com", "Ada")
    directory.update(user.id, password_hash="new-hash")
    assert directory.find_by_id(user.id).password_hash == "new-hash"


def test_update_email_to_taken_address(directory):
    """Moving onto another account's email conflicts."""
    _add(directory, "ada@example.com", "Ada")
    other = _add(directory, "tobi@example.com", "Tobi")

    with pytest.raises(ConflictError):
        directory.update(other.id, email="ada@example.com")


def test_update_unknown_field(directory):
    user = _add(directory, "ada@example.com", "Ada")
    with pytest.raises(ValueError):
        directory.update(user.id, role="admin")


def test_update_without_changes_returns_current(directory):
    user = _add(directory, "ada@example.com", "Ada")
    assert directory.update(user.id).name == "Ada"


def test_delete(directory):
    """Deleting removes the account once."""
    user = _add(directory, "ada@example.com", "Ada")

    assert directory.delete(user.id) is True
    assert directory.find_by_id(user.id) is None
    assert directory.delete(user.id) is False


def test_search_filters_sorts_and_pages(directory):
    """Search sorts by name and reports the total before paging."""
    _add(directory, "c@example.com", "Chidi", "Musician")
    _add(directory, "a@example.com", "Amaka", "Musician")
    _add(directory, "b@example.com", "Bayo", "Producer")
    _add(directory, "d@example.com", "Dami", "Musician")

    records, total = directory.search(creator_type="Musician", limit=2)
    assert total == 3
    assert [r.name for r in records] == ["Amaka", "Chidi"]

    records, total = directory.search(creator_type="Musician", page=2, limit=2)
    assert [r.name for r in records] == ["Dami"]

    records, total = directory.search(name="AY")
    assert total == 1
    assert records[0].name == "Bayo"


def test_search_name_is_literal(directory):
    """Regex metacharacters in the name are matched literally."""
    _add(directory, "a@example.com", "A.B. Sound")
    _add(directory, "b@example.com", "AxB Sound")

    records, total = directory.search(name="A.B")

    assert total == 1
    assert records[0].name == "A.B. Sound"


def test_creator_stats(directory):
    """Counts per type, most common first, with rounded percentages."""
    for i in range(3):
        _add(directory, f"m{i}@example.com", f"Musician {i}", "Musician")
    _add(directory, "p@example.com", "Producer", "Producer")

    total, stats = directory.creator_stats()

    assert total == 4
    assert [(s.creator_type, s.count, s.percentage) for s in stats] == [
        ("Musician", 3, 75),
        ("Producer", 1, 25),
    ]


def test_creator_stats_empty(directory):
    assert directory.creator_stats() == (0, [])


def test_ping(directory):
    """ping succeeds against a reachable server."""
    directory.ping()


class UnreachableCollection:
    def find_one(self, *args, **kwargs):
        raise ServerSelectionTimeoutError("localhost:27017: [Errno 111] Connection refused")


def test_driver_errors_become_directory_errors():
    """Store failures surface as DirectoryError with the driver message."""
    directory = UserDirectory(UnreachableCollection())

    with pytest.raises(DirectoryError) as exc_info:
        directory.find_by_email("ada@example.com")

    assert exc_info.value.message == "User directory unavailable"
    assert "Connection refused" in exc_info.value.details


@pytest.mark.parametrize("creator_type", ["Content Creator", "Musician", "Producer", "Event Planner", "Other"])
def test_validate_creator_type_accepts_known(creator_type):
    validate_creator_type(creator_type)


def test_validate_creator_type_rejects_unknown():
    with pytest.raises(ValidationError) as exc_info:
        validate_creator_type("DJ")
    assert exc_info.value.message == (
        "Invalid creatorType. Must be one of: Content Creator, Musician, Producer, Event Planner, Other"
    )
