"""Integration tests for profile, password and account deletion under /settings."""

import pytest

PASSWORD = "s3cret-pass"


def test_get_profile(client, auth_headers):
    response = client.get("/settings/profile", headers=auth_headers)

    assert response.status_code == 200
    profile = response.json()["profile"]
    assert profile["email"] == "ada@example.com"
    assert profile["name"] == "Ada"
    assert profile["creatorType"] == "Musician"
    assert profile["bio"] is None
    assert "password" not in profile


def test_update_profile(client, auth_headers):
    response = client.put(
        "/settings/profile",
        json={"name": "  Ada L.  ", "bio": "Afro-fusion singer", "age": 29},
        headers=auth_headers,
    )

    assert response.status_code == 200
    data = response.json()
    assert data["message"] == "Profile updated successfully"
    assert data["updatedFields"] == ["name", "bio", "age"]
    assert data["profile"]["name"] == "Ada L."
    assert data["profile"]["age"] == 29

    profile = client.get("/settings/profile", headers=auth_headers).json()["profile"]
    assert profile["bio"] == "Afro-fusion singer"


def test_update_profile_email_normalized(client, auth_headers):
    data = client.put(
        "/settings/profile", json={"email": "Ada.New@Example.com"}, headers=auth_headers
    ).json()

    assert data["profile"]["email"] == "ada.new@example.com"
    login = client.post("/auth/login", json={"email": "ada.new@example.com", "password": PASSWORD})
    assert login.status_code == 200


def test_update_profile_email_taken(client, signup):
    headers = signup()
    signup(email="eve@example.com", name="Eve")

    response = client.put("/settings/profile", json={"email": "EVE@example.com"}, headers=headers)

    assert response.status_code == 400
    assert response.json()["error"] == "Email already exists"


def test_update_profile_same_email_allowed(client, auth_headers):
    response = client.put("/settings/profile", json={"email": "ada@example.com"}, headers=auth_headers)
    assert response.status_code == 200


@pytest.mark.parametrize(
    "body, error",
    [
        ({}, "At least one field (name, email, creatorType, bio, age) must be provided"),
        ({"name": ""}, "At least one field (name, email, creatorType, bio, age) must be provided"),
        ({"email": "not-an-email"}, "Invalid email format"),
        ({"bio": "x" * 501}, "Bio must be at most 500 characters"),
        ({"age": 12}, "Age must be between 13 and 120"),
        ({"age": 121}, "Age must be between 13 and 120"),
    ],
)
def test_update_profile_rejected(client, auth_headers, body, error):
    response = client.put("/settings/profile", json=body, headers=auth_headers)

    assert response.status_code == 400
    assert response.json()["error"] == error


def test_update_profile_invalid_creator_type(client, auth_headers):
    response = client.put("/settings/profile", json={"creatorType": "DJ"}, headers=auth_headers)

    assert response.status_code == 400
    assert response.json()["error"].startswith("Invalid creatorType")


def test_change_password(client, auth_headers):
    response = client.put(
        "/settings/password",
        json={"currentPassword": PASSWORD, "newPassword": "brand-new-pass"},
        headers=auth_headers,
    )

    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "Password changed successfully"}

    old = client.post("/auth/login", json={"email": "ada@example.com", "password": PASSWORD})
    new = client.post("/auth/login", json={"email": "ada@example.com", "password": "brand-new-pass"})
    assert old.status_code == 401
    assert new.status_code == 200


@pytest.mark.parametrize(
    "body, error",
    [
        ({"currentPassword": PASSWORD}, "Both currentPassword and newPassword are required"),
        ({"currentPassword": PASSWORD, "newPassword": "abc"}, "New password must be at least 6 characters long"),
        ({"currentPassword": "wrong-pass", "newPassword": "brand-new-pass"}, "Current password is incorrect"),
        ({"currentPassword": PASSWORD, "newPassword": PASSWORD}, "New password must be different from current password"),
    ],
)
def test_change_password_rejected(client, auth_headers, body, error):
    response = client.put("/settings/password", json=body, headers=auth_headers)

    assert response.status_code == 400
    assert response.json()["error"] == error


def test_delete_account(client, auth_headers, user_directory):
    """Deletion removes the account; the still-valid token then finds no user."""
    response = client.request(
        "DELETE",
        "/settings/account",
        json={"password": PASSWORD, "confirmDeletion": "DELETE_MY_ACCOUNT"},
        headers=auth_headers,
    )

    assert response.status_code == 200
    assert response.json()["message"] == "Account deleted successfully"
    assert user_directory.find_by_email("ada@example.com") is None

    profile = client.get("/settings/profile", headers=auth_headers)
    assert profile.status_code == 404
    assert profile.json()["error"] == "User not found"


@pytest.mark.parametrize(
    "body, error",
    [
        ({"password": PASSWORD}, "Password and confirmDeletion are required"),
        ({"password": PASSWORD, "confirmDeletion": "delete"}, 'confirmDeletion must be exactly "DELETE_MY_ACCOUNT"'),
        ({"password": "wrong-pass", "confirmDeletion": "DELETE_MY_ACCOUNT"}, "Password is incorrect"),
    ],
)
def test_delete_account_rejected(client, auth_headers, user_directory, body, error):
    response = client.request("DELETE", "/settings/account", json=body, headers=auth_headers)

    assert response.status_code == 400
    assert response.json()["error"] == error
    assert user_directory.find_by_email("ada@example.com") is not None
