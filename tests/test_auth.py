"""Registration and login tests."""

from unittest.mock import patch

from expense_tracker.models.user import User


def test_register_user(client, db):
    """Test user registration."""
    response = client.post(
        "/register",
        json={"username": "newuser", "email": "newuser@example.com", "password": "password123"},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["userId"] > 0

    stored = db.query(User).filter(User.id == data["userId"]).one()
    assert stored.username == "newuser"
    assert stored.password_hash != "password123"


def test_register_duplicate_username(client, db, user):
    """Test registration with a taken username fails even with a new email."""
    response = client.post(
        "/register",
        json={"username": user["username"], "email": "fresh@example.com", "password": "password123"},
    )
    assert response.status_code == 400
    assert response.json()["message"] == "Username or email already exists"
    assert db.query(User).count() == 1


def test_register_duplicate_email(client, db, user):
    """Test registration with a taken email fails even with a new username."""
    response = client.post(
        "/register",
        json={"username": "freshname", "email": user["email"], "password": "password123"},
    )
    assert response.status_code == 400
    assert response.json()["success"] is False
    assert db.query(User).count() == 1


def test_register_duplicate_caught_by_unique_constraint(client, db, user):
    """Test a duplicate that slips past the pre-check is still rejected."""
    with patch("expense_tracker.api.auth.get_user_by_username_or_email", return_value=None):
        response = client.post(
            "/register",
            json={"username": user["username"], "email": "race@example.com", "password": "password123"},
        )
    assert response.status_code == 400
    assert response.json()["message"] == "Username or email already exists"
    assert db.query(User).count() == 1


def test_register_missing_fields(client):
    """Test registration requires username, email and password."""
    response = client.post("/register", json={"username": "someone", "password": "password123"})
    assert response.status_code == 400
    assert response.json()["message"] == "Username, email and password are required"


def test_register_short_password(client, db):
    """Test registration rejects passwords under six characters."""
    response = client.post(
        "/register",
        json={"username": "shorty", "email": "shorty@example.com", "password": "12345"},
    )
    assert response.status_code == 400
    assert "at least 6 characters" in response.json()["message"]
    assert db.query(User).count() == 0


def test_login(client, user):
    """Test user login returns the registered id."""
    response = client.post(
        "/login", json={"username": user["username"], "password": user["password"]}
    )
    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["user"] == {
        "id": user.user_id,
        "username": user["username"],
        "email": user["email"],
    }
    assert "password_hash" not in data["user"]


def test_login_wrong_password_and_unknown_user_look_the_same(client, user):
    """Test bad credentials give the same answer whichever field is wrong."""
    wrong_password = client.post(
        "/login", json={"username": user["username"], "password": "wrongpass"}
    )
    unknown_user = client.post("/login", json={"username": "nobody", "password": user["password"]})

    assert wrong_password.status_code == 401
    assert unknown_user.status_code == 401
    assert wrong_password.json() == unknown_user.json()
    assert wrong_password.json()["message"] == "Invalid username or password"


def test_login_missing_fields(client):
    """Test login requires username and password."""
    response = client.post("/login", json={"username": "testuser"})
    assert response.status_code == 400
    assert response.json()["message"] == "Username and password are required"
