"""Password hashing tests."""

from expense_tracker.services.auth import BCRYPT_ROUNDS, get_password_hash, verify_password


def test_hash_verifies_against_plaintext():
    """Test a hash verifies for the hashed password only."""
    hashed = get_password_hash("correct horse")

    assert verify_password("correct horse", hashed) is True
    assert verify_password("correct horsE", hashed) is False
    assert verify_password("", hashed) is False


def test_hash_is_salted_bcrypt():
    """Test hashes use bcrypt at the configured cost and differ per call."""
    first = get_password_hash("secret1")
    second = get_password_hash("secret1")

    assert first != second
    assert first.startswith("$2b$")
    assert f"${BCRYPT_ROUNDS:02d}$" in first
    assert "secret1" not in first


def test_malformed_hash_does_not_verify():
    """Test a corrupt stored hash is treated as a failed login."""
    assert verify_password("anything", "not-a-bcrypt-hash") is False
