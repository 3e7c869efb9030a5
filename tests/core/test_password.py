"""Tests for password hashing and verification utilities."""

from app.core.password import DUMMY_HASH, get_password_hash, verify_password

TEST_PASSWORD = "Password123!"
TEST_UNICODE_PASSWORD = "Zażółć123"


class TestPasswordHashing:
    """Test password hashing functions using Argon2 via pwdlib."""

    def test_hash_is_salted(self):
        hash1 = get_password_hash(TEST_PASSWORD)
        hash2 = get_password_hash(TEST_PASSWORD)

        assert hash1 != hash2
        assert hash1.startswith("$argon2")

    def test_verify_password(self):
        hashed = get_password_hash(TEST_PASSWORD)

        assert verify_password(TEST_PASSWORD, hashed) is True
        assert verify_password("WrongPassword123", hashed) is False
        assert verify_password("", hashed) is False

    def test_unicode_password(self):
        hashed = get_password_hash(TEST_UNICODE_PASSWORD)
        assert verify_password(TEST_UNICODE_PASSWORD, hashed) is True

    def test_dummy_hash_matches_nothing_real(self):
        assert verify_password(TEST_PASSWORD, DUMMY_HASH) is False
