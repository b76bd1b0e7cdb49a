"""
Unit tests for ibge_api/services/password_hasher.py
"""

from ibge_api.services.password_hasher import PasswordHasher


class TestPasswordHasher:
    """Tests for bcrypt hashing."""

    def test_hash_is_not_clear_text(self, hasher):
        hashed = hasher.hash("secret")

        assert hashed != "secret"
        assert hashed.startswith("$2")

    def test_verify_accepts_correct_password(self, hasher):
        assert hasher.verify("secret", hasher.hash("secret"))

    def test_verify_rejects_wrong_password(self, hasher):
        assert not hasher.verify("Secret", hasher.hash("secret"))

    def test_hashes_are_salted(self, hasher):
        assert hasher.hash("secret") != hasher.hash("secret")

    def test_malformed_hash_does_not_verify(self):
        assert not PasswordHasher(rounds=4).verify("secret", "not-a-bcrypt-hash")
