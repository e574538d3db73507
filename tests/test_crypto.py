"""Tests for password and token hashing."""

from music_ranking.crypto import generate_token_secret, hash_password, hash_token, verify_password


class TestPasswords:
    def test_roundtrip(self):
        hashed = hash_password("password123")
        assert hashed.startswith("scrypt$")
        assert verify_password("password123", hashed) is True

    def test_wrong_password(self):
        assert verify_password("password124", hash_password("password123")) is False

    def test_salted(self):
        """Same password, different hashes."""
        assert hash_password("password123") != hash_password("password123")

    def test_malformed_hash(self):
        assert verify_password("password123", "not-a-hash") is False
        assert verify_password("password123", "bcrypt$abc$def") is False


class TestTokens:
    def test_secret_is_hex(self):
        secret = generate_token_secret()
        assert len(secret) == 64
        int(secret, 16)

    def test_hash_is_stable(self):
        assert hash_token("abc") == hash_token("abc")
        assert hash_token("abc") != hash_token("abd")
        assert len(hash_token("abc")) == 64
