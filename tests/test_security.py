"""Unit tests for taskflow.core.security: bcrypt hashing and JWT access/refresh tokens."""

import unittest
from datetime import UTC, datetime, timedelta

import jwt
from pydantic import SecretStr

from api_harness import make_settings
from taskflow.core.security import (
    create_access_token,
    create_refresh_token,
    decode_access_token,
    decode_refresh_token,
    hash_password,
    verify_password,
)


class TestPasswordHashing(unittest.TestCase):
    def test_hash_and_verify(self) -> None:
        hashed = hash_password("Passw0rd", rounds=4)
        self.assertNotEqual(hashed, "Passw0rd")
        self.assertTrue(verify_password("Passw0rd", hashed))
        self.assertFalse(verify_password("passw0rd", hashed))

    def test_salted(self) -> None:
        self.assertNotEqual(hash_password("Passw0rd", rounds=4), hash_password("Passw0rd", rounds=4))

    def test_malformed_hash_is_not_a_match(self) -> None:
        self.assertFalse(verify_password("Passw0rd", "not-a-bcrypt-hash"))


class TestTokens(unittest.TestCase):
    def setUp(self) -> None:
        self.settings = make_settings()

    def test_access_token_round_trip(self) -> None:
        token = create_access_token("user-1", "admin", self.settings)
        payload = decode_access_token(token, self.settings)
        self.assertEqual(payload["sub"], "user-1")
        self.assertEqual(payload["role"], "admin")
        self.assertIn("exp", payload)

    def test_tokens_are_unique(self) -> None:
        a = create_access_token("user-1", "user", self.settings)
        b = create_access_token("user-1", "user", self.settings)
        self.assertNotEqual(a, b)

    def test_refresh_token_expiry(self) -> None:
        token, expires_at = create_refresh_token("user-1", "user", self.settings)
        expected = datetime.now(UTC) + timedelta(days=self.settings.REFRESH_TOKEN_EXPIRE_DAYS)
        self.assertLess(abs((expires_at - expected).total_seconds()), 5)
        self.assertEqual(decode_refresh_token(token, self.settings)["sub"], "user-1")

    def test_secrets_are_not_interchangeable(self) -> None:
        refresh, _ = create_refresh_token("user-1", "user", self.settings)
        with self.assertRaises(jwt.PyJWTError):
            decode_access_token(refresh, self.settings)
        access = create_access_token("user-1", "user", self.settings)
        with self.assertRaises(jwt.PyJWTError):
            decode_refresh_token(access, self.settings)

    def test_other_secret_rejected(self) -> None:
        token = create_access_token("user-1", "user", self.settings)
        other = make_settings(ACCESS_TOKEN_SECRET=SecretStr("another-secret"))
        with self.assertRaises(jwt.InvalidSignatureError):
            decode_access_token(token, other)

    def test_expired_token_rejected(self) -> None:
        past = datetime.now(UTC) - timedelta(minutes=5)
        token = jwt.encode(
            {"sub": "user-1", "role": "user", "exp": past},
            self.settings.ACCESS_TOKEN_SECRET.get_secret_value(),
            algorithm=self.settings.JWT_ALGORITHM,
        )
        with self.assertRaises(jwt.ExpiredSignatureError):
            decode_access_token(token, self.settings)


if __name__ == "__main__":
    unittest.main()
