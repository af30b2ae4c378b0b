"""Unit tests for clubhouse.core.security: bcrypt hashing, cookie signing, payload encryption."""

import unittest
from datetime import UTC, datetime, timedelta
from unittest import mock

import jwt
from cryptography.fernet import InvalidToken
from pydantic import SecretStr

from clubhouse.core.config import settings
from clubhouse.core.security import (
    BCRYPT_ROUNDS,
    SESSION_COOKIE_ALGORITHM,
    create_session_cookie,
    decode_session_cookie,
    decrypt_session_data,
    encrypt_session_data,
    hash_password,
    verify_password,
)


class TestPasswordHashing(unittest.TestCase):
    """hash_password/verify_password use bcrypt at the fixed cost factor."""

    def test_default_cost_factor_is_12(self) -> None:
        self.assertEqual(BCRYPT_ROUNDS, 12)
        hashed = hash_password("secret1")
        self.assertTrue(hashed.startswith("$2b$12$"))

    def test_hash_is_not_plaintext_and_is_salted(self) -> None:
        with mock.patch("clubhouse.core.security.BCRYPT_ROUNDS", 4):
            h1 = hash_password("secret1")
            h2 = hash_password("secret1")
        self.assertNotIn("secret1", h1)
        self.assertNotEqual(h1, h2)

    def test_verify_accepts_right_and_rejects_wrong_password(self) -> None:
        with mock.patch("clubhouse.core.security.BCRYPT_ROUNDS", 4):
            hashed = hash_password("secret1")
        self.assertTrue(verify_password("secret1", hashed))
        self.assertFalse(verify_password("secret2", hashed))
        self.assertFalse(verify_password("", hashed))

    def test_verify_with_malformed_hash_returns_false(self) -> None:
        self.assertFalse(verify_password("secret1", "not-a-bcrypt-hash"))

    def test_long_multibyte_password_is_accepted(self) -> None:
        password = "é" * 30  # 60 bytes in UTF-8
        with mock.patch("clubhouse.core.security.BCRYPT_ROUNDS", 4):
            hashed = hash_password(password)
        self.assertTrue(verify_password(password, hashed))


class TestSessionCookie(unittest.TestCase):
    """Cookie value is a signed JWT carrying only the opaque session id."""

    def test_round_trip(self) -> None:
        cookie = create_session_cookie("abc123")
        self.assertEqual(decode_session_cookie(cookie), "abc123")

    def test_tampered_cookie_is_rejected(self) -> None:
        header, payload, signature = create_session_cookie("abc123").split(".")
        flipped = ("A" if signature[0] != "A" else "B") + signature[1:]
        tampered = ".".join((header, payload, flipped))
        with self.assertRaises(jwt.PyJWTError):
            decode_session_cookie(tampered)

    def test_cookie_signed_with_other_secret_is_rejected(self) -> None:
        forged = jwt.encode(
            {"sid": "abc123", "exp": datetime.now(UTC) + timedelta(hours=1)},
            "some-other-secret",
            algorithm=SESSION_COOKIE_ALGORITHM,
        )
        with self.assertRaises(jwt.PyJWTError):
            decode_session_cookie(forged)

    def test_expired_cookie_is_rejected(self) -> None:
        expired = jwt.encode(
            {"sid": "abc123", "exp": datetime.now(UTC) - timedelta(seconds=5)},
            settings.SESSION_SECRET.get_secret_value(),
            algorithm=SESSION_COOKIE_ALGORITHM,
        )
        with self.assertRaises(jwt.ExpiredSignatureError):
            decode_session_cookie(expired)

    def test_cookie_without_session_id_is_rejected(self) -> None:
        token = jwt.encode(
            {"exp": datetime.now(UTC) + timedelta(hours=1)},
            settings.SESSION_SECRET.get_secret_value(),
            algorithm=SESSION_COOKIE_ALGORITHM,
        )
        with self.assertRaises(jwt.InvalidTokenError):
            decode_session_cookie(token)


class TestSessionPayloadEncryption(unittest.TestCase):
    """Session payloads are stored encrypted with the session-encryption secret."""

    def test_round_trip_and_ciphertext_hides_email(self) -> None:
        data = {"name": "Alice", "email": "a@x.com"}
        token = encrypt_session_data(data)
        self.assertNotIn("a@x.com", token)
        self.assertEqual(decrypt_session_data(token), data)

    def test_other_secret_cannot_decrypt(self) -> None:
        token = encrypt_session_data({"name": "Alice", "email": "a@x.com"})
        with mock.patch.object(settings, "SESSION_ENCRYPTION_SECRET", SecretStr("rotated")):
            with self.assertRaises(InvalidToken):
                decrypt_session_data(token)


if __name__ == "__main__":
    unittest.main()
