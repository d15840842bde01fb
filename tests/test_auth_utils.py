"""Password hashing, session tokens and settings checks."""

import time
from datetime import timedelta

import pytest
from jose import jwt
from pydantic import ValidationError as SettingsError

from store_rating.auth.permissions import Role
from store_rating.auth.utils import Identity, hash_password, issue_token, verify_password, verify_token
from store_rating.core.config import Settings, get_settings

IDENTITY = Identity(subject_id="user-1", email="user@example.com", role=Role.NORMAL_USER)


class TestPasswordHashing:
    def test_hash_verifies_against_original(self):
        hashed = hash_password("Abcdefg1!")
        assert hashed != "Abcdefg1!"
        assert verify_password("Abcdefg1!", hashed)

    def test_wrong_password_fails(self):
        hashed = hash_password("Abcdefg1!")
        assert not verify_password("Abcdefg2!", hashed)

    def test_hashes_are_salted(self):
        first = hash_password("Abcdefg1!")
        second = hash_password("Abcdefg1!")
        assert first != second
        assert verify_password("Abcdefg1!", first)
        assert verify_password("Abcdefg1!", second)

    @pytest.mark.parametrize("bad_hash", ["", "not-a-hash", "$2b$12$tooshort", None])
    def test_malformed_hash_fails_closed(self, bad_hash):
        assert verify_password("Abcdefg1!", bad_hash) is False

    def test_empty_password_fails(self):
        assert verify_password("", hash_password("Abcdefg1!")) is False


class TestSessionTokens:
    def test_roundtrip_returns_identity(self):
        token = issue_token(IDENTITY)
        assert verify_token(token) == IDENTITY

    def test_role_must_be_role_enum(self):
        with pytest.raises(AttributeError):
            issue_token(Identity(subject_id="user-1", email="user@example.com", role="NORMAL_USER"))

    def test_default_expiry_is_seven_days(self):
        token = issue_token(IDENTITY)
        claims = jwt.get_unverified_claims(token)
        assert claims["exp"] - claims["iat"] == 7 * 24 * 60 * 60
        assert claims["sub"] == "user-1"
        assert claims["role"] == "NORMAL_USER"

    def test_expired_token_is_invalid(self):
        token = issue_token(IDENTITY, expires_delta=timedelta(seconds=-10))
        assert verify_token(token) is None

    def test_token_signed_with_other_key_is_invalid(self):
        claims = jwt.get_unverified_claims(issue_token(IDENTITY))
        forged = jwt.encode(claims, "some-other-secret", algorithm="HS256")
        assert verify_token(forged) is None

    @pytest.mark.parametrize("token", ["", "garbage", "a.b.c"])
    def test_malformed_token_is_invalid(self, token):
        assert verify_token(token) is None

    def test_unknown_role_is_invalid(self):
        payload = {"sub": "user-1", "email": "user@example.com", "role": "ROOT", "exp": int(time.time()) + 60}
        token = jwt.encode(payload, get_settings().SECRET_KEY, algorithm="HS256")
        assert verify_token(token) is None

    def test_missing_claims_are_invalid(self):
        payload = {"sub": "user-1", "exp": int(time.time()) + 60}
        token = jwt.encode(payload, get_settings().SECRET_KEY, algorithm="HS256")
        assert verify_token(token) is None

    def test_token_without_expiry_is_invalid(self):
        payload = {"sub": "user-1", "email": "user@example.com", "role": "SYSTEM_ADMIN"}
        token = jwt.encode(payload, get_settings().SECRET_KEY, algorithm="HS256")
        assert verify_token(token) is None

    def test_token_without_subject_is_invalid(self):
        payload = {"email": "user@example.com", "role": "SYSTEM_ADMIN", "exp": int(time.time()) + 60}
        token = jwt.encode(payload, get_settings().SECRET_KEY, algorithm="HS256")
        assert verify_token(token) is None


class TestSettings:
    def test_missing_secret_fails_fast(self, monkeypatch):
        monkeypatch.delenv("SECRET_KEY", raising=False)
        with pytest.raises(SettingsError):
            Settings(_env_file=None)

    def test_blank_secret_is_rejected(self, monkeypatch):
        monkeypatch.setenv("SECRET_KEY", "   ")
        with pytest.raises(SettingsError):
            Settings(_env_file=None)

    def test_cookie_flags(self, monkeypatch):
        monkeypatch.setenv("ENVIRONMENT", "production")
        settings = Settings(_env_file=None)
        assert settings.is_production
        assert settings.cookie_max_age == 7 * 24 * 60 * 60
