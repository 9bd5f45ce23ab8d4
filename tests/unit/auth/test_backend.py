"""Unit tests for auth backend (JWT and password handling)."""

from datetime import timedelta

import pytest
from jose import jwt

from machine_emu.config import settings
from machine_emu.core.auth.backend import (
    create_access_token,
    decode_token,
    hash_password,
    verify_password,
)
from machine_emu.core.constants import NAME_CLAIM, PERMISSION_CLAIM


pytestmark = pytest.mark.unit


class TestPasswordHashing:
    """Tests for password hashing functions."""

    def test_hash_password_returns_hash(self):
        """hash_password should return a bcrypt hash."""
        hashed = hash_password("mysecretpassword")

        assert hashed != "mysecretpassword"
        assert hashed.startswith("$2b$")

    def test_hash_password_different_each_time(self):
        """hash_password should salt every hash."""
        assert hash_password("mysecretpassword") != hash_password("mysecretpassword")

    def test_verify_password_correct(self):
        """verify_password should return True for correct password."""
        hashed = hash_password("mysecretpassword")

        assert verify_password("mysecretpassword", hashed) is True

    def test_verify_password_incorrect(self):
        """verify_password should return False for incorrect password."""
        hashed = hash_password("mysecretpassword")

        assert verify_password("wrongpassword", hashed) is False

    def test_verify_password_without_hash(self):
        """verify_password should reject when there is no stored hash."""
        assert verify_password("anything", None) is False

    def test_verify_password_garbage_hash(self):
        """verify_password should reject a value that is not a hash."""
        assert verify_password("anything", "not-a-bcrypt-hash") is False


class TestAccessTokens:
    """Tests for access token creation and validation."""

    def test_round_trip(self):
        """decode_token should return the claims create_access_token embedded."""
        token = create_access_token(7, "alice", ["StartCar", "StopCar"])

        data = decode_token(token)

        assert data is not None
        assert data.user_id == 7
        assert data.user_name == "alice"
        assert data.permissions == frozenset({"StartCar", "StopCar"})
        assert data.type == "access"
        assert data.jti

    def test_permission_claim_is_repeated_per_name(self):
        """Each permission should be one entry of the permission claim."""
        token = create_access_token(1, "alice", ["StopCar", "StartCar", "StartCar"])

        payload = jwt.get_unverified_claims(token)

        assert payload[PERMISSION_CLAIM] == ["StartCar", "StopCar"]
        assert payload[NAME_CLAIM] == "alice"
        assert payload["sub"] == "1"
        assert payload["iss"] == settings.jwt_issuer
        assert payload["aud"] == settings.jwt_audience

    def test_no_permissions(self):
        """A user with no roles should get a token with an empty claim set."""
        data = decode_token(create_access_token(1, "alice", []))

        assert data is not None
        assert data.permissions == frozenset()

    def test_expiry_is_fixed_from_issuance(self):
        """exp should be issuance plus the configured lifetime."""
        data = decode_token(create_access_token(1, "alice", []))

        assert data is not None
        assert data.issued_at is not None
        lifetime = data.exp - data.issued_at
        assert lifetime == timedelta(minutes=settings.access_token_expire_minutes)

    def test_expired_token_rejected(self):
        """decode_token should return None for an expired token."""
        token = create_access_token(1, "alice", [], expires_delta=timedelta(seconds=-1))

        assert decode_token(token) is None

    def test_tampered_token_rejected(self):
        """decode_token should return None when the payload was altered."""
        token = create_access_token(1, "alice", ["StartCar"])
        forged = jwt.encode(
            {**jwt.get_unverified_claims(token), PERMISSION_CLAIM: ["ManageUsers"]},
            "some-other-secret-that-is-long-enough-000",
            algorithm="HS256",
        )

        assert decode_token(forged) is None

    def test_wrong_audience_rejected(self):
        """decode_token should return None for a token meant for someone else."""
        claims = jwt.get_unverified_claims(create_access_token(1, "alice", []))
        token = jwt.encode(
            {**claims, "aud": "another-service"},
            settings.secret_key,
            algorithm=settings.jwt_algorithm,
        )

        assert decode_token(token) is None

    def test_wrong_issuer_rejected(self):
        """decode_token should return None for a token from another issuer."""
        claims = jwt.get_unverified_claims(create_access_token(1, "alice", []))
        token = jwt.encode(
            {**claims, "iss": "someone-else"},
            settings.secret_key,
            algorithm=settings.jwt_algorithm,
        )

        assert decode_token(token) is None

    def test_malformed_token_rejected(self):
        """decode_token should return None for garbage input."""
        assert decode_token("not.a.token") is None
        assert decode_token("") is None
