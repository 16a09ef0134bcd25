"""
Tests for password hashing and token issue/verification.
"""
from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from app.core.config import DEV_JWT_SECRET, Settings, settings
from app.core.exceptions import AuthenticationError
from app.core.security import (
    Role,
    create_access_token,
    decode_access_token,
    decode_admin_claim,
    get_password_hash,
    verify_password,
)


def _exp(hours=1):
    return int((datetime.now(timezone.utc) + timedelta(hours=hours)).timestamp())


def test_password_hash_verifies():
    hashed = get_password_hash("s3cret!")
    assert hashed != "s3cret!"
    assert verify_password("s3cret!", hashed)
    assert not verify_password("wrong", hashed)


def test_password_hash_uses_configured_rounds():
    hashed = get_password_hash("whatever")
    assert hashed.startswith(f"$2b${settings.BCRYPT_ROUNDS:02d}$")


def test_long_passwords_keep_their_tail():
    base = "x" * 80
    hashed = get_password_hash(base + "a")
    assert verify_password(base + "a", hashed)
    assert not verify_password(base + "b", hashed)


@pytest.mark.parametrize("stored", ["", "not-a-bcrypt-hash", "$2b$04$short"])
def test_verify_password_never_raises_on_malformed_hash(stored):
    assert verify_password("anything", stored) is False


def test_issue_then_verify_round_trip():
    for is_admin in (True, False):
        principal = decode_access_token(create_access_token("alice", is_admin))
        assert principal.username == "alice"
        assert principal.is_admin is is_admin
        assert principal.expires_at > datetime.now(timezone.utc)


def test_token_expires_after_72_hours():
    token = create_access_token("alice", False)
    claims = jwt.get_unverified_claims(token)
    expected = datetime.now(timezone.utc) + timedelta(hours=72)
    assert abs(claims["exp"] - expected.timestamp()) < 60
    assert claims["user"] == "alice"
    assert claims["admin"] is False


def test_expired_token_is_rejected():
    token = create_access_token("alice", True, expires_delta=timedelta(seconds=-10))
    with pytest.raises(AuthenticationError):
        decode_access_token(token)


def test_token_signed_with_other_secret_is_rejected():
    token = jwt.encode({"user": "alice", "admin": True, "exp": _exp()}, "another-secret", algorithm="HS256")
    with pytest.raises(AuthenticationError):
        decode_access_token(token)


def test_token_with_other_algorithm_is_rejected():
    token = jwt.encode({"user": "alice", "admin": True, "exp": _exp()}, settings.jwt_secret, algorithm="HS512")
    with pytest.raises(AuthenticationError):
        decode_access_token(token)


@pytest.mark.parametrize("payload", [
    {"admin": True, "exp": _exp()},
    {"user": "alice", "admin": True},
    {"user": "", "exp": _exp()},
    {"user": 42, "exp": _exp()},
])
def test_token_missing_required_claims_is_rejected(payload):
    token = jwt.encode(payload, settings.jwt_secret, algorithm="HS256")
    with pytest.raises(AuthenticationError):
        decode_access_token(token)


def test_garbage_token_is_rejected():
    with pytest.raises(AuthenticationError):
        decode_access_token("not.a.token")


@pytest.mark.parametrize("claims, expected", [
    ({"admin": True}, True),
    ({"admin": False}, False),
    ({"admin": "true"}, True),
    ({"admin": "false"}, False),
    ({"Admin": True}, True),
    ({"Admin": False}, False),
    ({"Admin": "true"}, True),
    ({"Admin": "false"}, False),
])
def test_admin_claim_historical_encodings(claims, expected):
    assert decode_admin_claim(claims) is expected


@pytest.mark.parametrize("claims", [
    {},
    {"admin": 1},
    {"admin": "yes"},
    {"admin": "True"},
    {"Admin": None},
    {"ADMIN": True},
])
def test_admin_claim_unrecognized_shapes_fail_closed(claims):
    assert decode_admin_claim(claims) is False


def test_legacy_capitalized_string_claim_is_admin():
    token = jwt.encode({"user": "root", "Admin": "true", "exp": _exp()}, settings.jwt_secret, algorithm="HS256")
    principal = decode_access_token(token)
    assert principal.role is Role.ADMIN


def test_dev_secret_used_only_when_unconfigured():
    assert Settings(JWT_SECRET="").jwt_secret == DEV_JWT_SECRET
    assert Settings(JWT_SECRET="").using_dev_secret
    assert Settings(JWT_SECRET="prod").jwt_secret == "prod"


def test_signing_algorithm_is_not_configurable(monkeypatch):
    monkeypatch.setenv("ALGORITHM", "HS512")
    assert not hasattr(Settings(), "ALGORITHM")

    token = create_access_token("alice", False)
    assert jwt.get_unverified_header(token)["alg"] == "HS256"
