"""
Tests for JWT issuance and verification.
"""

import time
import uuid
from datetime import timedelta
from unittest.mock import patch

import jwt as pyjwt
import pytest

from auth.jwt import Claims, TokenService
from utils.errors import InvalidTokenError, JwtError

SECRET = "token-service-test-secret"


@pytest.fixture
def service() -> TokenService:
    return TokenService(secret=SECRET, expiration_days=7)


class TestIssue:
    def test_round_trip(self, service):
        uid = uuid.uuid4()
        claims = service.verify(service.issue(uid, "alice"))
        assert claims.sub == uid
        assert claims.username == "alice"

    def test_expiry_is_issued_at_plus_validity(self, service):
        claims = service.verify(service.issue(uuid.uuid4(), "alice"))
        assert claims.exp - claims.iat == 7 * 86400

    def test_custom_validity(self, service):
        claims = service.verify(service.issue(uuid.uuid4(), "bob", timedelta(minutes=5)))
        assert claims.exp - claims.iat == 300

    def test_uses_hs256(self, service):
        header = pyjwt.get_unverified_header(service.issue(uuid.uuid4(), "alice"))
        assert header["alg"] == "HS256"

    def test_claims_are_immutable(self, service):
        claims = service.verify(service.issue(uuid.uuid4(), "alice"))
        with pytest.raises(Exception):
            claims.username = "mallory"


class TestVerify:
    def test_expired_token_rejected(self, service):
        token = service.issue(uuid.uuid4(), "alice", timedelta(seconds=-10))
        with pytest.raises(InvalidTokenError):
            service.verify(token)

    def test_zero_validity_token_valid_within_its_second(self, service):
        uid = uuid.uuid4()
        now = int(time.time())
        token = pyjwt.encode({"sub": str(uid), "username": "alice", "iat": now, "exp": now}, SECRET)
        with patch("auth.jwt.time") as clock:
            clock.time.return_value = now + 0.999
            assert service.verify(token).sub == uid
            clock.time.return_value = now + 1
            with pytest.raises(InvalidTokenError):
                service.verify(token)

    def test_issued_with_zero_validity_verifies_immediately(self, service):
        uid = uuid.uuid4()
        token = service.issue(uid, "alice", timedelta(0))
        exp = pyjwt.decode(token, options={"verify_signature": False})["exp"]
        with patch("auth.jwt.time") as clock:
            clock.time.return_value = float(exp)
            assert service.verify(token).sub == uid

    def test_wrong_secret_rejected(self, service):
        other = TokenService(secret="someone-elses-secret", expiration_days=7)
        with pytest.raises(InvalidTokenError):
            service.verify(other.issue(uuid.uuid4(), "alice"))

    def test_malformed_token_rejected(self, service):
        with pytest.raises(InvalidTokenError):
            service.verify("not.a.jwt")

    def test_tampered_payload_rejected(self, service):
        header, _, signature = service.issue(uuid.uuid4(), "alice").split(".")
        forged_payload = pyjwt.encode(
            {"sub": str(uuid.uuid4()), "username": "root", "iat": 0, "exp": 2**31},
            SECRET,
        ).split(".")[1]
        with pytest.raises(InvalidTokenError):
            service.verify(f"{header}.{forged_payload}.{signature}")

    def test_missing_claim_rejected(self, service):
        token = pyjwt.encode({"sub": str(uuid.uuid4()), "exp": int(time.time()) + 60}, SECRET)
        with pytest.raises(InvalidTokenError):
            service.verify(token)

    def test_non_uuid_subject_rejected(self, service):
        now = int(time.time())
        token = pyjwt.encode(
            {"sub": "not-a-uuid", "username": "x", "iat": now, "exp": now + 60}, SECRET
        )
        with pytest.raises(InvalidTokenError):
            service.verify(token)

    def test_invalid_token_is_a_jwt_error(self):
        assert issubclass(InvalidTokenError, JwtError)
        assert InvalidTokenError("bad").code == 401


class TestClaims:
    def test_new_sets_window(self):
        claims = Claims.new(uuid.uuid4(), "carol", timedelta(days=1))
        assert claims.exp - claims.iat == 86400
