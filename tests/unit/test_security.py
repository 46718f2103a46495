"""Unit tests for bearer token verification."""
import pytest
from datetime import timedelta
from unittest.mock import Mock

import jwt
from fastapi import HTTPException

from officeops.core.config import settings
from officeops.core.security import (
    ACCESS_TOKEN_COOKIE,
    create_access_token,
    decode_access_token,
    get_current_user,
    is_approver,
    verify_approver,
)


def _request(headers=None, cookies=None):
    request = Mock()
    request.headers = headers or {}
    request.cookies = cookies or {}
    return request


@pytest.mark.unit
class TestTokens:
    """Token decoding."""

    def test_round_trip(self):
        token = create_access_token({"sub": 42, "role": 2})

        payload = decode_access_token(token)

        assert payload["sub"] == "42"
        assert payload["role"] == 2

    def test_expired_token(self):
        token = create_access_token({"sub": 42}, expires_delta=timedelta(seconds=-5))

        with pytest.raises(HTTPException) as exc_info:
            decode_access_token(token)
        assert exc_info.value.status_code == 401
        assert exc_info.value.detail == "Token expired"

    def test_wrong_signature(self):
        token = jwt.encode({"sub": "42", "exp": 9999999999}, "another-secret", algorithm="HS256")

        with pytest.raises(HTTPException) as exc_info:
            decode_access_token(token)
        assert exc_info.value.detail == "Invalid token"

    def test_missing_subject(self):
        token = create_access_token({"role": 1})

        with pytest.raises(HTTPException) as exc_info:
            decode_access_token(token)
        assert exc_info.value.status_code == 401


@pytest.mark.unit
class TestCurrentUser:
    """Resolving the acting user from a request."""

    def test_bearer_header(self):
        token = create_access_token({"sub": 42, "role": 2})

        user = get_current_user(_request(headers={"Authorization": f"Bearer {token}"}))

        assert user == {"id": 42, "role": 2}

    def test_cookie_fallback(self):
        token = create_access_token({"sub": 8, "role": 1})

        user = get_current_user(_request(cookies={ACCESS_TOKEN_COOKIE: token}))

        assert user["id"] == 8

    def test_missing_token(self):
        with pytest.raises(HTTPException) as exc_info:
            get_current_user(_request())
        assert exc_info.value.status_code == 401
        assert exc_info.value.detail == "Not authenticated"

    def test_non_numeric_subject(self):
        token = create_access_token({"sub": "alice"})

        with pytest.raises(HTTPException) as exc_info:
            get_current_user(_request(headers={"Authorization": f"Bearer {token}"}))
        assert exc_info.value.status_code == 401


@pytest.mark.unit
class TestApproverRole:
    """Role gate for approvals and purges."""

    def test_is_approver(self):
        assert is_approver({"id": 1, "role": settings.APPROVER_ROLES[0]}) is True
        assert is_approver({"id": 1, "role": 99}) is False
        assert is_approver({"id": 1, "role": None}) is False

    def test_verify_approver_allows_admin(self):
        token = create_access_token({"sub": 7, "role": 1})

        user = verify_approver(_request(headers={"Authorization": f"Bearer {token}"}))

        assert user == {"id": 7, "role": 1}

    def test_verify_approver_rejects_staff(self):
        token = create_access_token({"sub": 42, "role": 2})

        with pytest.raises(HTTPException) as exc_info:
            verify_approver(_request(headers={"Authorization": f"Bearer {token}"}))
        assert exc_info.value.status_code == 403
        assert exc_info.value.detail == "Insufficient permissions"

    def test_verify_approver_requires_role_claim(self):
        token = create_access_token({"sub": 42})

        with pytest.raises(HTTPException) as exc_info:
            verify_approver(_request(headers={"Authorization": f"Bearer {token}"}))
        assert exc_info.value.detail == "Role information missing"
