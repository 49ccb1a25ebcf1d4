"""JWT 유틸리티 테스트 (JWT helper tests)."""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from lists_api.config import settings
from lists_api.utils.jwt import (
    ACCESS_TOKEN_TYPE,
    REFRESH_TOKEN_TYPE,
    create_access_token,
    create_refresh_token,
    decode_token,
    get_username_from_token,
)


class TestTokenCreation:

    def test_access_token_claims(self):
        payload = decode_token(create_access_token("alice"))
        assert payload["sub"] == "alice"
        assert payload["type"] == ACCESS_TOKEN_TYPE

    def test_refresh_outlives_access(self):
        access = decode_token(create_access_token("alice"))
        refresh = decode_token(create_refresh_token("alice"))
        assert refresh["type"] == REFRESH_TOKEN_TYPE
        assert refresh["exp"] > access["exp"]


class TestGetUsername:

    def test_without_expected_type_accepts_both(self):
        assert get_username_from_token(create_access_token("alice")) == "alice"
        assert get_username_from_token(create_refresh_token("alice")) == "alice"

    def test_wrong_type_rejected(self):
        with pytest.raises(jwt.InvalidTokenError):
            get_username_from_token(create_refresh_token("alice"), ACCESS_TOKEN_TYPE)

    def test_expired_rejected(self):
        token = jwt.encode(
            {"sub": "alice", "exp": datetime.now(timezone.utc) - timedelta(seconds=1)},
            settings.JWT_SECRET_KEY,
            algorithm=settings.JWT_ALGORITHM,
        )
        with pytest.raises(jwt.ExpiredSignatureError):
            get_username_from_token(token)

    def test_missing_subject_rejected(self):
        """sub 클레임이 없으면 거부."""
        token = jwt.encode(
            {"exp": datetime.now(timezone.utc) + timedelta(minutes=5)},
            settings.JWT_SECRET_KEY,
            algorithm=settings.JWT_ALGORITHM,
        )
        with pytest.raises(jwt.InvalidTokenError):
            get_username_from_token(token)

    def test_empty_subject_rejected(self):
        token = jwt.encode(
            {"sub": "", "exp": datetime.now(timezone.utc) + timedelta(minutes=5)},
            settings.JWT_SECRET_KEY,
            algorithm=settings.JWT_ALGORITHM,
        )
        with pytest.raises(jwt.InvalidTokenError):
            get_username_from_token(token)
