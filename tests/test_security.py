"""권한 검사(guard) 및 비밀번호 유틸리티 테스트.

Guard tests run against transient models; nothing touches the database.
"""

import pytest

from lists_api.models import AppUser, Credential, Role, Team
from lists_api.security.passwords import (
    MAX_PASSWORD_BYTES,
    hash_password,
    make_credential,
    password_fits,
    verify_password,
)
from lists_api.security.user_security import UserSecurity, user_security
from lists_api.utils.exceptions import ForbiddenError


def _user(user_id: int, *role_codes: str) -> AppUser:
    roles = [Role(code=code, retired=False) for code in role_codes]
    return AppUser(id=user_id, credential=Credential(f"user{user_id}", "hash"), roles=roles, retired=False)


class TestIsAdminOrSameUser:
    """본인 또는 관리자 검사."""

    def test_same_user_non_admin(self):
        assert user_security.is_admin_or_same_user(_user(42), 42) is True

    def test_other_user_non_admin(self):
        assert user_security.is_admin_or_same_user(_user(7), 42) is False

    def test_other_user_admin(self):
        assert user_security.is_admin_or_same_user(_user(7, "ADMIN"), 42) is True

    def test_require_raises_for_other_user(self):
        with pytest.raises(ForbiddenError):
            user_security.require_admin_or_same_user(_user(7), 42)


class TestIsAdmin:

    def test_admin_role(self):
        assert user_security.is_admin(_user(1, "ADMIN", "EDITOR")) is True

    def test_no_admin_role(self):
        assert user_security.is_admin(_user(1, "EDITOR")) is False

    def test_retired_admin_role_grants_nothing(self):
        """은퇴한 관리자 역할은 권한을 주지 않음."""
        caller = _user(1)
        caller.roles.append(Role(code="ADMIN", retired=True))
        assert user_security.is_admin(caller) is False

    def test_custom_admin_role_code(self):
        guard = UserSecurity(admin_role_code="SUPERUSER")
        assert guard.is_admin(_user(1, "SUPERUSER")) is True
        assert guard.is_admin(_user(1, "ADMIN")) is False

    def test_require_admin_raises(self):
        with pytest.raises(ForbiddenError) as exc_info:
            user_security.require_admin(_user(1))
        assert exc_info.value.status_code == 403


class TestIsAdminOrMember:

    def test_member(self):
        member = _user(5)
        team = Team(id=1, name="Core", members=[member])
        assert user_security.is_admin_or_member(member, team) is True

    def test_non_member(self):
        team = Team(id=1, name="Core", members=[_user(5)])
        assert user_security.is_admin_or_member(_user(6), team) is False

    def test_admin_non_member(self):
        team = Team(id=1, name="Core", members=[_user(5)])
        assert user_security.is_admin_or_member(_user(6, "ADMIN"), team) is True


class TestPasswords:
    """bcrypt 해싱 테스트."""

    def test_hash_and_verify(self):
        hashed = hash_password("s3cret")
        assert hashed != "s3cret"
        assert verify_password("s3cret", hashed) is True
        assert verify_password("wrong", hashed) is False

    def test_missing_hash_never_verifies(self):
        assert verify_password("anything", None) is False

    def test_make_credential(self):
        credential = make_credential("alice", "pw")
        assert credential.username == "alice"
        assert verify_password("pw", credential.password_hash)

    def test_password_over_bcrypt_limit_never_verifies(self):
        """72바이트 초과 입력은 bcrypt 오류 대신 False."""
        hashed = hash_password("s3cret")
        assert verify_password("x" * 100, hashed) is False
        assert verify_password("x" * 100, None) is False

    def test_hash_rejects_password_over_bcrypt_limit(self):
        assert password_fits("x" * MAX_PASSWORD_BYTES) is True
        assert password_fits("비" * 25) is False
        with pytest.raises(ValueError):
            hash_password("x" * (MAX_PASSWORD_BYTES + 1))
