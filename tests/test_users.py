"""사용자 API 및 서비스 테스트.

AppUser tests. Creation, listing and role assignment are admin-only; reads,
credential changes and retirement are admin-or-same-user.
"""

from unittest.mock import AsyncMock, patch

import pytest
from httpx import AsyncClient

from lists_api.models import Role
from lists_api.repositories.user_repository import user_repository
from lists_api.schemas.user import UserUpdate
from lists_api.services.user_service import user_service
from lists_api.utils.exceptions import ForbiddenError, NotFoundError
from tests.conftest import ALICE_PASSWORD, auth_header

URL = "/api/users"


class TestUserCreate:
    """사용자 생성 테스트."""

    async def test_admin_creates_user(self, client: AsyncClient, admin_token, db):
        db.add(Role(code="EDITOR"))
        await db.flush()

        res = await client.post(URL, json={
            "username": "carol",
            "password": "carol-password",
            "roles": ["EDITOR"],
        }, headers=auth_header(admin_token))
        assert res.status_code == 201
        body = res.json()["body"]
        assert body["username"] == "carol"
        assert body["roles"] == ["EDITOR"]
        assert "password" not in body
        assert "passwordHash" not in body

        login = await client.post("/api/authenticate", json={"username": "carol", "password": "carol-password"})
        assert login.status_code == 200

    async def test_non_admin_forbidden(self, client: AsyncClient, alice_token):
        res = await client.post(URL, json={"username": "carol", "password": "pw"}, headers=auth_header(alice_token))
        assert res.status_code == 403

    async def test_duplicate_username(self, client: AsyncClient, admin_token, alice):
        res = await client.post(URL, json={"username": "alice", "password": "pw"}, headers=auth_header(admin_token))
        assert res.status_code == 409
        assert res.json()["errorCode"] == "L1001"

    async def test_unknown_role(self, client: AsyncClient, admin_token):
        res = await client.post(URL, json={
            "username": "carol",
            "password": "pw",
            "roles": ["GHOST"],
        }, headers=auth_header(admin_token))
        assert res.status_code == 404

    async def test_missing_password(self, client: AsyncClient, admin_token):
        res = await client.post(URL, json={"username": "carol"}, headers=auth_header(admin_token))
        assert res.status_code == 400
        assert res.json()["errorCode"] == "L1003"

    async def test_password_over_bcrypt_limit(self, client: AsyncClient, admin_token):
        """72바이트 초과 비밀번호로 생성 시 400 BAD_OPERATION."""
        res = await client.post(URL, json={"username": "carol", "password": "x" * 73}, headers=auth_header(admin_token))
        assert res.status_code == 400
        assert res.json()["errorCode"] == "L1003"

    async def test_multibyte_password_limit_counts_bytes(self, client: AsyncClient, admin_token):
        """UTF-8 바이트 기준: 24자 = 72바이트는 허용, 25자 = 75바이트는 거부."""
        res = await client.post(URL, json={"username": "carol", "password": "비" * 25}, headers=auth_header(admin_token))
        assert res.status_code == 400

        res = await client.post(URL, json={"username": "carol", "password": "비" * 24}, headers=auth_header(admin_token))
        assert res.status_code == 201

        login = await client.post("/api/authenticate", json={"username": "carol", "password": "비" * 24})
        assert login.status_code == 200

    async def test_username_of_retired_user_reusable(self, client: AsyncClient, admin_token, db, alice):
        """은퇴한 사용자의 사용자명 재사용 가능."""
        alice.retire()
        await db.flush()

        res = await client.post(URL, json={"username": "alice", "password": "new-pw"}, headers=auth_header(admin_token))
        assert res.status_code == 201
        assert res.json()["body"]["id"] != alice.id


class TestUserRead:
    """사용자 조회 테스트."""

    async def test_get_self(self, client: AsyncClient, alice, alice_token):
        res = await client.get(f"{URL}/{alice.id}", headers=auth_header(alice_token))
        assert res.status_code == 200
        assert res.json()["body"]["username"] == "alice"

    async def test_get_other_user_forbidden(self, client: AsyncClient, alice_token, bob):
        res = await client.get(f"{URL}/{bob.id}", headers=auth_header(alice_token))
        assert res.status_code == 403
        assert res.json()["errorCode"] == "L1002"

    async def test_admin_gets_other_user(self, client: AsyncClient, admin_token, bob):
        res = await client.get(f"{URL}/{bob.id}", headers=auth_header(admin_token))
        assert res.status_code == 200

    async def test_admin_gets_unknown_user(self, client: AsyncClient, admin_token):
        res = await client.get(f"{URL}/9999", headers=auth_header(admin_token))
        assert res.status_code == 404
        assert res.json()["errorCode"] == "L1000"

    async def test_guard_runs_before_lookup(self, client: AsyncClient, alice_token):
        """존재하지 않는 타인 ID도 403 (존재 여부 노출 안 함)."""
        res = await client.get(f"{URL}/9999", headers=auth_header(alice_token))
        assert res.status_code == 403

    async def test_list_users_admin(self, client: AsyncClient, admin_token, alice, bob):
        res = await client.get(f"{URL}?perPage=2", headers=auth_header(admin_token))
        assert res.status_code == 200
        body = res.json()["body"]
        assert body["total"] == 3
        assert body["pages"] == 2
        assert len(body["items"]) == 2

    async def test_list_users_non_admin(self, client: AsyncClient, alice_token):
        res = await client.get(URL, headers=auth_header(alice_token))
        assert res.status_code == 403

    async def test_find_by_credential(self, db, alice):
        found = await user_service.find_by_credential(db, alice.credential)
        assert found.id == alice.id

    async def test_find_by_username(self, db, alice):
        assert (await user_service.find_by_username(db, "alice")).id == alice.id
        with pytest.raises(NotFoundError):
            await user_service.find_by_username(db, "nobody")


class TestUserUpdate:
    """사용자 수정 테스트."""

    async def test_change_own_username(self, client: AsyncClient, alice, alice_token):
        res = await client.put(f"{URL}/{alice.id}", json={"username": "alicia"}, headers=auth_header(alice_token))
        assert res.status_code == 200
        assert res.json()["body"]["username"] == "alicia"

        old = await client.post("/api/authenticate", json={"username": "alice", "password": ALICE_PASSWORD})
        assert old.status_code == 401
        new = await client.post("/api/authenticate", json={"username": "alicia", "password": ALICE_PASSWORD})
        assert new.status_code == 200

    async def test_change_own_password(self, client: AsyncClient, alice, alice_token):
        res = await client.put(f"{URL}/{alice.id}", json={"password": "brand-new"}, headers=auth_header(alice_token))
        assert res.status_code == 200

        old = await client.post("/api/authenticate", json={"username": "alice", "password": ALICE_PASSWORD})
        assert old.status_code == 401
        new = await client.post("/api/authenticate", json={"username": "alice", "password": "brand-new"})
        assert new.status_code == 200

    async def test_change_to_taken_username(self, client: AsyncClient, alice, alice_token, bob):
        res = await client.put(f"{URL}/{alice.id}", json={"username": "bob"}, headers=auth_header(alice_token))
        assert res.status_code == 409

    async def test_update_other_user_forbidden(self, client: AsyncClient, alice_token, bob):
        res = await client.put(f"{URL}/{bob.id}", json={"password": "x"}, headers=auth_header(alice_token))
        assert res.status_code == 403

    async def test_unchanged_username_skips_conflict_check(self, db, alice):
        """사용자명이 그대로면 중복 검사를 하지 않음."""
        with patch.object(
            user_repository, "get_active_by_username", new=AsyncMock(return_value=alice)
        ) as lookup:
            await user_service.update(db, alice, alice.id, UserUpdate(username="alice", password="other"))
        lookup.assert_not_awaited()

    async def test_password_over_bcrypt_limit(self, client: AsyncClient, alice, alice_token):
        """72바이트 초과 비밀번호로 변경 시 400, 기존 비밀번호 유지."""
        res = await client.put(f"{URL}/{alice.id}", json={"password": "x" * 100}, headers=auth_header(alice_token))
        assert res.status_code == 400
        assert res.json()["errorCode"] == "L1003"

        login = await client.post("/api/authenticate", json={"username": "alice", "password": ALICE_PASSWORD})
        assert login.status_code == 200

    async def test_guard_before_mutation(self, db, alice, bob):
        """권한 실패 시 아무것도 변경되지 않음."""
        with pytest.raises(ForbiddenError):
            await user_service.update(db, alice, bob.id, UserUpdate(username="mallory"))
        assert bob.username == "bob"


class TestUserRoles:

    async def test_assign_roles(self, client: AsyncClient, admin_token, db, alice):
        db.add_all([Role(code="EDITOR"), Role(code="VIEWER")])
        await db.flush()

        res = await client.put(f"{URL}/{alice.id}/roles", json={"roles": ["VIEWER", "EDITOR"]}, headers=auth_header(admin_token))
        assert res.status_code == 200
        assert res.json()["body"]["roles"] == ["EDITOR", "VIEWER"]

    async def test_self_promotion_forbidden(self, client: AsyncClient, alice, alice_token, admin_role):
        res = await client.put(f"{URL}/{alice.id}/roles", json={"roles": ["ADMIN"]}, headers=auth_header(alice_token))
        assert res.status_code == 403


class TestUserRetire:
    """사용자 은퇴 테스트."""

    async def test_retire_self(self, client: AsyncClient, alice, alice_token):
        res = await client.delete(f"{URL}/{alice.id}", headers=auth_header(alice_token))
        assert res.status_code == 200

        # 은퇴 후에는 토큰이 더 이상 유효하지 않음
        res = await client.get(f"{URL}/me", headers=auth_header(alice_token))
        assert res.status_code == 401

    async def test_retire_then_find_fails(self, db, admin_user, bob):
        await user_service.retire(db, admin_user, bob.id)
        with pytest.raises(NotFoundError):
            await user_service.find_by_id(db, admin_user, bob.id)

    async def test_retire_other_user_forbidden(self, client: AsyncClient, alice_token, bob):
        res = await client.delete(f"{URL}/{bob.id}", headers=auth_header(alice_token))
        assert res.status_code == 403
