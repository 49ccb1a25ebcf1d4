"""권한 CRUD API 테스트 (Permission CRUD API tests)."""

import pytest
from httpx import AsyncClient

from lists_api.models import Permission, Role
from lists_api.services.permission_service import permission_service
from lists_api.utils.exceptions import NotFoundError
from tests.conftest import auth_header

URL = "/api/permissions"


class TestPermissionCrud:

    async def test_create_and_get(self, client: AsyncClient, admin_token):
        res = await client.post(URL, json={
            "code": "LISTS_WRITE",
            "description": "Write lists",
        }, headers=auth_header(admin_token))
        assert res.status_code == 201

        res = await client.get(f"{URL}/LISTS_WRITE", headers=auth_header(admin_token))
        assert res.status_code == 200
        assert res.json()["body"]["description"] == "Write lists"

    async def test_create_duplicate(self, client: AsyncClient, admin_token, db):
        db.add(Permission(code="LISTS_WRITE"))
        await db.flush()

        res = await client.post(URL, json={"code": "LISTS_WRITE"}, headers=auth_header(admin_token))
        assert res.status_code == 409

    async def test_create_non_admin_forbidden(self, client: AsyncClient, alice_token):
        res = await client.post(URL, json={"code": "LISTS_WRITE"}, headers=auth_header(alice_token))
        assert res.status_code == 403

    async def test_rename(self, client: AsyncClient, admin_token, db):
        db.add(Permission(code="LISTS_WRITE"))
        await db.flush()

        res = await client.put(f"{URL}/LISTS_WRITE", json={"code": "LISTS_EDIT"}, headers=auth_header(admin_token))
        assert res.status_code == 200
        assert res.json()["body"]["code"] == "LISTS_EDIT"

        res = await client.get(f"{URL}/LISTS_WRITE", headers=auth_header(admin_token))
        assert res.status_code == 404

    async def test_list(self, client: AsyncClient, alice_token, db):
        db.add_all([Permission(code="A"), Permission(code="B")])
        await db.flush()

        res = await client.get(URL, headers=auth_header(alice_token))
        assert res.status_code == 200
        body = res.json()["body"]
        assert body["total"] == 2
        assert [p["code"] for p in body["items"]] == ["A", "B"]


class TestPermissionRetire:

    async def test_retire_then_find_fails(self, db):
        db.add(Permission(code="LISTS_WRITE"))
        await db.flush()

        await permission_service.retire(db, "LISTS_WRITE")
        with pytest.raises(NotFoundError):
            await permission_service.find_by_code(db, "LISTS_WRITE")

    async def test_retired_permission_hidden_from_role(self, client: AsyncClient, admin_token, db):
        """은퇴한 권한은 역할 응답에서 제외."""
        read = Permission(code="LISTS_READ")
        write = Permission(code="LISTS_WRITE")
        db.add(Role(code="EDITOR", permissions=[read, write]))
        await db.flush()

        res = await client.delete(f"{URL}/LISTS_WRITE", headers=auth_header(admin_token))
        assert res.status_code == 200

        res = await client.get("/api/roles/EDITOR", headers=auth_header(admin_token))
        assert res.json()["body"]["permissions"] == ["LISTS_READ"]

    async def test_find_multiple_skips_retired(self, db):
        kept = Permission(code="A")
        gone = Permission(code="B", retired=True)
        db.add_all([kept, gone])
        await db.flush()

        found = await permission_service.find_multiple(db, {"A", "B", "C"})
        assert [p.code for p in found] == ["A"]

        with pytest.raises(NotFoundError):
            await permission_service.find_all_by_codes(db, {"A", "B"})
