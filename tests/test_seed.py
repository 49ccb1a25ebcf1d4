"""초기 데이터 시드 테스트 (Seed tests)."""

from sqlalchemy import func, select

from lists_api.config import settings
from lists_api.models import AppUser
from lists_api.security.passwords import verify_password
from lists_api.seed import seed_admin


class TestSeedAdmin:

    async def test_creates_admin(self, db):
        admin = await seed_admin(db)
        assert admin.username == settings.SEED_ADMIN_USERNAME
        assert admin.role_codes() == {settings.ADMIN_ROLE_CODE}
        assert verify_password(settings.SEED_ADMIN_PASSWORD, admin.password_hash)

    async def test_idempotent(self, db):
        first = await seed_admin(db)
        second = await seed_admin(db)
        assert first.id == second.id
        count = (await db.execute(select(func.count()).select_from(AppUser))).scalar()
        assert count == 1

    async def test_reuses_existing_admin_role(self, db, admin_role):
        admin = await seed_admin(db)
        assert [r.id for r in admin.roles] == [admin_role.id]
