from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from billbook.infrastructure.db.models import UserAccount


class UserRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, user_id: str) -> UserAccount | None:
        stmt = select(UserAccount).where(UserAccount.id == user_id)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> UserAccount | None:
        stmt = select(UserAccount).where(UserAccount.email == email.strip().lower())
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def create(self, email: str, password_hash: str) -> UserAccount:
        user = UserAccount(email=email.strip().lower(), password_hash=password_hash)
        self.db.add(user)
        await self.db.flush()
        return user
