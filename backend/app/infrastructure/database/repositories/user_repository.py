"""Concrete repository implementation for User backed by SQLAlchemy."""

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.interfaces import UserRepository
from app.domain.entities import User
from app.domain.exceptions import DuplicateEntityError
from app.infrastructure.database.models import UserModel
from app.infrastructure.database.repositories.errors import translate_store_errors


class SQLAlchemyUserRepository(UserRepository):
    """Implements the UserRepository port using SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: UserModel) -> User:
        """Map ORM model → domain entity."""
        return User(
            id=model.id,
            username=model.username,
            email=model.email,
            password_hash=model.password_hash,
            created_at=model.created_at,
        )

    async def get_by_id(self, user_id: int) -> User | None:
        with translate_store_errors("user lookup"):
            model = await self._session.get(UserModel, user_id)
        return self._to_entity(model) if model else None

    async def get_by_email(self, email: str) -> User | None:
        with translate_store_errors("user lookup"):
            result = await self._session.execute(
                select(UserModel).where(UserModel.email == email)
            )
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def find_by_email_or_username(self, email: str, username: str) -> User | None:
        with translate_store_errors("user lookup"):
            result = await self._session.execute(
                select(UserModel)
                .where(or_(UserModel.email == email, UserModel.username == username))
                .limit(1)
            )
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def create(self, user: User) -> User:
        model = UserModel(
            username=user.username,
            email=user.email,
            password_hash=user.password_hash,
            created_at=user.created_at,
        )
        conflict = DuplicateEntityError("User", "email", user.email)
        with translate_store_errors("user create", conflict=conflict):
            self._session.add(model)
            await self._session.flush()
        return self._to_entity(model)
