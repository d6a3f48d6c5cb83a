"""Application service (use case) for registration, login, and token checks."""

import logging

from app.application.interfaces import (
    PasswordHasher,
    TokenService,
    UnitOfWork,
    UserRepository,
)
from app.application.schemas.auth import LoginRequest, RegisterRequest
from app.domain.entities import User
from app.domain.exceptions import AuthenticationError, DuplicateEntityError

logger = logging.getLogger(__name__)


class AuthService:
    """Turns credentials into bearer tokens and bearer tokens into users."""

    def __init__(
        self,
        repository: UserRepository,
        hasher: PasswordHasher,
        tokens: TokenService,
        unit_of_work: UnitOfWork,
    ):
        self._repository = repository
        self._hasher = hasher
        self._tokens = tokens
        self._uow = unit_of_work

    async def register(self, data: RegisterRequest) -> tuple[User, str]:
        existing = await self._repository.find_by_email_or_username(data.email, data.username)
        if existing is not None:
            if existing.email == data.email:
                raise DuplicateEntityError("User", "email", data.email)
            raise DuplicateEntityError("User", "username", data.username)

        user = await self._repository.create(
            User(
                username=data.username,
                email=data.email,
                password_hash=self._hasher.hash(data.password),
            )
        )
        await self._uow.commit()
        logger.info("Registered user %s (%s)", user.id, user.username)
        return user, self._issue(user)

    async def login(self, data: LoginRequest) -> tuple[User, str]:
        user = await self._repository.get_by_email(data.email)
        if user is None or not self._hasher.verify(data.password, user.password_hash):
            raise AuthenticationError("Invalid credentials")
        return user, self._issue(user)

    async def authenticate(self, token: str) -> User:
        """Resolve a bearer token to the user it was issued for."""
        claims = self._tokens.verify(token)
        try:
            user_id = int(claims["sub"])
        except (KeyError, TypeError, ValueError):
            raise AuthenticationError("Malformed token subject")

        user = await self._repository.get_by_id(user_id)
        if user is None:
            raise AuthenticationError("User no longer exists")
        return user

    def _issue(self, user: User) -> str:
        return self._tokens.issue(
            {"sub": str(user.id), "username": user.username, "email": user.email}
        )
