"""Abstract repository interface (port) for User persistence."""

from abc import ABC, abstractmethod

from app.domain.entities import User


class UserRepository(ABC):
    """Port for user persistence — implemented in the infrastructure layer."""

    @abstractmethod
    async def get_by_id(self, user_id: int) -> User | None:
        """Retrieve a single user by ID."""
        ...

    @abstractmethod
    async def get_by_email(self, email: str) -> User | None:
        """Retrieve a single user by email address."""
        ...

    @abstractmethod
    async def find_by_email_or_username(self, email: str, username: str) -> User | None:
        """Return any user whose email *or* username matches."""
        ...

    @abstractmethod
    async def create(self, user: User) -> User:
        """Persist a new user and return it with the generated ID."""
        ...
