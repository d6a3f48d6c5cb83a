"""Abstract interfaces (ports) for password hashing and token issuance."""

from abc import ABC, abstractmethod
from typing import Any


class PasswordHasher(ABC):
    """Port for one-way password digests."""

    @abstractmethod
    def hash(self, secret: str) -> str:
        ...

    @abstractmethod
    def verify(self, secret: str, digest: str) -> bool:
        ...


class TokenService(ABC):
    """Port for signed bearer tokens."""

    @abstractmethod
    def issue(self, claims: dict[str, Any]) -> str:
        """Sign ``claims`` (plus an expiry) into a bearer token."""
        ...

    @abstractmethod
    def verify(self, token: str) -> dict[str, Any]:
        """Return the claims of a valid token. Raises AuthenticationError otherwise."""
        ...
