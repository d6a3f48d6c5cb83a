"""Password hashing and bearer-token adapters (passlib + python-jose)."""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any

from jose import JWTError, jwt
from passlib.context import CryptContext

from app.application.interfaces import PasswordHasher, TokenService
from app.domain.exceptions import AuthenticationError

logger = logging.getLogger(__name__)


class BcryptPasswordHasher(PasswordHasher):
    def __init__(self) -> None:
        self._context = CryptContext(schemes=["bcrypt"], deprecated="auto")

    def hash(self, secret: str) -> str:
        return self._context.hash(secret)

    def verify(self, secret: str, digest: str) -> bool:
        try:
            return self._context.verify(secret, digest)
        except ValueError:
            # Unrecognized or corrupt digest
            logger.warning("Stored password digest could not be parsed")
            return False


class JoseTokenService(TokenService):
    """Signs claims as JWTs with an expiry of ``expire_minutes``."""

    def __init__(self, secret_key: str, algorithm: str, expire_minutes: int):
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._expire_minutes = expire_minutes

    def issue(self, claims: dict[str, Any]) -> str:
        to_encode = dict(claims)
        to_encode["exp"] = datetime.now(timezone.utc) + timedelta(minutes=self._expire_minutes)
        return jwt.encode(to_encode, self._secret_key, algorithm=self._algorithm)

    def verify(self, token: str) -> dict[str, Any]:
        try:
            return jwt.decode(token, self._secret_key, algorithms=[self._algorithm])
        except JWTError as exc:
            logger.debug("Rejected bearer token: %s", exc)
            raise AuthenticationError("Invalid or expired token") from exc
