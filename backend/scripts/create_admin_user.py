#!/usr/bin/env python3
"""
create_admin_user.py - bootstrap the first account

Creates the user unless an account with the same email or username
already exists, so it is safe to run on every deploy.

Usage:
    python scripts/create_admin_user.py --username admin --email admin@example.com --password s3cret!
"""

import argparse
import asyncio
import logging

from app.application.schemas.auth import RegisterRequest
from app.config import get_settings
from app.domain.exceptions import DuplicateEntityError
from app.infrastructure.database import Base
from app.infrastructure.database.session import (
    dispose_engine,
    get_session_factory,
    init_engine,
)
from app.infrastructure.dependencies import build_auth_service
from app.infrastructure.logging.log_config import setup_logging

logger = logging.getLogger("create_admin_user")


async def run(username: str, email: str, password: str) -> None:
    settings = get_settings()
    engine = init_engine(settings.database_url)
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

        async with get_session_factory()() as session:
            service = build_auth_service(session)
            try:
                user, _ = await service.register(
                    RegisterRequest(username=username, email=email, password=password)
                )
            except DuplicateEntityError as exc:
                logger.info("Skipped: %s", exc.message)
                return
            logger.info("Created user %s (%s, id=%s)", user.username, user.email, user.id)
    finally:
        await dispose_engine()


def main() -> None:
    parser = argparse.ArgumentParser(description="Create the initial user account")
    parser.add_argument("--username", default="admin")
    parser.add_argument("--email", default="admin@example.com")
    parser.add_argument("--password", required=True)
    args = parser.parse_args()

    setup_logging()
    asyncio.run(run(args.username, args.email, args.password))


if __name__ == "__main__":
    main()
