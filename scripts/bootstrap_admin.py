#!/usr/bin/env python
"""Create the first league admin.

Usage:
    python scripts/bootstrap_admin.py --email organizer@example.com
    python scripts/bootstrap_admin.py --email organizer@example.com --name "Pat Organizer"

Creates the user row when it does not exist yet, then grants admin rights.
Running it again for the same email is a no-op.
"""

import argparse
import asyncio
import os
import sys

from dotenv import load_dotenv
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

load_dotenv()


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Grant league admin rights to a user")
    parser.add_argument("--email", required=True, help="Email of the admin user")
    parser.add_argument("--name", default=None, help="Display name for a new user")
    return parser.parse_args()


async def bootstrap_admin(email: str, display_name: str | None) -> None:
    from volleyleague.schemas.users import AdminUser, LeagueUser
    from volleyleague.utils.db_url import prepare_asyncpg_connection

    database_url = os.getenv("DATABASE_URL")
    if not database_url:
        print("ERROR: DATABASE_URL not configured")
        sys.exit(1)
    url, connect_args = prepare_asyncpg_connection(database_url)
    engine = create_async_engine(url, connect_args=connect_args)
    session_factory = async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False
    )

    address = email.strip().lower()
    async with session_factory() as session:
        result = await session.execute(
            select(LeagueUser).where(func.lower(LeagueUser.email) == address)
        )
        user = result.scalar_one_or_none()
        if user is None:
            user = LeagueUser(email=address, display_name=display_name)
            session.add(user)
            await session.flush()
            print(f"  ADD user: {address}")
        else:
            print(f"  SKIP user: {address} (already exists)")

        if await session.get(AdminUser, user.id) is None:
            session.add(AdminUser(user_id=user.id))  # type: ignore[arg-type]
            print(f"  ADD admin: {address}")
        else:
            print(f"  SKIP admin: {address} (already an admin)")

        await session.commit()

    await engine.dispose()


if __name__ == "__main__":
    args = parse_args()
    print("Bootstrapping league admin...")
    asyncio.run(bootstrap_admin(args.email, args.name))
