"""Issue a bearer token for a local user (signup/signin live in a separate auth service).

Usage:
    PYTHONPATH=src python scripts/issue_token.py dev@example.com
    PYTHONPATH=src python scripts/issue_token.py dev@example.com --first-name Ada --minutes 60
"""

import argparse
import asyncio
from datetime import timedelta

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from core.auth import create_access_token
from core.config import get_settings
from models import User


async def issue(email: str, first_name: str | None, last_name: str | None, minutes: int) -> str:
    """Get or create the user with `email` and return a signed access token."""
    settings = get_settings()
    engine = create_async_engine(settings.database_url, echo=False)
    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with session_factory() as session:
        try:
            result = await session.execute(select(User).where(User.email == email))
            user = result.scalar_one_or_none()
            if user is None:
                user = User(email=email, first_name=first_name, last_name=last_name)
                session.add(user)
                await session.flush()
                print(f'Created user {user.id} ({email})')
            await session.commit()
            return create_access_token(
                user.id,
                settings,
                email=email,
                expires_delta=timedelta(minutes=minutes),
            )
        except Exception:
            await session.rollback()
            raise
        finally:
            await engine.dispose()


def main() -> None:
    """CLI entry point."""
    settings = get_settings()
    if not settings.jwt_secret:
        print('ERROR: JWT_SECRET must be set to sign tokens.')
        raise SystemExit(1)
    parser = argparse.ArgumentParser(description='Issue an access token for a local user.')
    parser.add_argument('email', help='Email of the user (created if missing)')
    parser.add_argument('--first-name', default=None)
    parser.add_argument('--last-name', default=None)
    parser.add_argument(
        '--minutes', type=int, default=settings.jwt_expire_minutes,
        help='Token lifetime in minutes',
    )
    args = parser.parse_args()

    token = asyncio.run(issue(args.email, args.first_name, args.last_name, args.minutes))
    print(token)


if __name__ == '__main__':
    main()
