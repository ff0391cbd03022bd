"""Create an admin user.

Registration always assigns the ``user`` role, so the first admin has to be
provisioned here. Run from the project root::

    python scripts/create_admin.py "Ada Admin" ada ada@example.com 'a-strong-password'
"""
import argparse
import asyncio
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.auth.security import hash_password
from app.config import get_settings
from app.core.exceptions import ConflictError
from app.dependencies import create_engine, create_session_factory
from app.models.user import UserRole
from app.repositories.user_repository import UserRepository
from app.schemas.user import MAX_PASSWORD_BYTES, NewUser, password_too_long
from app.utils.logging import setup_logging


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create a user-directory admin account.")
    parser.add_argument("name", help="Display name")
    parser.add_argument("username", help="Username (1-50 chars)")
    parser.add_argument("email", help="Email address")
    parser.add_argument("password", help=f"Password (8 chars to {MAX_PASSWORD_BYTES} UTF-8 bytes)")
    return parser.parse_args(argv)


async def create_admin(args: argparse.Namespace) -> int:
    if not 1 <= len(args.username.strip()) <= 50:
        print("Invalid username length.", file=sys.stderr)
        return 1
    if len(args.password) < 8 or password_too_long(args.password):
        print(
            f"Password must be at least 8 characters and at most {MAX_PASSWORD_BYTES} bytes.",
            file=sys.stderr,
        )
        return 1

    settings = get_settings()
    engine = create_engine(settings)
    session_factory = create_session_factory(engine)

    try:
        async with session_factory() as session:
            repo = UserRepository(session)
            try:
                user = await repo.insert(
                    NewUser(
                        name=args.name,
                        username=args.username.strip(),
                        email=args.email,
                        password_hash=await asyncio.to_thread(hash_password, args.password),
                        role=UserRole.ADMIN,
                    )
                )
            except ConflictError:
                print(f"User '{args.username}' or '{args.email}' already exists.", file=sys.stderr)
                return 1
            await session.commit()
    finally:
        await engine.dispose()

    print(f"Created admin '{user.username}' with id {user.id}.")
    return 0


def main() -> int:
    setup_logging(get_settings().log_level, "console")
    return asyncio.run(create_admin(_parse_args()))


if __name__ == "__main__":
    sys.exit(main())
