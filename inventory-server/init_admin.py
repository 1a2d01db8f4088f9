"""
Seed the default administrator account.

Creates an ADMIN account on first start so that categories, assets and
borrow-request approvals can be managed. Credentials come from the
INVENTORY_ADMIN_USERNAME / INVENTORY_ADMIN_PASSWORD environment variables.
"""
import asyncio
import os

from inventory_app.infrastructure.database import get_session_factory, init_db, write_session
from inventory_app.modules.accounts import AccountCreateInput, AccountService
from inventory_app.modules.common.identity import Role


async def create_default_admin():
    """Create the default administrator unless one already exists."""
    await init_db()

    username = os.getenv("INVENTORY_ADMIN_USERNAME", "admin")
    password = os.getenv("INVENTORY_ADMIN_PASSWORD", "admin123")

    async with write_session(get_session_factory()) as db:
        service = AccountService.with_session(db)

        if await service.list_by_role(Role.ADMIN):
            print("An administrator account already exists, nothing to do")
            return

        await service.create_account(
            AccountCreateInput(
                username=username,
                password=password,
                role=Role.ADMIN,
                email=None,
                is_active=True,
            )
        )

    print("=" * 50)
    print("Default administrator created")
    print("=" * 50)
    print(f"username: {username}")
    print(f"password: {password}")
    print("=" * 50)
    print("Change the password after the first login!")
    print("=" * 50)


if __name__ == "__main__":
    asyncio.run(create_default_admin())
