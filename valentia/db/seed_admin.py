"""
Seed script to create the tables and the first admin user.

Run once with env set:
  ADMIN_USERNAME=admin
  ADMIN_PASSWORD=YourSecurePassword

  python -m valentia.db.seed_admin
"""
import asyncio

from valentia.auth.services import ensure_admin_user
from valentia.core.config import settings
from valentia.core.logging import configure_logging
from valentia.db.init_db import create_tables
from valentia.db.session import AsyncSessionLocal, engine


async def main() -> None:
    await create_tables(engine)
    if not settings.admin_username or not settings.admin_password:
        print("ADMIN_USERNAME / ADMIN_PASSWORD not set; skipping admin user.")
        await engine.dispose()
        return
    async with AsyncSessionLocal() as db:
        admin = await ensure_admin_user(db, settings.admin_username, settings.admin_password)
    print(f"Admin user ready: {admin.username} (role={admin.role})")
    await engine.dispose()


if __name__ == "__main__":
    configure_logging()
    asyncio.run(main())
