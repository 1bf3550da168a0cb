#!/usr/bin/env python3
"""
Create an admin account, or promote an existing user to admin.

Usage: python create_admin.py <email> [name]
"""
import asyncio
import getpass
import sys

from app.database import async_session, engine
from app.models import User
from app.services.auth import get_user_by_email, hash_password

async def create_admin(email: str, name: str):
    async with async_session() as db:
        user = await get_user_by_email(db, email)
        if user:
            user.role = "admin"
            await db.commit()
            print(f"✓ Promoted {email} to admin")
        else:
            password = getpass.getpass("Admin password (min 6 characters): ")
            if len(password) < 6:
                print("✗ Password too short, aborting")
                return
            db.add(User(name=name, email=email, password_hash=hash_password(password), role="admin"))
            await db.commit()
            print(f"✓ Created admin {email}")
    await engine.dispose()

if __name__ == "__main__":
    if len(sys.argv) < 2:
        print(__doc__)
        sys.exit(1)
    asyncio.run(create_admin(sys.argv[1], sys.argv[2] if len(sys.argv) > 2 else "Admin"))
