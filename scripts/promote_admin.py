"""
Grant the admin role to a user directly in the database. Needed once to create
the first admin, since PATCH /users/set-admin requires an admin caller.
Run: python -m scripts.promote_admin someone@example.com  (from backend dir, with DB running).
"""
import asyncio
import os
import sys

# Add parent so we can import from backend
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from database import close_db, init_db
from schemas.enums import UserRole


async def promote(email: str) -> None:
    store = await init_db()
    try:
        outcome = await store.users.update_one({"email": email}, {"role": UserRole.ADMIN.value}, upsert=True)
        if outcome.upserted_id:
            print(f"Created admin profile for {email}")
        elif outcome.modified_count:
            print(f"Promoted {email} to admin")
        else:
            print(f"{email} is already an admin")
    finally:
        await close_db()


if __name__ == "__main__":
    if len(sys.argv) != 2:
        print("Usage: python -m scripts.promote_admin <email>")
        sys.exit(2)
    asyncio.run(promote(sys.argv[1]))
