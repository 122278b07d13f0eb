"""Database seeding script (one household, four members)"""
import asyncio
import sys
from pathlib import Path

# Add parent directory to path to import household_ledger modules
sys.path.append(str(Path(__file__).parent.parent))

from sqlalchemy import select

from household_ledger.database import AsyncSessionLocal, Base, engine
from household_ledger.models import Household, Member

HOUSEHOLD_NAME = "Maple Street"

MEMBERS = [
    {"email": "john@example.com", "full_name": "John Doe", "payment_link": "https://pay.example.com/john"},
    {"email": "jane@example.com", "full_name": "Jane Smith", "payment_link": "https://pay.example.com/jane"},
    {"email": "bob@example.com", "full_name": "Bob Johnson", "payment_link": None},
    {"email": "alice@example.com", "full_name": "Alice Brown", "payment_link": None},
]


async def create_tables():
    """Create any missing tables"""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def seed_household():
    """Seed the database with a household and its members"""
    async with AsyncSessionLocal() as session:
        result = await session.execute(
            select(Household).where(Household.name == HOUSEHOLD_NAME)
        )
        household = result.scalar_one_or_none()

        if household is None:
            household = Household(name=HOUSEHOLD_NAME, invite_code="MAPLE1")
            session.add(household)
            await session.flush()
            print(f"  Created household '{HOUSEHOLD_NAME}' ({household.id})")
        else:
            print(f"  Household '{HOUSEHOLD_NAME}' already exists, reusing it")

        created_count = 0
        skipped_count = 0

        for member_data in MEMBERS:
            result = await session.execute(
                select(Member).where(Member.email == member_data["email"])
            )
            if result.scalar_one_or_none():
                print(f"  Member '{member_data['email']}' already exists, skipping...")
                skipped_count += 1
                continue

            member = Member(household_id=household.id, **member_data)
            session.add(member)
            await session.flush()
            print(f"  Created member '{member_data['full_name']}' ({member.id})")
            created_count += 1

        await session.commit()

        print("\nSummary:")
        print(f"  Created: {created_count} members")
        print(f"  Skipped: {skipped_count} members (already exist)")
        print(f"\nUse a member id as the X-User-Id header for household {household.id}")


async def main():
    """Main function to run seeding"""
    print("Seeding database...\n")

    try:
        await create_tables()
        await seed_household()
        print("\nDatabase seeding completed successfully!")
    except Exception as e:
        print(f"\nError seeding database: {str(e)}")
        raise
    finally:
        await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
