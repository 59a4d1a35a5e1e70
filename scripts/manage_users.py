# scripts/manage_users.py

import asyncio
import argparse
from sqlalchemy.future import select
from daycare.db import async_session
from daycare.models.user_profile import UserProfile
from daycare.core.constants import USER_ROLES

# 🎯 PROFILES TO SEED
USERS_TO_SEED = [
    {"first_name": "Dana", "last_name": "Director", "pin_code": "9560", "role": "director"},
    {"first_name": "Sam", "last_name": "Lee", "pin_code": "2900", "role": "staff"},
    {"first_name": "Riley", "last_name": "Aide", "pin_code": "2352", "role": "staff"},
    {"first_name": "Pat", "last_name": "Parent", "pin_code": "0843", "role": "parent"},
]


async def seed_users():
    async with async_session() as session:
        for user_data in USERS_TO_SEED:
            result = await session.execute(
                select(UserProfile).where(UserProfile.pin_code == user_data["pin_code"])
            )
            if result.scalar_one_or_none():
                print(f"⚠️  PIN for '{user_data['first_name']}' already in use. Skipping.")
                continue
            profile = UserProfile(**user_data, is_active=True)
            session.add(profile)
            print(f"✅ Created: {profile.first_name} {profile.last_name} ({profile.role})")

        await session.commit()
        print("✅ Done seeding profiles.\n")


async def add_user(first_name, last_name, pin_code, role):
    async with async_session() as session:
        profile = UserProfile(
            first_name=first_name,
            last_name=last_name,
            pin_code=pin_code,
            role=role,
            is_active=True,
        )
        session.add(profile)
        await session.commit()
        print(f"✅ Created: {first_name} {last_name} ({role}) id={profile.id}")


async def deactivate_users(pin_code=None, role=None):
    async with async_session() as session:
        if pin_code:
            q = select(UserProfile).where(UserProfile.pin_code == pin_code)
        elif role:
            q = select(UserProfile).where(UserProfile.role == role)
        else:
            print("❌ Specify either --pin or --role to deactivate profiles.")
            return

        profiles = (await session.execute(q)).scalars().all()
        if not profiles:
            print("⚠️  No matching profiles found.")
            return
        for profile in profiles:
            profile.is_active = False
        await session.commit()
        print(f"🗑️  Deactivated {len(profiles)} profile(s).")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Manage daycare user profiles")
    parser.add_argument("--seed", action="store_true", help="Seed initial profiles")
    parser.add_argument("--add", action="store_true", help="Add a single profile")
    parser.add_argument("--deactivate", action="store_true", help="Deactivate profiles")
    parser.add_argument("--first-name", type=str)
    parser.add_argument("--last-name", type=str)
    parser.add_argument("--pin", type=str, help="PIN code")
    parser.add_argument("--role", type=str, choices=USER_ROLES)

    args = parser.parse_args()

    if args.seed:
        asyncio.run(seed_users())
    elif args.add:
        if not (args.first_name and args.last_name and args.pin and args.role):
            parser.error("--add needs --first-name, --last-name, --pin and --role")
        asyncio.run(add_user(args.first_name, args.last_name, args.pin, args.role))
    elif args.deactivate:
        asyncio.run(deactivate_users(pin_code=args.pin, role=args.role))
    else:
        print("❗ Usage:")
        print("  python -m scripts.manage_users --seed")
        print("  python -m scripts.manage_users --add --first-name Sam --last-name Lee --pin 1111 --role staff")
        print("  python -m scripts.manage_users --deactivate --role parent")
