"""
Seed demo classrooms and children

Creates a few classrooms and children spread across every ratio group so the
ratio screens have something to show. Run after init_db / migrations.

Usage: python scripts/seed_demo_data.py
"""

import asyncio
import sys
import os
from datetime import date

# Add parent directory to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from sqlalchemy.future import select
from daycare.db import async_session
from daycare.models.child import Child
from daycare.models.classroom import AssignmentStatus, Classroom, ClassroomAssignment

CLASSROOMS = [
    {"name": "Butterflies", "capacity": 8, "age_group": "Infants"},
    {"name": "Ladybugs", "capacity": 12, "age_group": "Toddlers"},
    {"name": "Sunflowers", "capacity": 20, "age_group": "Preschool / Pre-K"},
]

# (first, last, date of birth, kindergarten flag, classroom name)
CHILDREN = [
    ("Ava", "Nguyen", date(2026, 3, 2), False, "Butterflies"),
    ("Leo", "Martinez", date(2025, 11, 20), False, "Butterflies"),
    ("Mia", "Johnson", date(2024, 12, 5), False, "Ladybugs"),
    ("Noah", "Smith", date(2024, 6, 14), False, "Ladybugs"),
    ("Zoe", "Brown", date(2023, 4, 1), False, "Sunflowers"),
    ("Eli", "Davis", date(2022, 2, 9), False, "Sunflowers"),
    ("Ivy", "Wilson", date(2021, 8, 30), True, "Sunflowers"),
]


async def seed_demo_data():
    async with async_session() as session:
        print("🌱 Seeding demo data...\n")

        result = await session.execute(select(Classroom))
        if result.scalars().first():
            print("⚠️  Classrooms already exist. Skipping seed.")
            return

        rooms = {}
        for data in CLASSROOMS:
            room = Classroom(**data, is_active=True)
            session.add(room)
            rooms[room.name] = room
        await session.flush()
        print(f"   ✅ Created {len(rooms)} classrooms")

        for first, last, dob, kg, room_name in CHILDREN:
            child = Child(
                first_name=first,
                last_name=last,
                date_of_birth=dob,
                is_kindergarten_enrolled=kg,
            )
            session.add(child)
            await session.flush()
            session.add(
                ClassroomAssignment(
                    child_id=child.id,
                    classroom_id=rooms[room_name].id,
                    status=AssignmentStatus.ACTIVE,
                )
            )
        await session.commit()
        print(f"   ✅ Created {len(CHILDREN)} children on rosters")
        print("\n🎉 Demo data seeded.")


if __name__ == "__main__":
    asyncio.run(seed_demo_data())
