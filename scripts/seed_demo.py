#!/usr/bin/env python3
"""
Seed script to create a demo hotel, a demo restaurant and their inventory
"""

import asyncio
import uuid


async def seed_demo_data():
    """Seed demo data for development"""
    from sqlalchemy import select

    from reserva.api.auth import create_access_token
    from reserva.database import SessionLocal, engine, Base
    from reserva.models.business import Business, BusinessKind, Resource, ResourceKind

    # Create tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with SessionLocal() as db:
        # Check if demo businesses already exist
        result = await db.execute(
            select(Business).where(Business.name == "Hotel Miramar")
        )
        existing = result.scalar_one_or_none()

        if existing:
            print("Demo data already exists. Skipping...")
            return

        print("Creating demo businesses...")

        owner_id = uuid.uuid4()
        hotel = Business(id=uuid.uuid4(), name="Hotel Miramar", kind=BusinessKind.HOTEL, owner_id=owner_id)
        restaurant = Business(
            id=uuid.uuid4(), name="La Terraza", kind=BusinessKind.RESTAURANT, owner_id=owner_id
        )
        db.add_all([hotel, restaurant])
        await db.flush()

        rooms = [
            ("101", 2, "Standard double"),
            ("102", 2, "Standard double"),
            ("201", 4, "Deluxe family room"),
            ("301", 6, "Suite with terrace"),
        ]
        for number, capacity, description in rooms:
            db.add(Resource(
                business_id=hotel.id,
                kind=ResourceKind.ROOM,
                number=number,
                capacity=capacity,
                description=description,
            ))

        tables = [
            ("T1", 2, "Window"),
            ("T2", 4, "Indoor"),
            ("T3", 4, "Patio"),
            ("T4", 8, "Private room"),
        ]
        for number, capacity, description in tables:
            db.add(Resource(
                business_id=restaurant.id,
                kind=ResourceKind.TABLE,
                number=number,
                capacity=capacity,
                description=description,
            ))

        await db.commit()

        demo_user_id = uuid.uuid4()
        token = create_access_token(demo_user_id, email="demo@reserva.dev")
        owner_token = create_access_token(owner_id, email="owner@reserva.dev")

        print(f"""
Demo data created successfully!

Hotel: {hotel.name}
  ID: {hotel.id}
  Rooms: {len(rooms)}

Restaurant: {restaurant.name}
  ID: {restaurant.id}
  Tables: {len(tables)}

Demo guest:
  ID: {demo_user_id}
  Access token: {token}

Demo owner (both businesses):
  ID: {owner_id}
  Access token: {owner_token}
""")


if __name__ == "__main__":
    asyncio.run(seed_demo_data())
