"""Starter dataset.

Written to disk the first time a collection file is created, and used
in place of a collection whose file can no longer be parsed.
Records are in the same raw shape the JSON repositories store.
"""

from __future__ import annotations

SEED_ITEMS: list[dict] = [
    {"id": "1", "name": "Chali", "description": "Construction support item", "daily_rate": "10", "total_quantity": 100},
    {"id": "2", "name": "Balli", "description": "Construction support beam", "daily_rate": "2", "total_quantity": 150},
    {"id": "3", "name": "Drum", "description": "Storage drum", "daily_rate": "5", "total_quantity": 50},
    {"id": "4", "name": "Batte", "description": "Construction support item", "daily_rate": "1", "total_quantity": 200},
    {"id": "5", "name": "Fatti", "description": "Construction material", "daily_rate": "0.5", "total_quantity": 300},
    {"id": "6", "name": "Rope", "description": "Construction rope", "daily_rate": "0.5", "total_quantity": 100},
    {"id": "7", "name": "Gaddar", "description": "Construction support item", "daily_rate": "1", "total_quantity": 150},
    {"id": "8", "name": "Gohdi", "description": "Construction support item", "daily_rate": "10", "total_quantity": 80},
]

SEED_CUSTOMERS: list[dict] = [
    {
        "id": "1",
        "name": "Raj Construction",
        "phone": "9876543210",
        "address": "123 Main Street, New Delhi",
        "created_at": "2023-01-15T00:00:00+00:00",
    },
    {
        "id": "2",
        "name": "Singh Builders",
        "phone": "8765432109",
        "address": "456 Park Avenue, Mumbai",
        "created_at": "2023-02-20T00:00:00+00:00",
    },
]

# No rentals are seeded: every seeded item starts fully available.
SEED_RENTALS: list[dict] = []


def seed_items() -> list[dict]:
    return [
        {**raw, "currency": "INR", "available_quantity": raw["total_quantity"]}
        for raw in SEED_ITEMS
    ]


def seed_customers() -> list[dict]:
    return [dict(raw) for raw in SEED_CUSTOMERS]


def seed_rentals() -> list[dict]:
    return [dict(raw) for raw in SEED_RENTALS]
