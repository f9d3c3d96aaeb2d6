"""
Seed Sample Products

Populates the products table with a small catalog for local development.
It is SAFE to run multiple times (idempotent): products are matched by name.

Usage:
    python scripts/seed_products.py
"""

import asyncio
import sys
import os
from decimal import Decimal

# -------------------------------------------------------------------
# WINDOWS EVENT LOOP FIX (CRITICAL)
# -------------------------------------------------------------------
if sys.platform.startswith("win"):
    asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())

# Add parent directory to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from sqlalchemy.future import select
from storefront.db import build_pool
from storefront.models.product import Product

SAMPLE_PRODUCTS = [
    {"name": "Ceramic Coating Kit", "price": Decimal("49.99"), "category": "Coatings",
     "description": "Nine month hydrophobic protection for paint and glass."},
    {"name": "Microfiber Towel Pack", "price": Decimal("12.50"), "category": "Accessories",
     "description": "Six plush 40x40cm towels."},
    {"name": "Wheel Cleaner", "price": Decimal("9.99"), "category": "Cleaners",
     "description": "Acid-free iron remover, 500ml."},
    {"name": "Interior Detailer", "price": Decimal("7.25"), "category": "Cleaners",
     "description": "Matte finish dashboard and trim spray."},
]


async def seed_products():
    pool = build_pool()
    try:
        async with pool.session() as db:
            created = 0
            for data in SAMPLE_PRODUCTS:
                result = await db.execute(select(Product).where(Product.name == data["name"]))
                if result.scalar_one_or_none():
                    print(f"⏭️  {data['name']} already exists.")
                    continue
                db.add(Product(**data))
                created += 1
            await db.commit()
            print(f"✅ Seeded {created} products.")
    finally:
        await pool.dispose()


if __name__ == "__main__":
    asyncio.run(seed_products())
