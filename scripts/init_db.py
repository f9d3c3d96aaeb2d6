# scripts/init_db.py
import asyncio
import os
import sys

# Add parent directory to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from storefront.db import build_pool


async def create_tables():
    pool = build_pool()
    try:
        await pool.create_tables()
    finally:
        await pool.dispose()
    print("✅ All missing tables created.")

if __name__ == "__main__":
    asyncio.run(create_tables())
