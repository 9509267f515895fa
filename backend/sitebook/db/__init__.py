"""Database Models Base — SQLAlchemy declarative Base shared by models and Alembic.

Invariants:
    - Every model registers on the one Base metadata
    - Engines and sessions live in infrastructure/database.py

Design Decisions:
    - aiosqlite driver by default, asyncpg when DATABASE_URL points at Postgres
"""
