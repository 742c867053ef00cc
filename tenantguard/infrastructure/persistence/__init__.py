"""Persistence: async engine, ORM models, repositories and Alembic migrations."""
