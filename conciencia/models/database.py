# Copyright (c) 2025 The Conciencia Authors
# This file is part of the Conciencia - Your Therapy Journal project.
# Licensed under the MIT License - see the LICENSE file for details.

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from conciencia.config import load_settings

# ✅ Base model
Base = declarative_base()

_engine = None


def get_engine():
    """
    Engine against the hosted Postgres (Supabase session pooler).
    Only the migration script talks SQL directly; the API goes through REST.
    """
    global _engine
    if _engine is None:
        database_url = load_settings().database_url
        if not database_url:
            raise RuntimeError("DATABASE_URL not configured")
        _engine = create_engine(
            database_url,
            pool_size=5,
            max_overflow=5,
            pool_recycle=1800,     # Recycle every 30 mins
            pool_pre_ping=True     # Validate before using connection
        )
    return _engine


def get_session_factory():
    return sessionmaker(autocommit=False, autoflush=False, bind=get_engine())
