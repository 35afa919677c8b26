"""
Database utilities for Streamlit UI.

Provides cached database engine and session management for direct database access.
"""

from contextlib import contextmanager

import streamlit as st
from sqlmodel import Session

from config.settings import settings
from utils.database import build_engine, init_db


@st.cache_resource
def get_database_engine():
    """
    Create and cache database engine.

    Uses Streamlit's cache_resource to ensure a single engine instance
    is shared across all sessions and reruns.
    """
    engine = build_engine(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)
    init_db(engine)
    return engine


@contextmanager
def get_db_session():
    """
    Context manager for database sessions.

    Usage:
        with get_db_session() as db:
            jobs, total = JobService(db).list_jobs()

    Ensures proper session cleanup after use.
    """
    engine = get_database_engine()
    with Session(engine) as session:
        yield session
