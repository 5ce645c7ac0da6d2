"""Pytest configuration and shared fixtures."""

from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import phone_collection.adapters.persistence.models  # noqa: F401
from phone_collection.adapters.persistence.database import Base
from phone_collection.domain.entities.agent import Agent
from phone_collection.domain.entities.collection_case import CollectionCase

T0 = datetime(2024, 1, 1, 8, 0, tzinfo=timezone.utc)


@pytest.fixture
def agents_abc():
    return [
        Agent(id=101, full_name="Aung Aung"),
        Agent(id=102, full_name="Bo Bo"),
        Agent(id=103, full_name="Chit Chit"),
    ]


@pytest.fixture
def five_cases():
    """Cases created at T1 < T2 < ... < T5."""
    return [
        CollectionCase(id=i, created_at=T0 + timedelta(minutes=i))
        for i in range(1, 6)
    ]


@pytest_asyncio.fixture
async def db_session():
    """Session on a fresh in-memory SQLite schema built from the ORM models."""
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    factory = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session
    await engine.dispose()
