"""Reusable seed data fixtures for integration tests."""

import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession

from tests.factories import make_article

SEEDED_IDS = (
    "00000000-0000-4000-8000-000000000001",
    "00000000-0000-4000-8000-000000000002",
    "00000000-0000-4000-8000-000000000003",
)


@pytest_asyncio.fixture
async def seeded_db(db: AsyncSession) -> AsyncSession:
    """Seed 3 articles, one of them published."""
    db.add_all(
        [
            make_article(
                public_id=SEEDED_IDS[0],
                title="Caching Strategies",
                description="When to cache, where to cache and how to invalidate.",
            ),
            make_article(
                public_id=SEEDED_IDS[1],
                title="Queue Fundamentals",
                description="Producers, consumers and delivery guarantees explained.",
                is_published=True,
            ),
            make_article(
                public_id=SEEDED_IDS[2],
                title="Indexing 101",
                description="B-trees, selectivity and reading a query plan.",
            ),
        ]
    )
    await db.commit()
    return db
