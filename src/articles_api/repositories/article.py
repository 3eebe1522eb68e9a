"""Article data-access layer.

Plain queries: no business logic, no HTTP concerns. ``ArticleRepository`` is
the contract the service depends on; ``SqlArticleRepository`` implements it
on an AsyncSession, so it runs against PostgreSQL or SQLite alike.
"""

from typing import Protocol

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from articles_api.models import Article


class ArticleRepository(Protocol):
    async def insert(self, article: Article) -> Article: ...

    async def find_by_public_id(self, public_id: str) -> Article | None: ...

    async def delete(self, article: Article) -> None: ...

    async def list_all(self) -> list[Article]: ...


class SqlArticleRepository:
    """SQLAlchemy-backed article store.

    Writes are flushed immediately so generated keys and constraint errors
    surface inside the calling operation; committing is left to ``get_db``.
    """

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def insert(self, article: Article) -> Article:
        """Add the article and flush so the store assigns its internal id."""
        self.db.add(article)
        await self.db.flush()
        return article

    async def find_by_public_id(self, public_id: str) -> Article | None:
        stmt = select(Article).where(Article.public_id == public_id)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def delete(self, article: Article) -> None:
        await self.db.delete(article)
        await self.db.flush()

    async def list_all(self) -> list[Article]:
        """Return every article in insertion order."""
        result = await self.db.execute(select(Article).order_by(Article.id))
        return list(result.scalars().all())
