"""Shared FastAPI dependencies.

Reusable type aliases and dependency functions that routers import.
Defined here (not in main.py) to avoid circular imports when routers
are registered in main.
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from articles_api.db.session import get_db
from articles_api.repositories.article import SqlArticleRepository
from articles_api.services.article import ArticleService

# scope="function": get_db commits before the response is sent, so a failed
# commit is answered by the SQLAlchemyError handler.
DB = Annotated[AsyncSession, Depends(get_db, scope="function")]


def get_article_service(db: DB) -> ArticleService:
    """Wire the service to a repository over this request's session."""
    return ArticleService(SqlArticleRepository(db))


ArticleServiceDep = Annotated[ArticleService, Depends(get_article_service, scope="function")]
