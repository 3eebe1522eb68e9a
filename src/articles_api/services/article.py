"""Article business logic.

Owns public id generation and not-found semantics. Store errors are left to
propagate; the app's handlers turn them into a Database Error response.
"""

import uuid

from articles_api.exceptions import NotFoundError
from articles_api.logging import get_logger
from articles_api.mapping import ArticlePayload, to_draft, to_payload
from articles_api.models import Article
from articles_api.repositories.article import ArticleRepository

logger = get_logger(__name__)


class ArticleService:
    def __init__(self, repository: ArticleRepository) -> None:
        self.repository = repository

    async def create_article(self, title: str | None, description: str | None) -> ArticlePayload:
        """Validate and store a new, unpublished article.

        Raises:
            ValidationError: when title or description break their constraints.
        """
        draft = to_draft(title, description)
        article = Article(
            public_id=str(uuid.uuid4()),
            title=draft.title,
            description=draft.description,
            is_published=False,
        )
        saved = await self.repository.insert(article)
        logger.info("article_created", article_id=saved.public_id)
        return to_payload(saved)

    async def find_all_articles(self) -> list[ArticlePayload]:
        return [to_payload(article) for article in await self.repository.list_all()]

    async def find_article_by_id(self, public_id: str) -> ArticlePayload:
        """Raises NotFoundError if no article has this public id."""
        return to_payload(await self._get(public_id))

    async def delete_article(self, public_id: str) -> None:
        """Permanently remove an article.

        Not idempotent: deleting an id that is already gone raises NotFoundError.
        """
        article = await self._get(public_id)
        await self.repository.delete(article)
        logger.info("article_deleted", article_id=public_id)

    async def _get(self, public_id: str) -> Article:
        article = await self.repository.find_by_public_id(public_id)
        if article is None:
            raise NotFoundError("Article", public_id)
        return article
