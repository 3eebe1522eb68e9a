"""ArticleService tests against a mocked repository (no database)."""

import uuid
from unittest.mock import AsyncMock

import pytest

from articles_api.exceptions import NotFoundError, ValidationError
from articles_api.models import Article
from articles_api.services.article import ArticleService
from tests.factories import make_article


@pytest.fixture
def repository() -> AsyncMock:
    repo = AsyncMock()
    repo.insert.side_effect = lambda article: article
    return repo


@pytest.fixture
def service(repository: AsyncMock) -> ArticleService:
    return ArticleService(repository)


@pytest.mark.asyncio
async def test_create_article_assigns_uuid_and_unpublished(
    service: ArticleService, repository: AsyncMock
) -> None:
    result = await service.create_article("Test Title", "Test Description")

    stored: Article = repository.insert.await_args.args[0]
    assert uuid.UUID(result.id).version == 4
    assert stored.public_id == result.id
    assert result.title == "Test Title"
    assert result.description == "Test Description"
    assert result.is_published is False
    assert stored.is_published is False


@pytest.mark.asyncio
async def test_create_article_generates_fresh_ids(service: ArticleService) -> None:
    first = await service.create_article("Same Title", "Same Description")
    second = await service.create_article("Same Title", "Same Description")
    assert first.id != second.id


@pytest.mark.asyncio
async def test_create_article_validates_before_storing(
    service: ArticleService, repository: AsyncMock
) -> None:
    with pytest.raises(ValidationError) as exc_info:
        await service.create_article("Hi", "Short")

    assert [e.field for e in exc_info.value.errors] == ["title", "description"]
    repository.insert.assert_not_awaited()


@pytest.mark.asyncio
async def test_find_all_articles(service: ArticleService, repository: AsyncMock) -> None:
    repository.list_all.return_value = [
        make_article(public_id="uuid-1", title="Title 1", is_published=True),
        make_article(public_id="uuid-2", title="Title 2"),
    ]

    result = await service.find_all_articles()

    assert [(r.id, r.title, r.is_published) for r in result] == [
        ("uuid-1", "Title 1", True),
        ("uuid-2", "Title 2", False),
    ]


@pytest.mark.asyncio
async def test_find_all_articles_empty(service: ArticleService, repository: AsyncMock) -> None:
    repository.list_all.return_value = []
    assert await service.find_all_articles() == []


@pytest.mark.asyncio
async def test_find_article_by_id(service: ArticleService, repository: AsyncMock) -> None:
    repository.find_by_public_id.return_value = make_article(public_id="test-uuid-123")

    result = await service.find_article_by_id("test-uuid-123")

    assert result.id == "test-uuid-123"
    repository.find_by_public_id.assert_awaited_once_with("test-uuid-123")


@pytest.mark.asyncio
async def test_find_article_by_id_not_found(service: ArticleService, repository: AsyncMock) -> None:
    repository.find_by_public_id.return_value = None

    with pytest.raises(NotFoundError, match="Article not found with id: non-existent-uuid"):
        await service.find_article_by_id("non-existent-uuid")


@pytest.mark.asyncio
async def test_delete_article(service: ArticleService, repository: AsyncMock) -> None:
    article = make_article(public_id="test-uuid-123")
    repository.find_by_public_id.return_value = article

    await service.delete_article("test-uuid-123")

    repository.delete.assert_awaited_once_with(article)


@pytest.mark.asyncio
async def test_delete_article_not_found(service: ArticleService, repository: AsyncMock) -> None:
    repository.find_by_public_id.return_value = None

    with pytest.raises(NotFoundError):
        await service.delete_article("non-existent-uuid")
    repository.delete.assert_not_awaited()


@pytest.mark.asyncio
async def test_store_errors_propagate(service: ArticleService, repository: AsyncMock) -> None:
    repository.list_all.side_effect = ConnectionError("store down")

    with pytest.raises(ConnectionError):
        await service.find_all_articles()
