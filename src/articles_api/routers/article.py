"""Article endpoints."""

from typing import Any

from fastapi import APIRouter, Response

from articles_api.dependencies import ArticleServiceDep
from articles_api.schemas.article import ArticleRequest, ArticleResponse
from articles_api.schemas.error import ErrorResponse

router = APIRouter(prefix="/api/articles", tags=["Articles"])

_INVALID_INPUT: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorResponse, "description": "Invalid input data"},
}
_NOT_FOUND: dict[int | str, dict[str, Any]] = {
    404: {"model": ErrorResponse, "description": "Article not found"},
}


@router.post(
    "",
    response_model=ArticleResponse,
    status_code=201,
    summary="Create a new article",
    responses=_INVALID_INPUT,
)
async def create_article(body: ArticleRequest, service: ArticleServiceDep) -> ArticleResponse:
    """Create an article from a title and description. Returns it with a generated UUID."""
    result = await service.create_article(body.title, body.description)
    return ArticleResponse.from_payload(result)


@router.get(
    "",
    response_model=list[ArticleResponse],
    status_code=200,
    summary="Get all articles",
)
async def find_all_articles(service: ArticleServiceDep) -> list[ArticleResponse]:
    """List every article; an empty list when there are none."""
    return [ArticleResponse.from_payload(item) for item in await service.find_all_articles()]


@router.get(
    "/{id}",
    response_model=ArticleResponse,
    status_code=200,
    summary="Get article by ID",
    responses=_NOT_FOUND,
)
async def find_article_by_id(id: str, service: ArticleServiceDep) -> ArticleResponse:
    """Fetch one article by its UUID."""
    return ArticleResponse.from_payload(await service.find_article_by_id(id))


@router.delete(
    "/{id}",
    status_code=204,
    response_class=Response,
    summary="Delete article by ID",
    responses=_NOT_FOUND,
)
async def delete_article(id: str, service: ArticleServiceDep) -> Response:
    """Delete one article by its UUID."""
    await service.delete_article(id)
    return Response(status_code=204)
