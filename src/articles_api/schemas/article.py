"""Article request/response schemas.

The request model only checks JSON shape (strings or absent). Range and
blank checks live in ``articles_api.mapping`` so that every violation is
reported together in our own error envelope.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from articles_api.mapping import ArticlePayload


class ArticleRequest(BaseModel):
    """Body of POST /api/articles."""

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "title": "Understanding Systems",
                    "description": "A guide to systems design basics.",
                }
            ]
        }
    )

    title: str | None = Field(
        default=None,
        description="Title of the article, 3 to 200 characters, required",
    )
    description: str | None = Field(
        default=None,
        description="Description or content of the article, 10 to 2000 characters, required",
    )


class ArticleResponse(BaseModel):
    """Article as returned to clients. ``id`` is the public identifier."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = Field(examples=["550e8400-e29b-41d4-a716-446655440000"])
    title: str = Field(examples=["Understanding Systems"])
    description: str = Field(examples=["A guide to systems design basics."])
    is_published: bool = Field(examples=[False])

    @classmethod
    def from_payload(cls, payload: ArticlePayload) -> "ArticleResponse":
        return cls(
            id=payload.id,
            title=payload.title,
            description=payload.description,
            is_published=payload.is_published,
        )
