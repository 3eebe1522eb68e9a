"""Validation and mapping between request data, domain values and payloads.

Everything here is pure: no I/O, no identifier generation. The service calls
``to_draft`` before touching the store and ``to_payload`` on the way out.

Validation collects every violation instead of stopping at the first one.
Each field is checked for presence (non-blank) and for length independently,
so an empty string fails both checks and yields two entries::

    >>> [e.message for e in validate_article("", "A guide to systems design basics.")]
    ['Title is required and cannot be blank', 'Title must be between 3 and 200 characters']
"""

from dataclasses import dataclass
from typing import cast

from articles_api.exceptions import FieldError, ValidationError
from articles_api.models import DESCRIPTION_MAX_LENGTH, TITLE_MAX_LENGTH, Article

TITLE_MIN_LENGTH = 3
DESCRIPTION_MIN_LENGTH = 10


@dataclass(frozen=True)
class ArticleDraft:
    """Validated title and description, not yet persisted."""

    title: str
    description: str


@dataclass(frozen=True)
class ArticlePayload:
    """Service-level view of a stored article.

    ``id`` is the public identifier. A dataclass rather than a Pydantic model
    so the service stays independent of HTTP serialization; the router turns
    it into ``ArticleResponse``.
    """

    id: str
    title: str
    description: str
    is_published: bool


def _check_text(
    field: str,
    label: str,
    value: str | None,
    min_length: int,
    max_length: int,
) -> list[FieldError]:
    errors: list[FieldError] = []
    if value is None or not value.strip():
        errors.append(FieldError(field, value, f"{label} is required and cannot be blank"))
    # length is only checked on a value that was actually sent
    if value is not None and not min_length <= len(value) <= max_length:
        errors.append(
            FieldError(
                field,
                value,
                f"{label} must be between {min_length} and {max_length} characters",
            )
        )
    return errors


def validate_article(title: str | None, description: str | None) -> list[FieldError]:
    """Return every constraint violation for an article's fields (empty if valid)."""
    return [
        *_check_text("title", "Title", title, TITLE_MIN_LENGTH, TITLE_MAX_LENGTH),
        *_check_text(
            "description",
            "Description",
            description,
            DESCRIPTION_MIN_LENGTH,
            DESCRIPTION_MAX_LENGTH,
        ),
    ]


def to_draft(title: str | None, description: str | None) -> ArticleDraft:
    """Validate raw fields and build the domain value.

    Raises:
        ValidationError: listing all violations, when any field is invalid.
    """
    errors = validate_article(title, description)
    if errors:
        raise ValidationError(errors)
    # no errors means neither field is None
    return ArticleDraft(title=cast(str, title), description=cast(str, description))


def to_payload(article: Article) -> ArticlePayload:
    return ArticlePayload(
        id=article.public_id,
        title=article.title,
        description=article.description,
        is_published=article.is_published,
    )
