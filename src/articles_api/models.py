"""SQLAlchemy models.

The integer primary key is the store's internal identity and never leaves the
process; clients only ever see ``public_id``.
"""

from datetime import datetime

from sqlalchemy import DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column

from articles_api.db.session import Base

PUBLIC_ID_LENGTH = 36
TITLE_MAX_LENGTH = 200
DESCRIPTION_MAX_LENGTH = 2000


class Article(Base):
    __tablename__ = "articles"

    id: Mapped[int] = mapped_column(primary_key=True)
    public_id: Mapped[str] = mapped_column(String(PUBLIC_ID_LENGTH), unique=True, index=True)
    title: Mapped[str] = mapped_column(String(TITLE_MAX_LENGTH))
    description: Mapped[str] = mapped_column(String(DESCRIPTION_MAX_LENGTH))
    is_published: Mapped[bool] = mapped_column(default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self) -> str:
        return f"Article(id={self.id!r}, public_id={self.public_id!r}, title={self.title!r})"
