"""Book database table model."""

from sqlalchemy import JSON, Column
from sqlmodel import Field

from src.library.entities.core._base import EntityTable


class BookTable(EntityTable, table=True):
    """Database persistence model for books."""

    __tablename__ = "books"

    isbn: str = Field(index=True)
    title: str
    description: str = ""
    authors: list[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    borrowed: bool = False
    borrowed_by_id: str | None = Field(default=None, foreign_key="users.id")
