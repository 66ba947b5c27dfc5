"""User database table model."""

from sqlalchemy import JSON, Column
from sqlmodel import Field

from src.library.entities.core._base import EntityTable


class UserTable(EntityTable, table=True):
    """Database persistence model for users."""

    __tablename__ = "users"

    first_name: str
    last_name: str
    email: str | None = Field(default=None, index=True)
    roles: list[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
