"""Entity: Book."""

from typing import Any

from pydantic import Field, model_validator

from src.library.entities.core._base import Entity
from src.library.entities.core.user import User


class Book(Entity):
    """Book entity representing an item in the library catalog.

    A book is either available or borrowed; while borrowed it references the
    borrowing user by identifier. ``borrowed_by`` is only populated when the
    book is loaded with details.
    """

    isbn: str = Field(description="ISBN")
    title: str = Field(description="Title")
    description: str = Field(default="", description="Description")
    authors: list[str] = Field(default_factory=list, description="Authors, in order")
    borrowed: bool = Field(default=False, description="Whether the book is borrowed")
    borrowed_by_id: str | None = Field(
        default=None, description="Identifier of the borrowing user"
    )
    borrowed_by: User | None = Field(
        default=None, exclude=True, description="Borrowing user, loaded with details"
    )

    @model_validator(mode="after")
    def _check_borrower(self) -> "Book":
        if self.borrowed != (self.borrowed_by_id is not None):
            raise ValueError("borrowed must be set exactly when a borrower is recorded")
        return self

    def borrow(self, user_id: str) -> None:
        """Mark the book as borrowed by ``user_id``."""
        self.borrowed = True
        self.borrowed_by_id = user_id
        self.borrowed_by = None

    def release(self) -> None:
        """Mark the book as available again."""
        self.borrowed = False
        self.borrowed_by_id = None
        self.borrowed_by = None

    def __eq__(self, other: Any) -> bool:
        """Compare books by business attributes, ignoring timestamps."""
        if not isinstance(other, Book):
            return False

        return (
            self.id == other.id
            and self.isbn == other.isbn
            and self.title == other.title
            and self.description == other.description
            and self.authors == other.authors
            and self.borrowed == other.borrowed
            and self.borrowed_by_id == other.borrowed_by_id
        )

    def __hash__(self) -> int:
        return hash((self.id, self.isbn, self.title))
