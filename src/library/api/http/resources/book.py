"""Wire representations of books and conversions from the domain entity."""

from uuid import UUID

from pydantic import BaseModel, Field

from src.library.entities.service.book import Book


class BookResource(BaseModel):
    """A book as sent and received over HTTP.

    ``identifier`` may be omitted when creating a book; one is generated.
    """

    identifier: UUID | None = Field(default=None, description="Book identifier")
    isbn: str = Field(min_length=1, max_length=20, description="ISBN")
    title: str = Field(min_length=1, max_length=512, description="Title")
    description: str = Field(default="", max_length=4096, description="Description")
    authors: list[str] = Field(default_factory=list, description="Authors, in order")
    borrowed: bool = Field(default=False, description="Whether the book is borrowed")

    @classmethod
    def from_entity(cls, book: Book) -> "BookResource":
        return cls(
            identifier=UUID(book.id),
            isbn=book.isbn,
            title=book.title,
            description=book.description,
            authors=list(book.authors),
            borrowed=book.borrowed,
        )

    def to_entity(self) -> Book:
        """Build a new, available book from this resource."""
        values = {
            "isbn": self.isbn,
            "title": self.title,
            "description": self.description,
            "authors": list(self.authors),
        }
        if self.identifier is not None:
            values["id"] = str(self.identifier)
        return Book(**values)


class BookListResource(BaseModel):
    books: list[BookResource] = Field(default_factory=list)

    @classmethod
    def from_entities(cls, books: list[Book]) -> "BookListResource":
        return cls(books=[BookResource.from_entity(book) for book in books])
