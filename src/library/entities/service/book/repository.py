"""Book repository."""

from datetime import UTC, datetime

from sqlmodel import Session, select

from src.library.entities.core.user import User, UserTable

from .entity import Book
from .table import BookTable

_PERSISTED_FIELDS = ("isbn", "title", "description", "authors", "borrowed", "borrowed_by_id")


class BookRepository:
    """Data-access layer for books."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def find_all(self) -> list[Book]:
        statement = select(BookTable).order_by(BookTable.title)
        rows = self._session.exec(statement).all()
        return [self._to_entity(row) for row in rows]

    def find_one_by_identifier(self, identifier: str) -> Book | None:
        row = self._session.get(BookTable, identifier)
        if row is None:
            return None
        return self._to_entity(row)

    def find_one_with_details_by_identifier(self, identifier: str) -> Book | None:
        """Load a book together with its borrowing user."""
        row = self._session.get(BookTable, identifier)
        if row is None:
            return None
        book = self._to_entity(row)
        if row.borrowed_by_id is not None:
            user_row = self._session.get(UserTable, row.borrowed_by_id)
            if user_row is not None:
                book.borrowed_by = User.model_validate(user_row, from_attributes=True)
        return book

    def save(self, book: Book) -> Book:
        """Insert or update ``book`` and return the stored state."""
        row = self._session.get(BookTable, book.id)
        if row is None:
            row = BookTable(
                id=book.id,
                created_at=book.created_at,
                updated_at=book.updated_at,
                **{field: getattr(book, field) for field in _PERSISTED_FIELDS},
            )
        else:
            for field in _PERSISTED_FIELDS:
                value = getattr(book, field)
                setattr(row, field, list(value) if field == "authors" else value)
            row.updated_at = datetime.now(UTC)
        self._session.add(row)
        self._session.commit()
        self._session.refresh(row)
        return self._to_entity(row)

    def delete_by_identifier(self, identifier: str) -> None:
        row = self._session.get(BookTable, identifier)
        if row is None:
            return
        self._session.delete(row)
        self._session.commit()

    @staticmethod
    def _to_entity(row: BookTable) -> Book:
        return Book.model_validate(row, from_attributes=True)
