"""Business operations on the book catalog."""

from loguru import logger

from src.library.core.models.principal import LibraryPrincipal
from src.library.core.security import check_access
from src.library.entities.service.book import Book, BookRepository


class BookAlreadyExistsError(Exception):
    """Raised when creating a book whose identifier is already in the catalog."""

    def __init__(self, identifier: str) -> None:
        self.identifier = identifier
        super().__init__(f"Book {identifier} already exists")


class BookService:
    """Authorizes and performs book operations for one principal.

    Every operation checks the access policy before touching the repository.
    """

    def __init__(self, book_repository: BookRepository, principal: LibraryPrincipal):
        self._repository = book_repository
        self._principal = principal

    def create(self, book: Book) -> str:
        check_access("books.create", self._principal)
        if self._repository.find_one_by_identifier(book.id) is not None:
            raise BookAlreadyExistsError(book.id)
        saved = self._repository.save(book)
        logger.info("Created book {} ({})", saved.id, saved.title)
        return saved.id

    def update(self, book: Book) -> str:
        check_access("books.update", self._principal)
        saved = self._repository.save(book)
        logger.info("Updated book {}", saved.id)
        return saved.id

    def find_by_identifier(self, identifier: str) -> Book | None:
        check_access("books.find_by_identifier", self._principal)
        return self._repository.find_one_by_identifier(identifier)

    def find_with_details_by_identifier(self, identifier: str) -> Book | None:
        check_access("books.find_with_details_by_identifier", self._principal)
        return self._repository.find_one_with_details_by_identifier(identifier)

    def find_all(self) -> list[Book]:
        check_access("books.find_all", self._principal)
        return self._repository.find_all()

    def borrow_by_id(self, book_id: str, user_id: str) -> None:
        """Mark a book as borrowed by ``user_id``.

        Unknown books are ignored; borrowing an already borrowed book
        overwrites the borrower.
        """
        check_access("books.borrow_by_id", self._principal)
        book = self._repository.find_one_by_identifier(book_id)
        if book is None:
            logger.debug("Borrow of unknown book {} ignored", book_id)
            return
        book.borrow(user_id)
        self._repository.save(book)
        logger.info("Book {} borrowed by {}", book_id, user_id)

    def return_by_id(self, book_id: str, user_id: str) -> None:
        """Mark a book as available again.

        Unknown books are ignored; returning an available book is a no-op.
        """
        check_access("books.return_by_id", self._principal)
        book = self._repository.find_one_by_identifier(book_id)
        if book is None:
            logger.debug("Return of unknown book {} ignored", book_id)
            return
        book.release()
        self._repository.save(book)
        logger.info("Book {} returned by {}", book_id, user_id)

    def delete_by_identifier(self, identifier: str) -> None:
        check_access("books.delete_by_identifier", self._principal)
        self._repository.delete_by_identifier(identifier)
        logger.info("Deleted book {}", identifier)
