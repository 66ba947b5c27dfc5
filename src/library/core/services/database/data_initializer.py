"""Sample users and books for development databases."""

from loguru import logger
from sqlmodel import Session, select

from src.library.core.security import Role
from src.library.entities.core.user import User, UserRepository, UserTable
from src.library.entities.service.book import Book, BookRepository

USER_BRUCE_WAYNE_IDENTIFIER = "c47641ee-5dbf-4f5a-9a3b-9f3f9b9a4a11"
USER_BRUCE_BANNER_IDENTIFIER = "69c10a4d-3fb9-4a0f-8ac4-0f3d3a1b0c22"
USER_PETER_PARKER_IDENTIFIER = "40c5ad0f-49a7-4d55-9c1c-5d5a2b7e3f33"
USER_CLARK_KENT_IDENTIFIER = "0d2c04f1-e6c8-4a83-a5a1-7e1a4c9d8e44"

BOOK_CLEAN_CODE_IDENTIFIER = "f9bf70d6-e56d-4cab-be9c-4a4f1f8e8b01"
BOOK_CLOUD_NATIVE_IDENTIFIER = "3038627d-627e-448d-8422-0a5705c9ca02"
BOOK_SPRING_ACTION_IDENTIFIER = "9fb9a2c5-3c58-4e13-a5c6-1b6b0a3b4c03"
BOOK_DEVOPS_IDENTIFIER = "02c3d1fe-a2ab-4e82-a0e5-1d7fd1b9cd04"
BOOK_CONTINUOUS_DELIVERY_IDENTIFIER = "7c4a8e5b-1f0c-4a57-9d2e-3b6c8d9e0f05"
BOOK_REFACTORING_IDENTIFIER = "b6e2f3a4-5c6d-4e7f-8a9b-0c1d2e3f4a06"

SAMPLE_USERS: tuple[User, ...] = (
    User(
        id=USER_BRUCE_WAYNE_IDENTIFIER,
        first_name="Bruce",
        last_name="Wayne",
        email="bruce.wayne@example.com",
        roles=[Role.USER],
    ),
    User(
        id=USER_BRUCE_BANNER_IDENTIFIER,
        first_name="Bruce",
        last_name="Banner",
        email="bruce.banner@example.com",
        roles=[Role.USER],
    ),
    User(
        id=USER_PETER_PARKER_IDENTIFIER,
        first_name="Peter",
        last_name="Parker",
        email="peter.parker@example.com",
        roles=[Role.CURATOR],
    ),
    User(
        id=USER_CLARK_KENT_IDENTIFIER,
        first_name="Clark",
        last_name="Kent",
        email="clark.kent@example.com",
        roles=[Role.ADMIN],
    ),
)

SAMPLE_BOOKS: tuple[Book, ...] = (
    Book(
        id=BOOK_CLEAN_CODE_IDENTIFIER,
        isbn="9780132350884",
        title="Clean Code",
        description="Even bad code can function. But if code isn't clean, it can "
        "bring a development organization to its knees.",
        authors=["Robert C. Martin"],
    ),
    Book(
        id=BOOK_CLOUD_NATIVE_IDENTIFIER,
        isbn="9781449374648",
        title="Cloud Native Java",
        description="Designing Resilient Systems with Spring Boot, Spring Cloud, "
        "and Cloud Foundry.",
        authors=["Josh Long", "Kenny Bastani"],
    ),
    Book(
        id=BOOK_SPRING_ACTION_IDENTIFIER,
        isbn="9781617292545",
        title="Spring Boot in Action",
        description="A developer-focused guide to writing applications using "
        "Spring Boot.",
        authors=["Craig Walls"],
    ),
    Book(
        id=BOOK_DEVOPS_IDENTIFIER,
        isbn="9781430245698",
        title="DevOps for Developers",
        description="Integrate development and operations, the agile way.",
        authors=["Michael Hüttermann"],
    ),
    Book(
        id=BOOK_CONTINUOUS_DELIVERY_IDENTIFIER,
        isbn="9780321601919",
        title="Continuous Delivery",
        description="Reliable software releases through build, test, and "
        "deployment automation.",
        authors=["Jez Humble", "David Farley"],
    ),
    Book(
        id=BOOK_REFACTORING_IDENTIFIER,
        isbn="9780134757599",
        title="Refactoring",
        description="Improving the design of existing code.",
        authors=["Martin Fowler"],
    ),
)


class DataInitializer:
    """Seeds the sample users and books into an empty database."""

    def __init__(self, session: Session) -> None:
        self._session = session
        self._user_repository = UserRepository(session)
        self._book_repository = BookRepository(session)

    def is_empty(self) -> bool:
        return self._session.exec(select(UserTable)).first() is None

    def initialize(self, force: bool = False) -> bool:
        """Insert sample data; returns False when data already exists.

        With ``force`` the existing rows are left in place and only missing
        sample records are added.
        """
        if not force and not self.is_empty():
            logger.info("Database already contains data; skipping seeding")
            return False

        created_users = 0
        for user in SAMPLE_USERS:
            if self._user_repository.get(user.id) is None:
                self._user_repository.create(user.model_copy())
                created_users += 1

        created_books = 0
        for book in SAMPLE_BOOKS:
            if self._book_repository.find_one_by_identifier(book.id) is None:
                self._book_repository.save(book.model_copy(deep=True))
                created_books += 1

        logger.info(
            "Seeded {} users and {} books", created_users, created_books
        )
        return True
