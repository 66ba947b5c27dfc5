"""Core application services."""

from .book_service import BookAlreadyExistsError, BookService
from .database.db_manage import DbManageService
from .database.db_session import DbSessionService
from .jwt import JwtGeneratorService, JwtVerificationService
from .user_service import UserService

__all__ = [
    "BookAlreadyExistsError",
    "BookService",
    "DbManageService",
    "DbSessionService",
    "JwtGeneratorService",
    "JwtVerificationService",
    "UserService",
]
