from .book import BookListResource, BookResource
from .user import UserListResource, UserResource

__all__ = ["BookListResource", "BookResource", "UserListResource", "UserResource"]
