"""Unit tests for the user entity package."""

from src.library.core.security import Role
from src.library.entities.core.user import User, UserRepository


class TestUser:
    def test_full_name(self, test_user: User):
        assert test_user.full_name == "Bruce Wayne"

    def test_roles_accept_strings(self):
        user = User(first_name="Peter", last_name="Parker", roles=["CURATOR"])

        assert user.roles == [Role.CURATOR]


class TestUserRepository:
    def test_create_and_get(self, user_repository: UserRepository, test_user: User):
        created = user_repository.create(test_user)

        assert created == test_user
        found = user_repository.get(test_user.id)
        assert found is not None
        assert found.roles == [Role.USER]

    def test_get_unknown(self, user_repository: UserRepository):
        assert user_repository.get("missing") is None

    def test_get_by_email(self, user_repository: UserRepository, test_user: User):
        user_repository.create(test_user)

        assert user_repository.get_by_email("bruce.wayne@example.com") == test_user
        assert user_repository.get_by_email("nobody@example.com") is None

    def test_list_all_sorted_by_name(self, user_repository: UserRepository):
        user_repository.create(User(first_name="Peter", last_name="Parker"))
        user_repository.create(User(first_name="Bruce", last_name="Wayne"))
        user_repository.create(User(first_name="Bruce", last_name="Banner"))

        names = [user.full_name for user in user_repository.list_all()]

        assert names == ["Bruce Banner", "Peter Parker", "Bruce Wayne"]
