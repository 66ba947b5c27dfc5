"""Unit tests for roles and the access policy."""

import pytest

from src.library.core.security import (
    ACCESS_POLICY,
    AccessDeniedError,
    Role,
    check_access,
    is_allowed,
)


class TestRoleParsing:
    """Test mapping of token role values to roles."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("USER", Role.USER),
            ("curator", Role.CURATOR),
            ("ROLE_ADMIN", Role.ADMIN),
            ("role_user", Role.USER),
            (" Curator ", Role.CURATOR),
        ],
    )
    def test_parse_known_roles(self, value, expected):
        assert Role.parse(value) is expected

    @pytest.mark.parametrize("value", ["", "LIBRARIAN", "ROLE_", "offline_access"])
    def test_parse_unknown_roles(self, value):
        assert Role.parse(value) is None

    def test_parse_all_drops_unknown_and_duplicates(self):
        roles = Role.parse_all(["USER", "ROLE_USER", "uma_authorization", "curator"])
        assert roles == frozenset({Role.USER, Role.CURATOR})


class TestAccessPolicy:
    """Test the operation to role table."""

    @pytest.mark.parametrize(
        "operation",
        [
            "books.create",
            "books.update",
            "books.find_by_identifier",
            "books.find_with_details_by_identifier",
            "books.find_all",
            "books.borrow_by_id",
            "books.return_by_id",
            "books.delete_by_identifier",
        ],
    )
    def test_admin_has_no_book_access(self, operation):
        assert not is_allowed(operation, {Role.ADMIN})

    @pytest.mark.parametrize(
        "operation,role,allowed",
        [
            ("books.create", Role.CURATOR, True),
            ("books.create", Role.USER, False),
            ("books.update", Role.CURATOR, True),
            ("books.update", Role.USER, False),
            ("books.delete_by_identifier", Role.CURATOR, True),
            ("books.delete_by_identifier", Role.USER, False),
            ("books.find_all", Role.USER, True),
            ("books.find_all", Role.CURATOR, True),
            ("books.borrow_by_id", Role.USER, True),
            ("books.borrow_by_id", Role.CURATOR, False),
            ("books.return_by_id", Role.USER, True),
            ("books.return_by_id", Role.CURATOR, False),
            ("users.find_all", Role.ADMIN, True),
            ("users.find_all", Role.USER, False),
        ],
    )
    def test_single_role(self, operation, role, allowed):
        assert is_allowed(operation, {role}) is allowed

    def test_any_matching_role_is_enough(self):
        assert is_allowed("books.borrow_by_id", {Role.CURATOR, Role.USER})
        assert is_allowed("books.create", {Role.ADMIN, Role.CURATOR})

    def test_no_roles_is_denied(self):
        for operation in ACCESS_POLICY:
            assert not is_allowed(operation, set())

    def test_unknown_operation_is_denied(self):
        assert not is_allowed("books.burn", {Role.USER, Role.CURATOR, Role.ADMIN})


class TestCheckAccess:
    def test_allowed_principal_passes(self, principal_factory):
        check_access("books.find_all", principal_factory(Role.USER))

    def test_denied_principal_raises(self, principal_factory):
        with pytest.raises(AccessDeniedError) as exc_info:
            check_access("books.create", principal_factory(Role.USER))

        assert exc_info.value.operation == "books.create"
        assert exc_info.value.allowed == frozenset({Role.CURATOR})
        assert "books.create" in str(exc_info.value)
