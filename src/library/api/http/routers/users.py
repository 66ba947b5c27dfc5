"""User API router."""

from fastapi import APIRouter, Depends, Response, status

from src.library.api.http.deps import get_current_principal, get_user_service
from src.library.api.http.resources import UserListResource, UserResource
from src.library.core.models.principal import LibraryPrincipal
from src.library.core.services import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=UserListResource)
def get_all_users(
    user_service: UserService = Depends(get_user_service),
) -> UserListResource:
    """List all users."""
    return UserListResource(
        users=[UserResource.from_entity(user) for user in user_service.find_all()]
    )


@router.get("/me", response_model=UserResource)
def get_me(
    principal: LibraryPrincipal = Depends(get_current_principal),
) -> UserResource:
    """Return the authenticated user."""
    return UserResource.from_principal(principal)


@router.get(
    "/{user_id}",
    response_model=UserResource,
    responses={status.HTTP_404_NOT_FOUND: {"description": "User not found"}},
)
def get_user_by_id(
    user_id: str,
    user_service: UserService = Depends(get_user_service),
):
    """Get a user by identifier."""
    user = user_service.find_by_identifier(user_id)
    if user is None:
        return Response(status_code=status.HTTP_404_NOT_FOUND)
    return UserResource.from_entity(user)
