"""Book API router: catalog CRUD plus borrow/return."""

from uuid import UUID

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import JSONResponse
from loguru import logger

from src.library.api.http.deps import get_book_service, get_current_principal
from src.library.api.http.resources import BookListResource, BookResource
from src.library.core.models.principal import LibraryPrincipal
from src.library.core.services import BookService

router = APIRouter(prefix="/books", tags=["books"])

_NOT_FOUND = {status.HTTP_404_NOT_FOUND: {"description": "Book not found"}}


def _reload_failed(book_id: str) -> Response:
    # The write went through but the book cannot be read back
    logger.error("Book {} could not be reloaded after a successful write", book_id)
    return Response(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


@router.get("", response_model=BookListResource)
def get_all_books(
    book_service: BookService = Depends(get_book_service),
) -> BookListResource:
    """List all books."""
    return BookListResource.from_entities(book_service.find_all())


@router.get("/{book_id}", response_model=BookResource, responses=_NOT_FOUND)
def get_book_by_id(
    book_id: UUID,
    book_service: BookService = Depends(get_book_service),
):
    """Get a book by its identifier."""
    book = book_service.find_with_details_by_identifier(str(book_id))
    if book is None:
        return Response(status_code=status.HTTP_404_NOT_FOUND)
    return BookResource.from_entity(book)


@router.post("/{book_id}/borrow", response_model=BookResource, responses=_NOT_FOUND)
def borrow_book_by_id(
    book_id: UUID,
    book_service: BookService = Depends(get_book_service),
    principal: LibraryPrincipal = Depends(get_current_principal),
):
    """Borrow a book for the authenticated user."""
    book = book_service.find_by_identifier(str(book_id))
    if book is None:
        return Response(status_code=status.HTTP_404_NOT_FOUND)

    book_service.borrow_by_id(book.id, principal.identifier)
    borrowed = book_service.find_with_details_by_identifier(book.id)
    if borrowed is None:
        return _reload_failed(book.id)
    return BookResource.from_entity(borrowed)


@router.post("/{book_id}/return", response_model=BookResource, responses=_NOT_FOUND)
def return_book_by_id(
    book_id: UUID,
    book_service: BookService = Depends(get_book_service),
    principal: LibraryPrincipal = Depends(get_current_principal),
):
    """Return a borrowed book."""
    book = book_service.find_by_identifier(str(book_id))
    if book is None:
        return Response(status_code=status.HTTP_404_NOT_FOUND)

    book_service.return_by_id(book.id, principal.identifier)
    returned = book_service.find_with_details_by_identifier(book.id)
    if returned is None:
        return _reload_failed(book.id)
    return BookResource.from_entity(returned)


@router.post(
    "",
    response_model=BookResource,
    status_code=status.HTTP_201_CREATED,
)
def create_book(
    book_resource: BookResource,
    request: Request,
    book_service: BookService = Depends(get_book_service),
):
    """Create a new book."""
    identifier = book_service.create(book_resource.to_entity())

    created = book_service.find_with_details_by_identifier(identifier)
    if created is None:
        return _reload_failed(identifier)

    location = request.app.url_path_for("get_book_by_id", book_id=identifier)
    return JSONResponse(
        status_code=status.HTTP_201_CREATED,
        content=BookResource.from_entity(created).model_dump(mode="json"),
        headers={"Location": str(location)},
    )


@router.put("/{book_id}", response_model=BookResource, responses=_NOT_FOUND)
def update_book(
    book_id: UUID,
    book_resource: BookResource,
    book_service: BookService = Depends(get_book_service),
):
    """Update a book's title, description, ISBN and authors."""
    book = book_service.find_by_identifier(str(book_id))
    if book is None:
        return Response(status_code=status.HTTP_404_NOT_FOUND)

    book.title = book_resource.title
    book.description = book_resource.description
    book.isbn = book_resource.isbn
    book.authors = list(book_resource.authors)
    identifier = book_service.update(book)

    updated = book_service.find_with_details_by_identifier(identifier)
    if updated is None:
        return _reload_failed(identifier)
    return BookResource.from_entity(updated)


@router.delete("/{book_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_book(
    book_id: UUID,
    book_service: BookService = Depends(get_book_service),
) -> Response:
    """Delete a book."""
    book_service.delete_by_identifier(str(book_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
