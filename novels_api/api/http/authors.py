"""
Author endpoints.

These endpoints use:
- Dependency Injection for the repositories
- Commands for the business logic
- ``handle_http_errors`` to turn every failure into an error envelope

Example:
    GET /api/authors/1
    {
        "type": "success",
        "statusCode": 200,
        "author": {
            "id": 1,
            "name": "William Gibson",
            "nationality": "Unknown",
            "href": "/api/authors/1",
            "novels": "/api/authors/1/novels"
        }
    }
"""

from typing import Annotated, Any

from fastapi import APIRouter, Body, Response, status
from fastapi.responses import JSONResponse

from novels_api.api.http.novels import serialise_novel
from novels_api.commands.resource_commands import (
    CreateResourceCommand,
    DeleteResourceCommand,
    GetResourceCommand,
    ListRelatedCommand,
    ListResourcesCommand,
    PatchResourceCommand,
    ReplaceResourceCommand,
    UpdateInput,
)
from novels_api.constants import PATCH_SUCCESS_MESSAGE
from novels_api.dependencies import (
    AuthorRepoDep,
    NovelRepoDep,
    ResourceId,
)
from novels_api.models.author import Author
from novels_api.schemas.author import (
    AuthorCreate,
    AuthorPatch,
    AuthorRead,
    AuthorReplace,
)
from novels_api.settings import app_settings
from novels_api.utils.envelope import (
    resource_links,
    respond,
    respond_collection,
    self_uri,
)
from novels_api.utils.error_handler import handle_http_errors

COLLECTION = "authors"
RELATED = "novels"

router = APIRouter(
    prefix=f"{app_settings.API_PREFIX}/{COLLECTION}", tags=["authors"]
)


def serialise_author(author: Author) -> dict[str, Any]:
    """Serialize an author and attach its self and novels links."""
    data = AuthorRead.model_validate(author).model_dump(by_alias=True)
    data.update(resource_links(COLLECTION, author.id, RELATED))
    return data


@router.get("", summary="Get all authors")
@handle_http_errors
async def get_authors(repo: AuthorRepoDep) -> JSONResponse:
    authors = await ListResourcesCommand(repo).execute()
    return respond_collection(
        "authors", [serialise_author(author) for author in authors]
    )


@router.get("/{author_id}", summary="Get an author")
@handle_http_errors
async def get_author(
    author_id: ResourceId, repo: AuthorRepoDep
) -> JSONResponse:
    """
    Get a single author.

    Raises a 404 envelope when no author has ``author_id``.
    """
    author = await GetResourceCommand(repo).execute(author_id)
    return respond("author", serialise_author(author))


@router.get("/{author_id}/novels", summary="Get the novels of an author")
@handle_http_errors
async def get_author_novels(
    author_id: ResourceId, repo: AuthorRepoDep, novel_repo: NovelRepoDep
) -> JSONResponse:
    command = ListRelatedCommand(repo, novel_repo.get_by_author)
    novels = await command.execute(author_id)
    return respond_collection(
        "novels", [serialise_novel(novel) for novel in novels]
    )


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Create a new author",
)
@handle_http_errors
async def create_author(
    author_data: AuthorCreate, repo: AuthorRepoDep
) -> JSONResponse:
    """
    Create a new author.

    Returns 201 with the created author and a ``Location`` header pointing
    at it. A duplicate name yields 409, a missing name 422.

    Example:
        POST /api/authors
        {
            "name": "Bruce Sterling"
        }
    """
    author = await CreateResourceCommand(repo).execute(author_data)
    return respond(
        "author",
        serialise_author(author),
        status_code=status.HTTP_201_CREATED,
        message="Author was successfully created",
        location=self_uri(COLLECTION, author.id),
    )


@router.put("/{author_id}", summary="Replace an author")
@handle_http_errors
async def replace_author(
    author_id: ResourceId,
    repo: AuthorRepoDep,
    body: Annotated[dict[str, Any] | None, Body()] = None,
) -> JSONResponse:
    """
    Replace every field of an author.

    The body must contain ``name`` and ``nationality``, otherwise 400.
    """
    command = ReplaceResourceCommand(repo, AuthorReplace)
    author = await command.execute(
        UpdateInput(id=author_id, data=body or {})
    )
    return respond(
        "author",
        serialise_author(author),
        message="Author successfully updated",
    )


@router.patch("/{author_id}", summary="Update some fields of an author")
@handle_http_errors
async def patch_author(
    author_id: ResourceId,
    repo: AuthorRepoDep,
    body: Annotated[dict[str, Any] | None, Body()] = None,
) -> JSONResponse:
    command = PatchResourceCommand(repo, AuthorPatch)
    author = await command.execute(
        UpdateInput(id=author_id, data=body or {})
    )
    return respond(
        "author", serialise_author(author), message=PATCH_SUCCESS_MESSAGE
    )


@router.delete(
    "/{author_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete an author",
)
@handle_http_errors
async def delete_author(
    author_id: ResourceId, repo: AuthorRepoDep
) -> Response:
    await DeleteResourceCommand(repo).execute(author_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
