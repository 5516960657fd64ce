"""
Novel endpoints.

Mirrors the author endpoints: every novel carries its ``href`` and a
``characters`` link to the characters appearing in it.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Body, Response, status
from fastapi.responses import JSONResponse

from novels_api.api.http.characters import serialise_character
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
    CharacterRepoDep,
    NovelRepoDep,
    ResourceId,
)
from novels_api.models.novel import Novel
from novels_api.schemas.novel import (
    NovelCreate,
    NovelPatch,
    NovelRead,
    NovelReplace,
)
from novels_api.settings import app_settings
from novels_api.utils.envelope import (
    resource_links,
    respond,
    respond_collection,
    self_uri,
)
from novels_api.utils.error_handler import handle_http_errors

COLLECTION = "novels"
RELATED = "characters"

router = APIRouter(
    prefix=f"{app_settings.API_PREFIX}/{COLLECTION}", tags=["novels"]
)


def serialise_novel(novel: Novel) -> dict[str, Any]:
    """Serialize a novel and attach its self and characters links."""
    data = NovelRead.model_validate(novel).model_dump(by_alias=True)
    data.update(resource_links(COLLECTION, novel.id, RELATED))
    return data


@router.get("", summary="Get all novels")
@handle_http_errors
async def get_novels(repo: NovelRepoDep) -> JSONResponse:
    novels = await ListResourcesCommand(repo).execute()
    return respond_collection(
        "novels", [serialise_novel(novel) for novel in novels]
    )


@router.get("/{novel_id}", summary="Get a novel")
@handle_http_errors
async def get_novel(
    novel_id: ResourceId, repo: NovelRepoDep
) -> JSONResponse:
    novel = await GetResourceCommand(repo).execute(novel_id)
    return respond("novel", serialise_novel(novel))


@router.get(
    "/{novel_id}/characters", summary="Get the characters of a novel"
)
@handle_http_errors
async def get_novel_characters(
    novel_id: ResourceId,
    repo: NovelRepoDep,
    character_repo: CharacterRepoDep,
) -> JSONResponse:
    """
    List the characters appearing in a novel.

    Raises a 404 envelope when the novel itself does not exist.
    """
    command = ListRelatedCommand(repo, character_repo.get_by_novel)
    characters = await command.execute(novel_id)
    return respond_collection(
        "characters",
        [serialise_character(character) for character in characters],
    )


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Create a new novel",
)
@handle_http_errors
async def create_novel(
    novel_data: NovelCreate, repo: NovelRepoDep
) -> JSONResponse:
    """
    Create a new novel.

    Example:
        POST /api/novels
        {
            "name": "Idoru",
            "year": 1996,
            "authorId": 1
        }
    """
    novel = await CreateResourceCommand(repo).execute(novel_data)
    return respond(
        "novel",
        serialise_novel(novel),
        status_code=status.HTTP_201_CREATED,
        message="Novel was successfully added",
        location=self_uri(COLLECTION, novel.id),
    )


@router.put("/{novel_id}", summary="Replace a novel")
@handle_http_errors
async def replace_novel(
    novel_id: ResourceId,
    repo: NovelRepoDep,
    body: Annotated[dict[str, Any] | None, Body()] = None,
) -> JSONResponse:
    """
    Replace every field of a novel.

    The body must contain ``name``, ``year``, ``plot`` and ``authorId``,
    otherwise 400.
    """
    command = ReplaceResourceCommand(repo, NovelReplace)
    novel = await command.execute(UpdateInput(id=novel_id, data=body or {}))
    return respond(
        "novel", serialise_novel(novel), message="Novel successfully updated"
    )


@router.patch("/{novel_id}", summary="Update some fields of a novel")
@handle_http_errors
async def patch_novel(
    novel_id: ResourceId,
    repo: NovelRepoDep,
    body: Annotated[dict[str, Any] | None, Body()] = None,
) -> JSONResponse:
    command = PatchResourceCommand(repo, NovelPatch)
    novel = await command.execute(UpdateInput(id=novel_id, data=body or {}))
    return respond(
        "novel", serialise_novel(novel), message=PATCH_SUCCESS_MESSAGE
    )


@router.delete(
    "/{novel_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a novel",
)
@handle_http_errors
async def delete_novel(
    novel_id: ResourceId, repo: NovelRepoDep
) -> Response:
    await DeleteResourceCommand(repo).execute(novel_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
