"""
Character endpoints.

Characters are leaves: they carry an ``href`` but no related collection.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Body, Response, status
from fastapi.responses import JSONResponse

from novels_api.commands.resource_commands import (
    CreateResourceCommand,
    DeleteResourceCommand,
    GetResourceCommand,
    ListResourcesCommand,
    PatchResourceCommand,
    ReplaceResourceCommand,
    UpdateInput,
)
from novels_api.constants import PATCH_SUCCESS_MESSAGE
from novels_api.dependencies import CharacterRepoDep, ResourceId
from novels_api.models.character import Character
from novels_api.schemas.character import (
    CharacterCreate,
    CharacterPatch,
    CharacterRead,
    CharacterReplace,
)
from novels_api.settings import app_settings
from novels_api.utils.envelope import (
    resource_links,
    respond,
    respond_collection,
    self_uri,
)
from novels_api.utils.error_handler import handle_http_errors

COLLECTION = "characters"

router = APIRouter(
    prefix=f"{app_settings.API_PREFIX}/{COLLECTION}", tags=["characters"]
)


def serialise_character(character: Character) -> dict[str, Any]:
    """Serialize a character and attach its self link."""
    data = CharacterRead.model_validate(character).model_dump(by_alias=True)
    data.update(resource_links(COLLECTION, character.id))
    return data


@router.get("", summary="Get all characters")
@handle_http_errors
async def get_characters(repo: CharacterRepoDep) -> JSONResponse:
    characters = await ListResourcesCommand(repo).execute()
    return respond_collection(
        "characters",
        [serialise_character(character) for character in characters],
    )


@router.get("/{character_id}", summary="Get a character")
@handle_http_errors
async def get_character(
    character_id: ResourceId, repo: CharacterRepoDep
) -> JSONResponse:
    character = await GetResourceCommand(repo).execute(character_id)
    return respond("character", serialise_character(character))


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Create a new character",
)
@handle_http_errors
async def create_character(
    character_data: CharacterCreate, repo: CharacterRepoDep
) -> JSONResponse:
    """
    Create a new character.

    Example:
        POST /api/characters
        {
            "name": "Colin Laney",
            "age": 30,
            "birthPlace": "Gainesville",
            "novelId": 1
        }
    """
    character = await CreateResourceCommand(repo).execute(character_data)
    return respond(
        "character",
        serialise_character(character),
        status_code=status.HTTP_201_CREATED,
        message="Character was successfully created",
        location=self_uri(COLLECTION, character.id),
    )


@router.put("/{character_id}", summary="Replace a character")
@handle_http_errors
async def replace_character(
    character_id: ResourceId,
    repo: CharacterRepoDep,
    body: Annotated[dict[str, Any] | None, Body()] = None,
) -> JSONResponse:
    """
    Replace every field of a character.

    The body must contain ``name``, ``age``, ``birthPlace``, ``bio``,
    ``occupation`` and ``novelId``, otherwise 400.
    """
    command = ReplaceResourceCommand(repo, CharacterReplace)
    character = await command.execute(
        UpdateInput(id=character_id, data=body or {})
    )
    return respond(
        "character",
        serialise_character(character),
        message="Character successfully updated",
    )


@router.patch(
    "/{character_id}", summary="Update some fields of a character"
)
@handle_http_errors
async def patch_character(
    character_id: ResourceId,
    repo: CharacterRepoDep,
    body: Annotated[dict[str, Any] | None, Body()] = None,
) -> JSONResponse:
    command = PatchResourceCommand(repo, CharacterPatch)
    character = await command.execute(
        UpdateInput(id=character_id, data=body or {})
    )
    return respond(
        "character",
        serialise_character(character),
        message=PATCH_SUCCESS_MESSAGE,
    )


@router.delete(
    "/{character_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a character",
)
@handle_http_errors
async def delete_character(
    character_id: ResourceId, repo: CharacterRepoDep
) -> Response:
    await DeleteResourceCommand(repo).execute(character_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
