"""
Commands for resource CRUD operations.

The same commands serve authors, novels and characters: each one is
parameterized by the repository (and, for updates, the input schema) of
the resource it operates on.

Example:
    ```python
    from novels_api.commands.resource_commands import (
        ReplaceResourceCommand,
        UpdateInput,
    )
    from novels_api.schemas.author import AuthorReplace

    command = ReplaceResourceCommand(repo, AuthorReplace)
    author = await command.execute(UpdateInput(id=1, data=body))
    ```
"""

from collections.abc import Awaitable, Callable
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field

from novels_api.commands.base import BaseCommand
from novels_api.exceptions import BadRequestError, NotFoundError
from novels_api.logging import logger
from novels_api.repositories.base import BaseRepository
from novels_api.schemas.base import CamelModel

T = TypeVar("T")
R = TypeVar("R")


# ============================================================================
# Input Models
# ============================================================================


class UpdateInput(BaseModel):  # type: ignore[misc]
    """Input model for replacing or patching a resource."""

    id: int = Field(..., description="Id of the resource to update")
    data: dict[str, Any] = Field(
        default_factory=dict, description="Raw request body"
    )


# ============================================================================
# Commands
# ============================================================================


class GetResourceCommand(BaseCommand[int, T], Generic[T]):
    """
    Command to fetch a single resource by id.

    Raises NotFoundError when no record has the requested id.
    """

    def __init__(self, repository: BaseRepository[T]):
        self.repository = repository

    async def execute(self, resource_id: int) -> T:
        entity = await self.repository.get_by_id(resource_id)
        if entity is None:
            logger.info(
                f"{self.repository.model.__name__} {resource_id} not found"
            )
            raise NotFoundError()
        return entity


class ListResourcesCommand(BaseCommand[dict[str, Any] | None, list[T]]):
    """Command to list every resource, optionally filtered by field values."""

    def __init__(self, repository: BaseRepository[T]):
        self.repository = repository

    async def execute(self, input_data: dict[str, Any] | None = None) -> list[T]:
        return await self.repository.get_all(**(input_data or {}))


class ListRelatedCommand(BaseCommand[int, list[R]], Generic[T, R]):
    """
    Command to list the collection owned by a parent resource.

    The parent must exist; its related records are then loaded with
    ``fetch_related`` (e.g. ``NovelRepository.get_by_author``).
    """

    def __init__(
        self,
        parent_repository: BaseRepository[T],
        fetch_related: Callable[[int], Awaitable[list[R]]],
    ):
        self.parent_repository = parent_repository
        self.fetch_related = fetch_related

    async def execute(self, parent_id: int) -> list[R]:
        await GetResourceCommand(self.parent_repository).execute(parent_id)
        return await self.fetch_related(parent_id)


class CreateResourceCommand(BaseCommand[CamelModel, T]):
    """
    Command to create a resource from a validated input schema.

    Only the fields declared on the schema reach the model, the datastore
    assigns the identifier.
    """

    def __init__(self, repository: BaseRepository[T]):
        self.repository = repository

    async def execute(self, input_data: CamelModel) -> T:
        entity = self.repository.model(**input_data.model_dump())
        return await self.repository.create(entity)


class ReplaceResourceCommand(BaseCommand[UpdateInput, T]):
    """
    Command for a full replace (PUT) of a resource.

    The body must carry every field of ``schema``; presence is checked
    before the values are validated, so an incomplete body is rejected
    with BadRequestError rather than a validation error.
    """

    def __init__(
        self, repository: BaseRepository[T], schema: type[CamelModel]
    ):
        self.repository = repository
        self.schema = schema

    async def execute(self, input_data: UpdateInput) -> T:
        entity = await GetResourceCommand(self.repository).execute(
            input_data.id
        )

        missing = self.schema.missing_fields(input_data.data)
        if missing:
            logger.info(
                f"Incomplete {self.repository.model.__name__} replace, missing: {', '.join(missing)}"
            )
            raise BadRequestError()

        values = self.schema.model_validate(input_data.data).model_dump()
        return await self.repository.update(entity, values)


class PatchResourceCommand(BaseCommand[UpdateInput, T]):
    """
    Command for a partial update (PATCH) of a resource.

    Only the fields present in the body are written; applying the same
    body twice leaves the record in the same state.
    """

    def __init__(
        self, repository: BaseRepository[T], schema: type[CamelModel]
    ):
        self.repository = repository
        self.schema = schema

    async def execute(self, input_data: UpdateInput) -> T:
        entity = await GetResourceCommand(self.repository).execute(
            input_data.id
        )
        values = self.schema.model_validate(input_data.data).model_dump(
            exclude_unset=True
        )
        return await self.repository.update(entity, values)


class DeleteResourceCommand(BaseCommand[int, None]):
    """Command to hard-delete a resource by id."""

    def __init__(self, repository: BaseRepository[T]):
        self.repository = repository

    async def execute(self, resource_id: int) -> None:
        entity = await GetResourceCommand(self.repository).execute(
            resource_id
        )
        await self.repository.delete(entity)
