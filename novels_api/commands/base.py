"""
Base command for encapsulating business operations.

The Command pattern encapsulates business logic as objects, making it
reusable across handlers and easy to test in isolation from HTTP.

Example:
    ```python
    class GetResourceCommand(BaseCommand[int, T]):
        def __init__(self, repository: BaseRepository[T]):
            self.repository = repository

        async def execute(self, resource_id: int) -> T:
            entity = await self.repository.get_by_id(resource_id)
            if entity is None:
                raise NotFoundError()
            return entity


    @router.get("/{author_id}")
    async def get_author(author_id: int, repo: AuthorRepoDep) -> JSONResponse:
        author = await GetResourceCommand(repo).execute(author_id)
        ...
    ```
"""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

TInput = TypeVar("TInput")
TOutput = TypeVar("TOutput")


class BaseCommand(ABC, Generic[TInput, TOutput]):
    """
    Base command for business operations.

    Commands encapsulate business logic and depend on repositories for
    data access.

    Type Parameters:
        TInput: Input data type.
        TOutput: Output data type.
    """

    @abstractmethod
    async def execute(self, input_data: TInput) -> TOutput:
        """
        Execute the command.

        Args:
            input_data: Input data for the command.

        Returns:
            Result of the command execution.

        Raises:
            AppException: For business rule violations (not found,
                incomplete payload).
            pydantic.ValidationError: When a payload fails its schema.
            SQLAlchemyError: When the datastore rejects the operation.
        """
        pass
