"""
Dependency injection configuration for FastAPI.

Handlers never reach for a module-level session: each request gets its own
``AsyncSession`` from ``get_session`` and repositories are built on top of
it here.

Example:
    ```python
    from novels_api.dependencies import AuthorRepoDep

    @router.get("")
    async def get_authors(repo: AuthorRepoDep) -> JSONResponse:
        authors = await repo.get_all()
        ...
    ```
"""

from typing import Annotated

from fastapi import Depends, Path
from sqlmodel.ext.asyncio.session import AsyncSession

from novels_api.constants import MAX_RESOURCE_ID
from novels_api.repositories.author_repository import AuthorRepository
from novels_api.repositories.character_repository import CharacterRepository
from novels_api.repositories.novel_repository import NovelRepository
from novels_api.storage.db import get_session

# ============================================================================
# Path Parameters
# ============================================================================

# Ids outside the primary key range can never address a record, so they
# fail path validation (404) instead of reaching the driver.
ResourceId = Annotated[int, Path(ge=1, le=MAX_RESOURCE_ID)]


# ============================================================================
# Database Session Dependencies
# ============================================================================

SessionDep = Annotated[AsyncSession, Depends(get_session)]


# ============================================================================
# Repository Dependencies
# ============================================================================


def get_author_repository(session: SessionDep) -> AuthorRepository:
    """Get author repository with injected database session."""
    return AuthorRepository(session)


def get_novel_repository(session: SessionDep) -> NovelRepository:
    """Get novel repository with injected database session."""
    return NovelRepository(session)


def get_character_repository(session: SessionDep) -> CharacterRepository:
    """Get character repository with injected database session."""
    return CharacterRepository(session)


AuthorRepoDep = Annotated[AuthorRepository, Depends(get_author_repository)]
NovelRepoDep = Annotated[NovelRepository, Depends(get_novel_repository)]
CharacterRepoDep = Annotated[
    CharacterRepository, Depends(get_character_repository)
]
