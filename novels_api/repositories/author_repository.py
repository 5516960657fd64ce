"""
Repository for Author entity.

Example:
    ```python
    from novels_api.repositories.author_repository import AuthorRepository
    from novels_api.storage.db import async_session

    async with async_session() as session:
        repo = AuthorRepository(session)
        authors = await repo.get_all()
        gibson = await repo.get_by_id(1)
    ```
"""

from sqlmodel.ext.asyncio.session import AsyncSession

from novels_api.models.author import Author
from novels_api.repositories.base import BaseRepository


class AuthorRepository(BaseRepository[Author]):
    """Repository for Author entity operations."""

    def __init__(self, session: AsyncSession):
        super().__init__(session, Author)
