"""Repository for Novel entity."""

from sqlmodel.ext.asyncio.session import AsyncSession

from novels_api.models.novel import Novel
from novels_api.repositories.base import BaseRepository


class NovelRepository(BaseRepository[Novel]):
    """Repository for Novel entity operations."""

    def __init__(self, session: AsyncSession):
        super().__init__(session, Novel)

    async def get_by_author(self, author_id: int) -> list[Novel]:
        """
        Get every novel written by an author.

        Args:
            author_id: Primary key of the owning author.

        Returns:
            Novels of the author, ordered by id.
        """
        return await self.get_all(author_id=author_id)
