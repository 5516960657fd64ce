"""Repository for Character entity."""

from sqlmodel.ext.asyncio.session import AsyncSession

from novels_api.models.character import Character
from novels_api.repositories.base import BaseRepository


class CharacterRepository(BaseRepository[Character]):
    """Repository for Character entity operations."""

    def __init__(self, session: AsyncSession):
        super().__init__(session, Character)

    async def get_by_novel(self, novel_id: int) -> list[Character]:
        """
        Get every character appearing in a novel.

        Args:
            novel_id: Primary key of the novel.

        Returns:
            Characters of the novel, ordered by id.
        """
        return await self.get_all(novel_id=novel_id)
