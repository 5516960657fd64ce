"""SQLModel table definitions.

Importing this package registers every table on ``SQLModel.metadata``.
"""

from novels_api.models.author import Author
from novels_api.models.character import Character
from novels_api.models.novel import Novel

__all__ = ["Author", "Character", "Novel"]
