from pydantic import Field

from novels_api.schemas.base import CamelModel


class CharacterCreate(CamelModel):
    """Input model for creating a character."""

    name: str = Field(..., min_length=1, description="Character name")
    age: int | None = None
    birth_place: str | None = None
    bio: str | None = None
    occupation: str | None = None
    novel_id: int | None = Field(
        default=None, description="Novel the character appears in"
    )


class CharacterReplace(CamelModel):
    """Input model for a full replace (PUT) of a character."""

    name: str = Field(..., min_length=1)
    age: int | None
    birth_place: str | None
    bio: str | None
    occupation: str | None
    novel_id: int | None


class CharacterPatch(CamelModel):
    """Input model for a partial update (PATCH) of a character."""

    name: str | None = None
    age: int | None = None
    birth_place: str | None = None
    bio: str | None = None
    occupation: str | None = None
    novel_id: int | None = None


class CharacterRead(CamelModel):
    """Serialized character, before hypermedia links are attached."""

    id: int
    name: str
    age: int | None = None
    birth_place: str | None = None
    bio: str | None = None
    occupation: str | None = None
    novel_id: int | None = None
