from pydantic import Field

from novels_api.schemas.base import CamelModel


class AuthorCreate(CamelModel):
    """Input model for creating an author."""

    name: str = Field(..., min_length=1, description="Author name")
    nationality: str | None = Field(
        default="Unknown", description="Author nationality"
    )


class AuthorReplace(CamelModel):
    """Input model for a full replace (PUT) of an author."""

    name: str = Field(..., min_length=1)
    nationality: str | None


class AuthorPatch(CamelModel):
    """Input model for a partial update (PATCH) of an author."""

    name: str | None = None
    nationality: str | None = None


class AuthorRead(CamelModel):
    """Serialized author, before hypermedia links are attached."""

    id: int
    name: str
    nationality: str | None = None
