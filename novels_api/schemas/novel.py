from pydantic import Field

from novels_api.schemas.base import CamelModel


class NovelCreate(CamelModel):
    """Input model for creating a novel."""

    name: str = Field(..., min_length=1, description="Novel title")
    year: int | None = Field(default=None, description="Publication year")
    plot: str | None = Field(default=None, description="Plot summary")
    author_id: int | None = Field(default=None, description="Owning author")


class NovelReplace(CamelModel):
    """Input model for a full replace (PUT) of a novel."""

    name: str = Field(..., min_length=1)
    year: int | None
    plot: str | None
    author_id: int | None


class NovelPatch(CamelModel):
    """Input model for a partial update (PATCH) of a novel."""

    name: str | None = None
    year: int | None = None
    plot: str | None = None
    author_id: int | None = None


class NovelRead(CamelModel):
    """Serialized novel, before hypermedia links are attached."""

    id: int
    name: str
    year: int | None = None
    plot: str | None = None
    author_id: int | None = None
