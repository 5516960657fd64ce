from sqlalchemy import Column, Text
from sqlmodel import Field, SQLModel


class Novel(SQLModel, table=True):
    """
    SQLModel representing a novel written by an author.

    Attributes:
        id: Primary key identifier for the novel
        name: Title of the novel
        year: Publication year
        plot: Free-text plot summary
        author_id: Owning author, cleared when the author is deleted
    """

    __table_args__ = {"extend_existing": True}

    id: int | None = Field(default=None, primary_key=True)
    name: str = Field(nullable=False)
    year: int | None = None
    plot: str | None = Field(default=None, sa_column=Column(Text))
    author_id: int | None = Field(
        default=None, foreign_key="author.id", ondelete="SET NULL", index=True
    )
