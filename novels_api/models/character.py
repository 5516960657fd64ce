from sqlalchemy import Column, Text
from sqlmodel import Field, SQLModel


class Character(SQLModel, table=True):
    """
    SQLModel representing a character appearing in a novel.

    Attributes:
        id: Primary key identifier for the character
        name: Name of the character
        age: Age of the character
        birth_place: Where the character was born
        bio: Free-text biography
        occupation: What the character does for a living
        novel_id: Novel the character belongs to, cleared when it is deleted
    """

    __table_args__ = {"extend_existing": True}

    id: int | None = Field(default=None, primary_key=True)
    name: str = Field(nullable=False)
    age: int | None = None
    birth_place: str | None = None
    bio: str | None = Field(default=None, sa_column=Column(Text))
    occupation: str | None = None
    novel_id: int | None = Field(
        default=None, foreign_key="novel.id", ondelete="SET NULL", index=True
    )
