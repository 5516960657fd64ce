from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel


class Author(SQLModel, table=True):
    """
    SQLModel representing an author entity in the database.

    This is a clean data model without Active Record methods.
    Use AuthorRepository for all database operations.

    Attributes:
        id: Primary key identifier for the author
        name: Name of the author, unique across all authors
        nationality: Nationality of the author. The "Unknown" default is
            applied by ``AuthorCreate`` only when the key is absent, an
            explicit null is stored as NULL
    """

    __table_args__ = (
        UniqueConstraint("name", name="uq_author_name"),
        {"extend_existing": True},
    )

    id: int | None = Field(default=None, primary_key=True)
    name: str = Field(nullable=False)
    nationality: str | None = None
