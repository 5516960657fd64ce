"""
Tests for the resource commands.

These tests verify that commands correctly encapsulate business logic
and can be tested independently of the HTTP handlers.
"""

from unittest.mock import AsyncMock

import pytest

from novels_api.commands.resource_commands import (
    CreateResourceCommand,
    DeleteResourceCommand,
    GetResourceCommand,
    ListRelatedCommand,
    ListResourcesCommand,
    PatchResourceCommand,
    ReplaceResourceCommand,
    UpdateInput,
)
from novels_api.exceptions import BadRequestError, NotFoundError
from novels_api.models.author import Author
from novels_api.models.character import Character
from novels_api.models.novel import Novel
from novels_api.schemas.author import AuthorCreate, AuthorPatch, AuthorReplace
from novels_api.schemas.character import CharacterReplace


@pytest.fixture
def author_repo(mock_repository):
    mock_repository.model = Author
    mock_repository.update.side_effect = _apply
    return mock_repository


async def _apply(entity, values):
    for key, value in values.items():
        setattr(entity, key, value)
    return entity


class TestGetResourceCommand:
    """Tests for GetResourceCommand."""

    @pytest.mark.asyncio
    async def test_found(self, author_repo):
        author = Author(id=1, name="Frank Herbert")
        author_repo.get_by_id.return_value = author

        result = await GetResourceCommand(author_repo).execute(1)

        assert result is author
        author_repo.get_by_id.assert_called_once_with(1)

    @pytest.mark.asyncio
    async def test_not_found(self, author_repo):
        with pytest.raises(NotFoundError):
            await GetResourceCommand(author_repo).execute(42)


class TestListCommands:
    """Tests for ListResourcesCommand and ListRelatedCommand."""

    @pytest.mark.asyncio
    async def test_list_all(self, author_repo):
        author_repo.get_all.return_value = [Author(id=1, name="A")]

        result = await ListResourcesCommand(author_repo).execute()

        assert len(result) == 1
        author_repo.get_all.assert_called_once_with()

    @pytest.mark.asyncio
    async def test_list_with_filters(self, author_repo):
        await ListResourcesCommand(author_repo).execute({"name": "A"})

        author_repo.get_all.assert_called_once_with(name="A")

    @pytest.mark.asyncio
    async def test_related_requires_parent(self, author_repo):
        """A missing parent is a 404, not an empty list."""
        fetch_related = AsyncMock()

        with pytest.raises(NotFoundError):
            await ListRelatedCommand(author_repo, fetch_related).execute(7)

        fetch_related.assert_not_called()

    @pytest.mark.asyncio
    async def test_related_records(self, author_repo):
        author_repo.get_by_id.return_value = Author(id=7, name="A")
        novels = [Novel(id=1, name="Dune", author_id=7)]
        fetch_related = AsyncMock(return_value=novels)

        result = await ListRelatedCommand(author_repo, fetch_related).execute(7)

        assert result == novels
        fetch_related.assert_called_once_with(7)


class TestCreateResourceCommand:
    """Tests for CreateResourceCommand."""

    @pytest.mark.asyncio
    async def test_create_author(self, author_repo):
        """Test creating an author with the default nationality."""
        author_repo.create.side_effect = _created

        result = await CreateResourceCommand(author_repo).execute(
            AuthorCreate(name="Frank Herbert")
        )

        assert result.id == 1
        assert result.name == "Frank Herbert"
        assert result.nationality == "Unknown"
        created = author_repo.create.call_args.args[0]
        assert isinstance(created, Author)

    @pytest.mark.asyncio
    async def test_create_author_with_null_nationality(self, author_repo):
        """An explicit null is not replaced by the default."""
        author_repo.create.side_effect = _created

        result = await CreateResourceCommand(author_repo).execute(
            AuthorCreate(name="B. Traven", nationality=None)
        )

        assert result.nationality is None


async def _created(entity):
    entity.id = 1
    return entity


class TestReplaceResourceCommand:
    """Tests for ReplaceResourceCommand."""

    @pytest.mark.asyncio
    async def test_replace(self, author_repo):
        author_repo.get_by_id.return_value = Author(
            id=1, name="Old", nationality="Unknown"
        )

        result = await ReplaceResourceCommand(author_repo, AuthorReplace).execute(
            UpdateInput(id=1, data={"name": "New", "nationality": "Irish"})
        )

        assert result.name == "New"
        assert result.nationality == "Irish"

    @pytest.mark.asyncio
    async def test_missing_field_is_bad_request(self, author_repo):
        author_repo.get_by_id.return_value = Author(id=1, name="Old")

        with pytest.raises(BadRequestError):
            await ReplaceResourceCommand(author_repo, AuthorReplace).execute(
                UpdateInput(id=1, data={"name": "New"})
            )

        author_repo.update.assert_not_called()

    @pytest.mark.asyncio
    async def test_null_counts_as_present(self, author_repo):
        author_repo.get_by_id.return_value = Author(
            id=1, name="Old", nationality="Irish"
        )

        result = await ReplaceResourceCommand(author_repo, AuthorReplace).execute(
            UpdateInput(id=1, data={"name": "New", "nationality": None})
        )

        assert result.nationality is None

    @pytest.mark.asyncio
    async def test_not_found_checked_first(self, author_repo):
        """A missing record wins over an incomplete body."""
        with pytest.raises(NotFoundError):
            await ReplaceResourceCommand(author_repo, AuthorReplace).execute(
                UpdateInput(id=1, data={})
            )

    @pytest.mark.asyncio
    async def test_camel_case_keys(self, mock_repository):
        """Wire names and attribute names both satisfy the presence check."""
        mock_repository.model = Character
        mock_repository.update.side_effect = _apply
        mock_repository.get_by_id.return_value = Character(id=1, name="Old")
        data = {
            "name": "Leto",
            "age": 40,
            "birthPlace": "Caladan",
            "bio": None,
            "occupation": "Duke",
            "novel_id": None,
        }

        result = await ReplaceResourceCommand(
            mock_repository, CharacterReplace
        ).execute(UpdateInput(id=1, data=data))

        assert result.birth_place == "Caladan"
        assert result.occupation == "Duke"


class TestPatchResourceCommand:
    """Tests for PatchResourceCommand."""

    @pytest.mark.asyncio
    async def test_patch_only_given_fields(self, author_repo):
        author_repo.get_by_id.return_value = Author(
            id=1, name="Frank Herbert", nationality="Unknown"
        )

        result = await PatchResourceCommand(author_repo, AuthorPatch).execute(
            UpdateInput(id=1, data={"nationality": "American"})
        )

        assert result.name == "Frank Herbert"
        assert result.nationality == "American"
        author_repo.update.assert_called_once()
        assert author_repo.update.call_args.args[1] == {
            "nationality": "American"
        }

    @pytest.mark.asyncio
    async def test_unknown_keys_are_dropped(self, author_repo):
        author_repo.get_by_id.return_value = Author(id=1, name="A")

        await PatchResourceCommand(author_repo, AuthorPatch).execute(
            UpdateInput(id=1, data={"id": 99, "favouriteColour": "red"})
        )

        assert author_repo.update.call_args.args[1] == {}

    @pytest.mark.asyncio
    async def test_not_found(self, author_repo):
        with pytest.raises(NotFoundError):
            await PatchResourceCommand(author_repo, AuthorPatch).execute(
                UpdateInput(id=1, data={"name": "B"})
            )


class TestDeleteResourceCommand:
    """Tests for DeleteResourceCommand."""

    @pytest.mark.asyncio
    async def test_delete(self, author_repo):
        author = Author(id=1, name="A")
        author_repo.get_by_id.return_value = author

        await DeleteResourceCommand(author_repo).execute(1)

        author_repo.delete.assert_called_once_with(author)

    @pytest.mark.asyncio
    async def test_delete_missing(self, author_repo):
        with pytest.raises(NotFoundError):
            await DeleteResourceCommand(author_repo).execute(1)

        author_repo.delete.assert_not_called()
