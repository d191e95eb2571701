"""Unit tests for the generic SQL repository and query helpers."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlmodel import select

from alexandria.core.database.entities import User
from alexandria.core.database.repositories.base import QueryBuilder, SqlRepository


@pytest.fixture
def mock_session():
    session = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def user_repo(mock_session) -> SqlRepository[User]:
    return SqlRepository(mock_session, User)


class TestSqlRepositoryUnitOfWork:
    @pytest.mark.asyncio
    async def test_create_flushes_without_committing(self, user_repo, mock_session):
        user = User(username="ada", email="ada@example.com")

        result = await user_repo.create(user)

        assert result is user
        mock_session.add.assert_called_once_with(user)
        mock_session.flush.assert_awaited_once()
        mock_session.refresh.assert_awaited_once_with(user)
        mock_session.commit.assert_not_called()

    @pytest.mark.asyncio
    async def test_update_flushes_without_committing(self, user_repo, mock_session):
        user = User(id=3, username="ada", email="ada@example.com")

        await user_repo.update(user)

        mock_session.add.assert_called_once_with(user)
        mock_session.flush.assert_awaited_once()
        mock_session.commit.assert_not_called()

    @pytest.mark.asyncio
    async def test_get_by_id_uses_session_get(self, user_repo, mock_session):
        mock_session.get.return_value = None

        assert await user_repo.get_by_id(42) is None
        mock_session.get.assert_awaited_once_with(User, 42)

    @pytest.mark.asyncio
    async def test_delete_missing_entity_returns_false(self, user_repo, mock_session):
        mock_session.get.return_value = None

        assert await user_repo.delete(7) is False
        mock_session.delete.assert_not_called()

    @pytest.mark.asyncio
    async def test_delete_existing_entity(self, user_repo, mock_session):
        user = User(id=7, username="ada", email="ada@example.com")
        mock_session.get.return_value = user

        assert await user_repo.delete(7) is True
        mock_session.delete.assert_awaited_once_with(user)
        mock_session.flush.assert_awaited_once()


class TestSqlRepositoryQueries:
    @pytest.mark.asyncio
    async def test_list_newest_first_with_filters(self, repos, make_user):
        await make_user("ada")
        await make_user("grace", "educator")
        await make_user("alan", "educator")

        educators = await repos.users.list(filters={"role": "educator"})

        assert [u.username for u in educators] == ["alan", "grace"]

    @pytest.mark.asyncio
    async def test_list_paginates(self, repos, make_user):
        for name in ("u1", "u2", "u3", "u4"):
            await make_user(name)

        page = await repos.users.list(limit=2, offset=1)

        assert [u.username for u in page] == ["u3", "u2"]

    @pytest.mark.asyncio
    async def test_count_with_and_without_filters(self, repos, make_user):
        await make_user("ada")
        await make_user("grace", "educator")

        assert await repos.users.count() == 2
        assert await repos.users.count({"role": "educator"}) == 1
        assert await repos.users.count({"role": None}) == 2


class TestQueryBuilder:
    def test_apply_filters_skips_none_and_unknown_fields(self):
        stmt = QueryBuilder.apply_filters(
            select(User), User, {"role": "educator", "email": None, "no_such_column": "x"}
        )

        compiled = str(stmt.compile(compile_kwargs={"literal_binds": True}))
        assert "users.role = 'educator'" in compiled
        assert "users.email =" not in compiled
        assert "no_such_column" not in compiled

    def test_apply_pagination(self):
        stmt = QueryBuilder.apply_pagination(select(User), 10, 20)

        assert stmt._limit == 10
        assert stmt._offset == 20

    def test_apply_pagination_none_is_a_no_op(self):
        stmt = select(User)

        assert QueryBuilder.apply_pagination(stmt, None, None) is stmt
