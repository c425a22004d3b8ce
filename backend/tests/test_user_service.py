"""
Notekeeper Backend — User Service Tests
=========================================

What:  Tests for the batched username lookup and the existence check.
How:   Runs against the in-memory SQLite fixture database.
"""

from unittest.mock import AsyncMock
from uuid import uuid4

import pytest
from sqlalchemy.exc import OperationalError

from notekeeper.exceptions import DependencyError, ValidationError
from notekeeper.services.user_service import UserService


class TestResolveUsernames:

    def setup_method(self):
        self.service = UserService()

    @pytest.mark.asyncio
    async def test_resolves_every_id(self, db_session, users):
        alice, bob = users["alice"], users["bob"]

        result = await self.service.resolve_usernames(
            db_session, [alice.id, bob.id, alice.id]
        )

        assert result == {alice.id: "alice", bob.id: "bob"}

    @pytest.mark.asyncio
    async def test_no_ids_skips_the_query(self, mock_db_session):
        assert await self.service.resolve_usernames(mock_db_session, []) == {}
        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_user_fails_whole_lookup(self, db_session, users):
        ghost = uuid4()

        with pytest.raises(DependencyError) as exc_info:
            await self.service.resolve_usernames(db_session, [users["alice"].id, ghost])

        assert exc_info.value.context["missing_user_ids"] == [str(ghost)]

    @pytest.mark.asyncio
    async def test_query_failure_is_dependency_error(self, mock_db_session):
        mock_db_session.execute = AsyncMock(
            side_effect=OperationalError("SELECT", {}, Exception("connection reset"))
        )

        with pytest.raises(DependencyError) as exc_info:
            await self.service.resolve_usernames(mock_db_session, [uuid4()])

        assert exc_info.value.context["error_type"] == "OperationalError"


class TestEnsureUserExists:

    def setup_method(self):
        self.service = UserService()

    @pytest.mark.asyncio
    async def test_existing_user_passes(self, db_session, users):
        await self.service.ensure_user_exists(db_session, users["bob"].id)

    @pytest.mark.asyncio
    async def test_unknown_user_is_validation_error(self, db_session, users):
        with pytest.raises(ValidationError) as exc_info:
            await self.service.ensure_user_exists(db_session, uuid4())

        assert exc_info.value.field == "user"
