"""
Tests for the Database resource's unit-of-work helper.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from scholarship_portal.core.database import Database, close_db


@pytest.fixture
def session():
    """A session whose ``begin()`` context records how it was exited."""
    session = MagicMock()
    session.__aenter__ = AsyncMock(return_value=session)
    session.__aexit__ = AsyncMock(return_value=False)

    begin = MagicMock()
    begin.__aenter__ = AsyncMock(return_value=session)
    begin.__aexit__ = AsyncMock(return_value=False)
    session.begin = MagicMock(return_value=begin)
    return session


@pytest.fixture
def database(session):
    database = Database(MagicMock())
    database.session_maker = MagicMock(return_value=session)
    return database


@pytest.mark.asyncio
async def test_transaction_commits_on_clean_exit(database, session):
    async with database.transaction() as db:
        assert db is session

    exit_args = session.begin.return_value.__aexit__.await_args.args
    assert exit_args[0] is None
    session.__aexit__.assert_awaited_once()


@pytest.mark.asyncio
async def test_transaction_rolls_back_and_reraises(database, session):
    with pytest.raises(RuntimeError, match="insert failed"):
        async with database.transaction():
            raise RuntimeError("insert failed")

    exit_args = session.begin.return_value.__aexit__.await_args.args
    assert exit_args[0] is RuntimeError
    # Connection released even on failure
    session.__aexit__.assert_awaited_once()


@pytest.mark.asyncio
async def test_session_is_released(database, session):
    async with database.session() as db:
        assert db is session

    session.begin.assert_not_called()
    session.__aexit__.assert_awaited_once()


@pytest.mark.asyncio
async def test_close_db_disposes_engine():
    engine = MagicMock()
    engine.dispose = AsyncMock()

    await close_db(Database(engine))

    engine.dispose.assert_awaited_once()


@pytest.mark.asyncio
async def test_close_db_without_database():
    await close_db(None)
