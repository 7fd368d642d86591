"""
Test the per-request session dependency
"""

import pytest
from sqlalchemy import func, select

from db import database
from db.models import ItemModel


async def count_items(session_factory) -> int:
    async with session_factory() as session:
        return await session.scalar(select(func.count()).select_from(ItemModel))


@pytest.mark.asyncio
async def test_get_db_commits_on_success(session_factory, monkeypatch):
    monkeypatch.setattr(database, "SessionFactory", session_factory)

    dependency = database.get_db()
    session = await dependency.__anext__()
    session.add(ItemModel(name="kept"))
    with pytest.raises(StopAsyncIteration):
        await dependency.__anext__()

    assert await count_items(session_factory) == 1


@pytest.mark.asyncio
async def test_get_db_rolls_back_on_error(session_factory, monkeypatch):
    monkeypatch.setattr(database, "SessionFactory", session_factory)

    dependency = database.get_db()
    session = await dependency.__anext__()
    session.add(ItemModel(name="discarded"))
    await session.flush()
    with pytest.raises(RuntimeError):
        await dependency.athrow(RuntimeError("endpoint failed"))

    assert await count_items(session_factory) == 0
