"""
Test In-Memory Repository
"""

import uuid

import pytest
from typing import Annotated
from pydantic import BaseModel

from db.memory_repository import InMemoryRepository
from models.primary_key import PrimaryKey, PrimaryKeyError
from models.schemas import Item
from services.crud_service import CRUDService


class Tag(BaseModel):
    slug: Annotated[str, PrimaryKey()]
    label: str


@pytest.mark.asyncio
async def test_create_assigns_sequential_ids(item_repo):
    first = await item_repo.create(Item(name="a"))
    second = await item_repo.create(Item(name="b"))

    assert first.id == 1
    assert second.id == 2
    assert await item_repo.read(2) == Item(id=2, name="b")


@pytest.mark.asyncio
async def test_create_ignores_client_id_for_auto_increment(item_repo):
    created = await item_repo.create(Item(id=99, name="a"))

    assert created.id == 1
    assert await item_repo.read(99) is None


@pytest.mark.asyncio
async def test_caller_supplied_keys():
    repo = InMemoryRepository(Tag)

    assert await repo.create(Tag(slug="py", label="Python")) == Tag(slug="py", label="Python")
    # Duplicate key is rejected
    assert await repo.create(Tag(slug="py", label="Other")) is None
    assert (await repo.read("py")).label == "Python"


@pytest.mark.asyncio
async def test_update_and_delete_missing_key(item_repo):
    assert await item_repo.update(1, Item(id=1, name="x")) is False
    assert await item_repo.delete(1) is False


@pytest.mark.asyncio
async def test_update_keeps_addressed_key(item_repo):
    await item_repo.create(Item(name="a"))

    assert await item_repo.update(1, Item(id=5, name="b")) is True
    assert await item_repo.read(1) == Item(id=1, name="b")
    assert await item_repo.read_all() == [Item(id=1, name="b")]


@pytest.mark.asyncio
async def test_delete_removes_item(item_repo):
    await item_repo.create(Item(name="a"))

    assert await item_repo.delete(1) is True
    assert await item_repo.read(1) is None
    assert await item_repo.read_all() == []


class Ticket(BaseModel):
    code: Annotated[str, PrimaryKey(auto_increment=True)] = ""
    title: str


class Device(BaseModel):
    serial: Annotated[uuid.UUID, PrimaryKey(auto_increment=True)]


@pytest.mark.asyncio
async def test_generated_key_takes_declared_type():
    repo = InMemoryRepository(Ticket)
    service = CRUDService(Ticket, repo)

    created = await repo.create(Ticket(title="a"))

    assert created.code == "1"
    assert await service.get("1") == created


def test_generated_key_must_fit_declared_type():
    with pytest.raises(PrimaryKeyError):
        InMemoryRepository(Device)
