import asyncio
from typing import Optional, Union

import mongomock
import pytest
from pydantic import BaseModel
from pymongo.errors import ServerSelectionTimeoutError

from docseq.db.counter_store import CounterStore
from docseq.models.counter import COUNTER_INDEX_KEYS, COUNTER_INDEX_NAME


class AsyncCollection:
    """Awaitable facade over a mongomock collection.

    Each call yields to the event loop first so concurrent allocations interleave.
    """

    def __init__(self, collection):
        self.sync = collection

    async def find_one(self, *args, **kwargs):
        await asyncio.sleep(0)
        return self.sync.find_one(*args, **kwargs)

    async def find_one_and_update(self, *args, **kwargs):
        await asyncio.sleep(0)
        return self.sync.find_one_and_update(*args, **kwargs)

    async def create_index(self, *args, **kwargs):
        return self.sync.create_index(*args, **kwargs)


class FailingCollection:
    """Collection whose server is never reachable."""

    async def find_one(self, *args, **kwargs):
        raise ServerSelectionTimeoutError("No servers found yet")

    async def find_one_and_update(self, *args, **kwargs):
        raise ServerSelectionTimeoutError("No servers found yet")

    async def create_index(self, *args, **kwargs):
        raise ServerSelectionTimeoutError("No servers found yet")


class Record(BaseModel):
    label: str
    flag: bool = False
    increment_field: Optional[Union[int, str]] = None


@pytest.fixture
def counters():
    collection = mongomock.MongoClient().db["_counters"]
    collection.create_index(COUNTER_INDEX_KEYS, name=COUNTER_INDEX_NAME, unique=True)
    return AsyncCollection(collection)


@pytest.fixture
def store(counters):
    return CounterStore(collection=counters)


@pytest.fixture
def failing_store():
    return CounterStore(collection=FailingCollection())


def flag_prefix(doc):
    return "P-TRUE-" if doc.flag else "P-FALSE-"


def flag_suffix(doc):
    return "-S-TRUE" if doc.flag else "-S-FALSE"
