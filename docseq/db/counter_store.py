# docseq/db/counter_store.py
import logging
from typing import Any, Optional

from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError, PyMongoError

from docseq.core.exceptions import StoreError
from docseq.models.counter import SequenceCounter, COUNTER_INDEX_KEYS, COUNTER_INDEX_NAME

logger = logging.getLogger(__name__)


class CounterStore:
    """
    Durable (model, field) -> count mapping backed by a MongoDB collection.

    Every write is a single find_one_and_update, so concurrent callers never
    share a count. Without an explicit collection the store uses the
    SequenceCounter collection set up by init_beanie.
    """

    def __init__(self, collection: Optional[Any] = None):
        self._collection = collection

    @property
    def collection(self):
        if self._collection is not None:
            return self._collection
        return SequenceCounter.get_pymongo_collection()

    async def ensure_indexes(self) -> None:
        """Create the unique (field, model) index on an explicitly bound collection."""
        try:
            await self.collection.create_index(COUNTER_INDEX_KEYS, name=COUNTER_INDEX_NAME, unique=True)
        except PyMongoError as e:
            raise StoreError("Failed to create counter index", details=str(e)) from e

    async def get_or_init(self, model: str, field: str, start: int, increment: int) -> SequenceCounter.State:
        """Return the counter for the key, creating it at ``start - increment`` if absent."""
        key = {"model": model, "field": field}
        try:
            existing = await self.collection.find_one(key)
            if existing is not None:
                return SequenceCounter.State.model_validate(existing)

            logger.debug(f"Initialising counter {model}.{field} at {start - increment}")
            try:
                created = await self._init_counter(key, start - increment)
            except DuplicateKeyError:
                # Lost the race against a concurrent upsert; the document exists now
                created = await self._init_counter(key, start - increment)
            return SequenceCounter.State.model_validate(created)
        except PyMongoError as e:
            raise StoreError(f"Database error initialising counter '{model}.{field}'", details=str(e)) from e

    async def _init_counter(self, key: dict, count: int) -> dict:
        return await self.collection.find_one_and_update(
            key,
            {"$setOnInsert": {"count": count}},
            upsert=True,
            return_document=ReturnDocument.AFTER,
        )

    async def increment_and_get(self, model: str, field: str, delta: int) -> int:
        """Atomically add ``delta`` to the counter and return the new count."""
        try:
            updated_doc = await self.collection.find_one_and_update(
                {"model": model, "field": field},
                {"$inc": {"count": delta}},
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            raise StoreError(f"Database error incrementing counter '{model}.{field}'", details=str(e)) from e

        if updated_doc is None:
            raise StoreError(f"Counter '{model}.{field}' disappeared before it could be incremented")

        logger.debug(f"Next count for '{model}.{field}': {updated_doc['count']}")
        return updated_doc["count"]

    async def reset(self, model: str, field: str, start: int, increment: int) -> SequenceCounter.State:
        """Restart the sequence so the next allocation yields ``start`` again."""
        try:
            updated_doc = await self.collection.find_one_and_update(
                {"model": model, "field": field},
                {"$set": {"count": start - increment}},
                upsert=True,
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            raise StoreError(f"Database error resetting counter '{model}.{field}'", details=str(e)) from e

        logger.debug(f"Counter '{model}.{field}' reset to {start - increment}")
        return SequenceCounter.State.model_validate(updated_doc)
