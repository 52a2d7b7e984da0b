# docseq/db/database.py
import logging
from typing import Optional, Sequence

from beanie import Document, init_beanie
from pymongo import AsyncMongoClient

from docseq.core.config import MONGODB_URL, DATABASE_NAME
from docseq.db.counter_store import CounterStore
from docseq.models.counter import SequenceCounter

logger = logging.getLogger(__name__)


async def init_db(
    document_models: Sequence[type[Document]] = (),
    url: Optional[str] = None,
    database_name: Optional[str] = None,
) -> CounterStore:
    """Connect to MongoDB, initialise Beanie with the counter model and return its store."""
    logger.info("Connecting to MongoDB...")
    client = AsyncMongoClient(url or MONGODB_URL)

    database = client[database_name or DATABASE_NAME]
    logger.info(f"Using database: {database.name}")

    await init_beanie(
        database=database,
        document_models=[SequenceCounter, *document_models],
    )
    logger.info("Beanie initialization complete for all models.")
    return CounterStore()
