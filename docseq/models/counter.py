# docseq/models/counter.py
from beanie import Document
from pydantic import BaseModel, ConfigDict, Field
from pymongo import IndexModel, ASCENDING

from docseq.core.config import COUNTER_COLLECTION

COUNTER_INDEX_KEYS = [("field", ASCENDING), ("model", ASCENDING)]
COUNTER_INDEX_NAME = "counter_field_model_unique_index"


class SequenceCounter(Document):
    """Last allocated raw count for one (model, field) pair."""
    model: str
    field: str
    # Stored as "count"; the attribute name keeps Document.count() usable
    current: int = Field(default=0, alias="count")

    model_config = ConfigDict(populate_by_name=True)

    class Settings:
        name = COUNTER_COLLECTION
        indexes = [
            IndexModel(COUNTER_INDEX_KEYS, name=COUNTER_INDEX_NAME, unique=True),
        ]

    # Plain snapshot returned by the store; no collection binding required
    class State(BaseModel):
        model: str
        field: str
        count: int

        model_config = ConfigDict(frozen=True, extra="ignore")
