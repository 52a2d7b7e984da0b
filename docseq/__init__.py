"""Auto-incremented, formatted sequence fields for Beanie documents."""
from docseq.core.allocator import SequenceAllocator
from docseq.core.exceptions import ConfigError, SequenceError, StoreError
from docseq.core.formatter import format_value, wrap_count
from docseq.core.options import ComputedAffix, LiteralAffix, SequenceOptions, resolve
from docseq.core.parser import ParsedSequence, parse_sequence
from docseq.db.counter_store import CounterStore
from docseq.db.database import init_db
from docseq.models.counter import SequenceCounter
from docseq.models.enum import AllocationState, ValueType
from docseq.plugin import register

__all__ = [
    "AllocationState",
    "ComputedAffix",
    "ConfigError",
    "CounterStore",
    "LiteralAffix",
    "ParsedSequence",
    "SequenceAllocator",
    "SequenceCounter",
    "SequenceError",
    "SequenceOptions",
    "StoreError",
    "ValueType",
    "format_value",
    "init_db",
    "parse_sequence",
    "register",
    "resolve",
    "wrap_count",
]
