# docseq/core/allocator.py
import logging
from typing import Any, Union

from docseq.core.formatter import format_value, wrap_count
from docseq.core.options import SequenceOptions
from docseq.core.parser import ParsedSequence, parse_sequence
from docseq.db.counter_store import CounterStore
from docseq.models.counter import SequenceCounter
from docseq.models.enum import AllocationState

logger = logging.getLogger(__name__)


class SequenceAllocator:
    """Assigns the next formatted sequence value to new records of one model field."""

    def __init__(self, options: SequenceOptions, store: CounterStore):
        self.options = options
        self.store = store

    async def allocate(self, record: Any, is_new: bool = True) -> AllocationState:
        """
        Give ``record`` its sequence value unless it is not new or already has one.

        The field is only assigned after the counter increment has been
        persisted; a store failure raises StoreError and leaves the field unset.
        A count taken by a record whose save later fails is not handed back.
        """
        opts = self.options
        state = AllocationState.UNALLOCATED
        if not is_new or getattr(record, opts.field_name, None) is not None:
            return self._transition(state, AllocationState.SKIPPED)

        state = self._transition(state, AllocationState.ALLOCATING)

        await self.store.get_or_init(opts.model_name, opts.field_name, opts.start, opts.increment)
        count = await self.store.increment_and_get(opts.model_name, opts.field_name, opts.increment)

        value = format_value(opts, wrap_count(opts, count), record)
        setattr(record, opts.field_name, value)

        logger.debug(f"{opts.model_name}.{opts.field_name}: assigned {value!r} (count={count})")
        return self._transition(state, AllocationState.ALLOCATED)

    def _transition(self, current: AllocationState, target: AllocationState) -> AllocationState:
        logger.debug(f"{self.options.model_name}.{self.options.field_name}: {current.value} -> {target.value}")
        return target

    def parse(self, record: Any) -> ParsedSequence:
        return parse_sequence(self.options, record)

    def next_version(self, record: Any) -> Union[int, str]:
        """Bump the version segment of the record's current value in place."""
        if not self.options.has_version:
            raise ValueError(f"{self.options.model_name}.{self.options.field_name} is not versioned")

        parsed = self.parse(record)
        if parsed.version is None:
            raise ValueError(f"{self.options.model_name}.{self.options.field_name} value carries no version")

        value = format_value(self.options, parsed.counter, record, version=int(parsed.version) + 1)
        setattr(record, self.options.field_name, value)
        return value

    async def reset(self) -> SequenceCounter.State:
        opts = self.options
        return await self.store.reset(opts.model_name, opts.field_name, opts.start, opts.increment)
