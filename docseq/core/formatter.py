# docseq/core/formatter.py
from typing import Any, Optional, Union

from docseq.core.options import SequenceOptions
from docseq.models.enum import ValueType


def wrap_count(options: SequenceOptions, count: int) -> int:
    """Map a raw count onto the display cycle ``start .. reset_after``.

    The stored counter keeps growing; only the formatted base wraps. With
    ``reset_after`` disabled (0) or not yet exceeded the count is returned as is.
    """
    if options.reset_after <= 0 or count <= options.reset_after:
        return count
    span = (options.reset_after - options.start) // options.increment + 1
    if span <= 0:
        return options.start
    step = (count - options.start) // options.increment
    return options.start + (step % span) * options.increment


def format_value(
    options: SequenceOptions,
    count: Union[int, str],
    record: Any,
    version: Optional[int] = None,
) -> Union[int, str]:
    """Build the field value: prefix + count [+ version segment] + suffix.

    ``version`` overrides ``options.start_version`` (used when bumping a version).
    """
    prefix = options.prefix.render(record)
    suffix = options.suffix.render(record)

    value = f"{prefix}{count}"
    if options.has_version:
        current = options.start_version if version is None else version
        value += f"{options.delimiter_version}{current}{options.delimiter_version}"
    value += suffix

    if options.value_type is ValueType.NUMBER and not (prefix or suffix or options.has_version):
        return int(value)
    return value
