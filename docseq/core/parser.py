# docseq/core/parser.py
from typing import Any, Optional, Union

from pydantic import BaseModel

from docseq.core.options import SequenceOptions


class ParsedSequence(BaseModel):
    prefix: str = ""
    counter: Union[int, str] = ""
    suffix: str = ""
    version: Optional[str] = None


def parse_sequence(options: SequenceOptions, record: Any) -> ParsedSequence:
    """Split the record's formatted field back into its parts.

    Prefix and suffix are recomputed from the record as it is now, so fields
    feeding a computed prefix/suffix must not change after creation.
    """
    prefix = options.prefix.render(record)
    suffix = options.suffix.render(record)

    stored = getattr(record, options.field_name, None)
    if stored is None:
        raise ValueError(f"{options.model_name}.{options.field_name} has no sequence value to parse")

    numeric = isinstance(stored, int) and not isinstance(stored, bool)
    text = str(stored)
    counter: Union[int, str] = text[len(prefix):len(text) - len(suffix)]

    if numeric:
        return ParsedSequence(prefix=prefix, counter=int(counter), suffix=suffix)

    version = None
    if options.has_version:
        parts = counter.split(options.delimiter_version)
        counter = parts[0]
        version = parts[1] if len(parts) > 1 else None

    return ParsedSequence(prefix=prefix, counter=counter, suffix=suffix, version=version)
