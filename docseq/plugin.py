# docseq/plugin.py
from typing import Any, ClassVar, Optional, Union, Annotated

from beanie import Document, Insert, Save, before_event
from pydantic import BeforeValidator
from pymongo import IndexModel, ASCENDING

from docseq.core.allocator import SequenceAllocator
from docseq.core.options import SequenceOptions, resolve
from docseq.db.counter_store import CounterStore
from docseq.models.enum import ValueType


def _stringify_number(value: Any) -> Any:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


def _field_annotation(options: SequenceOptions) -> Any:
    if options.value_type is ValueType.STRING:
        return Annotated[Optional[str], BeforeValidator(_stringify_number)]
    # Prefix, suffix or version turn a numeric sequence into text
    return Optional[Union[int, str]]


def _is_unsaved(document: Document) -> bool:
    """Best guess whether a document reaching ``save()`` has never been stored.

    With state management the saved state is the reliable marker. Without it
    only a missing id tells, so documents with client-side ids must be inserted.
    """
    settings = getattr(type(document), "Settings", None)
    if getattr(settings, "use_state_management", False):
        return getattr(document, "_saved_state", None) is None
    return document.id is None


def _extend_settings(document_cls: type[Document], options: SequenceOptions) -> type:
    base_settings = getattr(document_cls, "Settings", None)
    indexes = list(getattr(base_settings, "indexes", None) or [])
    indexes.append(
        IndexModel(
            [(options.field_name, ASCENDING)],
            name=f"{options.field_name}_sequence_index",
            unique=options.unique,
            sparse=True,
        )
    )
    bases = (base_settings,) if base_settings is not None else ()
    # Module and qualname mark it as a nested class so pydantic leaves it alone
    return type("Settings", bases, {
        "__module__": document_cls.__module__,
        "__qualname__": f"{document_cls.__qualname__}.Settings",
        "indexes": indexes,
    })


def register(document_cls: type[Document], raw_options: Any, store: CounterStore) -> type[Document]:
    """
    Attach an auto-incremented field to a Beanie document model.

    Returns a subclass of ``document_cls`` (same name) that declares the field,
    indexes it, fills it on first insert/save and exposes ``next_sequence``,
    ``parse_sequence``, ``next_version`` (versioned sequences only) and the
    ``reset_sequence`` classmethod. Must run before ``init_beanie``.

    Raises ConfigError for invalid options before touching the store.
    """
    options = resolve(raw_options)
    allocator = SequenceAllocator(options, store)
    field = options.field_name

    @before_event(Insert)
    async def assign_on_insert(self):
        # An insert always creates the record, whatever its id looks like
        await allocator.allocate(self, is_new=True)

    @before_event(Save)
    async def assign_on_save(self):
        await allocator.allocate(self, is_new=_is_unsaved(self))

    async def next_sequence(self):
        return await allocator.allocate(self, is_new=True)

    def parse_sequence(self):
        return allocator.parse(self)

    def next_version(self):
        return allocator.next_version(self)

    async def reset_sequence(cls):
        return await allocator.reset()

    namespace = {
        "__module__": document_cls.__module__,
        "__qualname__": document_cls.__qualname__,
        "__doc__": document_cls.__doc__,
        "__annotations__": {
            field: _field_annotation(options),
            "sequence_allocator": ClassVar[SequenceAllocator],
        },
        field: None,
        "sequence_allocator": allocator,
        "Settings": _extend_settings(document_cls, options),
        f"_assign_{field}_on_insert": assign_on_insert,
        f"_assign_{field}_on_save": assign_on_save,
        "next_sequence": next_sequence,
        "parse_sequence": parse_sequence,
        "reset_sequence": classmethod(reset_sequence),
    }
    if options.has_version:
        namespace["next_version"] = next_version

    return type(document_cls.__name__, (document_cls,), namespace)
