# docseq/core/options.py
from collections.abc import Mapping
from typing import Any, Callable, Literal, Union, Annotated

from loguru import logger
from pydantic import (
    AliasChoices, BaseModel, ConfigDict, Field, StrictBool, StrictInt, StrictStr,
    ValidationError, field_validator,
)

from docseq.core.exceptions import ConfigError
from docseq.models.enum import ValueType


class LiteralAffix(BaseModel):
    """Fixed prefix/suffix text."""
    kind: Literal["literal"] = "literal"
    value: str = ""

    model_config = ConfigDict(frozen=True)

    def render(self, record: Any) -> str:
        return self.value


class ComputedAffix(BaseModel):
    """Prefix/suffix derived from the owning record."""
    kind: Literal["computed"] = "computed"
    fn: Callable[[Any], Any]

    model_config = ConfigDict(frozen=True)

    def render(self, record: Any) -> str:
        result = self.fn(record)
        return "" if result is None else str(result)


Affix = Annotated[Union[LiteralAffix, ComputedAffix], Field(discriminator="kind")]


def _alias(name: str, camel: str) -> AliasChoices:
    return AliasChoices(name, camel)


class SequenceOptions(BaseModel):
    """Resolved, read-only options for one sequenced field."""
    model_name: StrictStr = Field(..., min_length=1, validation_alias=_alias("model_name", "modelName"))
    field_name: StrictStr = Field(..., min_length=1, validation_alias=_alias("field_name", "fieldName"))
    start: StrictInt = 1
    increment: StrictInt = Field(default=1, gt=0)
    prefix: Affix = Field(default_factory=LiteralAffix)
    suffix: Affix = Field(default_factory=LiteralAffix)
    value_type: ValueType = Field(default=ValueType.NUMBER, validation_alias=_alias("value_type", "valueType"))
    unique: StrictBool = True
    reset_after: StrictInt = Field(default=0, ge=0, validation_alias=_alias("reset_after", "resetAfter"))
    has_version: StrictBool = Field(default=False, validation_alias=_alias("has_version", "hasVersion"))
    start_version: StrictInt = Field(default=1, ge=0, validation_alias=_alias("start_version", "startVersion"))
    delimiter_version: StrictStr = Field(
        default="-", min_length=1, validation_alias=_alias("delimiter_version", "delimiterVersion")
    )

    model_config = ConfigDict(frozen=True, extra="ignore", protected_namespaces=())

    @field_validator("prefix", "suffix", mode="before")
    @classmethod
    def coerce_affix(cls, value: Any) -> Any:
        if isinstance(value, (LiteralAffix, ComputedAffix)):
            return value
        if callable(value):
            return ComputedAffix(fn=value)
        return LiteralAffix(value="" if value is None else str(value))

    @field_validator("value_type", mode="before")
    @classmethod
    def coerce_value_type(cls, value: Any) -> Any:
        # Accept the Python types as shorthand
        if value is int:
            return ValueType.NUMBER
        if value is str:
            return ValueType.STRING
        return value


def _describe(exc: ValidationError) -> str:
    error = exc.errors(include_url=False)[0]
    name = error["loc"][0] if error["loc"] else "options"
    if error["type"] == "missing":
        return f"require `options.{name}` parameter"
    if error["type"].startswith("int"):
        return f"`options.{name}` parameter must be an integer"
    return f"`options.{name}` {error['msg']}"


def resolve(raw_options: Any) -> SequenceOptions:
    """Validate raw registration options and apply defaults.

    Keys set to ``None`` are treated as absent. Raises ``ConfigError`` on
    anything that is not a mapping or carries a badly typed option.
    """
    if isinstance(raw_options, SequenceOptions):
        return raw_options
    if not isinstance(raw_options, Mapping):
        raise ConfigError("require `options` parameter")

    provided = {key: value for key, value in raw_options.items() if value is not None}
    try:
        options = SequenceOptions.model_validate(provided)
    except ValidationError as exc:
        raise ConfigError(_describe(exc), details=exc.errors(include_url=False)) from exc

    if options.reset_after > 0 and options.unique:
        logger.warning(
            f"Sequence {options.model_name}.{options.field_name}: reset_after={options.reset_after} "
            f"repeats values on a unique field; saves will fail once the sequence wraps."
        )
    return options
