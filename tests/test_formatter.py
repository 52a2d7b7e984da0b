import pytest

from docseq.core.formatter import format_value, wrap_count
from docseq.core.options import resolve
from tests.conftest import Record, flag_prefix, flag_suffix


def _options(**overrides):
    return resolve({"model_name": "Test", "field_name": "increment_field", **overrides})


def test_plain_numeric_value_stays_integer():
    assert format_value(_options(), 1, Record(label="a")) == 1


def test_plain_string_value_is_text():
    assert format_value(_options(value_type="string"), 1, Record(label="a")) == "1"


def test_literal_prefix_and_suffix():
    options = _options(start=500, prefix="P", suffix="S", value_type="string")
    assert format_value(options, 500, Record(label="a")) == "P500S"


def test_numeric_prefix_and_suffix_make_text():
    options = _options(start=500, prefix=1, suffix=9)
    assert format_value(options, 500, Record(label="a")) == "15009"


@pytest.mark.parametrize("flag, expected", [(True, "P-TRUE-300-S-TRUE"), (False, "P-FALSE-300-S-FALSE")])
def test_computed_prefix_and_suffix(flag, expected):
    options = _options(start=300, increment=3, value_type="string", prefix=flag_prefix, suffix=flag_suffix)
    assert format_value(options, 300, Record(label="a", flag=flag)) == expected


def test_version_segment_sits_between_counter_and_suffix():
    options = _options(
        start=300,
        value_type="string",
        has_version=True,
        prefix=lambda d: "P-TRUE-" if d.flag else "P-FALSE-",
        suffix=lambda d: "S-TRUE" if d.flag else "S-FALSE",
    )
    record = Record(label="a", flag=True)

    assert format_value(options, 300, record) == "P-TRUE-300-1-S-TRUE"
    assert format_value(options, "300", record, version=4) == "P-TRUE-300-4-S-TRUE"


def test_version_forces_text_on_numeric_field():
    options = _options(has_version=True, start_version=2, delimiter_version=".")
    assert format_value(options, 7, Record(label="a")) == "7.2."


def test_wrap_count_disabled_by_default():
    assert wrap_count(_options(), 1000) == 1000


def test_wrap_count_cycles_back_to_start():
    options = _options(reset_after=2, unique=False)
    assert [wrap_count(options, count) for count in range(1, 8)] == [1, 2, 1, 2, 1, 2, 1]


def test_wrap_count_respects_increment():
    options = _options(start=1, increment=3, reset_after=5, unique=False)
    assert [wrap_count(options, count) for count in (1, 4, 7, 10, 13)] == [1, 4, 1, 4, 1]


def test_wrap_count_below_start_threshold_always_start():
    options = _options(start=10, reset_after=5, unique=False)
    assert wrap_count(options, 10) == 10
    assert wrap_count(options, 11) == 10
