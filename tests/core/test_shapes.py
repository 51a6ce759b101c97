"""Tests for value classification and narrowing."""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Dict, List, Optional

import pytest
from typedkeys.core.shapes import (
    AnyStorableShape,
    MappingShape,
    ScalarShape,
    SequenceShape,
    ShapeMismatch,
    classify,
    is_storable,
)


@dataclass
class Score:
    player: str
    points: int


# ━━━ Classification ━━━


@pytest.mark.parametrize("tp", [str, bool, int, float, datetime, bytes])
def test_scalars_are_storable(tp):
    assert classify(tp) == ScalarShape(tp)


def test_nested_containers():
    shape = classify(dict[str, list[int]])
    assert shape == MappingShape(SequenceShape(ScalarShape(int)))


def test_typing_aliases_and_abcs():
    assert classify(List[str]) == SequenceShape(ScalarShape(str))
    assert classify(Dict[str, float]) == MappingShape(ScalarShape(float))
    assert classify(Sequence[bytes]) == SequenceShape(ScalarShape(bytes))
    assert classify(Mapping[str, bool]) == MappingShape(ScalarShape(bool))
    assert classify(tuple[int, ...]) == SequenceShape(ScalarShape(int), container=tuple)


def test_bare_containers_accept_any_storable():
    assert classify(list) == SequenceShape(AnyStorableShape())
    assert classify(dict) == MappingShape(AnyStorableShape())
    assert classify(List) == SequenceShape(AnyStorableShape())


@pytest.mark.parametrize(
    "tp",
    [
        Score,
        Optional[int],
        int | str,
        set[int],
        dict[int, str],
        list[Score],
        dict[str, Score],
        tuple[int, str],
        object,
        type(None),
    ],
)
def test_not_storable(tp):
    assert classify(tp) is None
    assert is_storable(tp) is False


def test_is_storable():
    assert is_storable(dict[str, list[int]]) is True


# ━━━ Narrowing ━━━


def test_int_rejects_bool():
    with pytest.raises(ShapeMismatch):
        ScalarShape(int).narrow(True)


def test_bool_rejects_int():
    with pytest.raises(ShapeMismatch):
        ScalarShape(bool).narrow(1)


def test_float_accepts_int():
    value = ScalarShape(float).narrow(3)
    assert value == 3.0
    assert isinstance(value, float)


def test_bytes_accepts_bytearray():
    assert ScalarShape(bytes).narrow(bytearray(b"abc")) == b"abc"


def test_str_rejects_bytes():
    with pytest.raises(ShapeMismatch):
        ScalarShape(str).narrow(b"abc")


def test_sequence_narrows_items():
    shape = classify(list[int])
    assert shape.narrow((1, 2, 3)) == [1, 2, 3]
    with pytest.raises(ShapeMismatch):
        shape.narrow([1, "two"])
    with pytest.raises(ShapeMismatch):
        shape.narrow("123")


def test_tuple_shape_returns_tuple():
    assert classify(tuple[str, ...]).narrow(["a", "b"]) == ("a", "b")


def test_mapping_requires_string_keys():
    shape = classify(dict[str, int])
    assert shape.narrow({"a": 1}) == {"a": 1}
    with pytest.raises(ShapeMismatch):
        shape.narrow({1: 1})
    with pytest.raises(ShapeMismatch):
        shape.narrow({"a": "1"})


def test_any_storable_rejects_records():
    shape = classify(list)
    assert shape.narrow([1, "a", {"b": [b"x"]}]) == [1, "a", {"b": [b"x"]}]
    with pytest.raises(ShapeMismatch):
        shape.narrow([Score("John", 3)])


def test_describe():
    assert classify(dict[str, list[int]]).describe() == "dict[str, list[int]]"


def test_float_rejects_int_too_large():
    with pytest.raises(ShapeMismatch):
        ScalarShape(float).narrow(10**400)


def test_datetime_rejects_aware_values():
    aware = datetime(2026, 10, 18, tzinfo=timezone(timedelta(hours=2)))
    assert ScalarShape(datetime).narrow(datetime(2026, 10, 18)) == datetime(2026, 10, 18)
    with pytest.raises(ShapeMismatch):
        ScalarShape(datetime).narrow(aware)
    with pytest.raises(ShapeMismatch):
        AnyStorableShape().narrow({"when": aware})


def test_date_is_not_storable():
    assert classify(date) is None
