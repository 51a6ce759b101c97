"""Tests for TypedKey declaration and strategy selection."""

from dataclasses import dataclass
from typing import Optional

import pytest
from pydantic import BaseModel
from typedkeys.core.errors import KeyDeclarationError
from typedkeys.core.keys import KeyNamespace, Strategy, TypedKey


@dataclass
class Score:
    player: str
    points: int


class Profile(BaseModel):
    name: str
    tags: list[str] = []


class NotSerializable:
    def __init__(self, handle) -> None:
        self.handle = handle


def test_storable_type_prefers_native():
    key = TypedKey("cake-count", int)
    assert key.strategy is Strategy.NATIVE
    assert key.shape is not None
    assert key.codec is None


def test_structured_type_is_encoded():
    key = TypedKey("highscore", Score)
    assert key.strategy is Strategy.ENCODED
    assert key.shape is None
    assert key.codec is not None


def test_optional_is_encoded():
    assert TypedKey("maybe", Optional[int]).strategy is Strategy.ENCODED


def test_pydantic_model_is_encoded():
    assert TypedKey("profile", Profile).strategy is Strategy.ENCODED


def test_encoded_forces_serialization_of_storable_type():
    key = TypedKey.encoded("cake-count", int)
    assert key.strategy is Strategy.ENCODED


def test_native_rejects_structured_type():
    with pytest.raises(KeyDeclarationError) as exc:
        TypedKey.native("highscore", Score)
    assert exc.value.key_name == "highscore"
    assert exc.value.value_type is Score


def test_unserializable_type_rejected_at_declaration():
    with pytest.raises(KeyDeclarationError):
        TypedKey("handle", NotSerializable)


def test_strategy_accepts_string():
    assert TypedKey("flag", bool, "encoded").strategy is Strategy.ENCODED


def test_keys_are_immutable():
    key = TypedKey("cake-count", int)
    with pytest.raises(AttributeError):
        key.name = "other"  # type: ignore[misc]


def test_keys_compare_by_declaration():
    assert TypedKey("a", int) == TypedKey("a", int)
    assert TypedKey("a", int) != TypedKey("a", str)
    assert TypedKey("a", int) != TypedKey.encoded("a", int)
    assert len({TypedKey("a", int), TypedKey("a", int)}) == 1


def test_type_name():
    assert TypedKey("d", dict[str, list[int]]).type_name == "dict[str, list[int]]"
    assert TypedKey("s", Score).type_name == "Score"


# ━━━ KeyNamespace ━━━


class Keys(KeyNamespace):
    number_of_cakes = KeyNamespace.plist("cake-count", int)
    complex_structure = KeyNamespace.plist("complex-dictionary", dict[str, list[int]])
    score = KeyNamespace.json("highscore", Score)


class MoreKeys(Keys):
    theme = KeyNamespace.plist("theme", str)


def test_namespace_declarations():
    assert Keys.number_of_cakes.strategy is Strategy.NATIVE
    assert Keys.complex_structure.strategy is Strategy.NATIVE
    assert Keys.score.strategy is Strategy.ENCODED
    assert Keys.score.name == "highscore"


def test_namespace_plist_rejects_structured():
    with pytest.raises(KeyDeclarationError):
        KeyNamespace.plist("highscore", Score)


def test_all_keys_in_declaration_order():
    names = [k.name for k in MoreKeys.all_keys()]
    assert names == ["cake-count", "complex-dictionary", "highscore", "theme"]
