"""
Typed keys — declare a storage cell's name and value type once.

A TypedKey carries no storage logic. Its strategy is resolved when the key
is constructed:

    NATIVE   the declared type is natively storable; values go straight
             into the backend cell
    ENCODED  anything else; values are serialized to a JSON byte blob

When a type is both storable and serializable, NATIVE wins unless the key
is declared with TypedKey.encoded().
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, TypeVar

from typedkeys.core.codec import StructuredCodec
from typedkeys.core.errors import KeyDeclarationError
from typedkeys.core.shapes import Shape, classify

V = TypeVar("V")


class Strategy(str, Enum):
    """How a key's values reach the backend."""

    NATIVE = "native"
    ENCODED = "encoded"


@dataclass(frozen=True, slots=True)
class TypedKey(Generic[V]):
    """
    An immutable handle pairing a cell name with a declared value type.

    Usage:
        cakes = TypedKey("cake-count", int)
        score = TypedKey("highscore", Score)

        storage[cakes] = 4
        storage[score] = Score(player="John", points=3)

    Keys are compared and hashed by (name, value_type, strategy).
    """

    name: str
    value_type: Any
    strategy: Strategy | None = None
    shape: Shape | None = field(default=None, init=False, compare=False, repr=False)
    codec: StructuredCodec[V] | None = field(default=None, init=False, compare=False, repr=False)

    def __post_init__(self) -> None:
        shape = classify(self.value_type)
        strategy = self.strategy
        if strategy is None:
            strategy = Strategy.NATIVE if shape is not None else Strategy.ENCODED
        strategy = Strategy(strategy)

        if strategy is Strategy.NATIVE:
            if shape is None:
                raise KeyDeclarationError(
                    f"Key '{self.name}': {self.value_type!r} is not natively storable",
                    key_name=self.name,
                    value_type=self.value_type,
                )
            codec = None
        else:
            shape = None
            try:
                codec = StructuredCodec(self.value_type)
            except TypeError as e:
                raise KeyDeclarationError(
                    f"Key '{self.name}': {self.value_type!r} is not serializable",
                    key_name=self.name,
                    value_type=self.value_type,
                ) from e

        # Frozen dataclass: derived fields are filled in once, here
        object.__setattr__(self, "strategy", strategy)
        object.__setattr__(self, "shape", shape)
        object.__setattr__(self, "codec", codec)

    @classmethod
    def native(cls, name: str, value_type: Any) -> TypedKey[Any]:
        """Declare a key stored directly. Raises KeyDeclarationError if not storable."""
        return cls(name, value_type, Strategy.NATIVE)

    @classmethod
    def encoded(cls, name: str, value_type: Any) -> TypedKey[Any]:
        """Declare a key whose values are always serialized, even storable ones."""
        return cls(name, value_type, Strategy.ENCODED)

    @property
    def type_name(self) -> str:
        if self.shape is not None:
            return self.shape.describe()
        return getattr(self.value_type, "__name__", repr(self.value_type))


class KeyNamespace:
    """
    Base for application key catalogues.

    Subclass it to get concise, namespaced declarations:

        class Keys(KeyNamespace):
            number_of_cakes = KeyNamespace.plist("cake-count", int)
            complex_structure = KeyNamespace.plist("complex-dictionary", dict[str, list[int]])
            score = KeyNamespace.json("highscore", Score)
    """

    @staticmethod
    def plist(key: str, type: Any) -> TypedKey[Any]:
        """A key stored natively (property-list types only)."""
        return TypedKey.native(key, type)

    @staticmethod
    def json(key: str, type: Any) -> TypedKey[Any]:
        """A key stored as a JSON blob."""
        return TypedKey.encoded(key, type)

    @classmethod
    def all_keys(cls) -> list[TypedKey[Any]]:
        """Every TypedKey declared on the namespace, in declaration order."""
        keys: list[TypedKey[Any]] = []
        for klass in reversed(cls.__mro__):
            for value in vars(klass).values():
                if isinstance(value, TypedKey) and value not in keys:
                    keys.append(value)
        return keys
