"""
Structural equality and hashing.

Two shapes of collection appear on the wire as JSON arrays:

- list fields (plain tuples) compare index by index;
- set fields (ValueSet) drop duplicates on construction and compare and
  hash independently of element order.

Which shape applies is a property of the field, declared on the model.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from typing import Any, Generic, TypeVar, get_args

from pydantic_core import core_schema

T = TypeVar("T")

# Keeps set hashes apart from the hash of an equal frozenset
_SET_SALT = 0x5E7A11CE


class ValueSet(Generic[T]):
    """
    Immutable, de-duplicated collection with no significant order.

    Insertion order of first occurrences is kept for encoding only.
    """

    __slots__ = ("_items", "_members", "_hash")

    def __init__(self, items: Iterable[T] = ()):
        unique: dict[T, T] = {}
        for item in items:
            unique.setdefault(item, item)
        self._items: tuple[T, ...] = tuple(unique.values())
        self._members = frozenset(self._items)
        self._hash = hash(self._members) ^ _SET_SALT

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def __contains__(self, item: object) -> bool:
        return item in self._members

    def __getitem__(self, index: int) -> T:
        return self._items[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ValueSet):
            return NotImplemented
        return self._hash == other._hash and self._members == other._members

    def __hash__(self) -> int:
        return self._hash

    def __repr__(self) -> str:
        return f"ValueSet({list(self._items)!r})"

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self

    @classmethod
    def __get_pydantic_core_schema__(cls, source: Any, handler: Any):
        args = get_args(source)
        item_schema = handler.generate_schema(args[0]) if args else core_schema.any_schema()
        return core_schema.no_info_after_validator_function(
            cls,
            core_schema.no_info_before_validator_function(
                _as_list, core_schema.list_schema(item_schema)
            ),
            serialization=core_schema.plain_serializer_function_ser_schema(list),
        )


def _as_list(value: Any) -> Any:
    if isinstance(value, ValueSet):
        return list(value)
    if value is None:
        return []
    if isinstance(value, (str, bytes, Mapping)) or not isinstance(value, Iterable):
        return value
    return list(value)


def tag_scalar(value: Any) -> Any:
    """
    Key a JSON scalar by its type as well as its value.

    Python treats True == 1 == 1.0; on the wire they are three different
    values and must not collapse in equality or de-duplication.
    """
    if isinstance(value, (bool, int, float, str)):
        return (type(value).__name__, value)
    return value


def structural_key(value: Any) -> Any:
    key = getattr(value, "_structural_key", None)
    if key is None:
        return value
    return key()


def structural_hash(value: Any) -> int:
    return hash((type(value).__name__, structural_key(value)))


def structural_equals(a: Any, b: Any) -> bool:
    """Equality by content: same kind, same fields, set fields order-free."""
    if a is b:
        return True
    if type(a) is not type(b):
        return False
    if hash(a) != hash(b):
        return False
    return structural_key(a) == structural_key(b)
