"""Identifiers that stand for a type and compare, order and hash by it."""

from __future__ import annotations

from typing import Any


class TypeId:
    """A unique identifier for a type.

    Two TypeIds are equal exactly when they were made from the same type.
    They are ordered and hashed by their integer value.
    """

    __slots__ = ("_type",)

    def __init__(self, value_type: Any) -> None:
        self._type = value_type

    @classmethod
    def of(cls, value_type: Any) -> "TypeId":
        """Return the identifier of ``value_type``."""
        return cls(value_type)

    @property
    def value_type(self) -> Any:
        return self._type

    def __int__(self) -> int:
        return id(self._type)

    def __index__(self) -> int:
        return id(self._type)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TypeId):
            return NotImplemented
        return int(self) == int(other)

    def __ne__(self, other: object) -> bool:
        if not isinstance(other, TypeId):
            return NotImplemented
        return int(self) != int(other)

    def __lt__(self, other: "TypeId") -> bool:
        if not isinstance(other, TypeId):
            return NotImplemented
        return int(self) < int(other)

    def __hash__(self) -> int:
        return int(self)

    def __repr__(self) -> str:
        name = getattr(self._type, "__qualname__", repr(self._type))
        return f"TypeId({name})"