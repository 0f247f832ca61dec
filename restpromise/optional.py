"""A value that is either present or absent, with helpers to act on it."""

from __future__ import annotations

from typing import Any, Callable, Generic, TypeVar

T = TypeVar("T")
U = TypeVar("U")

_MISSING: Any = object()


class Optional(Generic[T]):
    """Holds either some value or nothing."""

    __slots__ = ("_value",)

    def __init__(self, value: Any = _MISSING) -> None:
        self._value = value

    def is_empty(self) -> bool:
        """Return whether no value is held."""
        return self._value is _MISSING

    def get(self) -> T:
        """Return the held value; raise ValueError if there is none."""
        if self.is_empty():
            raise ValueError("Optional holds no value")
        return self._value

    def get_or_else(self, default: T) -> T:
        """Return the held value, or ``default`` when empty."""
        return default if self.is_empty() else self._value

    def or_else(self, func: Callable[[], Any]) -> None:
        """Call ``func`` when no value is held."""
        if self.is_empty():
            func()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Optional):
            return NotImplemented
        if self.is_empty() or other.is_empty():
            return self.is_empty() and other.is_empty()
        return bool(self._value == other._value)

    def __hash__(self) -> int:
        return hash((Optional, None if self.is_empty() else self._value))

    def __repr__(self) -> str:
        if self.is_empty():
            return "Optional()"
        return f"Optional({self._value!r})"


def some(value: T) -> Optional[T]:
    """Return an Optional holding ``value``."""
    return Optional(value)


def none() -> Optional[Any]:
    """Return an empty Optional."""
    return Optional()


def optionally_do(option: Optional[T], func: Callable[[T], None]) -> Optional[T]:
    """Call ``func`` with the held value, if any, and return ``option``."""
    if not option.is_empty():
        func(option.get())
    return option


def optionally_map(option: Optional[T], func: Callable[[T], U]) -> Optional[U]:
    """Return an Optional of ``func`` applied to the held value, if any."""
    if option.is_empty():
        return none()
    return some(func(option.get()))


def optionally_fmap(
    option: Optional[T], func: Callable[[T], Optional[U]]
) -> Optional[U]:
    """Apply ``func``, which returns an Optional, and flatten the result."""
    if not option.is_empty():
        result = func(option.get())
        if not result.is_empty():
            return some(result.get())
    return none()


def optionally_filter(
    option: Optional[T], func: Callable[[T], bool]
) -> Optional[T]:
    """Keep the held value only when ``func`` accepts it."""
    if not option.is_empty() and func(option.get()):
        return some(option.get())
    return none()