"""Tree of URL path segments used to match requests to route handlers."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from typing import Any, Callable


class RouteResult(enum.Enum):
    """Outcome a route handler reports."""

    OK = "ok"
    FAILURE = "failure"


@dataclass(frozen=True)
class TypedParam:
    """A named value captured from a request path."""

    name: str
    value: str

    def as_type(self, target: Any) -> Any:
        """Convert the value to ``target``; raise RuntimeError if it fails."""
        if target is str:
            return self.value
        try:
            return target(self.value.strip())
        except (TypeError, ValueError) as exc:
            raise RuntimeError("Bad lexical cast") from exc


class Route:
    """A handler bound to a path."""

    __slots__ = ("handler",)

    def __init__(self, handler: Callable[..., Any]) -> None:
        self.handler = handler

    def invoke_handler(self, *args: Any) -> Any:
        return self.handler(*args)


class _SegmentType(enum.Enum):
    FIXED = enum.auto()
    PARAM = enum.auto()
    OPTIONAL = enum.auto()
    SPLAT = enum.auto()


_MULTIPLE_SLASH = re.compile("//+")

_NOT_FOUND: tuple[None, list, list] = (None, [], [])


def _segment_type(fragment: str) -> _SegmentType:
    optpos = fragment.find("?")
    first = fragment[:1]
    if first == ":":
        if optpos != -1:
            if optpos != len(fragment) - 1:
                raise RuntimeError("? should be at the end of the string")
            return _SegmentType.OPTIONAL
        return _SegmentType.PARAM
    if first == "*":
        if len(fragment) > 1:
            raise RuntimeError("Invalid splat parameter")
        return _SegmentType.SPLAT
    if optpos != -1:
        raise RuntimeError("Only optional parameters are currently supported")
    return _SegmentType.FIXED


def _split(path: str) -> tuple[str, str]:
    head, _, rest = path.partition("/")
    return head, rest


class SegmentTreeNode:
    """One path segment, its route if any, and its child segments.

    Paths given to the methods must have no leading or trailing slash and
    no repeated slashes; ``sanitize_resource`` produces such paths.
    """

    def __init__(self) -> None:
        self._fixed: dict[str, SegmentTreeNode] = {}
        self._param: dict[str, SegmentTreeNode] = {}
        self._optional: dict[str, SegmentTreeNode] = {}
        self._splat: SegmentTreeNode | None = None
        self._route: Route | None = None

    @staticmethod
    def sanitize_resource(path: str) -> str:
        """Collapse repeated slashes and drop the leading and trailing one."""
        dup = _MULTIPLE_SLASH.sub("/", path)
        if not dup:
            return ""
        if dup[-1] == "/":
            return dup[1:-1]
        return dup[1:]

    def _collection(self, segment: str, kind: _SegmentType) -> tuple[dict, str]:
        if kind is _SegmentType.FIXED:
            return self._fixed, segment
        if kind is _SegmentType.PARAM:
            return self._param, segment
        return self._optional, segment[:-1]

    def add_route(self, path: str, handler: Callable[..., Any]) -> None:
        """Bind ``handler`` to ``path``; raise RuntimeError if already bound."""
        if not path:
            if self._route is not None:
                raise RuntimeError("Requested route already exist.")
            self._route = Route(handler)
            return
        segment, lower_path = _split(path)
        kind = _segment_type(segment)
        if kind is _SegmentType.SPLAT:
            if self._splat is None:
                self._splat = SegmentTreeNode()
            self._splat.add_route(lower_path, handler)
            return
        collection, key = self._collection(segment, kind)
        collection.setdefault(key, SegmentTreeNode()).add_route(lower_path, handler)

    def remove_route(self, path: str) -> bool:
        """Unbind ``path``; return whether this node is left empty.

        Raises RuntimeError when the path was never added.
        """
        if path:
            segment, lower_path = _split(path)
            kind = _segment_type(segment)
            if kind is _SegmentType.SPLAT:
                if self._splat is None:
                    raise RuntimeError("Requested does not exist.")
                return self._splat.remove_route(lower_path)
            collection, key = self._collection(segment, kind)
            child = collection.get(key)
            if child is None:
                raise RuntimeError("Requested does not exist.")
            if child.remove_route(lower_path):
                del collection[key]
        else:
            self._route = None
        return (
            not self._fixed
            and not self._param
            and not self._optional
            and self._splat is None
            and self._route is None
        )

    def find_route(
        self, path: str
    ) -> tuple[Route | None, list[TypedParam], list[TypedParam]]:
        """Return the matching route with its parameters and splats.

        When nothing matches, the route is None and both lists are empty.
        """
        return self._find(path, [], [])

    def _find(
        self, path: str, params: list[TypedParam], splats: list[TypedParam]
    ) -> tuple[Route | None, list[TypedParam], list[TypedParam]]:
        if not path:
            if self._optional:
                first = next(iter(self._optional.values()))
                return first._find(path, params, splats)
            if self._route is None:
                return _NOT_FOUND[0], [], []
            return self._route, list(params), list(splats)

        segment, lower_path = _split(path)

        child = self._fixed.get(segment)
        if child is not None:
            result = child._find(lower_path, params, splats)
            if result[0] is not None:
                return result

        for name, node in self._param.items():
            params.append(TypedParam(name, segment))
            result = node._find(lower_path, params, splats)
            if result[0] is not None:
                return result
            params.pop()

        for name, node in self._optional.items():
            params.append(TypedParam(name, segment))
            result = node._find(lower_path, params, splats)
            if result[0] is not None:
                return result
            params.pop()
            result = node._find(lower_path, params, splats)
            if result[0] is not None:
                return result

        if self._splat is not None:
            splats.append(TypedParam(segment, segment))
            result = self._splat._find(lower_path, params, splats)
            if result[0] is not None:
                return result
            splats.pop()

        return None, [], []