"""REST router that dispatches requests to handlers by method and path."""

from __future__ import annotations

import copy
import enum
from http import HTTPStatus
from typing import Any, Callable, Iterable

from restpromise.segment_tree import RouteResult, SegmentTreeNode, TypedParam

Handler = Callable[["RestRequest", Any], Any]
Middleware = Callable[[Any, Any], bool]
DisconnectHandler = Callable[[Any], Any]


class Method(enum.Enum):
    """HTTP request methods a route can be bound to."""

    OPTIONS = "OPTIONS"
    GET = "GET"
    POST = "POST"
    HEAD = "HEAD"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    TRACE = "TRACE"
    CONNECT = "CONNECT"


class RouteStatus(enum.Enum):
    """Outcome of routing one request."""

    MATCH = "match"
    NOT_FOUND = "not_found"
    NOT_ALLOWED = "not_allowed"


class RestRequest:
    """An HTTP request together with the parameters and splats of its route.

    The wrapped request must have ``method`` and ``resource`` attributes.
    """

    def __init__(
        self,
        request: Any,
        params: Iterable[TypedParam] = (),
        splats: Iterable[TypedParam] = (),
    ) -> None:
        self.http_request = request
        self._params = list(params)
        self._splats = list(splats)

    @property
    def method(self) -> Any:
        return self.http_request.method

    @property
    def resource(self) -> str:
        return self.http_request.resource

    def has_param(self, name: str) -> bool:
        return any(param.name == name for param in self._params)

    def param(self, name: str) -> TypedParam:
        """Return the named parameter; raise RuntimeError if unknown."""
        for param in self._params:
            if param.name == name:
                return param
        raise RuntimeError("Unknown parameter")

    def splat_at(self, index: int) -> TypedParam:
        """Return the splat at ``index``; raise IndexError if out of range."""
        if index < 0 or index >= len(self._splats):
            raise IndexError("Request splat index out of range")
        return self._splats[index]

    def splat(self) -> list[TypedParam]:
        return list(self._splats)


def _clone(response: Any) -> Any:
    cloner = getattr(response, "clone", None)
    return cloner() if callable(cloner) else response


def _sanitized(resource: str) -> str:
    if not resource:
        raise RuntimeError("Invalid zero-length URL.")
    return SegmentTreeNode.sanitize_resource(resource)


class Router:
    """Maps (method, path pattern) pairs to handlers.

    Patterns may hold fixed segments, ``:param``, optional ``:param?`` and
    ``*`` splats. Responses are expected to offer ``send(code, body)`` and
    ``send_method_not_allowed(methods)``, and optionally ``clone()``.
    """

    def __init__(self) -> None:
        self._routes: dict[Method, SegmentTreeNode] = {}
        self._custom_handlers: list[Handler] = []
        self._middlewares: list[Middleware] = []
        self._disconnect_handlers: list[DisconnectHandler] = []
        self._not_found_handler: Handler | None = None

    def _tree(self, method: Any) -> SegmentTreeNode:
        return self._routes.setdefault(Method(method), SegmentTreeNode())

    def get(self, resource: str, handler: Handler) -> None:
        self.add_route(Method.GET, resource, handler)

    def post(self, resource: str, handler: Handler) -> None:
        self.add_route(Method.POST, resource, handler)

    def put(self, resource: str, handler: Handler) -> None:
        self.add_route(Method.PUT, resource, handler)

    def patch(self, resource: str, handler: Handler) -> None:
        self.add_route(Method.PATCH, resource, handler)

    def delete(self, resource: str, handler: Handler) -> None:
        self.add_route(Method.DELETE, resource, handler)

    def options(self, resource: str, handler: Handler) -> None:
        self.add_route(Method.OPTIONS, resource, handler)

    def head(self, resource: str, handler: Handler) -> None:
        self.add_route(Method.HEAD, resource, handler)

    def add_route(self, method: Any, resource: str, handler: Handler) -> None:
        """Bind ``handler``; raise RuntimeError on an empty or taken path."""
        path = _sanitized(resource)
        self._tree(method).add_route(path, handler)

    def remove_route(self, method: Any, resource: str) -> None:
        """Unbind a route; raise RuntimeError if it does not exist."""
        path = _sanitized(resource)
        self._tree(method).remove_route(path)

    def add_custom_handler(self, handler: Handler) -> None:
        self._custom_handlers.append(handler)

    def add_middleware(self, middleware: Middleware) -> None:
        self._middlewares.append(middleware)

    def add_not_found_handler(self, handler: Handler) -> None:
        self._not_found_handler = handler

    def add_disconnect_handler(self, handler: DisconnectHandler) -> None:
        self._disconnect_handlers.append(handler)

    def has_not_found_handler(self) -> bool:
        return self._not_found_handler is not None

    def invoke_not_found_handler(self, request: Any, response: Any) -> Any:
        if self._not_found_handler is None:
            raise RuntimeError("No not-found handler is set")
        return self._not_found_handler(RestRequest(request), response)

    def disconnect_peer(self, peer: Any) -> None:
        for handler in self._disconnect_handlers:
            handler(peer)

    def route(self, request: Any, response: Any) -> RouteStatus:
        """Dispatch ``request`` and report how it was handled."""
        resource = request.resource
        if not resource:
            raise RuntimeError("Invalid zero-length URL.")

        req = copy.copy(request)
        resp = _clone(response)

        for middleware in self._middlewares:
            if not middleware(req, resp):
                return RouteStatus.MATCH

        method = Method(req.method)
        path = SegmentTreeNode.sanitize_resource(resource)
        found, params, splats = self._tree(method).find_route(path)
        if found is not None:
            found.invoke_handler(RestRequest(req, params, splats), resp)
            return RouteStatus.MATCH

        for handler in self._custom_handlers:
            if handler(RestRequest(req), _clone(response)) == RouteResult.OK:
                return RouteStatus.MATCH

        supported = [
            other
            for other, tree in self._routes.items()
            if other is not method and tree.find_route(path)[0] is not None
        ]
        if supported:
            response.send_method_not_allowed(supported)
            return RouteStatus.NOT_ALLOWED

        if self.has_not_found_handler():
            self.invoke_not_found_handler(req, response)
        else:
            response.send(HTTPStatus.NOT_FOUND, "Could not find a matching route")
        return RouteStatus.NOT_FOUND


def bind(func: Callable[[RestRequest, Any], Any]) -> Handler:
    """Wrap ``func(request, response)`` as a handler that reports success."""

    def handler(request: RestRequest, response: Any) -> RouteResult:
        func(request, response)
        return RouteResult.OK

    return handler


def middleware(func: Callable[[Any, Any], bool]) -> Middleware:
    """Wrap ``func(request, response)`` as a middleware returning its verdict."""

    def wrapped(request: Any, response: Any) -> bool:
        return func(request, response)

    return wrapped