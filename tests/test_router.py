from dataclasses import dataclass, field
from http import HTTPStatus

import pytest

from restpromise.router import (
    Method,
    RestRequest,
    Router,
    RouteStatus,
    bind,
    middleware,
)
from restpromise.segment_tree import RouteResult, TypedParam


@dataclass
class FakeRequest:
    method: Method
    resource: str


@dataclass
class FakeResponse:
    sent: list = field(default_factory=list)
    not_allowed: list = field(default_factory=list)

    def clone(self):
        return self

    def send(self, code, body=""):
        self.sent.append((code, body))

    def send_method_not_allowed(self, methods):
        self.not_allowed.append(list(methods))


def recorder(calls):
    def handler(request, response):
        calls.append(request)
        return RouteResult.OK

    return handler


def test_param_route_matches():
    router = Router()
    calls = []
    router.get("/users/:id", recorder(calls))
    status = router.route(FakeRequest(Method.GET, "/users/42"), FakeResponse())
    assert status is RouteStatus.MATCH
    assert calls[0].param(":id").as_type(int) == 42 or calls[0].param("id").as_type(int) == 42


def test_param_name_lookup():
    router = Router()
    calls = []
    router.get("/users/:id", recorder(calls))
    router.route(FakeRequest(Method.GET, "/users/7"), FakeResponse())
    request = calls[0]
    name = request._params[0].name
    assert request.has_param(name)
    assert request.param(name).value == "7"


def test_splat_route():
    router = Router()
    calls = []
    router.get("/files/*", recorder(calls))
    router.route(FakeRequest(Method.GET, "/files/readme"), FakeResponse())
    assert calls[0].splat_at(0).value == "readme"
    assert calls[0].splat() == [TypedParam("readme", "readme")]


def test_multiple_slashes_are_collapsed():
    router = Router()
    calls = []
    router.get("/a/b", recorder(calls))
    status = router.route(FakeRequest(Method.GET, "//a///b/"), FakeResponse())
    assert status is RouteStatus.MATCH
    assert len(calls) == 1


def test_not_found_sends_404():
    router = Router()
    response = FakeResponse()
    status = router.route(FakeRequest(Method.GET, "/nothing"), response)
    assert status is RouteStatus.NOT_FOUND
    assert response.sent == [(HTTPStatus.NOT_FOUND, "Could not find a matching route")]


def test_not_allowed_lists_methods():
    router = Router()
    router.post("/items", recorder([]))
    response = FakeResponse()
    status = router.route(FakeRequest(Method.GET, "/items"), response)
    assert status is RouteStatus.NOT_ALLOWED
    assert response.not_allowed == [[Method.POST]]
    assert response.sent == []


def test_not_found_handler_is_used():
    router = Router()
    assert not router.has_not_found_handler()
    calls = []
    router.add_not_found_handler(recorder(calls))
    assert router.has_not_found_handler()
    response = FakeResponse()
    status = router.route(FakeRequest(Method.GET, "/missing"), response)
    assert status is RouteStatus.NOT_FOUND
    assert calls[0].resource == "/missing"
    assert response.sent == []


def test_invoke_not_found_without_handler_raises():
    with pytest.raises(RuntimeError):
        Router().invoke_not_found_handler(FakeRequest(Method.GET, "/x"), FakeResponse())


def test_middleware_can_stop_routing():
    router = Router()
    calls = []
    router.get("/a", recorder(calls))
    router.add_middleware(lambda req, resp: False)
    status = router.route(FakeRequest(Method.GET, "/a"), FakeResponse())
    assert status is RouteStatus.MATCH
    assert calls == []


def test_middleware_passing_continues():
    router = Router()
    calls = []
    seen = []
    router.get("/a", recorder(calls))
    router.add_middleware(lambda req, resp: seen.append(req.resource) or True)
    router.route(FakeRequest(Method.GET, "/a"), FakeResponse())
    assert seen == ["/a"]
    assert len(calls) == 1


def test_custom_handler_ok_matches():
    router = Router()
    router.add_custom_handler(lambda req, resp: RouteResult.OK)
    response = FakeResponse()
    assert router.route(FakeRequest(Method.GET, "/x"), response) is RouteStatus.MATCH
    assert response.sent == []


def test_custom_handler_failure_falls_through():
    router = Router()
    router.add_custom_handler(lambda req, resp: RouteResult.FAILURE)
    status = router.route(FakeRequest(Method.GET, "/x"), FakeResponse())
    assert status is RouteStatus.NOT_FOUND


def test_empty_resource_raises():
    router = Router()
    with pytest.raises(RuntimeError):
        router.get("", recorder([]))
    with pytest.raises(RuntimeError):
        router.remove_route(Method.GET, "")
    with pytest.raises(RuntimeError):
        router.route(FakeRequest(Method.GET, ""), FakeResponse())


def test_duplicate_route_raises():
    router = Router()
    router.get("/a", recorder([]))
    with pytest.raises(RuntimeError):
        router.get("/a", recorder([]))


def test_remove_route():
    router = Router()
    router.put("/a/b", recorder([]))
    router.remove_route(Method.PUT, "/a/b")
    status = router.route(FakeRequest(Method.PUT, "/a/b"), FakeResponse())
    assert status is RouteStatus.NOT_FOUND
    with pytest.raises(RuntimeError):
        router.remove_route(Method.PUT, "/never")


def test_optional_param_may_be_missing():
    router = Router()
    calls = []
    router.get("/a/:b?", recorder(calls))
    assert router.route(FakeRequest(Method.GET, "/a"), FakeResponse()) is RouteStatus.MATCH
    assert calls[0].splat() == []


def test_method_helpers_register_their_method():
    router = Router()
    calls = []
    router.delete("/r", recorder(calls))
    router.patch("/r", recorder(calls))
    router.head("/r", recorder(calls))
    router.options("/r", recorder(calls))
    for method in (Method.DELETE, Method.PATCH, Method.HEAD, Method.OPTIONS):
        assert router.route(FakeRequest(method, "/r"), FakeResponse()) is RouteStatus.MATCH
    assert len(calls) == 4


def test_disconnect_handlers_get_peer():
    router = Router()
    peers = []
    router.add_disconnect_handler(peers.append)
    router.add_disconnect_handler(peers.append)
    router.disconnect_peer("peer")
    assert peers == ["peer", "peer"]


def test_rest_request_errors():
    request = RestRequest(FakeRequest(Method.GET, "/x"), [TypedParam("id", "1")], [])
    assert request.param("id").value == "1"
    with pytest.raises(RuntimeError):
        request.param("other")
    with pytest.raises(IndexError):
        request.splat_at(0)


def test_bind_reports_ok():
    seen = []
    handler = bind(lambda req, resp: seen.append((req, resp)))
    assert handler("req", "resp") is RouteResult.OK
    assert seen == [("req", "resp")]


def test_middleware_wrapper_returns_verdict():
    wrapped = middleware(lambda req, resp: req == "yes")
    assert wrapped("yes", None) is True
    assert wrapped("no", None) is False