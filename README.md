# restpromise

Building blocks for HTTP services:

- **`restpromise.segment_tree`**: a tree of URL path segments that matches paths to handlers. It provides `SegmentTreeNode`, `Route`, `TypedParam` and `RouteResult`.
- **`restpromise.router`**: a REST `Router` built on that tree. It also provides `Method`, `RouteStatus`, `RestRequest` and the `bind` and `middleware` helpers.
- **`restpromise.optional`**: an `Optional` value, made with `some` and `none`. The helpers that act on it are `optionally_do`, `optionally_map`, `optionally_fmap` and `optionally_filter`.
- **`restpromise.mailbox`**: three thread-safe containers:
  - a single-slot `Mailbox`;
  - an unbounded FIFO `Queue`;
  - a bounded FIFO `MPMCQueue`, whose capacity is a power of two.
- **`restpromise.typeid`**: `TypeId`, an identifier for a type that can be compared, ordered and hashed.

## Installation

```
pip install restpromise
```

## Routing

A path pattern is made of segments. Each segment is one of these:

- a fixed segment, such as `users`;
- a parameter, such as `:id`;
- an optional parameter, such as `:id?`;
- a splat, `*`.

When a path is added or looked up, repeated slashes are collapsed, and the leading and trailing slashes are dropped.

The router does not need any particular request or response class:

- A request needs `method` and `resource` attributes. `method` is a `Method` or its name, for example `"GET"`.
- A response needs two methods: `send(code, body)` and `send_method_not_allowed(methods)`.
- A response may offer `clone()`. If it does, handlers get a clone of the response.

```python
from types import SimpleNamespace
from restpromise.router import Router, RouteStatus

router = Router()
router.get("/users/:id", lambda request, response: print(request.param("id").as_type(int)))

request = SimpleNamespace(method="GET", resource="/users/42")
status = router.route(request, response_writer)   # prints 42
assert status is RouteStatus.MATCH
```

What `Router.route` does depends on what matches:

| Situation | What happens | Return value |
|---|---|---|
| A route matches | Its handler is called with a `RestRequest` and the response. | `RouteStatus.MATCH` |
| A custom handler returns `RouteResult.OK` | Routing stops there. | `RouteStatus.MATCH` |
| The path matches under other methods only | `response.send_method_not_allowed(...)` is called with those methods. | `RouteStatus.NOT_ALLOWED` |
| Nothing matches | The not-found handler is called. If none is set, `response.send(HTTPStatus.NOT_FOUND, "Could not find a matching route")` is called. | `RouteStatus.NOT_FOUND` |

Other behaviour of the router:

- Middlewares added with `add_middleware` run first. If a middleware returns a false value, routing stops and the call returns `RouteStatus.MATCH`.
- `bind(func)` wraps a plain `func(request, response)`. The wrapped handler returns `RouteResult.OK`.
- `Router.route` and `add_route` raise `RuntimeError` when the URL is empty.
- `add_route` also raises `RuntimeError` when a route is already bound to that method and path.
- `remove_route` raises `RuntimeError` when the route does not exist.

Inside a handler, the request gives access to what the path captured:

- `RestRequest.has_param(name)` tells whether a parameter was captured.
- `RestRequest.param(name)` returns it. It raises `RuntimeError` if there is no parameter of that name.
- `RestRequest.splat()` returns the list of captured splats.
- `RestRequest.splat_at(index)` returns one splat. It raises `IndexError` if the index is out of range.
- `TypedParam.as_type(target)` converts a captured value. It raises `RuntimeError` if the value cannot be converted.

## Optional values

```python
from restpromise.optional import some, none, optionally_map

assert optionally_map(some(3), lambda v: v + 1).get() == 4
assert none().get_or_else(7) == 7
```

Calling `get()` on an empty `Optional` raises `ValueError`.

## Queues and mailboxes

```python
from restpromise.mailbox import Mailbox, Queue, MPMCQueue

box = Mailbox()
assert box.post("first") is None
assert box.post("second") == "first"

q = Queue()
q.push(1)
assert q.pop() == 1
assert q.pop_safe() is None

bounded = MPMCQueue(2)
assert bounded.enqueue("a") and bounded.enqueue("b")
assert not bounded.enqueue("c")   # the queue is full
```

Errors raised by these containers:

- `Mailbox.get()` raises `RuntimeError` when the mailbox is empty.
- `Queue.pop()` raises `IndexError` when the queue is empty.
- `MPMCQueue.dequeue()` raises `IndexError` when the queue is empty.
- `MPMCQueue(size)` raises `ValueError` unless `size` is a power of two of at least 2.

## Type identifiers

```python
from restpromise.typeid import TypeId

assert TypeId.of(int) == TypeId.of(int)
assert TypeId.of(int) != TypeId.of(str)
```

## What this package does not do

This package contains no HTTP server. It does not:

- listen on a socket or accept connections;
- parse HTTP messages;
- write responses to the network;
- provide promises or other asynchronous result types.

`Router.route` works on request and response objects that your own server code supplies.

## Running the tests

```
pip install -e ".[test]"
pytest
```