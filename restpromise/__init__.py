"""A segment-tree REST router, optional values, thread-safe queues and type identifiers."""

__version__ = "0.1.0"
__all__ = [
    "mailbox",
    "optional",
    "router",
    "segment_tree",
    "typeid",
]