"""An in-memory JSON tree of typed nodes, with a tab-indented serializer."""

from __future__ import annotations

import enum
from typing import Any, Iterator, Optional


class JsonError(Exception):
    """Raised when a JSON tree operation is not valid for the node involved."""


class JsonType(enum.IntEnum):
    """Kinds of JSON node."""

    NULL = 0
    OBJECT = 1
    ARRAY = 2
    STRING = 3
    INTEGER = 4
    DOUBLE = 5
    BOOL = 6


_CONTAINERS = (JsonType.OBJECT, JsonType.ARRAY)

_ESCAPES = {
    "\n": "\\n",
    '"': '\\"',
    "\r": "\\r",
    "\\": "\\\\",
    "\b": "\\b",
    "\f": "\\f",
    "\t": "\\t",
}


def escape_string(s: str) -> str:
    """Escape quotes, backslashes and control characters for a JSON string."""
    return "".join(_ESCAPES.get(char, char) for char in s)


def _coerce(node_type: JsonType, value: Any) -> Any:
    if node_type is JsonType.STRING:
        return "" if value is None else str(value)
    if node_type is JsonType.INTEGER:
        return int(value or 0)
    if node_type is JsonType.DOUBLE:
        return float(value or 0.0)
    if node_type is JsonType.BOOL:
        return bool(value)
    return None


class JsonNode:
    """A node of a JSON tree.

    Scalar nodes hold their value in ``value``; objects and arrays hold child
    nodes, in insertion order. Children of objects carry a key.
    """

    __slots__ = ("type", "key", "value", "parent", "_children")

    def __init__(
        self,
        type: JsonType,
        key: Optional[str] = None,
        value: Any = None,
        parent: Optional["JsonNode"] = None,
    ) -> None:
        self.type = JsonType(type)
        self.key = key
        self.value = _coerce(self.type, value)
        self.parent: Optional[JsonNode] = None
        self._children: list[JsonNode] = []
        if parent is not None:
            parent._attach(self)

    @property
    def children(self) -> tuple["JsonNode", ...]:
        return tuple(self._children)

    @property
    def is_root(self) -> bool:
        return self.parent is None

    def _attach(self, child: "JsonNode") -> None:
        child.parent = self
        self._children.append(child)

    def _detach(self, child: "JsonNode") -> None:
        for position, candidate in enumerate(self._children):
            if candidate is child:
                del self._children[position]
                child.parent = None
                return
        raise JsonError("node is not a child of this node")

    def _require(self, node_type: JsonType) -> None:
        if self.type is not node_type:
            raise JsonError(f"operation requires a {node_type.name} node, not {self.type.name}")

    def get(self, key: str) -> Optional["JsonNode"]:
        """Return the first child with ``key``, or None."""
        for child in self._children:
            if child.key is not None and child.key == key:
                return child
        return None

    def add(self, key: str, val: "JsonNode") -> "JsonNode":
        """Add a copy of scalar ``val`` under ``key``; containers are added empty."""
        self._require(JsonType.OBJECT)
        node = JsonNode(val.type, key, None, self)
        node.value = _coerce(val.type, val.value)
        return node

    def set(self, key: str, val: "JsonNode") -> None:
        """Replace the value of the child under ``key`` with that of ``val``."""
        self._require(JsonType.OBJECT)
        target = self.get(key)
        if target is None:
            raise KeyError(key)
        if target.type is not val.type:
            raise JsonError("Type mismatch")
        target.value = _coerce(val.type, val.value)

    def delete(self, key: str) -> None:
        """Remove the child under ``key``."""
        target = self.get(key)
        if target is None:
            raise KeyError(key)
        self._detach(target)

    def get_item(self, idx: int) -> Optional["JsonNode"]:
        """Return the child at position ``idx``, or None if there is none."""
        if 0 <= idx < len(self._children):
            return self._children[idx]
        return None

    def set_item(self, idx: int, val: "JsonNode") -> None:
        """Replace the value of the array item at ``idx`` with that of ``val``."""
        self._require(JsonType.ARRAY)
        target = self.get_item(idx)
        if target is None:
            raise IndexError(idx)
        if target.type is not val.type:
            raise JsonError("Type mismatch")
        target.value = _coerce(val.type, val.value)

    def add_item(self, val: "JsonNode") -> int:
        """Append a copy of ``val`` to the array; return its index."""
        self._require(JsonType.ARRAY)
        node = JsonNode(val.type, None, None, self)
        node.value = _coerce(val.type, val.value)
        return len(self._children) - 1

    def delete_item(self, idx: int) -> None:
        """Remove the array item at ``idx``."""
        self._require(JsonType.ARRAY)
        target = self.get_item(idx)
        if target is None:
            raise IndexError(idx)
        self._detach(target)

    def splice(self, child: "JsonNode") -> None:
        """Move ``child`` (with its subtree) to the end of this node's children."""
        ancestor: Optional[JsonNode] = self
        while ancestor is not None:
            if ancestor is child:
                raise JsonError("cannot splice a node into its own subtree")
            ancestor = ancestor.parent
        if child.parent is not None:
            child.parent._detach(child)
        self._attach(child)

    def array_splice(self, child: "JsonNode") -> int:
        """Move ``child`` to the end of this array; return its index."""
        self._require(JsonType.ARRAY)
        self.splice(child)
        return len(self._children) - 1

    def split(self) -> None:
        """Detach this node from its parent, making it the root of its own tree."""
        if self.parent is not None:
            self.parent._detach(self)

    def serialize(self) -> str:
        """Render this node and its subtree as tab-indented JSON text."""
        parts: list[str] = []
        _serialize_into(self, parts, 0)
        return "".join(parts)

    def __len__(self) -> int:
        return len(self._children)

    def __iter__(self) -> Iterator["JsonNode"]:
        return iter(list(self._children))

    def __repr__(self) -> str:
        return f"JsonNode({self.type.name}, key={self.key!r}, value={self.value!r}, children={len(self)})"


def _serialize_into(node: JsonNode, out: list[str], level: int) -> None:
    indent = "\t" * level
    out.append(indent)

    if node.parent is not None and node.parent.type is not JsonType.ARRAY:
        key = node.key if node.key is not None else ""
        out.append(f'"{key}": ')

    node_type = node.type
    if node_type in _CONTAINERS:
        opener, closer = ("{", "}") if node_type is JsonType.OBJECT else ("[", "]")
        out.append(opener + "\n")
        children = node._children
        last = len(children) - 1
        for position, child in enumerate(children):
            _serialize_into(child, out, level + 1)
            out.append(",\n" if position < last else "\n")
        out.append(indent + closer)
    elif node_type is JsonType.STRING:
        out.append(f'"{escape_string(node.value)}"')
    elif node_type is JsonType.INTEGER:
        out.append(str(node.value))
    elif node_type is JsonType.DOUBLE:
        out.append(f"{node.value:f}")
    elif node_type is JsonType.BOOL:
        out.append("true" if node.value == 1 else "false")
    else:
        out.append("null")


def serialize(node: JsonNode) -> str:
    """Render ``node`` and its subtree as tab-indented JSON text."""
    return node.serialize()