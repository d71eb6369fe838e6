"""
  Canonical CLVM wire format and tree hashing

The byte format itself is `clvm.serialize`'s. This module adapts the arena to
it: `clvm` walks any object that exposes `.atom` and `.pair` (the CLVMObject
protocol), and hands parsed atoms and pairs back through a `to_sexp`
callable, which here allocates them in the caller's `Allocator`.

Both directions, and `tree_hash`, use explicit stacks, so a hostile blob with
a very deep left spine cannot exhaust the Python stack.
"""

from __future__ import annotations

import hashlib
from io import BytesIO
from typing import Any, Optional

from clvm.serialize import sexp_from_stream, sexp_to_stream

from clvm_codec.allocator import Allocator, NodePtr
from clvm_codec.errors import SerdeError


class _NodeView:
    """Read-only CLVMObject view of one arena node."""

    __slots__ = ("_a", "_node")

    def __init__(self, a: Allocator, node: NodePtr):
        self._a = a
        self._node = node

    @property
    def atom(self) -> Optional[bytes]:
        if self._a.is_atom(self._node):
            return self._a.atom(self._node)
        return None

    @property
    def pair(self) -> Optional[tuple[_NodeView, _NodeView]]:
        if self._a.is_atom(self._node):
            return None
        first, rest = self._a.pair(self._node)
        return _NodeView(self._a, first), _NodeView(self._a, rest)


def _to_node(a: Allocator, obj: Any) -> NodePtr:
    # obj is bytes, an already allocated NodePtr, or a (first, rest) tuple of those
    results: list[NodePtr] = []
    stack: list[tuple[Any, bool]] = [(obj, False)]
    while stack:
        o, ready = stack.pop()
        if ready:
            rest = results.pop()
            first = results.pop()
            results.append(a.new_pair(first, rest))
        elif isinstance(o, NodePtr):
            results.append(o)
        elif isinstance(o, tuple):
            stack.append((o, True))
            stack.append((o[1], False))
            stack.append((o[0], False))
        else:
            results.append(a.new_atom(o))
    return results[0]


def node_to_bytes(a: Allocator, node: NodePtr) -> bytes:
    out = BytesIO()
    try:
        sexp_to_stream(_NodeView(a, node), out)
    except ValueError as e:
        raise SerdeError(f"cannot serialize node: {e}") from e
    return out.getvalue()


def node_to_hex(a: Allocator, node: NodePtr) -> str:
    return node_to_bytes(a, node).hex()


def node_from_bytes(a: Allocator, blob: bytes) -> NodePtr:
    """Parse exactly one node from `blob`; trailing bytes are an error."""
    blob = bytes(blob)
    f = BytesIO(blob)
    try:
        node = sexp_from_stream(f, lambda obj: _to_node(a, obj))
    except ValueError as e:
        raise SerdeError(f"bad encoding: {e}") from e
    trailing = len(blob) - f.tell()
    if trailing:
        raise SerdeError(f"bad encoding: {trailing} trailing byte(s)")
    return node


def node_from_hex(a: Allocator, text: str) -> NodePtr:
    try:
        blob = bytes.fromhex(text)
    except ValueError as e:
        raise SerdeError(f"invalid hex: {e}") from None
    return node_from_bytes(a, blob)


def tree_hash(a: Allocator, node: NodePtr) -> bytes:
    """sha256 tree hash: atoms hash as 0x01 || atom, pairs as 0x02 || left || right."""
    hashes: list[bytes] = []
    # (node, visited) entries; a visited pair combines the two hashes above it
    stack: list[tuple[NodePtr, bool]] = [(node, False)]
    while stack:
        n, visited = stack.pop()
        if visited:
            right = hashes.pop()
            left = hashes.pop()
            hashes.append(hashlib.sha256(b"\2" + left + right).digest())
        elif a.is_atom(n):
            hashes.append(hashlib.sha256(b"\1" + a.atom(n)).digest())
        else:
            first, rest = a.pair(n)
            stack.append((n, True))
            stack.append((rest, False))
            stack.append((first, False))
    return hashes[0]
