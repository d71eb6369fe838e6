"""Framing conventions for an ordered list of already-encoded field nodes.

* tuple  ``(A . (B . C))``                  no terminator
* list   ``(A . (B . (C . ())))``           nil terminated
* curry  ``(c (q . A) (c (q . B) 1))``      arguments curried onto a program

`frame` builds the outer structure, `unframe` peels it back into exactly
`count` field nodes. Decoding the fields themselves is the caller's job.
"""

from __future__ import annotations

from enum import Enum

from clvm_codec.allocator import Allocator, NodePtr
from clvm_codec.errors import ExpectedNil, ExpectedPair, InvalidCurryForm

# Operator atoms used by the curry form
OP_QUOTE = b"\x01"
OP_CONS = b"\x04"
# Environment reference that terminates a curried argument chain
ENV_ATOM = b"\x01"


class Repr(Enum):
    TUPLE = "tuple"
    LIST = "list"
    CURRY = "curry"


def frame(a: Allocator, representation: Repr, nodes: list[NodePtr]) -> NodePtr:
    if representation is Repr.TUPLE:
        return _frame_tuple(a, nodes)
    if representation is Repr.LIST:
        return _frame_list(a, nodes)
    if representation is Repr.CURRY:
        return _frame_curry(a, nodes)
    raise ValueError(f"unknown representation {representation!r}")


def unframe(
    a: Allocator, representation: Repr, node: NodePtr, count: int
) -> list[NodePtr]:
    if representation is Repr.TUPLE:
        return _unframe_tuple(a, node, count)
    if representation is Repr.LIST:
        return _unframe_list(a, node, count)
    if representation is Repr.CURRY:
        return _unframe_curry(a, node, count)
    raise ValueError(f"unknown representation {representation!r}")


# --- Tuple ---
def _frame_tuple(a: Allocator, nodes: list[NodePtr]) -> NodePtr:
    if not nodes:
        return a.nil()
    acc = nodes[-1]
    for n in reversed(nodes[:-1]):
        acc = a.new_pair(n, acc)
    return acc


def _unframe_tuple(a: Allocator, node: NodePtr, count: int) -> list[NodePtr]:
    if count == 0:
        if not a.is_atom(node) or not a.is_nil(node):
            raise ExpectedNil()
        return []
    out = []
    for _ in range(count - 1):
        if not a.is_pair(node):
            raise ExpectedPair()
        first, node = a.pair(node)
        out.append(first)
    out.append(node)
    return out


# --- List ---
def _frame_list(a: Allocator, nodes: list[NodePtr]) -> NodePtr:
    acc = a.nil()
    for n in reversed(nodes):
        acc = a.new_pair(n, acc)
    return acc


def _unframe_list(a: Allocator, node: NodePtr, count: int) -> list[NodePtr]:
    out = []
    for _ in range(count):
        if not a.is_pair(node):
            raise ExpectedPair()
        first, node = a.pair(node)
        out.append(first)
    if not a.is_atom(node) or not a.is_nil(node):
        raise ExpectedNil()
    return out


# --- Curry ---
def _frame_curry(a: Allocator, nodes: list[NodePtr]) -> NodePtr:
    op_c = a.new_atom(OP_CONS)
    op_q = a.new_atom(OP_QUOTE)
    nil = a.nil()
    acc = a.new_atom(ENV_ATOM)
    for n in reversed(nodes):
        quoted = a.new_pair(op_q, n)
        acc = a.new_pair(op_c, a.new_pair(quoted, a.new_pair(acc, nil)))
    return acc


def _split(a: Allocator, node: NodePtr, what: str) -> tuple[NodePtr, NodePtr]:
    if not a.is_pair(node):
        raise InvalidCurryForm(f"expected pair for {what}")
    return a.pair(node)


def _expect_atom(a: Allocator, node: NodePtr, blob: bytes, what: str) -> None:
    if not a.is_atom(node) or a.atom(node) != blob:
        raise InvalidCurryForm(f"expected {what} atom {blob.hex()}")


def _unframe_curry(a: Allocator, node: NodePtr, count: int) -> list[NodePtr]:
    out = []
    for i in range(count):
        # (c (q . value) rest)
        op, args = _split(a, node, "cons application")
        _expect_atom(a, op, OP_CONS, "cons operator")
        quoted, args = _split(a, args, f"argument {i}")
        q, value = _split(a, quoted, f"quoted argument {i}")
        _expect_atom(a, q, OP_QUOTE, "quote operator")
        node, tail = _split(a, args, "remaining arguments")
        if not a.is_atom(tail) or not a.is_nil(tail):
            raise InvalidCurryForm("cons application takes exactly two arguments")
        out.append(value)
    _expect_atom(a, node, ENV_ATOM, "environment")
    return out
