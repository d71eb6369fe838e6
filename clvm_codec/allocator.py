"""Node arena for CLVM values.

Every node lives in an `Allocator` and is referred to by a `NodePtr` handle.
Atoms are stored as `bytes`, pairs as a `(first, rest)` tuple of handles. The
arena is append-only: nothing is ever mutated or freed, so a failed decode can
never corrupt nodes that were created before it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from clvm_codec.errors import ExpectedAtom, ExpectedPair


@dataclass(frozen=True)
class NodePtr:
    i: int

    def __int__(self) -> int:
        return int(self.i)

    def __index__(self) -> int:
        return int(self.i)


_Slot = Union[bytes, tuple[NodePtr, NodePtr]]


class Allocator:
    """Append-only arena of atoms and pairs.

    Atoms are interned, so encoding the same bytes twice yields the same
    handle. Not safe for concurrent mutation from several threads.
    """

    __slots__ = ("_nodes", "_atoms", "_nil", "_one")

    def __init__(self):
        self._nodes: list[_Slot] = []
        self._atoms: dict[bytes, NodePtr] = {}
        self._nil = self.new_atom(b"")
        self._one = self.new_atom(b"\x01")

    def __len__(self) -> int:
        return len(self._nodes)

    def __repr__(self) -> str:
        return f"<Allocator nodes={len(self._nodes)} atoms={len(self._atoms)}>"

    # --- Construction ---
    def new_atom(self, blob: bytes) -> NodePtr:
        blob = bytes(blob)
        ptr = self._atoms.get(blob)
        if ptr is None:
            ptr = NodePtr(len(self._nodes))
            self._nodes.append(blob)
            self._atoms[blob] = ptr
        return ptr

    def new_pair(self, first: NodePtr, rest: NodePtr) -> NodePtr:
        self._check(first)
        self._check(rest)
        ptr = NodePtr(len(self._nodes))
        self._nodes.append((first, rest))
        return ptr

    def nil(self) -> NodePtr:
        return self._nil

    def one(self) -> NodePtr:
        return self._one

    # --- Inspection ---
    def is_atom(self, node: NodePtr) -> bool:
        return isinstance(self._slot(node), bytes)

    def is_pair(self, node: NodePtr) -> bool:
        return not self.is_atom(node)

    def is_nil(self, node: NodePtr) -> bool:
        return self._slot(node) == b""

    def atom(self, node: NodePtr) -> bytes:
        slot = self._slot(node)
        if not isinstance(slot, bytes):
            raise ExpectedAtom()
        return slot

    def pair(self, node: NodePtr) -> tuple[NodePtr, NodePtr]:
        slot = self._slot(node)
        if isinstance(slot, bytes):
            raise ExpectedPair()
        return slot

    def atom_len(self, node: NodePtr) -> int:
        return len(self.atom(node))

    # --- Internals ---
    def _slot(self, node: NodePtr) -> _Slot:
        self._check(node)
        return self._nodes[node.i]

    def _check(self, node: NodePtr) -> None:
        if not isinstance(node, NodePtr) or not 0 <= node.i < len(self._nodes):
            raise ValueError(f"{node!r} does not belong to this allocator")
