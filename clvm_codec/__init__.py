# Typed encoding of Python values as CLVM nodes.
#
# A node is either an atom (raw bytes, the empty atom doubling as nil, false
# and zero) or a pair of two nodes. Nodes live in an Allocator and are passed
# around as NodePtr handles; nothing in this package keeps nodes alive on its
# own.
#
# Naming guidance:
# - `a` is always the Allocator a node belongs to.
# - `to_clvm` / `from_clvm` are the value-level entry points; `encode` /
#   `decode` are the codec-level ones and take the current decode depth.

from clvm_codec.allocator import Allocator, NodePtr
from clvm_codec.codec import (
    Bytes32,
    Bytes48,
    Bytes96,
    I8,
    I16,
    I32,
    I64,
    I128,
    Repr,
    U8,
    U16,
    U32,
    U64,
    U128,
    clvm,
    clvm_enum,
    codec_for,
    from_clvm,
    to_clvm,
    variant,
)
from clvm_codec.serde import node_from_bytes, node_from_hex, node_to_bytes, node_to_hex, tree_hash

__all__ = [
    "Allocator",
    "NodePtr",
    "Bytes32",
    "Bytes48",
    "Bytes96",
    "I8",
    "I16",
    "I32",
    "I64",
    "I128",
    "Repr",
    "U8",
    "U16",
    "U32",
    "U64",
    "U128",
    "clvm",
    "clvm_enum",
    "codec_for",
    "from_clvm",
    "to_clvm",
    "variant",
    "node_from_bytes",
    "node_from_hex",
    "node_to_bytes",
    "node_to_hex",
    "tree_hash",
]
