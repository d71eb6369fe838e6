from __future__ import annotations

from typing import Any

from clvm_codec.allocator import Allocator, NodePtr
from clvm_codec.config import get_max_decode_depth
from clvm_codec.errors import DepthLimitExceeded, FromClvmError


class Codec:
    """Encode/decode contract shared by every primitive and derived codec.

    `encode` is total for well-formed values and raises `ToClvmError`
    otherwise. `decode` raises a `FromClvmError` subclass. `depth` counts how
    many composite values enclose `node` and is checked against the configured
    limit before any child is decoded.
    """

    # True when at least one value of the type encodes to the nil atom
    nil_encodable: bool = True

    def encode(self, a: Allocator, value: Any) -> NodePtr:
        raise NotImplementedError

    def decode(self, a: Allocator, node: NodePtr, depth: int = 0) -> Any:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"<{type(self).__name__}>"


def check_depth(depth: int) -> None:
    limit = get_max_decode_depth()
    if depth > limit:
        raise DepthLimitExceeded(limit)


def decode_child(
    codec: Codec, a: Allocator, node: NodePtr, depth: int, segment: str | int
) -> Any:
    """Decode a nested value one level deeper, tagging failures with `segment`."""
    try:
        return codec.decode(a, node, depth + 1)
    except FromClvmError as e:
        e.with_context(segment)
        raise
