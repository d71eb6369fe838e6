"""Resolve Python type annotations to codecs.

    bool                      -> Bool
    bytes                     -> Bytes
    str                       -> Str
    None                      -> Unit
    tuple[()]                 -> Unit (decodes to ())
    Annotated[T, codec]       -> codec         (U64, I32, Bytes32, ...)
    Optional[T] / T | None    -> Option(T)
    list[T] / Sequence[T]     -> ListOf(T)
    tuple[T, ...]             -> ListOf(T)
    tuple[A, B]               -> Pair(A, B)
    @clvm / @clvm_enum class  -> its derived codec
    class with to_clvm/from_clvm methods -> CustomCodec

Plain `int` is rejected: the width is part of the encoding contract.
"""

from __future__ import annotations

import collections.abc
import inspect
import logging
import threading
import types
import typing
from typing import Any

from clvm_codec.allocator import Allocator, NodePtr
from clvm_codec.codec.base import Codec, check_depth
from clvm_codec.codec.primitives import Bool, Bytes, ListOf, Option, Pair, Str, Unit

logger = logging.getLogger(__name__)

_BOOL = Bool()
_BYTES = Bytes()
_STR = Str()
_UNIT = Unit()
_EMPTY_TUPLE = Unit(())

_cache: dict[Any, Codec] = {}
_lock = threading.Lock()


def _accepts_depth(fn: Any) -> bool:
    try:
        return "depth" in inspect.signature(fn).parameters
    except (TypeError, ValueError):
        return False


class CustomCodec(Codec):
    """Adapter for classes that implement `to_clvm` / `from_clvm` by hand.

    A `from_clvm(a, node, depth)` that takes a `depth` keyword is given the
    depth of `node` and should decode nested values through `decode_child`
    so the depth limit keeps counting. Without it, nesting restarts at 0
    inside the custom value.
    """

    def __init__(self, cls: type):
        self.cls = cls
        self.nil_encodable = getattr(cls, "clvm_nil_encodable", True)
        self._takes_depth = _accepts_depth(cls.from_clvm)

    def encode(self, a: Allocator, value: Any) -> NodePtr:
        return value.to_clvm(a)

    def decode(self, a: Allocator, node: NodePtr, depth: int = 0) -> Any:
        check_depth(depth)
        if self._takes_depth:
            return self.cls.from_clvm(a, node, depth=depth)
        return self.cls.from_clvm(a, node)

    def __repr__(self) -> str:
        return f"<custom {self.cls.__name__}>"


def codec_for(tp: Any) -> Codec:
    if isinstance(tp, Codec):
        return tp
    derived = getattr(tp, "__clvm_codec__", None)
    if derived is not None:
        return derived()

    with _lock:
        cached = _cache.get(tp)
    if cached is not None:
        return cached

    codec = _build(tp)
    with _lock:
        codec = _cache.setdefault(tp, codec)
    logger.debug("resolved clvm codec for %r: %r", tp, codec)
    return codec


def _build(tp: Any) -> Codec:
    origin = typing.get_origin(tp)
    args = typing.get_args(tp)

    if origin is typing.Annotated:
        for meta in tp.__metadata__:
            if isinstance(meta, Codec):
                return meta
        return codec_for(args[0])

    if tp is bool:
        return _BOOL
    if tp is bytes:
        return _BYTES
    if tp is str:
        return _STR
    if tp is None or tp is type(None):
        return _UNIT
    if tp is int:
        raise TypeError("int has no fixed width; annotate with U8..U128 or I8..I128")

    if origin is typing.Union or origin is types.UnionType:
        present = [t for t in args if t is not type(None)]
        if len(present) == 1 and len(args) == 2:
            return Option(codec_for(present[0]))
        raise TypeError(f"only Optional[T] unions can be encoded, got {tp!r}")

    if origin in (list, collections.abc.Sequence) and len(args) == 1:
        return ListOf(codec_for(args[0]))

    if origin is tuple:
        # tuple[()] reports its args as () or ((),) depending on the Python version
        if args in ((), ((),)) and tp is not typing.Tuple:
            return _EMPTY_TUPLE
        if len(args) == 2 and args[1] is Ellipsis:
            return ListOf(codec_for(args[0]))
        if len(args) == 2:
            return Pair(codec_for(args[0]), codec_for(args[1]))

    if isinstance(tp, type) and hasattr(tp, "to_clvm") and hasattr(tp, "from_clvm"):
        return CustomCodec(tp)

    raise TypeError(f"no clvm codec for {tp!r}")


def to_clvm(a: Allocator, value: Any, tp: Any = None) -> NodePtr:
    """Encode `value`; `tp` is required when the Python type alone has no codec (ints)."""
    return codec_for(type(value) if tp is None else tp).encode(a, value)


def from_clvm(tp: Any, a: Allocator, node: NodePtr) -> Any:
    return codec_for(tp).decode(a, node)
