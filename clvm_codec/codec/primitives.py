"""Built-in codecs: integers, byte strings, strings, booleans, optionals,
sequences, pairs and unit.

The `Annotated` aliases at the bottom (`U8`, `I32`, `Bytes32`, ...) are what
dataclass fields use to pick a width; a bare `int` carries no width and is
rejected by the registry.
"""

from __future__ import annotations

from typing import Annotated, Any, Sequence

from clvm.casts import int_from_bytes, int_to_bytes

from clvm_codec.allocator import Allocator, NodePtr
from clvm_codec.codec.base import Codec, check_depth, decode_child
from clvm_codec.errors import (
    Custom,
    ExpectedAtom,
    ExpectedNil,
    ExpectedPair,
    ToClvmError,
    WrongAtomLength,
)


# --- Integer helpers ---
# Minimal big-endian two's complement; zero is the empty atom.
int_to_atom = int_to_bytes
atom_to_int = int_from_bytes


def _atom(a: Allocator, node: NodePtr) -> bytes:
    if not a.is_atom(node):
        raise ExpectedAtom()
    return a.atom(node)


class Int(Codec):
    """Fixed-width integer. Padded atoms are accepted if the value fits."""

    def __init__(self, bits: int, signed: bool):
        if bits <= 0 or bits % 8:
            raise ValueError(f"integer width must be a positive multiple of 8, got {bits}")
        self.bits = bits
        self.signed = signed
        self.byte_len = bits // 8
        if signed:
            self.min = -(1 << (bits - 1))
            self.max = (1 << (bits - 1)) - 1
        else:
            self.min = 0
            self.max = (1 << bits) - 1

    def encode(self, a: Allocator, value: Any) -> NodePtr:
        if isinstance(value, bool) or not isinstance(value, int):
            raise ToClvmError(f"{self!r} expects int, got {type(value).__name__}")
        if not self.min <= value <= self.max:
            raise ToClvmError(f"{value} is out of range for {self!r}")
        return a.new_atom(int_to_atom(value))

    def decode(self, a: Allocator, node: NodePtr, depth: int = 0) -> int:
        blob = _atom(a, node)
        value = atom_to_int(blob)
        if not self.min <= value <= self.max:
            raise WrongAtomLength(self.byte_len, len(blob))
        return value

    def __repr__(self) -> str:
        return f"{'i' if self.signed else 'u'}{self.bits}"


class Bytes(Codec):
    def encode(self, a: Allocator, value: Any) -> NodePtr:
        if not isinstance(value, (bytes, bytearray, memoryview)):
            raise ToClvmError(f"bytes expected, got {type(value).__name__}")
        return a.new_atom(bytes(value))

    def decode(self, a: Allocator, node: NodePtr, depth: int = 0) -> bytes:
        return _atom(a, node)


class FixedBytes(Codec):
    """Byte array of exactly `size` bytes."""

    def __init__(self, size: int):
        self.size = size
        self.nil_encodable = size == 0

    def encode(self, a: Allocator, value: Any) -> NodePtr:
        if not isinstance(value, (bytes, bytearray, memoryview)):
            raise ToClvmError(f"bytes expected, got {type(value).__name__}")
        if len(value) != self.size:
            raise ToClvmError(f"expected {self.size} bytes, got {len(value)}")
        return a.new_atom(bytes(value))

    def decode(self, a: Allocator, node: NodePtr, depth: int = 0) -> bytes:
        blob = _atom(a, node)
        if len(blob) != self.size:
            raise WrongAtomLength(self.size, len(blob))
        return blob

    def __repr__(self) -> str:
        return f"bytes{self.size}"


class Str(Codec):
    def encode(self, a: Allocator, value: Any) -> NodePtr:
        if not isinstance(value, str):
            raise ToClvmError(f"str expected, got {type(value).__name__}")
        return a.new_atom(value.encode("utf-8"))

    def decode(self, a: Allocator, node: NodePtr, depth: int = 0) -> str:
        try:
            return _atom(a, node).decode("utf-8")
        except UnicodeDecodeError as e:
            raise Custom(f"invalid utf-8 string: {e.reason}") from None


class Bool(Codec):
    def encode(self, a: Allocator, value: Any) -> NodePtr:
        if not isinstance(value, bool):
            raise ToClvmError(f"bool expected, got {type(value).__name__}")
        return a.one() if value else a.nil()

    def decode(self, a: Allocator, node: NodePtr, depth: int = 0) -> bool:
        blob = _atom(a, node)
        if blob == b"":
            return False
        if blob == b"\x01":
            return True
        raise Custom(f"expected boolean value of either 1 or 0, got {blob.hex()}")


class Unit(Codec):
    """The empty value <-> nil. Decodes to `empty`: `None`, or `()` for `tuple[()]`."""

    def __init__(self, empty: Any = None):
        self.empty = empty

    def encode(self, a: Allocator, value: Any) -> NodePtr:
        if value is not None and value != ():
            raise ToClvmError(f"unit expected, got {value!r}")
        return a.nil()

    def decode(self, a: Allocator, node: NodePtr, depth: int = 0) -> Any:
        if not a.is_atom(node) or not a.is_nil(node):
            raise ExpectedNil()
        return self.empty


class Option(Codec):
    """`None` is nil, anything else is the inner encoding.

    Nil always decodes as `None`, so an inner type that can itself encode to
    nil would make `Some(x)` and `None` indistinguishable. Such inner codecs
    are rejected up front.
    """

    def __init__(self, inner: Codec):
        if inner.nil_encodable:
            raise TypeError(
                f"Option[{inner!r}] is ambiguous: {inner!r} can encode to nil"
            )
        self.inner = inner

    def encode(self, a: Allocator, value: Any) -> NodePtr:
        if value is None:
            return a.nil()
        return self.inner.encode(a, value)

    def decode(self, a: Allocator, node: NodePtr, depth: int = 0) -> Any:
        if a.is_atom(node) and a.is_nil(node):
            return None
        return self.inner.decode(a, node, depth)

    def __repr__(self) -> str:
        return f"Option[{self.inner!r}]"


class ListOf(Codec):
    """Proper list of homogeneous elements: `(e1 e2 ... en)`."""

    def __init__(self, inner: Codec):
        self.inner = inner

    def encode(self, a: Allocator, value: Any) -> NodePtr:
        if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
            raise ToClvmError(f"sequence expected, got {type(value).__name__}")
        acc = a.nil()
        for item in reversed(value):
            acc = a.new_pair(self.inner.encode(a, item), acc)
        return acc

    def decode(self, a: Allocator, node: NodePtr, depth: int = 0) -> list:
        check_depth(depth)
        items = []
        while a.is_pair(node):
            first, node = a.pair(node)
            items.append(decode_child(self.inner, a, first, depth, len(items)))
        if not a.is_nil(node):
            raise ExpectedNil()
        return items

    def __repr__(self) -> str:
        return f"list[{self.inner!r}]"


class Pair(Codec):
    """A 2-tuple `(first . rest)`."""

    nil_encodable = False

    def __init__(self, first: Codec, rest: Codec):
        self.first = first
        self.rest = rest

    def encode(self, a: Allocator, value: Any) -> NodePtr:
        if not isinstance(value, tuple) or len(value) != 2:
            raise ToClvmError(f"2-tuple expected, got {value!r}")
        return a.new_pair(self.first.encode(a, value[0]), self.rest.encode(a, value[1]))

    def decode(self, a: Allocator, node: NodePtr, depth: int = 0) -> tuple:
        check_depth(depth)
        if not a.is_pair(node):
            raise ExpectedPair()
        first, rest = a.pair(node)
        return (
            decode_child(self.first, a, first, depth, 0),
            decode_child(self.rest, a, rest, depth, 1),
        )

    def __repr__(self) -> str:
        return f"tuple[{self.first!r}, {self.rest!r}]"


# Field type aliases
U8 = Annotated[int, Int(8, signed=False)]
U16 = Annotated[int, Int(16, signed=False)]
U32 = Annotated[int, Int(32, signed=False)]
U64 = Annotated[int, Int(64, signed=False)]
U128 = Annotated[int, Int(128, signed=False)]
I8 = Annotated[int, Int(8, signed=True)]
I16 = Annotated[int, Int(16, signed=True)]
I32 = Annotated[int, Int(32, signed=True)]
I64 = Annotated[int, Int(64, signed=True)]
I128 = Annotated[int, Int(128, signed=True)]

Bytes32 = Annotated[bytes, FixedBytes(32)]
Bytes48 = Annotated[bytes, FixedBytes(48)]
Bytes96 = Annotated[bytes, FixedBytes(96)]
