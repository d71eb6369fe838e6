from dataclasses import dataclass, field
from typing import Optional, Sequence, Union

import pytest

from clvm_codec import Bytes32, Repr, U8, U16, clvm, codec_for, from_clvm, node_to_hex, to_clvm
from clvm_codec.codec import CustomCodec, Int, ListOf, Option, Pair, StructCodec, decode_child
from clvm_codec.errors import DepthLimitExceeded


class Point:
    """Hand-written codec: (x . y) as two single-byte atoms."""

    clvm_nil_encodable = False

    def __init__(self, x, y):
        self.x = x
        self.y = y

    def __eq__(self, other):
        return isinstance(other, Point) and (self.x, self.y) == (other.x, other.y)

    def to_clvm(self, a):
        return a.new_pair(a.new_atom(bytes([self.x])), a.new_atom(bytes([self.y])))

    @classmethod
    def from_clvm(cls, a, node):
        x, y = a.pair(node)
        return cls(a.atom(x)[0], a.atom(y)[0])


@clvm
@dataclass
class WithCustom:
    where: Point
    label: Bytes32 | None = None


@clvm(Repr.TUPLE)
@dataclass
class WithOverride:
    # stored as a plain int, encoded as u16
    count: int = field(metadata={"clvm": U16})


def test_resolution():
    assert isinstance(codec_for(U8), Int)
    assert isinstance(codec_for(list[U8]), ListOf)
    assert isinstance(codec_for(Sequence[U8]), ListOf)
    assert isinstance(codec_for(tuple[U8, bytes]), Pair)
    assert isinstance(codec_for(Point), CustomCodec)
    assert isinstance(codec_for(Bytes32 | None), Option)
    assert isinstance(codec_for(WithCustom), StructCodec)


def test_codecs_are_cached():
    assert codec_for(list[U8]) is codec_for(list[U8])
    assert codec_for(WithCustom) is codec_for(WithCustom)


def test_codec_instance_passes_through():
    codec = Int(24, signed=False)
    assert codec_for(codec) is codec


@pytest.mark.parametrize("tp", [int, Union[U8, bytes], float, dict[bytes, bytes], tuple[U8, U8, U8]])
def test_unsupported_types(tp):
    with pytest.raises(TypeError):
        codec_for(tp)


def test_custom_codec_field(check):
    check(WithCustom(Point(1, 2)), "ffff0102ff8080")
    check(WithCustom(Point(1, 2), b"\x33" * 32), "ffff0102ffa0" + "33" * 32 + "80")


def test_field_metadata_override(check):
    check(WithOverride(count=300), "82012c")


def test_optional_of_custom(check):
    check(None, "80", Point | None)
    check(Point(3, 4), "ff0304", Point | None)


def test_bare_int_field_is_rejected(a):
    @clvm
    @dataclass
    class Untyped:
        n: int

    with pytest.raises(TypeError):
        to_clvm(a, Untyped(1))


def test_init_false_field_is_rejected(a):
    @clvm
    @dataclass
    class Derived:
        n: U8
        doubled: U8 = field(init=False, default=0)

    with pytest.raises(TypeError):
        codec_for(Derived)


def test_clvm_requires_dataclass():
    with pytest.raises(TypeError):

        @clvm
        class Plain:
            n: U8


def test_user_methods_are_kept(a):
    @clvm
    @dataclass
    class Tagged:
        n: U8

        def to_clvm(self, a):
            return a.new_atom(b"custom")

    assert node_to_hex(a, Tagged(1).to_clvm(a)) == "86637573746f6d"
    assert from_clvm(Tagged, a, to_clvm(a, Tagged(7))) == Tagged(7)


class Boxed:
    """Custom wrapper around a derived struct that forwards the decode depth."""

    clvm_nil_encodable = False
    seen_depth = None

    def __init__(self, inner):
        self.inner = inner

    def __eq__(self, other):
        return isinstance(other, Boxed) and self.inner == other.inner

    def to_clvm(self, a):
        return a.new_pair(a.one(), to_clvm(a, self.inner))

    @classmethod
    def from_clvm(cls, a, node, depth=0):
        cls.seen_depth = depth
        _, rest = a.pair(node)
        return cls(decode_child(codec_for(Chain), a, rest, depth, "inner"))


@clvm
@dataclass
class Chain:
    value: U8
    box: Optional[Boxed] = None


def test_custom_codec_receives_depth(check):
    check(Chain(1, Boxed(Chain(2))), "ff01ffff01ff02ff808080")
    # Chain at 0, its box field at 1
    assert Boxed.seen_depth == 1


def test_custom_codec_nesting_counts_toward_limit(a, depth_limit):
    depth_limit(10)
    value = Chain(0)
    for _ in range(20):
        value = Chain(0, Boxed(value))
    with pytest.raises(DepthLimitExceeded):
        from_clvm(Chain, a, to_clvm(a, value))
