from dataclasses import dataclass
from typing import Optional

import pytest

from clvm_codec import I8, Repr, U8, U32, clvm, clvm_enum, codec_for, from_clvm, node_from_hex, to_clvm, variant
from clvm_codec.errors import (
    ExpectedAtom,
    ExpectedNil,
    ExpectedPair,
    NoMatchingVariant,
    ToClvmError,
    WrongDiscriminant,
)


@clvm_enum(Repr.LIST)
class Shape:
    pass


@variant
@dataclass
class Circle(Shape):
    radius: U32


@variant(discriminant=5)
@dataclass
class Square(Shape):
    side: U32


@variant
@dataclass
class Dot(Shape):
    pass


@clvm(Repr.LIST)
@dataclass
class Holder:
    shape: Circle


@clvm_enum(Repr.TUPLE, discriminant=I8)
class Signed:
    pass


@variant(discriminant=-1)
@dataclass
class Negative(Signed):
    pass


@clvm_enum(Repr.TUPLE, untagged=True)
class Loose:
    pass


@variant
@dataclass
class Number(Loose):
    value: U8


@variant(representation=Repr.LIST)
@dataclass
class Both(Loose):
    x: U8
    y: U8


@clvm_enum(Repr.TUPLE, untagged=True)
class Overlapping:
    pass


@variant
@dataclass
class Raw(Overlapping):
    value: bytes


@variant
@dataclass
class Text(Overlapping):
    value: str


# --- Tagged ---
@pytest.mark.parametrize(
    "value,expected",
    [
        (Circle(radius=3), "ff80ff0380"),
        (Square(side=4), "ff05ff0480"),
        # implicit numbering continues after an explicit value
        (Dot(), "ff0680"),
    ],
)
def test_tagged_golden(check, value, expected):
    check(value, expected, Shape)


def test_signed_discriminant(check):
    check(Negative(), "ff81ff80", Signed)


def test_unknown_discriminant(a):
    with pytest.raises(WrongDiscriminant) as exc:
        from_clvm(Shape, a, node_from_hex(a, "ff0780"))
    assert exc.value.discriminant == 7


def test_matched_variant_failure_does_not_fall_through(a):
    # tag 0 selects Circle; its payload has a trailing element
    with pytest.raises(ExpectedNil) as exc:
        from_clvm(Shape, a, node_from_hex(a, "ff80ff01ff0280"))
    assert exc.value.path == ["Circle"]


def test_zero_field_variant_needs_nil_payload(a):
    with pytest.raises(ExpectedNil) as exc:
        from_clvm(Shape, a, node_from_hex(a, "ff0601"))
    assert exc.value.path == ["Dot"]


def test_tagged_enum_from_atom(a):
    with pytest.raises(ExpectedPair):
        from_clvm(Shape, a, a.one())


def test_discriminant_must_be_an_atom(a):
    with pytest.raises(ExpectedAtom) as exc:
        from_clvm(Shape, a, node_from_hex(a, "ffff010280"))
    assert exc.value.path == ["discriminant"]


def test_variant_decode_rejects_other_variants(a):
    node = Square(side=4).to_clvm(a)
    with pytest.raises(WrongDiscriminant) as exc:
        Circle.from_clvm(a, node)
    assert exc.value.discriminant == 5


def test_variant_typed_field(check, a):
    check(Holder(shape=Circle(radius=3)), "ffff80ff038080")
    with pytest.raises(WrongDiscriminant) as exc:
        from_clvm(Holder, a, node_from_hex(a, "ffff05ff048080"))
    assert exc.value.path == ["shape"]


def test_variant_typed_field_rejects_siblings(a):
    with pytest.raises(ToClvmError):
        to_clvm(a, Holder(shape=Square(side=1)))


def test_optional_tagged_enum(check):
    check(None, "80", Optional[Shape])
    check(Dot(), "ff0680", Optional[Shape])


def test_encode_non_variant(a):
    with pytest.raises(ToClvmError):
        to_clvm(a, Negative(), Shape)


def test_duplicate_discriminant():
    @clvm_enum
    class Dup:
        pass

    @variant(discriminant=1)
    @dataclass
    class First(Dup):
        pass

    with pytest.raises(TypeError):

        @variant(discriminant=1)
        @dataclass
        class Second(Dup):
            pass


def test_discriminant_out_of_range():
    @clvm_enum
    class Small:
        pass

    with pytest.raises(TypeError):

        @variant(discriminant=256)
        @dataclass
        class TooBig(Small):
            pass


def test_variant_needs_enum_base():
    with pytest.raises(TypeError):

        @variant
        @dataclass
        class Orphan:
            pass


# --- Untagged ---
@pytest.mark.parametrize(
    "value,expected",
    [
        (Number(value=9), "09"),
        (Both(x=1, y=2), "ff01ff0280"),
    ],
)
def test_untagged_golden(check, value, expected):
    check(value, expected, Loose)


def test_untagged_first_match_wins(a):
    node = node_from_hex(a, "8568656c6c6f")
    assert from_clvm(Overlapping, a, node) == Raw(value=b"hello")
    assert Text.from_clvm(a, node) == Text(value="hello")


def test_untagged_no_match_keeps_last_error(a):
    with pytest.raises(NoMatchingVariant) as exc:
        from_clvm(Loose, a, node_from_hex(a, "ff0102"))
    cause = exc.value.__cause__
    assert isinstance(cause, ExpectedPair)
    assert cause.path == ["Both"]
    assert exc.value.enum_name == "Loose"


def test_untagged_variant_decodes_only_itself(a):
    with pytest.raises(ExpectedAtom):
        Number.from_clvm(a, node_from_hex(a, "ff01ff0280"))


def test_untagged_enum_is_sealed_once_optional_relies_on_it(check):
    @clvm_enum(Repr.LIST, untagged=True)
    class Growing:
        pass

    @variant
    @dataclass
    class Full(Growing):
        x: U8
        y: U8

    check(None, "80", Optional[Growing])

    # a zero-field variant would make nil ambiguous for the Optional above
    with pytest.raises(TypeError):

        @variant
        @dataclass
        class Empty(Growing):
            pass

    check(Full(1, 2), "ff01ff0280", Optional[Growing])


def test_untagged_enum_open_while_nil_encodable():
    @clvm_enum(Repr.TUPLE, untagged=True)
    class Open:
        pass

    @variant
    @dataclass
    class Small(Open):
        value: U8

    with pytest.raises(TypeError):
        codec_for(Optional[Open])

    @variant
    @dataclass
    class Later(Open):
        value: bytes
