from typing import Optional

import pytest
from hypothesis import given, strategies as st

from clvm_codec import Allocator, Bytes32, U8, U64, from_clvm, node_to_hex, to_clvm
from clvm_codec.errors import (
    Custom,
    ExpectedAtom,
    ExpectedNil,
    ExpectedPair,
    FromClvmError,
    ToClvmError,
    WrongAtomLength,
)


# --- Byte strings ---
@pytest.mark.parametrize(
    "value,expected",
    [
        (b"", "80"),
        (b"\x01", "01"),
        (b"\x7f", "7f"),
        (b"\x80", "8180"),
        (b"hello", "8568656c6c6f"),
    ],
)
def test_bytes(check, value, expected):
    check(value, expected)


def test_fixed_bytes(check):
    check(b"\xab" * 32, "a0" + "ab" * 32, Bytes32)


@pytest.mark.parametrize("size", [0, 31, 33])
def test_fixed_bytes_wrong_length(a, size):
    node = a.new_atom(b"\x00" * size)
    with pytest.raises(WrongAtomLength) as exc:
        from_clvm(Bytes32, a, node)
    assert exc.value.expected == 32
    assert exc.value.found == size


def test_fixed_bytes_encode_wrong_length(a):
    with pytest.raises(ToClvmError):
        to_clvm(a, b"\x00" * 33, Bytes32)


def test_bytes_from_pair(a):
    with pytest.raises(ExpectedAtom):
        from_clvm(bytes, a, a.new_pair(a.nil(), a.nil()))


# --- Strings ---
def test_str(check):
    check("XYZ", "8358595a")
    check("", "80")
    check("é", "82c3a9")


def test_str_invalid_utf8(a):
    with pytest.raises(Custom):
        from_clvm(str, a, a.new_atom(b"\xff\xfe"))


# --- Booleans ---
def test_bool(check):
    check(True, "01")
    check(False, "80")


@pytest.mark.parametrize("atom", [b"\x02", b"\x00", b"\x00\x01", b"\xff"])
def test_bool_rejects_other_atoms(a, atom):
    with pytest.raises(Custom):
        from_clvm(bool, a, a.new_atom(atom))


# --- Optional ---
def test_optional(check):
    check(None, "80", Optional[Bytes32])
    check(b"\x01" * 32, "a0" + "01" * 32, Optional[Bytes32])
    check(None, "80", Bytes32 | None)


@pytest.mark.parametrize("inner", [U64, bool, bytes, str, list[U8], tuple[U8, ...]])
def test_optional_rejects_nil_encodable_inner(inner):
    from clvm_codec.codec import codec_for

    with pytest.raises(TypeError):
        codec_for(Optional[inner])


# --- Sequences ---
def test_list(check):
    check([1, 2, 3], "ff01ff02ff0380", list[U8])
    check([], "80", list[U8])
    check([b"a", b"bc"], "ff61ff826263" + "80", list[bytes])


def test_nested_list(check):
    check([[1], []], "ffff0180ff8080", list[list[U8]])


def test_tuple_ellipsis_is_a_list(a):
    node = to_clvm(a, (1, 2), tuple[U8, ...])
    assert node_to_hex(a, node) == "ff01ff0280"
    assert from_clvm(tuple[U8, ...], a, node) == [1, 2]


def test_list_not_nil_terminated(a):
    node = a.new_pair(a.one(), a.one())
    with pytest.raises(ExpectedNil):
        from_clvm(list[U8], a, node)


def test_list_element_error_carries_index(a):
    node = a.new_pair(a.one(), a.new_pair(a.new_atom(b"\x01\x00"), a.nil()))
    with pytest.raises(WrongAtomLength) as exc:
        from_clvm(list[U8], a, node)
    assert exc.value.path == [1]
    assert str(exc.value).startswith("[1]: ")


def test_list_encode_rejects_non_sequence(a):
    with pytest.raises(ToClvmError):
        to_clvm(a, b"abc", list[U8])


# --- Pairs and unit ---
def test_pair(check):
    check((1, 2), "ff0102", tuple[U8, U8])
    check((b"A", (b"B", b"C")), "ff41ff4243", tuple[bytes, tuple[bytes, bytes]])


def test_pair_from_atom(a):
    with pytest.raises(ExpectedPair):
        from_clvm(tuple[U8, U8], a, a.one())


def test_unit(check, a):
    check(None, "80", None)
    check((), "80", tuple[()])
    with pytest.raises(ExpectedNil):
        from_clvm(None, a, a.one())


def test_all_decode_errors_share_a_base(a):
    with pytest.raises(FromClvmError):
        from_clvm(Bytes32, a, a.nil())


@given(st.lists(st.binary(max_size=70), max_size=10))
def test_bytes_list_round_trip(values):
    a = Allocator()
    node = to_clvm(a, values, list[bytes])
    assert from_clvm(list[bytes], a, node) == values


@given(st.one_of(st.none(), st.binary(min_size=32, max_size=32)))
def test_optional_round_trip(value):
    a = Allocator()
    node = to_clvm(a, value, Optional[Bytes32])
    assert from_clvm(Optional[Bytes32], a, node) == value
