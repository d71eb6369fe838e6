from __future__ import annotations

# Public surface for the codec package
from .base import Codec, check_depth, decode_child
from .primitives import (
    Bool,
    Bytes,
    Bytes32,
    Bytes48,
    Bytes96,
    FixedBytes,
    I8,
    I16,
    I32,
    I64,
    I128,
    Int,
    ListOf,
    Option,
    Pair,
    Str,
    U8,
    U16,
    U32,
    U64,
    U128,
    Unit,
    atom_to_int,
    int_to_atom,
)
from .representation import Repr, frame, unframe
from .structs import StructCodec
from .enums import TaggedEnumCodec, UntaggedEnumCodec, VariantCodec
from .registry import CustomCodec, codec_for, from_clvm, to_clvm
from .derive import clvm, clvm_enum, variant

__all__ = [
    "Codec",
    "check_depth",
    "decode_child",
    "Bool",
    "Bytes",
    "Bytes32",
    "Bytes48",
    "Bytes96",
    "FixedBytes",
    "I8",
    "I16",
    "I32",
    "I64",
    "I128",
    "Int",
    "ListOf",
    "Option",
    "Pair",
    "Str",
    "U8",
    "U16",
    "U32",
    "U64",
    "U128",
    "Unit",
    "atom_to_int",
    "int_to_atom",
    "Repr",
    "frame",
    "unframe",
    "StructCodec",
    "TaggedEnumCodec",
    "UntaggedEnumCodec",
    "VariantCodec",
    "CustomCodec",
    "codec_for",
    "from_clvm",
    "to_clvm",
    "clvm",
    "clvm_enum",
    "variant",
]
