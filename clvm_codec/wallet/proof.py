"""Lineage proofs for singleton-style coins.

A proof is either a full lineage proof ``(parent_coin_info inner_puzzle_hash
amount)`` or, for the first coin after launch, an eve proof
``(parent_coin_info amount)``. Nothing in the encoding says which one it is:
the two lists differ in length, so decoding tries the lineage shape first and
falls back to the eve shape.
"""

from __future__ import annotations

from dataclasses import dataclass

from clvm_codec.codec import Bytes32, Repr, U64, clvm, clvm_enum, variant


@clvm_enum(Repr.LIST, untagged=True)
class Proof:
    pass


@variant
@clvm(Repr.LIST)
@dataclass(frozen=True)
class LineageProof(Proof):
    parent_coin_info: Bytes32
    inner_puzzle_hash: Bytes32
    amount: U64


@variant
@clvm(Repr.LIST)
@dataclass(frozen=True)
class EveProof(Proof):
    parent_coin_info: Bytes32
    amount: U64
