"""Typed spend conditions.

A condition is the list ``(opcode arg1 arg2 ...)``, which is exactly a tagged
enum with list framing: the opcode is the discriminant and the arguments are
the variant's fields.
"""

from __future__ import annotations

from dataclasses import dataclass

from clvm_codec.codec import Bytes32, Bytes48, Repr, U32, U64, clvm_enum, variant
from clvm_codec.conditions.opcodes import ConditionOpcode as Op


@clvm_enum(Repr.LIST)
class Condition:
    @property
    def opcode(self) -> Op:
        return Op(Condition._clvm_enum.variant_for(self).discriminant)


# --- Signatures ---
@variant(discriminant=Op.AGG_SIG_UNSAFE)
@dataclass(frozen=True)
class AggSigUnsafe(Condition):
    pubkey: Bytes48
    message: bytes


@variant(discriminant=Op.AGG_SIG_ME)
@dataclass(frozen=True)
class AggSigMe(Condition):
    pubkey: Bytes48
    message: bytes


# --- Outputs and fees ---
@variant(discriminant=Op.CREATE_COIN)
@dataclass(frozen=True)
class CreateCoin(Condition):
    puzzle_hash: Bytes32
    amount: U64


@variant(discriminant=Op.RESERVE_FEE)
@dataclass(frozen=True)
class ReserveFee(Condition):
    amount: U64


# --- Announcements ---
@variant(discriminant=Op.CREATE_COIN_ANNOUNCEMENT)
@dataclass(frozen=True)
class CreateCoinAnnouncement(Condition):
    message: bytes


@variant(discriminant=Op.ASSERT_COIN_ANNOUNCEMENT)
@dataclass(frozen=True)
class AssertCoinAnnouncement(Condition):
    announcement_id: Bytes32


@variant(discriminant=Op.CREATE_PUZZLE_ANNOUNCEMENT)
@dataclass(frozen=True)
class CreatePuzzleAnnouncement(Condition):
    message: bytes


@variant(discriminant=Op.ASSERT_PUZZLE_ANNOUNCEMENT)
@dataclass(frozen=True)
class AssertPuzzleAnnouncement(Condition):
    announcement_id: Bytes32


# --- Self assertions ---
@variant(discriminant=Op.ASSERT_MY_COIN_ID)
@dataclass(frozen=True)
class AssertMyCoinId(Condition):
    coin_id: Bytes32


@variant(discriminant=Op.ASSERT_MY_PARENT_ID)
@dataclass(frozen=True)
class AssertMyParentId(Condition):
    parent_id: Bytes32


@variant(discriminant=Op.ASSERT_MY_PUZZLEHASH)
@dataclass(frozen=True)
class AssertMyPuzzlehash(Condition):
    puzzle_hash: Bytes32


@variant(discriminant=Op.ASSERT_MY_AMOUNT)
@dataclass(frozen=True)
class AssertMyAmount(Condition):
    amount: U64


# --- Time locks ---
@variant(discriminant=Op.ASSERT_SECONDS_RELATIVE)
@dataclass(frozen=True)
class AssertSecondsRelative(Condition):
    seconds: U64


@variant(discriminant=Op.ASSERT_SECONDS_ABSOLUTE)
@dataclass(frozen=True)
class AssertSecondsAbsolute(Condition):
    seconds: U64


@variant(discriminant=Op.ASSERT_HEIGHT_RELATIVE)
@dataclass(frozen=True)
class AssertHeightRelative(Condition):
    height: U32


@variant(discriminant=Op.ASSERT_HEIGHT_ABSOLUTE)
@dataclass(frozen=True)
class AssertHeightAbsolute(Condition):
    height: U32
