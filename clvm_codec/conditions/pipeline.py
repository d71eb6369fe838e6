"""Parse and validate the conditions produced by a bundle of coin spends.

Each coin spend carries the output of its puzzle: a list of conditions. Known
opcodes are decoded into `Condition` values and applied to the `Spend`;
unknown opcodes are skipped so that new conditions can be soft-forked in.
The supplied `ConditionPolicy` sees every spend and every parsed condition
before default handling.
"""

from __future__ import annotations

import hashlib
import logging
from dataclasses import dataclass, field
from functools import partial
from typing import Callable, Iterable, Iterator

from clvm_codec.allocator import Allocator, NodePtr
from clvm_codec.codec.primitives import int_to_atom
from clvm_codec.conditions.condition import (
    AggSigMe,
    AggSigUnsafe,
    AssertCoinAnnouncement,
    AssertHeightAbsolute,
    AssertHeightRelative,
    AssertMyAmount,
    AssertMyCoinId,
    AssertMyParentId,
    AssertMyPuzzlehash,
    AssertPuzzleAnnouncement,
    AssertSecondsAbsolute,
    AssertSecondsRelative,
    Condition,
    CreateCoin,
    CreateCoinAnnouncement,
    CreatePuzzleAnnouncement,
    ReserveFee,
)
from clvm_codec.conditions.opcodes import KNOWN_OPCODES, ConditionOpcode
from clvm_codec.conditions.policy import ConditionPolicy, ConsensusPolicy
from clvm_codec.errors import FromClvmError, ValidationError

logger = logging.getLogger(__name__)

MAX_CONDITIONS_PER_SPEND = 10_000


def compute_coin_id(parent_coin_info: bytes, puzzle_hash: bytes, amount: int) -> bytes:
    return hashlib.sha256(parent_coin_info + puzzle_hash + int_to_atom(amount)).digest()


@dataclass(frozen=True)
class CoinSpend:
    parent_coin_info: bytes
    puzzle_hash: bytes
    amount: int
    # output of running the puzzle with its solution
    conditions: NodePtr


@dataclass
class Spend:
    coin_id: bytes
    parent_id: bytes
    puzzle_hash: bytes
    amount: int
    conditions: NodePtr
    create_coin: list[CreateCoin] = field(default_factory=list)
    agg_sig_me: list[tuple[bytes, bytes]] = field(default_factory=list)
    agg_sig_unsafe: list[tuple[bytes, bytes]] = field(default_factory=list)
    reserve_fee: int = 0
    seconds_relative: int = 0
    height_relative: int | None = None


@dataclass
class SpendBundleConditions:
    spends: list[Spend] = field(default_factory=list)
    reserve_fee: int = 0
    removal_amount: int = 0
    addition_amount: int = 0
    seconds_absolute: int = 0
    height_absolute: int = 0


@dataclass
class _Announcements:
    coin: set[bytes] = field(default_factory=set)
    puzzle: set[bytes] = field(default_factory=set)
    asserted: list[tuple[str, bytes]] = field(default_factory=list)


def _reject(message: str, cause: Exception | None = None) -> ValidationError:
    logger.info("rejecting spend bundle: %s", message)
    return ValidationError(message, cause)


def iter_conditions(
    a: Allocator,
    conditions: NodePtr,
    on_unknown: Callable[[bytes], None] | None = None,
) -> Iterator[Condition]:
    """Yield the known conditions of a puzzle output, in order.

    Skipped conditions are reported to `on_unknown` with their opcode atom
    (empty when the opcode is a pair).
    """
    node = conditions
    count = 0
    while a.is_pair(node):
        item, node = a.pair(node)
        count += 1
        if count > MAX_CONDITIONS_PER_SPEND:
            raise _reject(f"more than {MAX_CONDITIONS_PER_SPEND} conditions in one spend")
        if not a.is_pair(item):
            raise _reject("condition is not a list")
        op_node = a.pair(item)[0]
        op = a.atom(op_node) if a.is_atom(op_node) else b""
        if len(op) != 1 or op[0] not in KNOWN_OPCODES:
            logger.debug("skipping unknown condition opcode %s", op.hex() or "<pair>")
            if on_unknown is not None:
                on_unknown(op)
            continue
        try:
            yield Condition.from_clvm(a, item)
        except FromClvmError as e:
            name = ConditionOpcode(op[0]).name
            raise _reject(f"malformed {name} condition: {e}", e) from e
    if not a.is_nil(node):
        raise _reject("condition list is not nil terminated")


# --- Default handling ---
def _create_coin(bundle, spend, c: CreateCoin, ann) -> None:
    if any(c == other for other in spend.create_coin):
        raise _reject(f"duplicate output {c.puzzle_hash.hex()} {c.amount}")
    spend.create_coin.append(c)
    bundle.addition_amount += c.amount


def _reserve_fee(bundle, spend, c: ReserveFee, ann) -> None:
    spend.reserve_fee += c.amount
    bundle.reserve_fee += c.amount


def _agg_sig_me(bundle, spend, c: AggSigMe, ann) -> None:
    spend.agg_sig_me.append((c.pubkey, c.message))


def _agg_sig_unsafe(bundle, spend, c: AggSigUnsafe, ann) -> None:
    spend.agg_sig_unsafe.append((c.pubkey, c.message))


def _create_coin_announcement(bundle, spend, c: CreateCoinAnnouncement, ann) -> None:
    ann.coin.add(hashlib.sha256(spend.coin_id + c.message).digest())


def _create_puzzle_announcement(bundle, spend, c: CreatePuzzleAnnouncement, ann) -> None:
    ann.puzzle.add(hashlib.sha256(spend.puzzle_hash + c.message).digest())


def _assert_coin_announcement(bundle, spend, c: AssertCoinAnnouncement, ann) -> None:
    ann.asserted.append(("coin", c.announcement_id))


def _assert_puzzle_announcement(bundle, spend, c: AssertPuzzleAnnouncement, ann) -> None:
    ann.asserted.append(("puzzle", c.announcement_id))


def _assert_my_coin_id(bundle, spend, c: AssertMyCoinId, ann) -> None:
    if c.coin_id != spend.coin_id:
        raise _reject("ASSERT_MY_COIN_ID failed")


def _assert_my_parent_id(bundle, spend, c: AssertMyParentId, ann) -> None:
    if c.parent_id != spend.parent_id:
        raise _reject("ASSERT_MY_PARENT_ID failed")


def _assert_my_puzzlehash(bundle, spend, c: AssertMyPuzzlehash, ann) -> None:
    if c.puzzle_hash != spend.puzzle_hash:
        raise _reject("ASSERT_MY_PUZZLEHASH failed")


def _assert_my_amount(bundle, spend, c: AssertMyAmount, ann) -> None:
    if c.amount != spend.amount:
        raise _reject("ASSERT_MY_AMOUNT failed")


def _assert_seconds_relative(bundle, spend, c: AssertSecondsRelative, ann) -> None:
    spend.seconds_relative = max(spend.seconds_relative, c.seconds)


def _assert_seconds_absolute(bundle, spend, c: AssertSecondsAbsolute, ann) -> None:
    bundle.seconds_absolute = max(bundle.seconds_absolute, c.seconds)


def _assert_height_relative(bundle, spend, c: AssertHeightRelative, ann) -> None:
    if spend.height_relative is None or c.height > spend.height_relative:
        spend.height_relative = c.height


def _assert_height_absolute(bundle, spend, c: AssertHeightAbsolute, ann) -> None:
    bundle.height_absolute = max(bundle.height_absolute, c.height)


_HANDLERS: dict[type, Callable] = {
    CreateCoin: _create_coin,
    ReserveFee: _reserve_fee,
    AggSigMe: _agg_sig_me,
    AggSigUnsafe: _agg_sig_unsafe,
    CreateCoinAnnouncement: _create_coin_announcement,
    CreatePuzzleAnnouncement: _create_puzzle_announcement,
    AssertCoinAnnouncement: _assert_coin_announcement,
    AssertPuzzleAnnouncement: _assert_puzzle_announcement,
    AssertMyCoinId: _assert_my_coin_id,
    AssertMyParentId: _assert_my_parent_id,
    AssertMyPuzzlehash: _assert_my_puzzlehash,
    AssertMyAmount: _assert_my_amount,
    AssertSecondsRelative: _assert_seconds_relative,
    AssertSecondsAbsolute: _assert_seconds_absolute,
    AssertHeightRelative: _assert_height_relative,
    AssertHeightAbsolute: _assert_height_absolute,
}


def parse_spends(
    a: Allocator,
    coin_spends: Iterable[CoinSpend],
    policy: ConditionPolicy | None = None,
) -> SpendBundleConditions:
    """Run every coin spend's conditions through default handling and `policy`.

    Raises `ValidationError` on the first rejected condition, on a failed
    announcement assertion, or when outputs plus reserved fees exceed the
    value of the coins spent.
    """
    if policy is None:
        policy = ConsensusPolicy()
    bundle = SpendBundleConditions()
    ann = _Announcements()

    for cs in coin_spends:
        spend = Spend(
            coin_id=compute_coin_id(cs.parent_coin_info, cs.puzzle_hash, cs.amount),
            parent_id=cs.parent_coin_info,
            puzzle_hash=cs.puzzle_hash,
            amount=cs.amount,
            conditions=cs.conditions,
        )
        bundle.removal_amount += cs.amount
        policy.new_spend(spend)
        on_unknown = partial(policy.unknown_condition, spend)
        for condition in iter_conditions(a, cs.conditions, on_unknown):
            policy.condition(spend, condition)
            _HANDLERS[type(condition)](bundle, spend, condition, ann)
        policy.post_spend(a, spend)
        bundle.spends.append(spend)

    for kind, announcement_id in ann.asserted:
        created = ann.coin if kind == "coin" else ann.puzzle
        if announcement_id not in created:
            raise _reject(f"{kind} announcement {announcement_id.hex()} was never created")

    if bundle.addition_amount + bundle.reserve_fee > bundle.removal_amount:
        raise _reject(
            f"outputs ({bundle.addition_amount}) plus reserved fee ({bundle.reserve_fee}) "
            f"exceed inputs ({bundle.removal_amount})"
        )
    return bundle
