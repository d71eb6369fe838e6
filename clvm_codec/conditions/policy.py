"""Customization points for condition parsing and validation.

The mempool wants to record more than plain consensus validation does, so it
hooks into the spend pipeline through a `ConditionPolicy`. The pipeline calls
the hooks; policies never change what is parsed or how it is validated.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol

from clvm_codec.allocator import Allocator
from clvm_codec.conditions.condition import AggSigUnsafe, Condition, CreateCoin
from clvm_codec.serde import node_to_bytes

if TYPE_CHECKING:
    from clvm_codec.conditions.pipeline import Spend


class ConditionPolicy(Protocol):
    def new_spend(self, spend: Spend) -> None: ...
    def condition(self, spend: Spend, condition: Condition) -> None: ...
    def unknown_condition(self, spend: Spend, opcode: bytes) -> None: ...
    def post_spend(self, a: Allocator, spend: Spend) -> None: ...


class ConsensusPolicy:
    """Plain consensus validation: nothing extra to record."""

    def new_spend(self, spend: Spend) -> None:
        pass

    def condition(self, spend: Spend, condition: Condition) -> None:
        pass

    def unknown_condition(self, spend: Spend, opcode: bytes) -> None:
        pass

    def post_spend(self, a: Allocator, spend: Spend) -> None:
        pass


@dataclass
class SpendStats:
    opcodes: Counter = field(default_factory=Counter)
    created_amount: int = 0
    unsafe_messages: list[bytes] = field(default_factory=list)
    # skipped opcodes by hex; "" counts conditions whose opcode is a pair
    unknown_opcodes: Counter = field(default_factory=Counter)
    conditions_bytes: int = 0


class MempoolPolicy:
    """Per-spend bookkeeping the mempool uses for fee and spam heuristics."""

    def __init__(self):
        self.stats: dict[bytes, SpendStats] = {}
        self._current: SpendStats | None = None

    def new_spend(self, spend: Spend) -> None:
        self._current = SpendStats()
        self.stats[spend.coin_id] = self._current

    def condition(self, spend: Spend, condition: Condition) -> None:
        stats = self._current
        stats.opcodes[condition.opcode.name] += 1
        if isinstance(condition, CreateCoin):
            stats.created_amount += condition.amount
        elif isinstance(condition, AggSigUnsafe):
            stats.unsafe_messages.append(condition.message)

    def unknown_condition(self, spend: Spend, opcode: bytes) -> None:
        self._current.unknown_opcodes[opcode.hex()] += 1

    def post_spend(self, a: Allocator, spend: Spend) -> None:
        # size of the raw condition list as the puzzle returned it
        self._current.conditions_bytes = len(node_to_bytes(a, spend.conditions))
        self._current = None

    def total_conditions(self) -> int:
        return sum(sum(s.opcodes.values()) for s in self.stats.values())
