from __future__ import annotations

from .opcodes import ConditionOpcode
from .condition import (
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
from .policy import ConditionPolicy, ConsensusPolicy, MempoolPolicy, SpendStats
from .pipeline import (
    CoinSpend,
    Spend,
    SpendBundleConditions,
    compute_coin_id,
    iter_conditions,
    parse_spends,
)

__all__ = [
    "ConditionOpcode",
    "AggSigMe",
    "AggSigUnsafe",
    "AssertCoinAnnouncement",
    "AssertHeightAbsolute",
    "AssertHeightRelative",
    "AssertMyAmount",
    "AssertMyCoinId",
    "AssertMyParentId",
    "AssertMyPuzzlehash",
    "AssertPuzzleAnnouncement",
    "AssertSecondsAbsolute",
    "AssertSecondsRelative",
    "Condition",
    "CreateCoin",
    "CreateCoinAnnouncement",
    "CreatePuzzleAnnouncement",
    "ReserveFee",
    "ConditionPolicy",
    "ConsensusPolicy",
    "MempoolPolicy",
    "SpendStats",
    "CoinSpend",
    "Spend",
    "SpendBundleConditions",
    "compute_coin_id",
    "iter_conditions",
    "parse_spends",
]
