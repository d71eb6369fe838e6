from __future__ import annotations

from enum import IntEnum


class ConditionOpcode(IntEnum):
    # Signatures
    AGG_SIG_UNSAFE = 49  # pubkey, message
    AGG_SIG_ME = 50  # pubkey, message

    # Outputs and fees
    CREATE_COIN = 51  # puzzle_hash, amount
    RESERVE_FEE = 52  # amount

    # Announcements
    CREATE_COIN_ANNOUNCEMENT = 60  # message
    ASSERT_COIN_ANNOUNCEMENT = 61  # announcement id
    CREATE_PUZZLE_ANNOUNCEMENT = 62  # message
    ASSERT_PUZZLE_ANNOUNCEMENT = 63  # announcement id

    # Self assertions
    ASSERT_MY_COIN_ID = 70
    ASSERT_MY_PARENT_ID = 71
    ASSERT_MY_PUZZLEHASH = 72
    ASSERT_MY_AMOUNT = 73

    # Time locks
    ASSERT_SECONDS_RELATIVE = 80
    ASSERT_SECONDS_ABSOLUTE = 81
    ASSERT_HEIGHT_RELATIVE = 82
    ASSERT_HEIGHT_ABSOLUTE = 83


KNOWN_OPCODES: frozenset[int] = frozenset(int(op) for op in ConditionOpcode)
