from __future__ import annotations
import os


# Defaults
DEFAULT_MAX_DECODE_DEPTH = 256


def int_from_env(var: str, default: int) -> int:
    raw = os.environ.get(var)
    if not raw or not raw.strip():
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        raise ValueError(f"{var} must be an integer, got {raw!r}") from None
    if value <= 0:
        raise ValueError(f"{var} must be positive, got {value}")
    return value


def get_max_decode_depth() -> int:
    # read on every call so tests (and embedders) can override at runtime
    return int_from_env('CLVM_CODEC_MAX_DEPTH', DEFAULT_MAX_DECODE_DEPTH)
