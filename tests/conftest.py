import pytest

from clvm_codec import Allocator, from_clvm, node_to_hex, to_clvm


@pytest.fixture
def a():
    """Return a fresh allocator for each test."""
    return Allocator()


@pytest.fixture
def check(a):
    """Encode `value`, compare the serialized hex, and decode it back.

    `tp` is only needed for values whose Python type carries no codec (ints).
    """

    def _check(value, expected, tp=None):
        tp = type(value) if tp is None else tp
        node = to_clvm(a, value, tp)
        assert node_to_hex(a, node) == expected
        assert from_clvm(tp, a, node) == value
        return node

    return _check


@pytest.fixture
def depth_limit(monkeypatch):
    """Lower the decode depth limit for the duration of a test."""

    def _set(limit: int):
        monkeypatch.setenv("CLVM_CODEC_MAX_DEPTH", str(limit))

    return _set
