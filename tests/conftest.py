"""Core test fixtures for dice tests."""

import pytest

from dicegen.config import Settings


class ScriptedRandom:
    """Deterministic random source.

    Returns ``values`` in order, then repeats the last one forever.
    Every call is recorded as ``(low, high)`` in ``calls``.
    """

    def __init__(self, *values: int) -> None:
        self.values = list(values)
        self.calls: list[tuple[int, int]] = []

    def randint(self, a: int, b: int) -> int:
        self.calls.append((a, b))
        index = min(len(self.calls) - 1, len(self.values) - 1)
        return self.values[index]


class MaxRandom:
    """Random source that always rolls the highest face."""

    def randint(self, a: int, b: int) -> int:
        return b


@pytest.fixture
def scripted_random():
    """Factory for ScriptedRandom sources."""
    return ScriptedRandom


@pytest.fixture
def max_random() -> MaxRandom:
    return MaxRandom()


@pytest.fixture
def settings() -> Settings:
    """Default settings, ignoring any .env file."""
    return Settings(_env_file=None)
