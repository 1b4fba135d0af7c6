"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import random
from collections.abc import Iterable

import pytest


class ScriptedRandom(random.Random):
    """``random.Random`` that replays queued draws.

    ``randint`` pops from *ints* and ``random`` pops from *floats*; running
    out of values raises ``IndexError`` so unexpected draws fail loudly.
    """

    def __init__(self, ints: Iterable[int] = (), floats: Iterable[float] = ()) -> None:
        super().__init__(0)
        self._ints = list(ints)
        self._floats = list(floats)

    def randint(self, a: int, b: int) -> int:
        value = self._ints.pop(0)
        assert a <= value <= b
        return value

    def random(self) -> float:
        return self._floats.pop(0)


@pytest.fixture
def scripted_rng() -> type[ScriptedRandom]:
    """Factory for RNGs with predetermined dice faces / coin draws."""
    return ScriptedRandom
