"""
Move selection for the computer
---

Intentionally naive: the computer does not evaluate positions, it just picks one of the safe moves it is given.
"""

import random
from typing import Optional, Protocol

from src.xxlchess.movement import Movement


class BotStrategy(Protocol):
    def choose(self, candidates: list[Movement]) -> Optional[Movement]: ...


class RandomSelectionStrategy:
    """Default policy: pick uniformly at random. Pass a seeded `random.Random` to make it reproducible."""

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self.rng = rng or random.Random()

    def choose(self, candidates: list[Movement]) -> Optional[Movement]:
        if not candidates:
            return None
        return self.rng.choice(candidates)


class FirstAvailableStrategy:
    """Deterministic policy: always the first candidate"""

    def choose(self, candidates: list[Movement]) -> Optional[Movement]:
        return candidates[0] if candidates else None
