"""
Dice engine.
Wraps one random source for the whole session: battle rolls and mission draws share it.
The source is injected so tests can supply seeded or scripted generators.
"""

import logging
import random
import time
from typing import Sequence, TypeVar

from conquest.engine import DICE_SIDES

logger = logging.getLogger(__name__)

T = TypeVar("T")


class DiceRoller:
    """Random source handle. Seeded once when created; never reseeded during a session."""

    def __init__(self, rng: random.Random | None = None, sides: int = DICE_SIDES):
        self.rng = rng if rng is not None else random.Random()
        self.sides = sides

    @classmethod
    def from_seed(cls, seed: int) -> "DiceRoller":
        return cls(random.Random(seed))

    @classmethod
    def from_clock(cls) -> "DiceRoller":
        """Seed from the current time, once, at session start."""
        seed = time.time_ns()
        logger.debug("Seeding dice from clock: %d", seed)
        return cls.from_seed(seed)

    def roll_die(self) -> int:
        return self.rng.randint(1, self.sides)

    def roll(self, quantity: int) -> list[int]:
        """Roll quantity dice, in roll order."""
        if quantity < 0:
            raise ValueError(f"Cannot roll a negative number of dice: {quantity}")
        return [self.roll_die() for _ in range(quantity)]

    def roll_ranked(self, quantity: int) -> list[int]:
        """
        Roll quantity dice and rank them highest first.
        The sort is stable and ties are left as rolled, so equal values pair up in order.
        """
        return sorted(self.roll(quantity), reverse=True)

    def coin_flip(self) -> int:
        """0 or 1 with equal probability."""
        return self.rng.randrange(2)

    def randint(self, low: int, high: int) -> int:
        """Uniform integer in [low, high] inclusive."""
        return self.rng.randint(low, high)

    def choice(self, options: Sequence[T]) -> T:
        return self.rng.choice(options)


def roll_attack_dice(dice: DiceRoller) -> dict[str, list[int]]:
    """
    Roll one die per side for a single attack.

    Returns:
        Dict with "attacker" and "defender" roll lists
    """
    return {
        "attacker": dice.roll_ranked(1),
        "defender": dice.roll_ranked(1),
    }
