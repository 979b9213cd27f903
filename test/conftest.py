"""Shared test fixtures and helpers."""

import pytest

from conquest.engine.dice import DiceRoller
from conquest.engine.state import GameState, create_territory_store, MODE_ATTACK


class ScriptedRandom:
    """
    Stands in for random.Random, handing out queued values in order.
    choice() consumes a queued index into the sequence.
    """

    def __init__(self, values):
        self.values = list(values)

    def _next(self) -> int:
        if not self.values:
            raise AssertionError("Scripted random source ran out of values")
        return self.values.pop(0)

    def randint(self, low, high):
        value = self._next()
        assert low <= value <= high, f"scripted {value} outside [{low}, {high}]"
        return value

    def randrange(self, stop):
        value = self._next()
        assert 0 <= value < stop, f"scripted {value} outside [0, {stop})"
        return value

    def choice(self, options):
        return options[self._next()]


def scripted_dice(*values) -> DiceRoller:
    return DiceRoller(ScriptedRandom(values))


def make_store():
    """A:red:5, B:blue:3, C:blue:2, D:green:1"""
    return create_territory_store(
        ["A", "B", "C", "D"],
        ["red", "blue", "blue", "green"],
        [5, 3, 2, 1],
    )


@pytest.fixture
def store():
    return make_store()


@pytest.fixture
def attack_state(store):
    """Session state in attack mode with a conquer-2 mission."""
    from conquest.engine.missions import conquer_count_mission
    return GameState(store=store, mission=conquer_count_mission(2), mode=MODE_ATTACK)
