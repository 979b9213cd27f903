import random

import pytest

from conquest.engine.dice import DiceRoller
from conquest.engine.events import ATTACK_FAILED, MISSION_ASSIGNED, SESSION_ENDED
from conquest.engine.missions import ConquerCount, DestroyFaction
from conquest.engine.session import GameSession
from conquest.engine.state import MODE_ATTACK, MODE_OVERVIEW

from conftest import scripted_dice


@pytest.fixture
def session(store):
    # coin 1 -> ConquerCount, target 2
    return GameSession.start(store, scripted_dice(1, 2))


def test_start_assigns_mission(session):
    assert session.mission == ConquerCount(2, "Conquer 2 territories.")
    assert session.conquests == 0
    assert session.mode == MODE_OVERVIEW
    assert session.event_log[0].type == MISSION_ASSIGNED
    assert session.event_log[0].payload["mission"]["kind"] == "conquer_count"
    assert session.event_log[0].to_dict()["type"] == MISSION_ASSIGNED


def test_start_destroy_faction(store):
    session = GameSession.start(store, scripted_dice(0, 1))
    assert session.mission == DestroyFaction("green", 1, "Destroy the green army completely.")


def test_start_seeds_from_clock_by_default(store):
    session = GameSession.start(store)
    assert session.mission is not None
    assert session.mission.target_count >= 1


def test_attack_uses_session_dice(session):
    session.dice = scripted_dice(6, 1)
    session.enter_attack_mode()
    outcome, events = session.attack(1, 2)

    assert outcome.success
    assert (outcome.attacker_roll, outcome.defender_roll) == (6, 1)
    assert session.store[1].troops == 2
    assert events[0].type == "attack_resolved"


def test_failed_action_keeps_state(session):
    session.dice = scripted_dice(6, 1, 6, 1)
    with pytest.raises(ValueError):
        session.attack(1, 2)
    assert session.mode == MODE_OVERVIEW

    session.enter_attack_mode()
    with pytest.raises(ValueError):
        session.attack(1, 4, lambda lo, hi: 0)
    assert session.store[3].faction == "green"
    assert session.conquests == 0


def test_play_to_victory(session):
    """A:red:5 takes D (1 troop) then C (2 troops): two conquests."""
    session.dice = scripted_dice(6, 1, 6, 1, 6, 1, 6, 1)
    session.enter_attack_mode()

    session.attack(1, 4, lambda lo, hi: 1)
    assert session.conquests == 1
    assert session.mission_summary()["progress"] == 1

    session.attack(1, 3)
    outcome, _ = session.attack(1, 3, lambda lo, hi: hi)

    assert outcome.conquered
    assert session.conquests == 2
    assert session.finished
    assert session.mission_accomplished
    assert session.mission_summary()["complete"] is True
    assert session.event_log[-1].type == SESSION_ENDED
    with pytest.raises(ValueError):
        session.attack(1, 2)


def test_quit(session):
    session.quit()
    assert session.finished
    assert not session.mission_accomplished


class TestDiceDrawnOnlyForResolvedAttacks:

    @pytest.fixture
    def seeded(self, store):
        session = GameSession.start(store, DiceRoller.from_seed(3))
        session.enter_attack_mode()
        return session

    @pytest.mark.parametrize("attacker, defender", [(2, 3), (1, 9), (1, 1)])
    def test_rejected_attack(self, seeded, attacker, defender):
        before = seeded.dice.rng.getstate()
        with pytest.raises(ValueError):
            seeded.attack(attacker, defender)
        assert seeded.dice.rng.getstate() == before

    def test_refused_attack(self, seeded):
        before = seeded.dice.rng.getstate()
        outcome, events = seeded.attack(4, 1)

        assert not outcome.success
        assert [e.type for e in events] == [ATTACK_FAILED]
        assert seeded.dice.rng.getstate() == before

    def test_wrong_mode_and_finished_session(self, seeded):
        seeded.return_to_overview()
        before = seeded.dice.rng.getstate()
        with pytest.raises(ValueError):
            seeded.attack(1, 2)

        seeded.quit()
        with pytest.raises(ValueError):
            seeded.attack(1, 2)
        assert seeded.dice.rng.getstate() == before

    def test_valid_attack_draws_two_dice(self, seeded):
        replay = DiceRoller(random.Random())
        replay.rng.setstate(seeded.dice.rng.getstate())
        expected = (replay.roll_die(), replay.roll_die())

        outcome, _ = seeded.attack(1, 2)
        assert (outcome.attacker_roll, outcome.defender_roll) == expected
        assert seeded.dice.rng.getstate() == replay.rng.getstate()
