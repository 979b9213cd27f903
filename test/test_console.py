"""
Console flows driven through scripted input.
"""

import pytest

from conquest import console
from conquest.engine.dice import DiceRoller

from conftest import scripted_dice


@pytest.fixture
def play(monkeypatch):
    """Run console.main() with scripted answers and dice; returns (exit code, output)."""
    def run(answers, dice_values, capsys):
        replies = iter(answers)

        def fake_input(prompt=""):
            try:
                return next(replies)
            except StopIteration:
                raise EOFError from None

        monkeypatch.setattr("builtins.input", fake_input)
        monkeypatch.setattr(DiceRoller, "from_clock", lambda: scripted_dice(*dice_values))
        code = console.main()
        return code, capsys.readouterr().out
    return run


def test_quit_from_main_menu(play, capsys):
    # bundled skirmish map, ConquerCount(2), quit
    code, out = play(["3", "0"], [1, 2], capsys)
    assert code == 0
    assert "(default)" in out
    assert "Conquer 2 territories. (Progress: 0/2)" in out
    assert "System finished successfully!" in out


def test_map_and_statistics(play, capsys):
    code, out = play(["3", "1", "3", "0"], [1, 2], capsys)
    assert code == 0
    assert "Highlands" in out
    assert "Total registered territories: 3" in out
    assert "Total troops on the board: 10" in out
    assert "Strongest territory: Highlands (5 troops)" in out
    assert "Weakest territory: Marshes (2 troops)" in out


def test_play_to_victory(play, capsys):
    answers = [
        "3",            # skirmish map
        "2",            # attack phase
        "1", "1", "2",  # Highlands -> Riverlands, 3 -> 2
        "1", "1", "2",  # 2 -> 1
        "1", "1", "2",  # conquered
        "1",            # move 1 troop
        "1", "1", "3",  # Highlands -> Marshes, 2 -> 1
        "1", "1", "3",  # conquered
        "1",            # move 1 troop
    ]
    code, out = play(answers, [1, 2] + [6, 1] * 5, capsys)
    assert code == 0
    assert "TERRITORY Riverlands CONQUERED BY THE red ARMY" in out
    assert "Troops available in Highlands: 5" in out
    assert "CONGRATULATIONS" in out
    assert "System finished successfully!" not in out


def test_invalid_attacks_are_reported(play, capsys):
    answers = [
        "3", "2",
        "1", "2", "3",  # both blue
        "1", "x",       # not a number
        "1", "0",       # back out of the attack prompt
        "9",            # unknown option
        "0",            # end attack phase
        "0",            # quit
    ]
    code, out = play(answers, [1, 2], capsys)
    assert code == 0
    assert "Invalid action: Cannot attack a territory that already belongs to your army" in out
    assert "Invalid selection!" in out
    assert "Invalid option!" in out
    assert "System finished successfully!" in out


def test_manual_registration(play, capsys):
    answers = [
        "1",                    # register by hand
        "2", "3",               # below the minimum, then 3
        "A", "red", "5",
        "B", "blue", "x", "-1", "3",
        "C", "green", "1",
        "0",
    ]
    # coin 0 -> DestroyFaction, first enemy (blue)
    code, out = play(answers, [0, 0], capsys)
    assert code == 0
    assert "You will register 3 territories" in out
    assert "Destroy the blue army completely." in out


def test_interrupted_input_exits_cleanly(play, capsys):
    code, out = play(["3"], [1, 2], capsys)
    assert code == 0
    assert "Goodbye" in out


def test_out_of_memory_during_setup(play, capsys, monkeypatch):
    def exhausted():
        raise MemoryError

    monkeypatch.setattr(console, "choose_setup", exhausted)
    code, out = play([], [], capsys)
    assert code == 1
    assert "could not allocate" in out
