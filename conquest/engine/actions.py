"""
Action definitions for the game.
Actions are immutable, deterministic instructions.
"""

from dataclasses import dataclass, field

ENTER_ATTACK_MODE = "enter_attack_mode"
RETURN_TO_OVERVIEW = "return_to_overview"
ATTACK = "attack"
QUIT = "quit"


@dataclass(frozen=True)
class Action:
    """Base action class. All actions have a type and a payload."""
    type: str  # e.g., "attack", "enter_attack_mode", "return_to_overview", "quit"
    payload: dict = field(default_factory=dict)  # Action-specific data


def enter_attack_mode() -> Action:
    """Leave the overview menu for the attack phase."""
    return Action(type=ENTER_ATTACK_MODE)


def return_to_overview() -> Action:
    """End the attack phase and go back to the overview menu."""
    return Action(type=RETURN_TO_OVERVIEW)


def attack(
    attacker: int,  # 1-based territory number
    defender: int,  # 1-based territory number
    dice_rolls: dict[str, list[int]],  # "attacker" -> [rolls], "defender" -> [rolls]
) -> Action:
    """
    Attack defender from attacker.

    dice_rolls must be provided (deterministic, no RNG in reducer).

    Example: attack(1, 3, {"attacker": [6], "defender": [2]})
    """
    return Action(
        type=ATTACK,
        payload={
            "attacker": attacker,
            "defender": defender,
            "dice_rolls": dice_rolls,
        },
    )


def quit_game() -> Action:
    """End the session from the overview menu."""
    return Action(type=QUIT)
