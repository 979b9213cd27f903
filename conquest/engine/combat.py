"""
Combat resolution system.
One attack = one die per side; exactly one side loses exactly one troop.
A defender reduced to zero troops is conquered and receives troops moved in by the attacker.
"""

import logging
from dataclasses import dataclass
from typing import Callable

from conquest.engine.state import Territory

logger = logging.getLogger(__name__)

# Called with (min_troops, max_troops) when a conquest leaves the attacker movable troops;
# returns how many troops to move into the conquered territory.
TransferChooser = Callable[[int, int], int]

MIN_TRANSFER = 1


@dataclass
class AttackOutcome:
    """Result of a single attack."""
    success: bool  # False when the attack was refused (attacker had <= 1 troop)
    conquered: bool  # True if the defender changed hands
    attacker_roll: int | None = None
    defender_roll: int | None = None
    attacker_losses: int = 0
    defender_losses: int = 0
    transferred: int = 0  # troops moved into the conquered territory
    forced_transfer: bool = False  # attacker had no movable troops; 1 moved, attacker left at 0
    reason: str | None = None  # why the attack was refused


def can_attack(attacker: Territory) -> bool:
    """An attacker must keep one troop behind, so it needs more than one."""
    return attacker.troops > 1


def resolve_attack(
    attacker: Territory,
    defender: Territory,
    dice_rolls: dict[str, list[int]],
    choose_transfer: TransferChooser | None = None,
) -> AttackOutcome:
    """
    Resolve one attack between two territories.

    Combat rules:
    - Attacker with <= 1 troop cannot attack: returns success=False, nothing changes
    - Highest attacker die vs highest defender die
    - Strictly greater attacker roll: defender loses 1 troop
    - Otherwise (ties included): attacker loses 1 troop
    - Defender at <= 0 troops is conquered: takes the attacker's faction and receives
      t troops from the attacker, 1 <= t <= attacker.troops - 1 (chosen by choose_transfer,
      minimum when no chooser is given). An attacker left with exactly 1 troop moves it
      anyway: defender gets 1, attacker drops to 0.

    Note: This function MODIFIES both territories in place. Callers that need the
    originals on error should pass copies (the reducer works on a copied state).

    Args:
        attacker: Attacking territory (modified in place)
        defender: Defending territory (modified in place)
        dice_rolls: {"attacker": [rolls], "defender": [rolls]}, ranked highest first
        choose_transfer: Asked for the transfer amount after a conquest

    Returns:
        AttackOutcome describing rolls, losses and the conquest
    """
    if not can_attack(attacker):
        logger.debug("Attack from %s refused: %d troop(s)", attacker.name, attacker.troops)
        return AttackOutcome(
            success=False,
            conquered=False,
            reason=f"{attacker.name} must have more than 1 troop to attack",
        )

    attacker_rolls = dice_rolls.get("attacker") or []
    defender_rolls = dice_rolls.get("defender") or []
    if not attacker_rolls or not defender_rolls:
        raise ValueError("Attack needs at least one die for each side")

    attacker_roll = attacker_rolls[0]
    defender_roll = defender_rolls[0]

    attacker_losses = 0
    defender_losses = 0
    if attacker_roll > defender_roll:
        defender_losses = 1
    else:
        attacker_losses = 1

    attacker.troops -= attacker_losses
    defender.troops -= defender_losses

    outcome = AttackOutcome(
        success=True,
        conquered=False,
        attacker_roll=attacker_roll,
        defender_roll=defender_roll,
        attacker_losses=attacker_losses,
        defender_losses=defender_losses,
    )

    if defender.troops > 0:
        return outcome

    outcome.conquered = True
    defender.faction = attacker.faction

    if attacker.troops > 1:
        max_transfer = attacker.troops - 1
        amount = choose_transfer(MIN_TRANSFER, max_transfer) if choose_transfer else MIN_TRANSFER
        if isinstance(amount, bool) or not isinstance(amount, int):
            raise ValueError(f"Transfer amount must be an integer, got {amount!r}")
        if not MIN_TRANSFER <= amount <= max_transfer:
            raise ValueError(
                f"Must move between {MIN_TRANSFER} and {max_transfer} troops, got {amount}")
        defender.troops = amount
        attacker.troops -= amount
        outcome.transferred = amount
    else:
        # No movable troops: the last one goes anyway
        defender.troops = 1
        attacker.troops -= 1
        outcome.transferred = 1
        outcome.forced_transfer = True

    logger.info(
        "%s conquered by %s (%d troop(s) moved)",
        defender.name, attacker.faction, outcome.transferred,
    )
    return outcome
