"""
Main game reducer.
Applies actions to state, enforcing rules and producing new state.
Returns (new_state, events) where events describe what happened.
"""

import logging

from conquest.engine.state import GameState, MODE_OVERVIEW, MODE_ATTACK
from conquest.engine.actions import (
    Action,
    ENTER_ATTACK_MODE,
    RETURN_TO_OVERVIEW,
    ATTACK,
    QUIT,
)
from conquest.engine.combat import resolve_attack, TransferChooser
from conquest.engine.missions import mission_complete
from conquest.engine.events import (
    GameEvent,
    mode_changed,
    attack_resolved,
    attack_failed,
    territory_conquered,
    troops_transferred,
    mission_completed,
    session_ended,
)

logger = logging.getLogger(__name__)


# Mode rules: which action types are allowed in which mode.
# Showing the map, statistics and mission progress are queries, allowed anywhere.
MODE_ALLOWED_ACTIONS = {
    MODE_OVERVIEW: [ENTER_ATTACK_MODE, QUIT],
    MODE_ATTACK: [ATTACK, RETURN_TO_OVERVIEW],
}


def _validate_action_for_mode(action: Action, state: GameState) -> None:
    """Validate that an action is allowed in the current mode."""
    allowed_actions = MODE_ALLOWED_ACTIONS.get(state.mode, [])
    if action.type not in allowed_actions:
        raise ValueError(
            f"Action '{action.type}' is not allowed in mode '{state.mode}'. "
            f"Allowed actions: {', '.join(allowed_actions)}"
        )


def validate_attack_targets(state: GameState, attacker: int, defender: int) -> None:
    """
    Validate a pair of 1-based territory numbers for an attack.
    Raises ValueError describing the first problem found.
    """
    total = len(state.store)
    for label, number in (("Attacker", attacker), ("Defender", defender)):
        if isinstance(number, bool) or not isinstance(number, int):
            raise ValueError(f"{label} must be a territory number, got {number!r}")
        if not 1 <= number <= total:
            raise ValueError(
                f"{label} number {number} is out of range (1-{total})")
    if attacker == defender:
        raise ValueError("A territory cannot attack itself")
    if state.territory(attacker).faction == state.territory(defender).faction:
        raise ValueError(
            "Cannot attack a territory that already belongs to your army")


def apply_action(
    state: GameState,
    action: Action,
    choose_transfer: TransferChooser | None = None,
) -> tuple[GameState, list[GameEvent]]:
    """
    Apply a single action to the current state, returning new state and events.

    Validates:
    - Session is not over and has a mission
    - Action is valid for the current mode

    The input state is never modified; on ValueError the caller keeps its state.

    Args:
        state: Current game state
        action: Action to apply
        choose_transfer: Asked for the troop transfer amount after a conquest

    Returns:
        Tuple of (new_state, events) where events describe what happened
    """
    if state.finished:
        if state.mission_accomplished:
            raise ValueError("Game is over. Your mission is already accomplished.")
        raise ValueError("Game is over.")

    if state.mission is None:
        raise ValueError("No mission assigned. Start the session first.")

    _validate_action_for_mode(action, state)

    new_state = state.copy()
    events: list[GameEvent] = []

    if action.type == ENTER_ATTACK_MODE:
        new_state, evts = _handle_change_mode(new_state, MODE_ATTACK)
        events.extend(evts)

    elif action.type == RETURN_TO_OVERVIEW:
        new_state, evts = _handle_change_mode(new_state, MODE_OVERVIEW)
        events.extend(evts)

    elif action.type == ATTACK:
        new_state, evts = _handle_attack(new_state, action, choose_transfer)
        events.extend(evts)

    elif action.type == QUIT:
        new_state, evts = _handle_quit(new_state)
        events.extend(evts)

    else:
        raise ValueError(f"Unknown action type: {action.type}")

    return new_state, events


def _handle_change_mode(state: GameState, new_mode: str) -> tuple[GameState, list[GameEvent]]:
    old_mode = state.mode
    state.mode = new_mode
    return state, [mode_changed(old_mode, new_mode)]


def _handle_attack(
    state: GameState,
    action: Action,
    choose_transfer: TransferChooser | None,
) -> tuple[GameState, list[GameEvent]]:
    """
    Resolve one attack.
    Validates:
    - Both territory numbers in range and distinct
    - Territories belong to different factions
    On conquest the session counter goes up; the mission is re-checked after every attack
    and a completed mission ends the session straight away.
    """
    attacker_number = action.payload.get("attacker")
    defender_number = action.payload.get("defender")
    dice_rolls = action.payload.get("dice_rolls") or {}

    validate_attack_targets(state, attacker_number, defender_number)

    attacker = state.territory(attacker_number)
    defender = state.territory(defender_number)
    defender_faction = defender.faction

    events: list[GameEvent] = []

    outcome = resolve_attack(attacker, defender, dice_rolls, choose_transfer)
    state.last_attack = outcome

    if not outcome.success:
        events.append(attack_failed(attacker.name, defender.name, outcome.reason or ""))
        return state, events

    # Snapshot after losses, before the transfer moved troops around
    attacker_after_losses = attacker.to_dict()
    defender_after_losses = defender.to_dict()
    if outcome.conquered:
        attacker_after_losses["troops"] = attacker.troops + outcome.transferred
        defender_after_losses["troops"] = 0
        defender_after_losses["faction"] = defender_faction

    events.append(attack_resolved(
        attacker=attacker_after_losses,
        defender=defender_after_losses,
        attacker_roll=outcome.attacker_roll,
        defender_roll=outcome.defender_roll,
        attacker_losses=outcome.attacker_losses,
        defender_losses=outcome.defender_losses,
    ))

    if outcome.conquered:
        state.conquests += 1
        events.append(territory_conquered(defender.name, defender_faction, defender.faction))
        events.append(troops_transferred(
            from_territory=attacker.name,
            to_territory=defender.name,
            amount=outcome.transferred,
            remaining=attacker.troops,
            forced=outcome.forced_transfer,
        ))

    if mission_complete(state.mission, state.store, state.conquests):
        logger.info("Mission complete after %d conquest(s)", state.conquests)
        state.finished = True
        state.mission_accomplished = True
        events.append(mission_completed(state.mission.description, state.conquests))
        old_mode = state.mode
        state.mode = MODE_OVERVIEW
        events.append(mode_changed(old_mode, MODE_OVERVIEW))
        events.append(session_ended(True, state.conquests))

    return state, events


def _handle_quit(state: GameState) -> tuple[GameState, list[GameEvent]]:
    state.finished = True
    return state, [session_ended(False, state.conquests)]
