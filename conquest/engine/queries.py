"""
Query functions for UI integration.
These functions help the UI understand what actions are available
without mutating game state.
"""

from dataclasses import dataclass
from typing import Any

from conquest.engine.state import GameState, TerritoryStore
from conquest.engine.actions import ATTACK
from conquest.engine.combat import can_attack
from conquest.engine.missions import mission_complete, mission_progress
from conquest.engine.reducer import MODE_ALLOWED_ACTIONS, validate_attack_targets


@dataclass
class ValidationResult:
    """Result of action validation."""
    valid: bool
    error: str | None = None


@dataclass
class TerritoryStatistics:
    """Board-wide troop statistics."""
    total_troops: int
    strongest_name: str
    strongest_troops: int
    weakest_name: str
    weakest_troops: int
    average_troops: float


# ===== Action Validation =====

def validate_attack(state: GameState, attacker: int, defender: int) -> ValidationResult:
    """
    Validate an attack request without applying it.
    An attacker without spare troops is reported too, although the reducer treats
    that case as a failed attack rather than an error.
    """
    if state.finished:
        return ValidationResult(False, "Game is over.")
    if state.mission is None:
        return ValidationResult(False, "No mission assigned.")
    if ATTACK not in get_available_action_types(state):
        return ValidationResult(False, "Enter attack mode first.")
    try:
        validate_attack_targets(state, attacker, defender)
    except ValueError as e:
        return ValidationResult(False, str(e))
    if not can_attack(state.territory(attacker)):
        return ValidationResult(
            False, f"{state.territory(attacker).name} must have more than 1 troop to attack")
    return ValidationResult(True)


def get_available_action_types(state: GameState) -> list[str]:
    """Action types the reducer accepts right now."""
    if state.finished:
        return []
    return list(MODE_ALLOWED_ACTIONS.get(state.mode, []))


# ===== Board Queries =====

def get_statistics(store: TerritoryStore) -> TerritoryStatistics:
    """
    Troop statistics over all territories.
    Ties for strongest/weakest go to the territory registered first.
    """
    territories = list(store)
    if not territories:
        raise ValueError("No territories registered")

    strongest = territories[0]
    weakest = territories[0]
    total = 0
    for territory in territories:
        total += territory.troops
        if territory.troops > strongest.troops:
            strongest = territory
        if territory.troops < weakest.troops:
            weakest = territory

    return TerritoryStatistics(
        total_troops=total,
        strongest_name=strongest.name,
        strongest_troops=strongest.troops,
        weakest_name=weakest.name,
        weakest_troops=weakest.troops,
        average_troops=total / len(territories),
    )


def get_attack_sources(state: GameState) -> list[int]:
    """1-based numbers of territories with enough troops to attack."""
    return [i for i, t in enumerate(state.store, 1) if can_attack(t)]


def get_mission_summary(state: GameState) -> dict[str, Any]:
    """Mission description with current progress, for menus and banners."""
    mission = state.mission
    if mission is None:
        return {}
    return {
        "kind": mission.kind,
        "description": mission.description,
        "progress": mission_progress(mission, state.store, state.conquests),
        "target": mission.target_count,
        "complete": mission_complete(mission, state.store, state.conquests),
        "conquests": state.conquests,
    }
