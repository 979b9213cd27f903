"""
Game events for UI hooks and logging.
Events describe what happened during action processing.
"""

from dataclasses import dataclass
from typing import Any


@dataclass
class GameEvent:
    """Base event class. All events have a type and payload."""
    type: str
    payload: dict[str, Any]

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "payload": self.payload}


# ===== Event Type Constants =====

# Session events
MISSION_ASSIGNED = "mission_assigned"
MODE_CHANGED = "mode_changed"
SESSION_ENDED = "session_ended"

# Combat events
ATTACK_RESOLVED = "attack_resolved"
ATTACK_FAILED = "attack_failed"

# Territory events
TERRITORY_CONQUERED = "territory_conquered"
TROOPS_TRANSFERRED = "troops_transferred"

# Victory events
MISSION_COMPLETED = "mission_completed"


# ===== Event Factory Functions =====

def mission_assigned(mission: dict[str, Any]) -> GameEvent:
    return GameEvent(MISSION_ASSIGNED, {"mission": mission})


def mode_changed(old_mode: str, new_mode: str) -> GameEvent:
    return GameEvent(MODE_CHANGED, {
        "old_mode": old_mode,
        "new_mode": new_mode,
    })


def attack_resolved(
    attacker: dict[str, Any],
    defender: dict[str, Any],
    attacker_roll: int,
    defender_roll: int,
    attacker_losses: int,
    defender_losses: int,
) -> GameEvent:
    """
    attacker/defender are territory snapshots ({name, faction, troops}) taken after losses,
    before any troop transfer.
    """
    return GameEvent(ATTACK_RESOLVED, {
        "attacker": attacker,
        "defender": defender,
        "attacker_roll": attacker_roll,
        "defender_roll": defender_roll,
        "attacker_losses": attacker_losses,
        "defender_losses": defender_losses,
    })


def attack_failed(attacker: str, defender: str, reason: str) -> GameEvent:
    return GameEvent(ATTACK_FAILED, {
        "attacker": attacker,
        "defender": defender,
        "reason": reason,
    })


def territory_conquered(territory: str, old_faction: str, new_faction: str) -> GameEvent:
    return GameEvent(TERRITORY_CONQUERED, {
        "territory": territory,
        "old_faction": old_faction,
        "new_faction": new_faction,
    })


def troops_transferred(
    from_territory: str,
    to_territory: str,
    amount: int,
    remaining: int,
    forced: bool = False,
) -> GameEvent:
    """forced: the attacker had no movable troops and gave up its last one."""
    return GameEvent(TROOPS_TRANSFERRED, {
        "from_territory": from_territory,
        "to_territory": to_territory,
        "amount": amount,
        "remaining": remaining,
        "forced": forced,
    })


def mission_completed(description: str, conquests: int) -> GameEvent:
    return GameEvent(MISSION_COMPLETED, {
        "description": description,
        "conquests": conquests,
    })


def session_ended(mission_accomplished: bool, conquests: int) -> GameEvent:
    return GameEvent(SESSION_ENDED, {
        "mission_accomplished": mission_accomplished,
        "conquests": conquests,
    })
