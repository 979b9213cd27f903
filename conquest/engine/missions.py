"""
Mission system.
Each session gets one randomly drawn mission:
- ConquerCount: conquer N territories during the session
- DestroyFaction: eliminate every territory of one enemy army
Progress is always derived from the live territory store, never cached.
"""

import logging
from dataclasses import dataclass
from typing import Any, Union

from conquest.engine import MIN_CONQUEST_TARGET, FALLBACK_CONQUEST_TARGET
from conquest.engine.dice import DiceRoller
from conquest.engine.state import TerritoryStore

logger = logging.getLogger(__name__)

CONQUER_COUNT = "conquer_count"
DESTROY_FACTION = "destroy_faction"


@dataclass(frozen=True)
class ConquerCount:
    """Conquer target_count territories this session."""
    target_count: int
    description: str = ""

    @property
    def kind(self) -> str:
        return CONQUER_COUNT

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "target_count": self.target_count,
            "description": self.description,
        }


@dataclass(frozen=True)
class DestroyFaction:
    """
    Leave no territory under target_faction.
    target_count is the number of territories the faction held at assignment; it only
    feeds the progress display, completion depends on the faction being gone.
    """
    target_faction: str
    target_count: int
    description: str = ""

    @property
    def kind(self) -> str:
        return DESTROY_FACTION

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "target_faction": self.target_faction,
            "target_count": self.target_count,
            "description": self.description,
        }


Mission = Union[ConquerCount, DestroyFaction]


def conquer_count_mission(target_count: int) -> ConquerCount:
    return ConquerCount(
        target_count=target_count,
        description=f"Conquer {target_count} territories.",
    )


def destroy_faction_mission(target_faction: str, target_count: int) -> DestroyFaction:
    return DestroyFaction(
        target_faction=target_faction,
        target_count=target_count,
        description=f"Destroy the {target_faction} army completely.",
    )


def player_faction(territories: TerritoryStore) -> str:
    """The player is whoever holds the first registered territory."""
    return territories[0].faction


def conquest_target_range(total_territories: int) -> tuple[int, int]:
    """Inclusive bounds for a ConquerCount target; collapses to a single value on small maps."""
    high = total_territories // 2
    if high < MIN_CONQUEST_TARGET:
        high = MIN_CONQUEST_TARGET
    return MIN_CONQUEST_TARGET, high


def enemy_factions(territories: TerritoryStore) -> list[str]:
    """Distinct factions other than the player's, in first-seen order."""
    own = player_faction(territories)
    enemies: set[str] = set()
    ordered: list[str] = []
    for territory in territories:
        if territory.faction != own and territory.faction not in enemies:
            enemies.add(territory.faction)
            ordered.append(territory.faction)
    return ordered


def assign_mission(territories: TerritoryStore, dice: DiceRoller) -> Mission:
    """
    Draw the session mission. Each kind is picked with equal probability.

    ConquerCount: target uniform in conquest_target_range(len(territories)).
    DestroyFaction: a random enemy faction; target_count = territories it holds now.
    Falls back to ConquerCount(FALLBACK_CONQUEST_TARGET) when there is no enemy left
    or the enemy list cannot be built.
    """
    if dice.coin_flip() == 0:
        try:
            candidates = enemy_factions(territories)
        except MemoryError:
            logger.warning("Out of memory collecting enemy factions; using fallback mission")
            return conquer_count_mission(FALLBACK_CONQUEST_TARGET)

        if not candidates:
            logger.debug("No enemy faction on the map; using fallback mission")
            return conquer_count_mission(FALLBACK_CONQUEST_TARGET)

        target = dice.choice(candidates)
        mission: Mission = destroy_faction_mission(target, territories.count_faction(target))
    else:
        low, high = conquest_target_range(len(territories))
        mission = conquer_count_mission(dice.randint(low, high))

    logger.info("Mission assigned: %s", mission.description)
    return mission


def mission_complete(mission: Mission, territories: TerritoryStore, conquests: int) -> bool:
    """Check whether the mission is fulfilled against the current board."""
    if isinstance(mission, ConquerCount):
        return conquests >= mission.target_count
    if isinstance(mission, DestroyFaction):
        return territories.count_faction(mission.target_faction) == 0
    raise TypeError(f"Unknown mission type: {type(mission).__name__}")


def mission_progress(mission: Mission, territories: TerritoryStore, conquests: int) -> int:
    """Progress value for display, measured against mission.target_count."""
    if isinstance(mission, ConquerCount):
        return conquests
    if isinstance(mission, DestroyFaction):
        return mission.target_count - territories.count_faction(mission.target_faction)
    raise TypeError(f"Unknown mission type: {type(mission).__name__}")
