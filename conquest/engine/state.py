"""
Game state representation.
The territory store is a fixed-size, positionally indexed collection created at setup.
Reducer actions work on copies; the session swaps in the new state once an action succeeds.
"""

from dataclasses import dataclass, field
from copy import deepcopy
from typing import TYPE_CHECKING, Any, Iterator, Sequence

from conquest.engine import MIN_TERRITORIES

if TYPE_CHECKING:
    from conquest.engine.combat import AttackOutcome
    from conquest.engine.missions import Mission

MODE_OVERVIEW = "overview"
MODE_ATTACK = "attack"


@dataclass
class Territory:
    """A named board cell with a controlling faction and a troop count."""
    name: str
    faction: str  # army color tag; overwritten on conquest
    troops: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "faction": self.faction,
            "troops": self.troops,
        }


@dataclass
class TerritoryStore:
    """
    Owns every Territory of a session.
    Identity is the position in the list; no territory is added or removed after setup.
    """
    territories: list[Territory] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.territories)

    def __iter__(self) -> Iterator[Territory]:
        return iter(self.territories)

    def __getitem__(self, index: int) -> Territory:
        return self.territories[index]

    def count_faction(self, faction: str) -> int:
        """Number of territories currently held by faction."""
        return sum(1 for t in self.territories if t.faction == faction)

    def factions(self) -> list[str]:
        """Distinct faction tags in first-seen order."""
        seen: list[str] = []
        for territory in self.territories:
            if territory.faction not in seen:
                seen.append(territory.faction)
        return seen


def create_territory_store(
    names: Sequence[str],
    factions: Sequence[str],
    troop_counts: Sequence[int],
) -> TerritoryStore:
    """
    Build the territory store from parallel sequences (one entry per territory).

    Raises ValueError when fewer than MIN_TERRITORIES are given, the sequences differ in
    length, a name or faction is blank, or a troop count is negative.
    """
    if not (len(names) == len(factions) == len(troop_counts)):
        raise ValueError(
            f"Territory fields length mismatch: {len(names)} names, "
            f"{len(factions)} factions, {len(troop_counts)} troop counts"
        )
    if len(names) < MIN_TERRITORIES:
        raise ValueError(
            f"At least {MIN_TERRITORIES} territories are required, got {len(names)}")

    territories = []
    for number, (name, faction, troops) in enumerate(zip(names, factions, troop_counts), 1):
        name = str(name).strip()
        faction = str(faction).strip()
        if not name:
            raise ValueError(f"Territory {number} has no name")
        if not faction:
            raise ValueError(f"Territory {number} ({name}) has no army color")
        if isinstance(troops, bool) or not isinstance(troops, int):
            raise ValueError(f"Territory {number} ({name}) troop count must be an integer")
        if troops < 0:
            raise ValueError(f"Territory {number} ({name}) cannot have negative troops")
        territories.append(Territory(name=name, faction=faction, troops=troops))
    return TerritoryStore(territories=territories)


@dataclass
class GameState:
    """Complete session state."""
    store: TerritoryStore
    mission: "Mission | None" = None
    # Territories conquered by the player this session; only ever incremented
    conquests: int = 0
    mode: str = MODE_OVERVIEW  # "overview" or "attack"
    finished: bool = False
    mission_accomplished: bool = False
    # Outcome of the most recent attack request (None before the first one)
    last_attack: "AttackOutcome | None" = None

    def copy(self) -> "GameState":
        """Return a deep copy of this game state."""
        return deepcopy(self)

    def territory(self, number: int) -> Territory:
        """Territory by its 1-based number as shown to the player."""
        if not 1 <= number <= len(self.store):
            raise ValueError(
                f"Territory number {number} is out of range (1-{len(self.store)})")
        return self.store[number - 1]
