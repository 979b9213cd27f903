"""
Bundled starting maps.
Each setup lives under data/setups/<setup_id>/: starting_setup.json (the territories, in
registration order) and optional manifest.json (display_name).
Files are validated with pydantic before a territory store is built from them.
"""

import json
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from conquest.engine import MIN_TERRITORIES
from conquest.engine.state import TerritoryStore, create_territory_store

DATA_DIR = Path(__file__).parent.parent / "data"
SETUPS_DIR = DATA_DIR / "setups"


class SetupError(ValueError):
    """A bundled setup is missing or malformed."""


class SetupTerritory(BaseModel):
    name: str = Field(min_length=1)
    faction: str = Field(min_length=1)
    troops: int = Field(ge=0)


class StartingSetup(BaseModel):
    """First territory is the player's: its faction is the player's army."""
    territories: list[SetupTerritory] = Field(min_length=MIN_TERRITORIES)


class SetupManifest(BaseModel):
    id: str
    display_name: str


def _default_setup_id() -> str:
    """Single place for default: conquest.config.DEFAULT_SETUP_ID."""
    from conquest.config import DEFAULT_SETUP_ID
    return DEFAULT_SETUP_ID


def _setup_dir(setup_id: str) -> Path:
    return SETUPS_DIR / setup_id


def _read_manifest(setup_dir: Path) -> SetupManifest:
    setup_id = setup_dir.name
    manifest_path = setup_dir / "manifest.json"
    if not manifest_path.exists():
        return SetupManifest(id=setup_id, display_name=setup_id)
    try:
        with open(manifest_path, "r") as f:
            data = json.load(f)
        return SetupManifest(
            id=data.get("id", setup_id),
            display_name=data.get("display_name", setup_id),
        )
    except (json.JSONDecodeError, OSError, AttributeError, ValidationError):
        return SetupManifest(id=setup_id, display_name=setup_id)


def list_setups() -> list[SetupManifest]:
    """All setups (subdirs of data/setups/ with starting_setup.json), sorted by id."""
    out = []
    if not SETUPS_DIR.exists():
        return out
    for d in sorted(SETUPS_DIR.iterdir()):
        if not d.is_dir():
            continue
        if not (d / "starting_setup.json").exists():
            continue
        out.append(_read_manifest(d))
    return out


def load_setup(setup_id: str) -> StartingSetup:
    """Load and validate data/setups/<setup_id>/starting_setup.json."""
    setup_dir = _setup_dir(setup_id)
    starting_path = setup_dir / "starting_setup.json"
    if not starting_path.exists():
        raise SetupError(f"Setup not found: {setup_id}")
    try:
        with open(starting_path, "r") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise SetupError(f"Setup {setup_id} is not valid JSON: {e}") from e
    try:
        return StartingSetup.model_validate(data)
    except ValidationError as e:
        raise SetupError(f"Setup {setup_id} is invalid: {e}") from e


def load_territory_store(setup_id: str | None = None) -> TerritoryStore:
    """Build a territory store from a bundled setup (default setup when setup_id is None)."""
    setup = load_setup(setup_id or _default_setup_id())
    return create_territory_store(
        names=[t.name for t in setup.territories],
        factions=[t.faction for t in setup.territories],
        troop_counts=[t.troops for t in setup.territories],
    )
