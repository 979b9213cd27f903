"""
Game session orchestration.
Owns the state and the dice for one game: seeds the dice once, assigns the mission,
rolls for each attack and runs every action through the reducer.
"""

import logging

from conquest.engine.state import GameState, TerritoryStore
from conquest.engine.dice import DiceRoller, roll_attack_dice
from conquest.engine.combat import AttackOutcome, TransferChooser
from conquest.engine.missions import Mission, assign_mission
from conquest.engine.reducer import apply_action
from conquest.engine.queries import get_mission_summary, validate_attack
from conquest.engine import actions
from conquest.engine.events import GameEvent, mission_assigned

logger = logging.getLogger(__name__)


class GameSession:
    """
    One game from mission assignment to quit or victory.
    A failed action (ValueError) leaves the session state untouched.
    """

    def __init__(self, state: GameState, dice: DiceRoller):
        self.state = state
        self.dice = dice
        self.event_log: list[GameEvent] = []

    @classmethod
    def start(cls, store: TerritoryStore, dice: DiceRoller | None = None) -> "GameSession":
        """
        Begin a session on a finalized territory store.
        Without an injected DiceRoller, one is seeded from the clock here, before the
        mission draw and any roll.
        """
        if dice is None:
            dice = DiceRoller.from_clock()
        mission = assign_mission(store, dice)
        session = cls(GameState(store=store, mission=mission), dice)
        session._record([mission_assigned(mission.to_dict())])
        logger.debug("Session started with %d territories", len(store))
        return session

    # ===== State accessors =====

    @property
    def store(self) -> TerritoryStore:
        return self.state.store

    @property
    def mission(self) -> Mission:
        return self.state.mission

    @property
    def conquests(self) -> int:
        return self.state.conquests

    @property
    def mode(self) -> str:
        return self.state.mode

    @property
    def finished(self) -> bool:
        return self.state.finished

    @property
    def mission_accomplished(self) -> bool:
        return self.state.mission_accomplished

    def mission_summary(self) -> dict:
        return get_mission_summary(self.state)

    # ===== Actions =====

    def apply(
        self,
        action: actions.Action,
        choose_transfer: TransferChooser | None = None,
    ) -> list[GameEvent]:
        """Run an action through the reducer and keep the resulting state and events."""
        new_state, events = apply_action(self.state, action, choose_transfer)
        self.state = new_state
        self._record(events)
        return events

    def enter_attack_mode(self) -> list[GameEvent]:
        return self.apply(actions.enter_attack_mode())

    def return_to_overview(self) -> list[GameEvent]:
        return self.apply(actions.return_to_overview())

    def quit(self) -> list[GameEvent]:
        return self.apply(actions.quit_game())

    def attack(
        self,
        attacker: int,
        defender: int,
        choose_transfer: TransferChooser | None = None,
    ) -> tuple[AttackOutcome, list[GameEvent]]:
        """
        Attack defender from attacker (1-based territory numbers).
        Dice are rolled only when validate_attack accepts the request.
        choose_transfer(min, max) is asked for the troops to move in after a conquest
        when the attacker has troops to spare.
        """
        # Rejected and refused attacks reach the reducer without dice, so they draw nothing
        dice_rolls = {}
        if validate_attack(self.state, attacker, defender).valid:
            dice_rolls = roll_attack_dice(self.dice)
        events = self.apply(actions.attack(attacker, defender, dice_rolls), choose_transfer)
        return self.state.last_attack, events

    def _record(self, events: list[GameEvent]) -> None:
        for event in events:
            logger.debug("event %s %s", event.type, event.payload)
        self.event_log.extend(events)
