#!/usr/bin/env python3
"""
Interactive console for the conquest game.
Owns every prompt and printout; the engine only sees parsed numbers and strings.
Run: python main.py (or the installed `conquest` command)
"""

import logging
import sys

from conquest.config import DEFAULT_SETUP_ID
from conquest.engine import MIN_TERRITORIES
from conquest.engine.state import Territory, TerritoryStore, create_territory_store, MODE_ATTACK
from conquest.engine.session import GameSession
from conquest.engine.definitions import list_setups, load_territory_store, SetupError
from conquest.engine.events import GameEvent
from conquest.engine.queries import get_statistics, get_attack_sources

LINE = "-" * 61


def print_header():
    """Print the welcome banner."""
    print()
    print("=" * 62)
    print("      CONQUEST - TERRITORY REGISTRATION AND MISSIONS")
    print("=" * 62)
    print()


def read_int(prompt: str, minimum: int | None = None, maximum: int | None = None,
             retry_message: str = "Invalid value! Try again: ") -> int:
    """Keep asking until the answer is an integer within [minimum, maximum]."""
    answer = input(prompt)
    while True:
        try:
            value = int(answer.strip())
            if (minimum is None or value >= minimum) and (maximum is None or value <= maximum):
                return value
        except ValueError:
            pass
        answer = input(retry_message)


def read_text(prompt: str) -> str:
    answer = input(prompt).strip()
    while not answer:
        answer = input("This field cannot be empty: ").strip()
    return answer


# ===== Setup =====

def register_territories() -> TerritoryStore:
    """Ask for the number of territories and then each territory's fields."""
    total = read_int(
        f"How many territories do you want to register (minimum {MIN_TERRITORIES})? ",
        minimum=MIN_TERRITORIES,
        retry_message=f"Invalid value! Enter an integer of at least {MIN_TERRITORIES}: ",
    )
    print(f"You will register {total} territories to start the game.")
    print(LINE)

    names, factions, troops = [], [], []
    for number in range(1, total + 1):
        print(f"\n TERRITORY REGISTRATION {number}")
        print(LINE)
        names.append(read_text("Territory name: "))
        factions.append(read_text("Army color: "))
        troops.append(read_int(
            "Number of troops: ", minimum=0,
            retry_message="Invalid value! Enter a non-negative number: ",
        ))
        print("Territory registered!")

    return create_territory_store(names, factions, troops)


def choose_setup() -> TerritoryStore:
    """Register territories by hand or start from a bundled map."""
    setups = list_setups()
    if not setups:
        return register_territories()

    print("1. Register territories")
    for i, setup in enumerate(setups, 2):
        default = " (default)" if setup.id == DEFAULT_SETUP_ID else ""
        print(f"{i}. Bundled map: {setup.display_name}{default}")
    choice = read_int("Choose an option: ", minimum=1, maximum=len(setups) + 1,
                      retry_message="Invalid option! Choose again: ")
    if choice == 1:
        return register_territories()

    setup = setups[choice - 2]
    try:
        return load_territory_store(setup.id)
    except SetupError as e:
        print(f"\nCould not load {setup.display_name}: {e}")
        print("Falling back to manual registration.\n")
        return register_territories()


# ===== Display =====

def print_territory(territory: Territory, number: int):
    print(f"\n TERRITORY {number}")
    print(f"   Name: {territory.name}")
    print(f"   Army: {territory.faction}")
    print(f"   Troops: {territory.troops}")


def print_map(store: TerritoryStore):
    print("\n")
    print(LINE)
    print("                  REGISTERED TERRITORIES")
    print(LINE)
    for number, territory in enumerate(store, 1):
        print_territory(territory, number)
    print()
    print(LINE)
    print(f" Total registered territories: {len(store)}")
    print(LINE)


def print_statistics(store: TerritoryStore):
    stats = get_statistics(store)
    print("\n GAME STATISTICS")
    print(LINE)
    print(f" Total troops on the board: {stats.total_troops}")
    print(f" Strongest territory: {stats.strongest_name} ({stats.strongest_troops} troops)")
    print(f" Weakest territory: {stats.weakest_name} ({stats.weakest_troops} troops)")
    print(f" Average troops per territory: {stats.average_troops:.1f}")
    print(LINE)


def mission_line(session: GameSession) -> str:
    summary = session.mission_summary()
    return f"{summary['description']} (Progress: {summary['progress']}/{summary['target']})"


def print_mission_banner(session: GameSession):
    print("\n--- YOUR MISSION ---")
    print(f"Objective: {session.mission.description}")
    print("--------------------")


def print_events(events: list[GameEvent]):
    """Render attack events as battle text."""
    for e in events:
        p = e.payload
        if e.type == "attack_failed":
            print(f"\nATTACK FAILED: {p['reason']}.")
        elif e.type == "attack_resolved":
            attacker, defender = p["attacker"], p["defender"]
            print(f"\n--- BATTLE: {attacker['name']} (A) vs {defender['name']} (D) ---")
            print("Rolling the dice...")
            print(f" -> Attack ({attacker['faction']}): {p['attacker_roll']}")
            print(f" -> Defense ({defender['faction']}): {p['defender_roll']}")
            if p["defender_losses"]:
                print("Attacker wins! The defender loses 1 troop.")
            else:
                print("Defender wins! The attacker loses 1 troop.")
            print("----------------------------------------")
            print("Battle result:")
            print(f" -> {attacker['name']} lost {p['attacker_losses']} troop(s) "
                  f"and now has {attacker['troops']}.")
            print(f" -> {defender['name']} lost {p['defender_losses']} troop(s) "
                  f"and now has {max(defender['troops'], 0)}.")
        elif e.type == "territory_conquered":
            print("----------------------------------------")
            print(f"!!! TERRITORY {p['territory']} CONQUERED BY THE {p['new_faction']} ARMY !!!")
        elif e.type == "troops_transferred":
            if p["forced"]:
                print("The attacker has no troops to spare. "
                      "The conquered territory keeps 1 troop.")
            else:
                print(f"{p['amount']} troops moved to {p['to_territory']}. "
                      f"Troops left in {p['from_territory']}: {p['remaining']}")
        elif e.type in ("mission_completed", "mode_changed", "session_ended"):
            pass  # Menus and the victory banner show these
        else:
            print(f"  {e.type}: {e.payload}")


def print_victory(session: GameSession):
    print("\n\n====================================================")
    print(f"!!! CONGRATULATIONS, YOU ACCOMPLISHED YOUR MISSION: {session.mission.description} !!!")
    print("====================================================\n")


# ===== Attack phase =====

def prompt_transfer(attacker: Territory):
    """Build the transfer chooser for an attack launched from attacker."""
    def choose_transfer(minimum: int, maximum: int) -> int:
        print("\nTerritory conquered! You must move troops into it.")
        print(f"Troops available in {attacker.name}: {maximum + 1}")
        return read_int(
            f"How many troops do you want to move? (Min: {minimum}, Max: {maximum}): ",
            minimum=minimum, maximum=maximum,
            retry_message=f"How many troops do you want to move? (Min: {minimum}, Max: {maximum}): ",
        )
    return choose_transfer


def prompt_attack(session: GameSession):
    """Ask for attacker and defender, resolve the attack and show the aftermath."""
    print("\n--- ATTACK PHASE ---")
    print_map(session.store)
    sources = get_attack_sources(session.state)
    if sources:
        print(f"Territories able to attack: {', '.join(str(n) for n in sources)}")
    try:
        attacker = int(input("Choose the ATTACKING territory number (or 0 to go back): ").strip())
        if attacker == 0:
            return
        defender = int(input("Choose the DEFENDING territory number: ").strip())
    except ValueError:
        print("\nInvalid selection! Check the territory numbers and try again.")
        return

    try:
        chooser = prompt_transfer(session.state.territory(attacker))
        _, events = session.attack(attacker, defender, chooser)
    except ValueError as e:
        print(f"\nInvalid action: {e}")
        return

    print_events(events)
    print("----------------------------------------\n")
    print("\n--- AFTER THE BATTLE ---")
    print_territory(session.state.territory(attacker), attacker)
    print_territory(session.state.territory(defender), defender)


def run_attack_phase(session: GameSession) -> bool:
    """Attack menu loop. Returns True as soon as the mission is accomplished."""
    session.enter_attack_mode()
    while session.mode == MODE_ATTACK and not session.finished:
        print("\n--- ATTACK PHASE ---")
        print(f"MISSION: {mission_line(session)}")
        print("1. Attack")
        print("2. Check mission and map")
        print("0. End attack phase")
        choice = input("Choose an action: ").strip()

        if choice == "1":
            prompt_attack(session)
            if session.mission_accomplished:
                return True
        elif choice == "2":
            print_map(session.store)
            print(f"\nMISSION REMINDER: {mission_line(session)}")
        elif choice == "0":
            session.return_to_overview()
        else:
            print("\nInvalid option! Try again.")
    return session.mission_accomplished


def run_main_loop(session: GameSession) -> bool:
    """Overview menu loop. Returns True if the mission was accomplished."""
    print_mission_banner(session)
    while not session.finished:
        print("\n--- MAIN MENU ---")
        print(f"YOUR MISSION: {mission_line(session)}")
        print("1. Show full map")
        print("2. Start attack phase")
        print("3. Show statistics")
        print("0. Quit")
        choice = input("Choose an option: ").strip()

        if choice == "1":
            print_map(session.store)
        elif choice == "2":
            if run_attack_phase(session):
                print_victory(session)
                return True
        elif choice == "3":
            print_statistics(session.store)
        elif choice == "0":
            session.quit()
        else:
            print("\nInvalid option! Try again.")
    return session.mission_accomplished


def main() -> int:
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    print_header()
    print("Welcome to the territory registration system!")
    try:
        store = choose_setup()
    except MemoryError:
        print("Error: could not allocate the territories. The program will exit.")
        return 1
    except (EOFError, KeyboardInterrupt):
        print("\n\nSetup interrupted. Goodbye!")
        return 0

    session = GameSession.start(store)
    try:
        accomplished = run_main_loop(session)
    except (EOFError, KeyboardInterrupt):
        print("\n\nGame interrupted. Goodbye!")
        return 0

    if not accomplished:
        print("\n System finished successfully!")
        print(" Let the games begin!\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
