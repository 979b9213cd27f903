"""
Main entry point for the Conquest console game.
Registers territories, assigns a mission and runs the menus until victory or quit.
"""

import sys

from conquest.console import main

if __name__ == "__main__":
    sys.exit(main())
