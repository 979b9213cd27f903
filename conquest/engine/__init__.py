"""
Conquest mission and combat engine.
Core engine without console I/O; the console collaborator reads commands and renders events.
"""

DICE_SIDES = 6

# Territory store: fixed size after setup, never fewer than this.
MIN_TERRITORIES = 3

# ConquerCount missions: target drawn from [MIN_CONQUEST_TARGET, max(MIN_CONQUEST_TARGET, total // 2)].
MIN_CONQUEST_TARGET = 2
# Mission used when no enemy faction can be targeted.
FALLBACK_CONQUEST_TARGET = 2
