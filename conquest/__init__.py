"""
Conquest - a turn-based territorial conquest console game.
"""
