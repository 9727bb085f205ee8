"""
game_state.py
-------------
Defines the top-level states the game can be in.
"""

from enum import Enum


class GameState(Enum):
    """Top-level game states. Values are the persisted/presented names."""
    HOME = "home"                   # Main menu
    LEVEL_SELECT = "levelSelect"    # Stage/level browser
    SHOP = "shop"                   # Character shop
    PLAY = "play"                   # Active gameplay
    PAUSE = "pause"                 # Frozen with pause popup
    WIN = "win"                     # Level cleared popup
    GAME_OVER = "gameOver"          # Player died popup
