"""
Entity exports.

Provides the axis-aligned box base and all gameplay bodies.
"""

from pixel_commando.entities.base_entity import Box
from pixel_commando.entities.bullet import Bullet
from pixel_commando.entities.enemy import Enemy, Boss
from pixel_commando.entities.player import Player

__all__ = [
    'Box',
    'Bullet',
    'Enemy',
    'Boss',
    'Player',
]
