"""
Runtime configuration exports.

Provides game-wide constants. All exports are lightweight class
constants with no initialization overhead.
"""

from pixel_commando.core.runtime.game_settings import (
    Display,
    Physics,
    World,
    PlayerStats,
    EnemyStats,
    BossStats,
    BulletStats,
    Combat,
    Progression,
    Ads,
    Storage,
)

__all__ = [
    # Display & Timing
    'Display',
    'Physics',
    # World & Entities
    'World',
    'PlayerStats',
    'EnemyStats',
    'BossStats',
    'BulletStats',
    # Rules
    'Combat',
    'Progression',
    # Services
    'Ads',
    'Storage',
]
