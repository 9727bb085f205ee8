"""
Core services exports.

Provides configuration loading, the event system and persistence.
"""

from pixel_commando.core.services.config_manager import load_config, config_value
from pixel_commando.core.services.event_manager import (
    EventManager,
    BaseEvent,
    ShotFiredEvent,
    PlayerJumpedEvent,
    PlayerDamagedEvent,
    PlayerDiedEvent,
    EnemyKilledEvent,
    BossSpawnedEvent,
    BossDefeatedEvent,
    LevelCompletedEvent,
    StateChangedEvent,
)
from pixel_commando.core.services.storage import KeyValueStore
from pixel_commando.core.services.progress_store import Progress, ProgressStore

__all__ = [
    # Config
    'load_config',
    'config_value',
    # Events
    'EventManager',
    'BaseEvent',
    'ShotFiredEvent',
    'PlayerJumpedEvent',
    'PlayerDamagedEvent',
    'PlayerDiedEvent',
    'EnemyKilledEvent',
    'BossSpawnedEvent',
    'BossDefeatedEvent',
    'LevelCompletedEvent',
    'StateChangedEvent',
    # Persistence
    'KeyValueStore',
    'Progress',
    'ProgressStore',
]
