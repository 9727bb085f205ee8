"""
game_session.py
---------------
GameSession aggregate: every piece of mutable per-attempt world state,
owned by the state machine and passed explicitly into physics and
combat.

Responsibilities
----------------
- Hold the player, enemy roster, boss, both bullet collections and the
  revive checkpoint for the level currently being played.
- Rebuild all of it atomically when a level (re)starts.
"""

import random
from typing import List, Optional

from pixel_commando.core.debug.debug_logger import DebugLogger
from pixel_commando.entities.bullet import Bullet
from pixel_commando.entities.enemy import Enemy, Boss
from pixel_commando.entities.player import Player
from pixel_commando.systems import level_rules


class GameSession:
    """World state for one level attempt."""

    def __init__(self, rng: Optional[random.Random] = None):
        """
        Args:
            rng: Source for in-play randomness (refire cooldowns)
        """
        self.rng = rng or random.Random()
        self.player = Player()
        self.enemies: List[Enemy] = []
        self.boss: Optional[Boss] = None
        self.boss_spawned = False
        self.bullets: List[Bullet] = []
        self.enemy_bullets: List[Bullet] = []

        self.level = 1
        self.stage = 1
        self.level_in_stage = 1
        self.checkpoint = (self.player.x, self.player.y)

    # ===========================================================
    # Level Setup
    # ===========================================================

    def load_level(self, level: int) -> int:
        """
        Reset the world for a level attempt, in order: clamp the id,
        derive stage indices, reset the player, rebuild enemies, clear
        bullets and boss, then checkpoint at spawn.

        Returns:
            int: The clamped level id actually loaded
        """
        self.level = level_rules.clamp_level(level)
        self.stage = level_rules.stage_of(self.level)
        self.level_in_stage = level_rules.level_in_stage(self.level)

        self.player.reset()
        self.enemies = level_rules.build_enemies(self.stage, self.level_in_stage)

        self.bullets = []
        self.enemy_bullets = []
        self.boss = None
        self.boss_spawned = False

        self.checkpoint = (self.player.x, self.player.y)

        DebugLogger.system(
            f"Loaded level {self.level} (stage {self.stage}-{self.level_in_stage}, "
            f"{len(self.enemies)} enemies)",
            category="level"
        )
        return self.level

    def spawn_boss(self) -> Boss:
        """Bring in the boss. Only the first call per attempt has an effect."""
        if not self.boss_spawned:
            self.boss = level_rules.build_boss()
            self.boss_spawned = True
            DebugLogger.state(f"Boss spawned on level {self.level}", category="level")
        return self.boss

    # ===========================================================
    # Queries
    # ===========================================================

    def record_checkpoint(self):
        self.checkpoint = (self.player.x, self.player.y)

    @property
    def boss_cleared(self) -> bool:
        """Boss has appeared and been destroyed this attempt."""
        return self.boss_spawned and self.boss is None
