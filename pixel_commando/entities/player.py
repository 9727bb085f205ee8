"""
player.py
---------
Player-controlled commando.

Responsibilities
----------------
- Hold body, velocity, facing and health state for one level attempt.
- Apply damage through the invincibility window.
- Reset to the spawn pose on (re)start and revive at a checkpoint.
"""

from pixel_commando.core.runtime.game_settings import World, PlayerStats, Combat
from pixel_commando.entities.base_entity import Box


class Player(Box):
    """Side-scrolling player body. Mutated only by physics and combat."""

    __slots__ = (
        'dx', 'dy', 'speed', 'jump_impulse', 'facing',
        'health', 'max_health', 'invincible', 'on_ground',
    )

    def __init__(self, x: float = PlayerStats.SPAWN_X, y: float = None):
        if y is None:
            y = World.GROUND_Y - PlayerStats.HEIGHT
        super().__init__(x, y, PlayerStats.WIDTH, PlayerStats.HEIGHT)
        self.dx = 0.0
        self.dy = 0.0
        self.speed = PlayerStats.SPEED
        self.jump_impulse = PlayerStats.JUMP_IMPULSE
        self.facing = 1

        self.max_health = PlayerStats.MAX_HEALTH
        self.health = self.max_health
        self.invincible = 0
        self.on_ground = False

    # ===========================================================
    # Lifecycle
    # ===========================================================

    def reset(self):
        """Return to spawn with full health and spawn invincibility."""
        self.x = PlayerStats.SPAWN_X
        self.y = World.GROUND_Y - self.h
        self.dx = 0.0
        self.dy = 0.0
        self.facing = 1
        self.health = self.max_health
        self.invincible = Combat.SPAWN_INVINCIBILITY

    def revive_at(self, x: float, y: float):
        """Restore the player in place after an ad-gated revive."""
        self.x = max(0, min(x, World.LEVEL_WIDTH - self.w))
        self.y = y
        self.dx = 0.0
        self.dy = 0.0
        self.health = max(Combat.REVIVE_MIN_HEALTH, int(self.max_health * Combat.REVIVE_HEALTH_RATIO))
        self.invincible = Combat.REVIVE_INVINCIBILITY

    # ===========================================================
    # Damage
    # ===========================================================

    @property
    def is_dead(self) -> bool:
        return self.health <= 0

    def tick_invincibility(self):
        """Count the invincibility window down by one tick, flooring at 0."""
        if self.invincible > 0:
            self.invincible -= 1

    def take_damage(self, amount: int) -> bool:
        """
        Apply damage unless invincible. Landed damage opens a new
        invincibility window.

        Returns:
            bool: True if the damage landed
        """
        if self.invincible > 0:
            return False
        self.health -= amount
        self.invincible = Combat.HIT_INVINCIBILITY
        return True
