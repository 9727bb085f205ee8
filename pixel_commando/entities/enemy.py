"""
enemy.py
--------
Patrolling grunts and the end-of-level boss.

Both patrol back and forth around a fixed origin, always face the
player, and fire on an integer cooldown. The boss adds a health pool
and fires a two-bullet volley.
"""

from pixel_commando.core.runtime.game_settings import BulletStats
from pixel_commando.entities.base_entity import Box
from pixel_commando.entities.bullet import Bullet


class Enemy(Box):
    """Ground patroller that shoots at the player."""

    __slots__ = ('speed', 'patrol_range', 'start_x', 'facing', 'shoot_cooldown')

    VOLLEY = (BulletStats.ENEMY,)
    MUZZLE_BACK_OFFSET = 8

    def __init__(self, x, y, w, h, speed, patrol_range, shoot_cooldown, facing=-1):
        super().__init__(x, y, w, h)
        self.speed = speed
        self.patrol_range = patrol_range
        self.start_x = x
        self.facing = facing
        self.shoot_cooldown = shoot_cooldown

    # ===========================================================
    # Behaviour
    # ===========================================================

    def patrol(self):
        """Advance one tick; reverse direction once past the patrol range."""
        self.x += self.speed
        if abs(self.x - self.start_x) > self.patrol_range:
            self.speed = -self.speed

    def face(self, target_x: float):
        """Turn toward the target's x position."""
        self.facing = 1 if target_x >= self.x else -1

    def ready_to_fire(self) -> bool:
        """Count the shoot cooldown down; True when it has run out."""
        self.shoot_cooldown -= 1
        return self.shoot_cooldown <= 0

    def fire(self) -> list:
        """Build this enemy's volley in its facing direction."""
        direction = self.facing
        if direction == 1:
            muzzle_x = self.x + self.w
        else:
            muzzle_x = self.x - self.MUZZLE_BACK_OFFSET

        return [
            Bullet(muzzle_x, self.y + y_offset, w, h, speed * direction, owner="enemy")
            for (w, h, speed, y_offset) in self.VOLLEY
        ]


class Boss(Enemy):
    """Single per-level boss with a health pool and a double volley."""

    __slots__ = ('health', 'max_health')

    VOLLEY = (BulletStats.BOSS_UPPER, BulletStats.BOSS_LOWER)
    MUZZLE_BACK_OFFSET = 10

    def __init__(self, x, y, w, h, speed, patrol_range, shoot_cooldown, max_health, facing=-1):
        super().__init__(x, y, w, h, speed, patrol_range, shoot_cooldown, facing)
        self.max_health = max_health
        self.health = max_health

    @property
    def is_dead(self) -> bool:
        return self.health <= 0

    def take_damage(self, amount: int) -> bool:
        """
        Reduce health.

        Returns:
            bool: True if this hit brought health to zero or below
        """
        self.health -= amount
        return self.is_dead
