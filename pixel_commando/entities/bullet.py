"""
bullet.py
---------
Horizontal projectile. Owner is 'player' or 'enemy'; player and enemy
bullets are kept in separate collections by the session.
"""

from pixel_commando.entities.base_entity import Box


class Bullet(Box):
    """Straight-line bullet moving a signed distance every tick."""

    __slots__ = ('speed', 'owner')

    def __init__(self, x, y, w, h, speed, owner="player"):
        super().__init__(x, y, w, h)
        self.speed = speed
        self.owner = owner

    def advance(self):
        self.x += self.speed

    def is_out_of_bounds(self, level_width: float, margin: float) -> bool:
        """True once the bullet leaves [-margin, level_width + margin] horizontally."""
        return self.x < -margin or self.x > level_width + margin
