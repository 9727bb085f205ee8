"""
base_entity.py
--------------
Foundational axis-aligned box shared by every in-game entity
(Player, Enemy, Boss, Bullet).

Coordinate System
-----------------
Top-left based world coordinates:
- (x, y) is the box's top-left corner in level space
- y grows downward; the ground line is a fixed y
- All sizes are fixed at construction
"""


class Box:
    """
    Axis-aligned rectangle with real-valued position.

    Subclassed by Player, Enemy, Boss and Bullet.
    """

    __slots__ = ('x', 'y', 'w', 'h')

    def __init__(self, x: float, y: float, w: float, h: float):
        self.x = x
        self.y = y
        self.w = w
        self.h = h

    # ===========================================================
    # Edges
    # ===========================================================

    @property
    def left(self) -> float:
        return self.x

    @property
    def right(self) -> float:
        return self.x + self.w

    @property
    def top(self) -> float:
        return self.y

    @property
    def bottom(self) -> float:
        return self.y + self.h

    @property
    def center(self) -> tuple:
        return (self.x + self.w / 2, self.y + self.h / 2)

    # ===========================================================
    # Collision
    # ===========================================================

    def overlaps(self, other: "Box") -> bool:
        """
        Strict AABB overlap test. Boxes that only share an edge
        do not collide.
        """
        return (self.left < other.right and self.right > other.left and
                self.top < other.bottom and self.bottom > other.top)

    def __repr__(self):
        return f"{type(self).__name__}(x={self.x:.1f}, y={self.y:.1f}, w={self.w}, h={self.h})"
