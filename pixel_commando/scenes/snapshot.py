"""
snapshot.py
-----------
Read-only per-frame view of the game for the presentation layer.

The renderer only ever sees these frozen copies; it cannot reach back
into the live session or progress store.
"""

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class EntityView:
    """Position and size of one entity, plus optional status fields."""
    x: float
    y: float
    w: float
    h: float
    facing: int = 1
    health: Optional[int] = None
    max_health: Optional[int] = None
    invincible: int = 0

    @classmethod
    def of(cls, entity) -> "EntityView":
        return cls(
            x=entity.x,
            y=entity.y,
            w=entity.w,
            h=entity.h,
            facing=getattr(entity, "facing", 1),
            health=getattr(entity, "health", None),
            max_health=getattr(entity, "max_health", None),
            invincible=getattr(entity, "invincible", 0),
        )


@dataclass(frozen=True)
class ProgressView:
    coins: int
    unlocked_level: int
    unlocked_chars: Tuple[bool, ...]
    selected_char: int


@dataclass(frozen=True)
class GameSnapshot:
    """Everything a renderer needs for one frame."""
    state: str
    player: EntityView
    enemies: Tuple[EntityView, ...]
    boss: Optional[EntityView]
    bullets: Tuple[EntityView, ...]
    enemy_bullets: Tuple[EntityView, ...]
    progress: ProgressView
    level: int
    stage: int
    level_in_stage: int
    ad_busy: bool
    muted: bool

    # Menu cursors
    menu_index: int = 0
    selected_stage: int = 1
    selected_level: int = 1
    shop_index: int = 0
    win_ad_claimed: bool = False
    ad_vendor: str = "none"
