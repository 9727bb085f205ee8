"""
level_rules.py
--------------
Level identity arithmetic and per-level entity rosters.

Levels are numbered 1..TOTAL_LEVELS and grouped into stages of
LEVELS_PER_STAGE consecutive levels:

    stage(L)    = ceil(L / LEVELS_PER_STAGE)
    in_stage(L) = ((L - 1) mod LEVELS_PER_STAGE) + 1
    level       = (stage - 1) * LEVELS_PER_STAGE + in_stage

Enemy rosters are generated from a RNG seeded by (stage, in-stage index)
so the same level always produces the same layout.
"""

import math
import random

from pixel_commando.core.runtime.game_settings import World, EnemyStats, BossStats
from pixel_commando.entities.enemy import Enemy, Boss


# ===========================================================
# Level Identity
# ===========================================================

def clamp_level(level: int) -> int:
    """Clamp any requested level id into [1, TOTAL_LEVELS]."""
    return max(1, min(int(level), World.TOTAL_LEVELS))


def stage_of(level: int) -> int:
    return max(1, min(World.TOTAL_STAGES, math.ceil(level / World.LEVELS_PER_STAGE)))


def level_in_stage(level: int) -> int:
    return ((level - 1) % World.LEVELS_PER_STAGE) + 1


def level_id(stage: int, in_stage: int) -> int:
    """Inverse of (stage_of, level_in_stage)."""
    return (stage - 1) * World.LEVELS_PER_STAGE + in_stage


def stage_bounds(stage: int) -> tuple:
    """First and last level id of a stage."""
    return level_id(stage, 1), level_id(stage, World.LEVELS_PER_STAGE)


def default_level_for_stage(stage: int, unlocked_level: int) -> int:
    """
    Level preselected when browsing a stage: the stage's first level if
    the stage is still locked, otherwise the furthest unlocked level in it.
    """
    start, end = stage_bounds(stage)
    if unlocked_level < start:
        return start
    return min(end, unlocked_level)


# ===========================================================
# Rosters
# ===========================================================

def enemy_count(stage: int, in_stage: int) -> int:
    return min(World.ENEMY_BASE_COUNT + stage + in_stage // 2, World.ENEMY_MAX_COUNT)


def build_enemies(stage: int, in_stage: int) -> list:
    """
    Build the enemy set for a level, spread across the level body
    between the spawn area and the boss arena.
    """
    rng = random.Random(stage * 1000 + in_stage)
    count = enemy_count(stage, in_stage)
    spread = (World.LEVEL_WIDTH - 900) / count
    low, high = EnemyStats.INITIAL_COOLDOWN

    enemies = []
    for i in range(count):
        spawn_x = EnemyStats.FIRST_SPAWN_X + i * spread + rng.random() * EnemyStats.SPAWN_JITTER
        enemies.append(Enemy(
            x=spawn_x,
            y=World.GROUND_Y - EnemyStats.HEIGHT,
            w=EnemyStats.WIDTH,
            h=EnemyStats.HEIGHT,
            speed=EnemyStats.BASE_SPEED + stage * EnemyStats.SPEED_PER_STAGE,
            patrol_range=EnemyStats.BASE_RANGE + in_stage * EnemyStats.RANGE_PER_LEVEL,
            shoot_cooldown=low + rng.random() * (high - low),
        ))
    return enemies


def build_boss() -> Boss:
    """Create the end-of-level boss in its arena."""
    spawn_x = World.LEVEL_WIDTH - BossStats.OFFSET_FROM_END
    return Boss(
        x=spawn_x,
        y=World.GROUND_Y - BossStats.HEIGHT,
        w=BossStats.WIDTH,
        h=BossStats.HEIGHT,
        speed=BossStats.SPEED,
        patrol_range=BossStats.RANGE,
        shoot_cooldown=BossStats.INITIAL_COOLDOWN,
        max_health=BossStats.MAX_HEALTH,
    )


# ===========================================================
# Triggers
# ===========================================================

def boss_trigger_reached(player_x: float) -> bool:
    return player_x > World.LEVEL_WIDTH - World.BOSS_TRIGGER_DISTANCE


def end_zone_reached(player_x: float) -> bool:
    return player_x >= World.LEVEL_WIDTH - World.END_ZONE_DISTANCE
