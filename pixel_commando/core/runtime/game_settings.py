"""
game_settings.py
----------------
Centralized constants for all game systems.

World units are pixels; speeds and gravity are per fixed tick,
countdowns (invincibility, shoot cooldowns) are in ticks.
"""


# ===========================================================
# Display & Performance
# ===========================================================

class Display:
    """Screen and window configuration."""
    WIDTH: int = 960
    HEIGHT: int = 540
    FPS: int = 60
    CAPTION: str = "Pixel Commando"


# ===========================================================
# Physics & Timing
# ===========================================================

class Physics:
    """Physics and update timing."""
    UPDATE_RATE: int = 60
    FIXED_DT: float = 1 / UPDATE_RATE
    MAX_FRAME_TIME: float = 0.1
    GRAVITY: float = 0.6


# ===========================================================
# World Geometry & Level Layout
# ===========================================================

class World:
    """Level dimensions and progression layout."""
    LEVEL_WIDTH: int = 3000
    GROUND_Y: int = 400

    TOTAL_STAGES: int = 8
    LEVELS_PER_STAGE: int = 10
    TOTAL_LEVELS: int = TOTAL_STAGES * LEVELS_PER_STAGE

    BULLET_MARGIN: int = 20
    BOSS_TRIGGER_DISTANCE: int = 800   # boss spawns once player.x > LEVEL_WIDTH - this
    END_ZONE_DISTANCE: int = 100       # win zone starts at LEVEL_WIDTH - this

    ENEMY_BASE_COUNT: int = 4
    ENEMY_MAX_COUNT: int = 16


# ===========================================================
# Entity Tuning
# ===========================================================

class PlayerStats:
    """Player body and movement tuning."""
    SPAWN_X: float = 100
    WIDTH: int = 55
    HEIGHT: int = 75
    SPEED: float = 5
    JUMP_IMPULSE: float = 12
    MAX_HEALTH: int = 100


class EnemyStats:
    """Patrolling grunt tuning."""
    WIDTH: int = 55
    HEIGHT: int = 75
    BASE_SPEED: float = 1.8
    SPEED_PER_STAGE: float = 0.08
    BASE_RANGE: float = 120
    RANGE_PER_LEVEL: float = 6
    FIRST_SPAWN_X: float = 500
    SPAWN_JITTER: float = 100
    INITIAL_COOLDOWN: tuple = (70, 160)
    REFIRE_COOLDOWN: tuple = (120, 220)


class BossStats:
    """End-of-level boss tuning."""
    OFFSET_FROM_END: int = 320
    WIDTH: int = 90
    HEIGHT: int = 100
    SPEED: float = 2.2
    RANGE: float = 180
    MAX_HEALTH: int = 450
    INITIAL_COOLDOWN: int = 40
    REFIRE_COOLDOWN: tuple = (70, 105)


class BulletStats:
    """Projectile geometry: (width, height, speed, y offset from owner top)."""
    PLAYER = (14, 6, 8, 28)
    ENEMY = (12, 5, 6, 25)
    BOSS_UPPER = (14, 6, 8, 40)
    BOSS_LOWER = (14, 6, 7, 52)


# ===========================================================
# Combat Rules
# ===========================================================

class Combat:
    """Damage, reward and invincibility constants."""
    ENEMY_CONTACT_DAMAGE: int = 25
    BOSS_CONTACT_DAMAGE: int = 35
    ENEMY_BULLET_DAMAGE: int = 20
    PLAYER_BULLET_BOSS_DAMAGE: int = 12

    ENEMY_KILL_REWARD: int = 20
    BOSS_KILL_REWARD: int = 200

    HIT_INVINCIBILITY: int = 40
    SPAWN_INVINCIBILITY: int = 60
    REVIVE_INVINCIBILITY: int = 90
    REVIVE_MIN_HEALTH: int = 45
    REVIVE_HEALTH_RATIO: float = 0.5


# ===========================================================
# Progression & Shop
# ===========================================================

class Progression:
    """Coin rewards and purchasable characters."""
    WIN_BASE_REWARD: int = 100
    HOME_MENU = ("PLAY", "LEVELS", "SHOP")

    # (name, color, price)
    CHARACTERS = (
        ("Soldier", (0, 255, 255), 0),
        ("Red Force", (255, 0, 0), 600),
        ("Green Hero", (0, 255, 0), 1200),
        ("Shadow Ops", (255, 165, 0), 2400),
        ("Cyber X", (255, 0, 255), 4800),
    )


# ===========================================================
# Ads & Storage
# ===========================================================

class Ads:
    """Rewarded ad broker defaults (seconds)."""
    VENDORS = ("none", "crazygames", "gamemonetize", "gamedistribution")
    DEFAULT_VENDOR: str = "none"
    SIMULATED_DELAY: float = 0.4
    REQUEST_TIMEOUT: float = 9.0
    INIT_TIMEOUT: float = 8.0
    READY_GRACE: float = 1.5


class Storage:
    """Client-side persistence keys."""
    SAVE_FILE: str = "pixel_commando_save.json"
    PROGRESS_KEY: str = "pixelSave"
    VENDOR_KEY: str = "pixelActiveSdk"
