"""
physics.py
----------
Advances every dynamic entity of a GameSession by exactly one fixed tick.

Responsibilities
----------------
- Translate held/edge controls into player velocity, jumps and shots.
- Integrate constant gravity, clamp to the ground line and level bounds.
- Patrol, aim and fire for enemies and the boss; trigger the boss spawn.
- Move bullets and drop the ones that have left the level.

Collision and damage are resolved afterwards by the CombatResolver.
"""

from dataclasses import dataclass

from pixel_commando.core.debug.debug_logger import DebugLogger
from pixel_commando.core.runtime.game_settings import (
    Physics, World, BulletStats, EnemyStats, BossStats
)
from pixel_commando.core.services.event_manager import (
    ShotFiredEvent, PlayerJumpedEvent, BossSpawnedEvent
)
from pixel_commando.entities.bullet import Bullet
from pixel_commando.systems import level_rules


# ===========================================================
# Control Snapshot
# ===========================================================

@dataclass
class Controls:
    """Gameplay input for one tick. left/right are held, jump/shoot are edges."""
    left: bool = False
    right: bool = False
    jump: bool = False
    shoot: bool = False


# ===========================================================
# Physics System
# ===========================================================

class PhysicsSystem:
    """Fixed-tick integrator for player, enemies, boss and bullets."""

    def __init__(self, events=None):
        """
        Args:
            events: EventManager for shot/jump/boss notifications (optional)
        """
        self.events = events

    def step(self, session, controls: Controls):
        """Advance the whole session one tick."""
        self._update_player(session, controls)
        self._update_enemies(session)
        self._update_boss(session)
        self._update_bullets(session)

    # ===========================================================
    # Player
    # ===========================================================

    def _update_player(self, session, controls):
        player = session.player

        if controls.right:
            player.dx = player.speed
            player.facing = 1
        elif controls.left:
            player.dx = -player.speed
            player.facing = -1
        else:
            player.dx = 0

        if controls.jump and player.on_ground:
            player.dy = -player.jump_impulse
            player.on_ground = False
            self._dispatch(PlayerJumpedEvent(position=(player.x, player.y)))

        if controls.shoot:
            self._fire_player_bullet(session)

        player.dy += Physics.GRAVITY
        player.x += player.dx
        player.y += player.dy

        if player.bottom > World.GROUND_Y:
            player.y = World.GROUND_Y - player.h
            player.dy = 0
            player.on_ground = True
        else:
            player.on_ground = False

        player.x = max(0, min(player.x, World.LEVEL_WIDTH - player.w))

        session.record_checkpoint()

    def _fire_player_bullet(self, session):
        player = session.player
        w, h, speed, y_offset = BulletStats.PLAYER
        direction = player.facing
        muzzle_x = player.x + player.w if direction == 1 else player.x - 10

        session.bullets.append(Bullet(muzzle_x, player.y + y_offset, w, h, speed * direction, owner="player"))
        self._dispatch(ShotFiredEvent(shooter="player", position=(muzzle_x, player.y + y_offset)))

    # ===========================================================
    # Enemies & Boss
    # ===========================================================

    def _update_enemies(self, session):
        target_x = session.player.x
        low, high = EnemyStats.REFIRE_COOLDOWN

        for enemy in session.enemies:
            enemy.patrol()
            enemy.face(target_x)

            if enemy.ready_to_fire():
                session.enemy_bullets.extend(enemy.fire())
                enemy.shoot_cooldown = session.rng.uniform(low, high)
                self._dispatch(ShotFiredEvent(shooter="enemy", position=(enemy.x, enemy.y)))

    def _update_boss(self, session):
        if not session.boss_spawned and level_rules.boss_trigger_reached(session.player.x):
            session.spawn_boss()
            self._dispatch(BossSpawnedEvent(level=session.level))

        boss = session.boss
        if boss is None:
            return

        boss.patrol()
        boss.face(session.player.x)

        if boss.ready_to_fire():
            low, high = BossStats.REFIRE_COOLDOWN
            session.enemy_bullets.extend(boss.fire())
            boss.shoot_cooldown = session.rng.uniform(low, high)
            self._dispatch(ShotFiredEvent(shooter="boss", position=(boss.x, boss.y)))

    # ===========================================================
    # Bullets
    # ===========================================================

    def _update_bullets(self, session):
        for collection in (session.bullets, session.enemy_bullets):
            for bullet in collection:
                bullet.advance()

        before = len(session.bullets) + len(session.enemy_bullets)
        session.bullets = [
            b for b in session.bullets
            if not b.is_out_of_bounds(World.LEVEL_WIDTH, World.BULLET_MARGIN)
        ]
        session.enemy_bullets = [
            b for b in session.enemy_bullets
            if not b.is_out_of_bounds(World.LEVEL_WIDTH, World.BULLET_MARGIN)
        ]
        dropped = before - len(session.bullets) - len(session.enemy_bullets)
        if dropped:
            DebugLogger.trace(f"Dropped {dropped} off-level bullets", category="collision")

    def _dispatch(self, event):
        if self.events is not None:
            self.events.dispatch(event)
