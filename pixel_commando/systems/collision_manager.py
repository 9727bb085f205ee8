"""
collision_manager.py
--------------------
Ordered AABB combat resolver for a GameSession.

Responsibilities
----------------
- Test every relevant entity pair with a strict AABB overlap.
- Apply contact, bullet and boss damage in a fixed rule order.
- Award and persist coin rewards for kills.
- Report deaths so the state machine can transition.

Rule order per tick
-------------------
1. player  vs each enemy       -> contact damage
2. player  vs boss             -> contact damage
3. player bullets vs enemies   -> bullet and enemy removed, coin reward
4. player bullets vs boss      -> bullet removed, boss damage, bounty on kill
5. enemy bullets vs player     -> bullet removed, bullet damage

Removals are collected during each scan and compacted afterwards, so
nothing removed mid-scan is revisited and every entity is visited in
stable list order.
"""

from dataclasses import dataclass

from pixel_commando.core.debug.debug_logger import DebugLogger
from pixel_commando.core.runtime.game_settings import Combat
from pixel_commando.core.services.event_manager import (
    PlayerDamagedEvent, PlayerDiedEvent, EnemyKilledEvent, BossDefeatedEvent
)


@dataclass
class CombatReport:
    """What happened during one resolve pass."""
    damage_taken: int = 0
    enemies_killed: int = 0
    boss_hits: int = 0
    boss_defeated: bool = False
    coins_awarded: int = 0
    player_died: bool = False


class CombatResolver:
    """Detects collisions and applies the combat rules for one tick."""

    def __init__(self, progress_store, events=None):
        """
        Args:
            progress_store: ProgressStore credited with kill rewards
            events: EventManager for combat notifications (optional)
        """
        self.progress_store = progress_store
        self.events = events

    def resolve(self, session) -> CombatReport:
        """Run all combat rules against the session, in order."""
        report = CombatReport()

        self._resolve_contact(session, report)
        spent = self._resolve_bullets_vs_enemies(session, report)
        self._resolve_bullets_vs_boss(session, report, spent)
        session.bullets = [b for i, b in enumerate(session.bullets) if i not in spent]
        self._resolve_enemy_bullets(session, report)

        return report

    # ===========================================================
    # Damage
    # ===========================================================

    def _damage_player(self, session, amount: int, source: str, report: CombatReport):
        """Damage contract: ignored while invincible, death reported once."""
        player = session.player
        was_alive = not player.is_dead

        if not player.take_damage(amount):
            return

        report.damage_taken += amount
        self._dispatch(PlayerDamagedEvent(amount=amount, health=player.health, source=source))
        DebugLogger.trace(f"Player took {amount} from {source} (hp {player.health})", category="combat")

        if was_alive and player.is_dead:
            report.player_died = True
            self._dispatch(PlayerDiedEvent(level=session.level, position=(player.x, player.y)))
            DebugLogger.state(f"Player died on level {session.level}", category="combat")

    # ===========================================================
    # Rules
    # ===========================================================

    def _resolve_contact(self, session, report):
        player = session.player

        for enemy in session.enemies:
            if player.overlaps(enemy):
                self._damage_player(session, Combat.ENEMY_CONTACT_DAMAGE, "enemy_contact", report)

        if session.boss is not None and player.overlaps(session.boss):
            self._damage_player(session, Combat.BOSS_CONTACT_DAMAGE, "boss_contact", report)

    def _resolve_bullets_vs_enemies(self, session, report) -> set:
        """Each bullet removes at most one enemy. Returns spent bullet indices."""
        spent = set()
        killed = set()

        for b_idx, bullet in enumerate(session.bullets):
            for e_idx, enemy in enumerate(session.enemies):
                if e_idx in killed:
                    continue
                if bullet.overlaps(enemy):
                    spent.add(b_idx)
                    killed.add(e_idx)
                    self._award(Combat.ENEMY_KILL_REWARD, report)
                    report.enemies_killed += 1
                    self._dispatch(EnemyKilledEvent(position=enemy.center, reward=Combat.ENEMY_KILL_REWARD))
                    break

        if killed:
            session.enemies = [e for i, e in enumerate(session.enemies) if i not in killed]
        return spent

    def _resolve_bullets_vs_boss(self, session, report, spent: set):
        boss = session.boss
        if boss is None:
            return

        for b_idx, bullet in enumerate(session.bullets):
            if b_idx in spent or not bullet.overlaps(boss):
                continue

            spent.add(b_idx)
            report.boss_hits += 1
            if boss.take_damage(Combat.PLAYER_BULLET_BOSS_DAMAGE):
                session.boss = None
                report.boss_defeated = True
                self._award(Combat.BOSS_KILL_REWARD, report)
                self._dispatch(BossDefeatedEvent(level=session.level, reward=Combat.BOSS_KILL_REWARD))
                DebugLogger.state(f"Boss defeated on level {session.level}", category="combat")
                return

    def _resolve_enemy_bullets(self, session, report):
        player = session.player
        remaining = []

        for bullet in session.enemy_bullets:
            if bullet.overlaps(player):
                self._damage_player(session, Combat.ENEMY_BULLET_DAMAGE, "enemy_bullet", report)
            else:
                remaining.append(bullet)

        session.enemy_bullets = remaining

    # ===========================================================
    # Helpers
    # ===========================================================

    def _award(self, amount: int, report: CombatReport):
        self.progress_store.add_coins(amount)
        report.coins_awarded += amount

    def _dispatch(self, event):
        if self.events is not None:
            self.events.dispatch(event)
