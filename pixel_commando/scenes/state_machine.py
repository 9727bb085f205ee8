"""
state_machine.py
----------------
GameStateMachine: owns the GameSession and every transition between
home, level select, shop, play, pause, win and game over.

Responsibilities
----------------
- Sequence level starts atomically and track the revive checkpoint.
- Drive one fixed tick of physics and combat while playing, then check
  the death and win predicates.
- Grant win rewards and advance the unlock frontier.
- Route rewarded-ad offers (win bonus, revive) through the AdBroker with
  one RewardOpportunity token per offer, so late or repeated resolutions
  never double-grant.
- Back the keyboard/menu control surface and produce presentation
  snapshots.
"""

from dataclasses import dataclass
from typing import Optional

from pixel_commando.ads.vendors import create_vendor
from pixel_commando.core.debug.debug_logger import DebugLogger
from pixel_commando.core.runtime.game_settings import World, Progression, Ads, Storage
from pixel_commando.core.services.event_manager import LevelCompletedEvent, StateChangedEvent
from pixel_commando.scenes.game_session import GameSession
from pixel_commando.scenes.game_state import GameState
from pixel_commando.scenes.snapshot import GameSnapshot, EntityView, ProgressView
from pixel_commando.systems import level_rules
from pixel_commando.systems.collision_manager import CombatResolver
from pixel_commando.systems.physics import PhysicsSystem, Controls


POPUP_OPTIONS = {
    GameState.PAUSE: ("RESUME", "RESTART", "HOME"),
    GameState.WIN: ("NEXT", "WATCH AD", "HOME"),
    GameState.GAME_OVER: ("RETRY", "REVIVE", "HOME"),
}


@dataclass
class RewardOpportunity:
    """One offer of an ad-gated reward. Claimed at most once."""
    kind: str
    level: int
    claimed: bool = False


class GameStateMachine:
    """Top-level game flow controller."""

    def __init__(self, progress_store, broker, events=None, session: Optional[GameSession] = None, audio=None):
        """
        Args:
            progress_store: ProgressStore for coins, frontier and characters
            broker: AdBroker used for rewarded offers
            events: EventManager shared with physics, combat and audio
            session: GameSession to drive (a fresh one by default)
            audio: SoundManager for mute state (optional)
        """
        self.progress = progress_store
        self.broker = broker
        self.events = events
        self.session = session or GameSession()
        self.audio = audio

        self.physics = PhysicsSystem(events)
        self.resolver = CombatResolver(progress_store, events)

        self.state = GameState.HOME
        self.menu_index = 0
        self.selected_stage = 1
        self.selected_level = 1
        self.shop_index = self.progress.selected_char

        self._win_offer: Optional[RewardOpportunity] = None
        self._revive_offer: Optional[RewardOpportunity] = None
        self._muted = False

        DebugLogger.init_entry("GameStateMachine")

    # ===========================================================
    # Transitions
    # ===========================================================

    def _set_state(self, new_state: GameState):
        previous = self.state
        if previous is new_state:
            return
        self.state = new_state
        self.menu_index = 0

        if previous is GameState.GAME_OVER:
            self._revive_offer = None

        if new_state is GameState.PLAY:
            self.broker.gameplay_start()
        elif previous is GameState.PLAY:
            self.broker.gameplay_stop()

        DebugLogger.state(f"{previous.value} -> {new_state.value}")
        if self.events is not None:
            self.events.dispatch(StateChangedEvent(previous=previous.value, current=new_state.value))

    def start_level(self, level: int) -> int:
        """
        Start (or restart) a level. Out-of-range ids are clamped.

        Returns:
            int: The level actually started
        """
        loaded = self.session.load_level(level)
        self.selected_stage = self.session.stage
        self.selected_level = loaded
        self._win_offer = None
        self._revive_offer = None

        if self.state is GameState.PLAY:
            self.broker.gameplay_start()
        else:
            self._set_state(GameState.PLAY)
        DebugLogger.state(f"Started level {loaded}", category="level")
        return loaded

    def pause(self) -> bool:
        if self.state is not GameState.PLAY:
            return False
        self._set_state(GameState.PAUSE)
        return True

    def resume(self) -> bool:
        if self.state is not GameState.PAUSE:
            return False
        self._set_state(GameState.PLAY)
        return True

    def restart(self) -> int:
        """Restart the current level from scratch."""
        return self.start_level(self.session.level)

    def retry(self) -> Optional[int]:
        if self.state is not GameState.GAME_OVER:
            return None
        return self.restart()

    def next_level(self) -> Optional[int]:
        """Advance from the win popup; the final level returns home."""
        if self.state is not GameState.WIN:
            return None
        if self.session.level >= World.TOTAL_LEVELS:
            self.go_home()
            return None
        return self.start_level(self.session.level + 1)

    def go_home(self) -> bool:
        if self.state in (GameState.HOME, GameState.PLAY):
            return False
        if self.state is GameState.GAME_OVER:
            self.session.player.reset()
        self._set_state(GameState.HOME)
        return True

    def back(self):
        """Escape key: pause/resume in game, leave shop and level select."""
        if self.state is GameState.PLAY:
            self.pause()
        elif self.state is GameState.PAUSE:
            self.resume()
        elif self.state in (GameState.SHOP, GameState.LEVEL_SELECT):
            self.go_home()

    # ===========================================================
    # Per-Tick Update
    # ===========================================================

    def update(self, controls: Optional[Controls] = None):
        """Advance one fixed tick."""
        player = self.session.player
        player.tick_invincibility()

        if self.state is not GameState.PLAY:
            return

        self.physics.step(self.session, controls or Controls())
        report = self.resolver.resolve(self.session)

        if report.player_died:
            self._game_over()
            return

        if self.session.boss_cleared and level_rules.end_zone_reached(player.x):
            self._level_complete()

    def _game_over(self):
        self._set_state(GameState.GAME_OVER)
        self._revive_offer = RewardOpportunity("revive", self.session.level)
        DebugLogger.state(f"Game over on level {self.session.level}", category="level")

    def _level_complete(self):
        level = self.session.level
        self.progress.add_coins(Progression.WIN_BASE_REWARD)
        self.progress.advance_frontier(level)
        self._win_offer = RewardOpportunity("win_bonus", level)

        self._set_state(GameState.WIN)
        DebugLogger.state(f"Level {level} complete", category="level")
        if self.events is not None:
            self.events.dispatch(LevelCompletedEvent(
                level=level,
                reward=Progression.WIN_BASE_REWARD,
                unlocked_level=self.progress.unlocked_level,
            ))

    # ===========================================================
    # Rewarded Offers
    # ===========================================================

    @property
    def win_ad_claimed(self) -> bool:
        return self._win_offer is not None and self._win_offer.claimed

    def claim_win_ad(self) -> bool:
        """
        Watch an ad for a second WIN_BASE_REWARD. One grant per win.

        Returns:
            bool: True if an ad request was issued
        """
        offer = self._win_offer
        if self.state is not GameState.WIN or offer is None or offer.claimed:
            return False
        if self.broker.busy:
            return False

        def on_reward():
            self._grant_win_bonus(offer)

        return self.broker.request_rewarded_ad(on_reward, self._on_ad_failed) is not None

    def _grant_win_bonus(self, offer: RewardOpportunity):
        # Applied even if the player already left the win popup
        if offer.claimed:
            return
        offer.claimed = True
        self.progress.add_coins(Progression.WIN_BASE_REWARD)
        DebugLogger.action(f"Win bonus granted for level {offer.level}", category="progress")

    def revive_with_ad(self) -> bool:
        """
        Watch an ad to continue from the checkpoint.

        Returns:
            bool: True if an ad request was issued
        """
        offer = self._revive_offer
        if self.state is not GameState.GAME_OVER or offer is None or offer.claimed:
            return False
        if self.broker.busy:
            return False

        def on_reward():
            self._apply_revive(offer)

        return self.broker.request_rewarded_ad(on_reward, self._on_ad_failed) is not None

    def _apply_revive(self, offer: RewardOpportunity):
        if offer.claimed or offer is not self._revive_offer or self.state is not GameState.GAME_OVER:
            DebugLogger.warn("Revive resolved after leaving game over - ignored", category="ads")
            return
        offer.claimed = True
        x, y = self.session.checkpoint
        self.session.player.revive_at(x, y)
        self._set_state(GameState.PLAY)
        DebugLogger.action(f"Player revived on level {offer.level}", category="level")

    @staticmethod
    def _on_ad_failed():
        DebugLogger.system("Rewarded ad not completed - no reward", category="ads")

    # ===========================================================
    # Menus
    # ===========================================================

    def navigate(self, delta: int):
        """Up/down: move the cursor of whatever menu is showing."""
        if self.state is GameState.HOME:
            self.menu_index = (self.menu_index + delta) % len(Progression.HOME_MENU)
        elif self.state in POPUP_OPTIONS:
            self.menu_index = (self.menu_index + delta) % len(POPUP_OPTIONS[self.state])
        elif self.state is GameState.SHOP:
            self.shop_index = (self.shop_index + delta) % len(Progression.CHARACTERS)
        elif self.state is GameState.LEVEL_SELECT:
            start, end = level_rules.stage_bounds(self.selected_stage)
            last = min(end, self.progress.unlocked_level)
            if last >= start:
                self.selected_level = max(start, min(self.selected_level + delta, last))

    def confirm(self):
        """Enter: activate the highlighted option."""
        if self.state is GameState.HOME:
            self.home_confirm()
        elif self.state is GameState.LEVEL_SELECT:
            self.level_select_confirm()
        elif self.state is GameState.SHOP:
            self.select_shop_item(self.shop_index)
        elif self.state in POPUP_OPTIONS:
            self._popup_confirm(POPUP_OPTIONS[self.state][self.menu_index])

    def _popup_confirm(self, option: str):
        if option == "HOME":
            self.go_home()
        elif self.state is GameState.PAUSE:
            if option == "RESUME":
                self.resume()
            else:
                self.restart()
        elif self.state is GameState.WIN:
            if option == "NEXT":
                self.next_level()
            else:
                self.claim_win_ad()
        elif self.state is GameState.GAME_OVER:
            if option == "RETRY":
                self.retry()
            else:
                self.revive_with_ad()

    def home_confirm(self):
        if self.state is not GameState.HOME:
            return
        choice = Progression.HOME_MENU[self.menu_index]
        if choice == "PLAY":
            self.start_level(self.progress.unlocked_level)
        elif choice == "LEVELS":
            self.selected_stage = level_rules.stage_of(self.progress.unlocked_level)
            self.selected_level = level_rules.default_level_for_stage(
                self.selected_stage, self.progress.unlocked_level)
            self._set_state(GameState.LEVEL_SELECT)
        else:
            self.shop_index = self.progress.selected_char
            self._set_state(GameState.SHOP)

    def change_stage(self, delta: int) -> bool:
        """Left/right in level select: browse stages, preselecting a level."""
        if self.state is not GameState.LEVEL_SELECT:
            return False
        stage = self.selected_stage + delta
        if not 1 <= stage <= World.TOTAL_STAGES:
            return False
        self.selected_stage = stage
        self.selected_level = level_rules.default_level_for_stage(stage, self.progress.unlocked_level)
        return True

    def pick_level(self, in_stage: int) -> bool:
        """
        Pick a level tile in the current stage. Picking the already
        selected level starts it; locked levels are ignored.
        """
        if self.state is not GameState.LEVEL_SELECT:
            return False
        if not 1 <= in_stage <= World.LEVELS_PER_STAGE:
            return False
        level = level_rules.level_id(self.selected_stage, in_stage)
        if not self.progress.is_level_unlocked(level):
            return False
        if level == self.selected_level:
            self.start_level(level)
        else:
            self.selected_level = level
        return True

    def level_select_confirm(self) -> bool:
        """Start the selected level. Locked stages can be browsed but not entered."""
        if self.state is not GameState.LEVEL_SELECT:
            return False
        if not self.progress.is_level_unlocked(self.selected_level):
            return False
        self.start_level(self.selected_level)
        return True

    def select_shop_item(self, index: int) -> bool:
        if self.state is not GameState.SHOP:
            return False
        if 0 <= index < len(Progression.CHARACTERS):
            self.shop_index = index
        return self.progress.select_or_buy_character(index)

    # ===========================================================
    # Settings
    # ===========================================================

    @property
    def muted(self) -> bool:
        if self.audio is not None:
            return self.audio.muted
        return self._muted

    def toggle_mute(self) -> bool:
        if self.audio is not None:
            return self.audio.toggle_mute()
        self._muted = not self._muted
        return self._muted

    def cycle_ad_vendor(self) -> Optional[str]:
        """
        Switch to the next ad vendor and remember the choice.

        Returns:
            The new vendor name, or None if an ad is in flight
        """
        current = self.broker.vendor
        names = Ads.VENDORS
        index = names.index(current.name) if current.name in names else -1
        name = names[(index + 1) % len(names)]

        vendor = create_vendor(name, host=current.host, config=current.config)
        if not self.broker.switch_vendor(vendor):
            return None
        self.progress.storage.set(Storage.VENDOR_KEY, name)
        return name

    # ===========================================================
    # Presentation
    # ===========================================================

    def snapshot(self) -> GameSnapshot:
        session = self.session
        progress = self.progress.progress
        return GameSnapshot(
            state=self.state.value,
            player=EntityView.of(session.player),
            enemies=tuple(EntityView.of(e) for e in session.enemies),
            boss=EntityView.of(session.boss) if session.boss is not None else None,
            bullets=tuple(EntityView.of(b) for b in session.bullets),
            enemy_bullets=tuple(EntityView.of(b) for b in session.enemy_bullets),
            progress=ProgressView(
                coins=progress.coins,
                unlocked_level=progress.unlocked_level,
                unlocked_chars=tuple(progress.unlocked_chars),
                selected_char=progress.selected_char,
            ),
            level=session.level,
            stage=session.stage,
            level_in_stage=session.level_in_stage,
            ad_busy=self.broker.busy,
            muted=self.muted,
            menu_index=self.menu_index,
            selected_stage=self.selected_stage,
            selected_level=self.selected_level,
            shop_index=self.shop_index,
            win_ad_claimed=self.win_ad_claimed,
            ad_vendor=self.broker.vendor_name,
        )
