"""
input_manager.py
----------------
Keyboard input mapped onto the game's control surface.

Provides:
- Context-based bindings (gameplay, ui, system)
- Edge detection (pressed, held, released) per fixed tick
- Gameplay Controls for the physics step
- Menu routing (navigate, stage browse, level tiles, confirm, back) to the state machine
"""

import pygame

from pixel_commando.core.debug.debug_logger import DebugLogger
from pixel_commando.scenes.game_state import GameState
from pixel_commando.systems.physics import Controls


# ===========================================================
# Default Key Bindings
# ===========================================================

# Level tiles 1-10 of the selected stage; 0 picks tile 10
LEVEL_TILE_KEYS = [
    pygame.K_1, pygame.K_2, pygame.K_3, pygame.K_4, pygame.K_5,
    pygame.K_6, pygame.K_7, pygame.K_8, pygame.K_9, pygame.K_0,
]

DEFAULT_KEY_BINDINGS = {
    "gameplay": {
        "move_left": [pygame.K_LEFT, pygame.K_a],
        "move_right": [pygame.K_RIGHT, pygame.K_d],
        "jump": [pygame.K_UP, pygame.K_SPACE, pygame.K_w],
        "shoot": [pygame.K_f, pygame.K_j],
        "pause": [pygame.K_ESCAPE, pygame.K_p],
    },
    "ui": {
        "navigate_up": [pygame.K_UP, pygame.K_w],
        "navigate_down": [pygame.K_DOWN, pygame.K_s],
        "navigate_left": [pygame.K_LEFT, pygame.K_a],
        "navigate_right": [pygame.K_RIGHT, pygame.K_d],
        "confirm": [pygame.K_RETURN, pygame.K_SPACE],
        "back": [pygame.K_ESCAPE],
        **{f"pick_level_{tile}": [key] for tile, key in enumerate(LEVEL_TILE_KEYS, start=1)},
    },
    "system": {
        "cycle_ad_vendor": [pygame.K_F8],
        "toggle_mute": [pygame.K_m],
    },
}


class InputManager:
    """
    Per-tick input with edge detection.

    Usage:
        input_manager.update()
        input_manager.route_menu_actions(machine)
        machine.update(input_manager.build_controls())
    """

    def __init__(self, key_bindings=None):
        """
        Args:
            key_bindings: Custom key bindings dict (uses DEFAULT_KEY_BINDINGS if None)
        """
        DebugLogger.init_entry("InputManager")

        self.key_bindings = key_bindings or DEFAULT_KEY_BINDINGS
        self.context = "gameplay"

        self._actions = {}
        for context_name, actions in self.key_bindings.items():
            if context_name == "system":
                continue
            for action_name in actions:
                self._actions[action_name] = {
                    "pressed": False,
                    "held": False,
                    "released": False,
                    "prev_held": False,
                }

    # ===========================================================
    # Context Management
    # ===========================================================

    def set_context(self, name: str, keys=None):
        """
        Switch input context, syncing held state to prevent false edges.

        Args:
            name: Context name ("gameplay" or "ui")
            keys: Pressed-key mapping (polled from pygame if None)
        """
        if name not in self.key_bindings:
            DebugLogger.warn(f"Unknown context: {name}", category="input")
            return
        if name == self.context:
            return

        self.context = name
        keys = pygame.key.get_pressed() if keys is None else keys
        for action_name, state in self._actions.items():
            is_held = action_name in self.key_bindings[name] and self._is_action_down(action_name, keys)
            state["pressed"] = False
            state["released"] = False
            state["held"] = is_held
            state["prev_held"] = is_held

        DebugLogger.state(f"Context switched to [{name.upper()}]", category="input")

    def sync_context(self, state: GameState, keys=None):
        """Gameplay bindings while playing, menu bindings everywhere else."""
        self.set_context("gameplay" if state is GameState.PLAY else "ui", keys)

    # ===========================================================
    # Action Queries
    # ===========================================================

    def action_pressed(self, action: str) -> bool:
        """Rising edge this tick."""
        state = self._actions.get(action)
        return state["pressed"] if state else False

    def action_held(self, action: str) -> bool:
        state = self._actions.get(action)
        return state["held"] if state else False

    def action_released(self, action: str) -> bool:
        state = self._actions.get(action)
        return state["released"] if state else False

    # ===========================================================
    # Tick Update
    # ===========================================================

    def update(self, keys=None):
        """
        Poll the keyboard once per fixed tick.

        Args:
            keys: Pressed-key mapping (polled from pygame if None)
        """
        keys = pygame.key.get_pressed() if keys is None else keys
        for action in self.key_bindings[self.context]:
            self._update_action_state(action, keys)

    def _update_action_state(self, action: str, keys):
        state = self._actions[action]
        current_held = self._is_action_down(action, keys)
        prev_held = state["prev_held"]

        state["pressed"] = current_held and not prev_held
        state["released"] = not current_held and prev_held
        state["held"] = current_held
        state["prev_held"] = current_held

    def build_controls(self) -> Controls:
        """Gameplay controls for this tick. Empty outside gameplay."""
        if self.context != "gameplay":
            return Controls()
        return Controls(
            left=self.action_held("move_left"),
            right=self.action_held("move_right"),
            jump=self.action_pressed("jump"),
            shoot=self.action_pressed("shoot"),
        )

    def route_menu_actions(self, machine):
        """Forward this tick's edge actions to the state machine."""
        if self.context == "gameplay":
            if self.action_pressed("pause"):
                machine.back()
            return

        if self.action_pressed("back"):
            machine.back()
            return
        if self.action_pressed("navigate_up"):
            machine.navigate(-1)
        if self.action_pressed("navigate_down"):
            machine.navigate(1)

        horizontal = int(self.action_pressed("navigate_right")) - int(self.action_pressed("navigate_left"))
        if horizontal:
            if machine.state is GameState.LEVEL_SELECT:
                machine.change_stage(horizontal)
            elif machine.state is not GameState.HOME:
                machine.navigate(horizontal)

        if machine.state is GameState.LEVEL_SELECT:
            for tile in range(1, len(LEVEL_TILE_KEYS) + 1):
                if self.action_pressed(f"pick_level_{tile}"):
                    machine.pick_level(tile)
                    return

        if self.action_pressed("confirm"):
            machine.confirm()

    # ===========================================================
    # System Input (Global Hotkeys)
    # ===========================================================

    def handle_system_input(self, event, machine):
        """
        Handle global hotkeys independent of context.

        Args:
            event: pygame event to process
            machine: GameStateMachine receiving mute / vendor toggles
        """
        if event.type != pygame.KEYDOWN:
            return

        system_bindings = self.key_bindings.get("system", {})

        if event.key in system_bindings.get("toggle_mute", ()):
            muted = machine.toggle_mute()
            DebugLogger.action(f"Mute: {'ON' if muted else 'OFF'}", category="input")

        elif event.key in system_bindings.get("cycle_ad_vendor", ()):
            name = machine.cycle_ad_vendor()
            if name is not None:
                DebugLogger.action(f"Ad vendor: {name}", category="input")

    # ===========================================================
    # Internal Helpers
    # ===========================================================

    def _is_action_down(self, action: str, keys) -> bool:
        """Check if any key bound to action in the active context is down."""
        bound_keys = self.key_bindings[self.context].get(action, ())
        for key in bound_keys:
            if keys[key]:
                return True
        return False
