"""
test_input_manager.py
---------------------
Keyboard edge detection, context switching and menu routing.
"""

from collections import defaultdict
from types import SimpleNamespace
from unittest.mock import MagicMock

import pygame
import pytest

from pixel_commando.core.services.input_manager import InputManager
from pixel_commando.scenes.game_state import GameState


def pressed(*key_codes):
    keys = defaultdict(bool)
    for code in key_codes:
        keys[code] = True
    return keys


@pytest.fixture
def input_manager():
    return InputManager()


@pytest.fixture
def menu_machine():
    machine = MagicMock()
    machine.state = GameState.HOME
    return machine


# ===========================================================
# Edges
# ===========================================================

class TestEdges:

    def test_press_hold_release(self, input_manager):
        input_manager.update(pressed(pygame.K_d))
        assert input_manager.action_pressed("move_right")
        assert input_manager.action_held("move_right")

        input_manager.update(pressed(pygame.K_d))
        assert not input_manager.action_pressed("move_right")
        assert input_manager.action_held("move_right")

        input_manager.update(pressed())
        assert input_manager.action_released("move_right")
        assert not input_manager.action_held("move_right")

    def test_unknown_action_is_false(self, input_manager):
        assert input_manager.action_pressed("teleport") is False

    def test_controls_from_gameplay(self, input_manager):
        input_manager.update(pressed(pygame.K_LEFT, pygame.K_SPACE, pygame.K_f))
        controls = input_manager.build_controls()
        assert (controls.left, controls.right, controls.jump, controls.shoot) == (True, False, True, True)

        input_manager.update(pressed(pygame.K_LEFT, pygame.K_SPACE, pygame.K_f))
        controls = input_manager.build_controls()
        assert controls.left is True
        assert controls.jump is False
        assert controls.shoot is False

    def test_controls_empty_in_menus(self, input_manager):
        input_manager.sync_context(GameState.HOME, pressed())
        input_manager.update(pressed(pygame.K_LEFT))
        assert input_manager.build_controls().left is False


# ===========================================================
# Contexts
# ===========================================================

class TestContexts:

    def test_sync_context_follows_state(self, input_manager):
        input_manager.sync_context(GameState.PAUSE, pressed())
        assert input_manager.context == "ui"
        input_manager.sync_context(GameState.PLAY, pressed())
        assert input_manager.context == "gameplay"

    def test_held_key_does_not_fire_after_switch(self, input_manager, menu_machine):
        input_manager.update(pressed(pygame.K_SPACE))
        input_manager.sync_context(GameState.WIN, pressed(pygame.K_SPACE))

        input_manager.update(pressed(pygame.K_SPACE))
        input_manager.route_menu_actions(menu_machine)

        menu_machine.confirm.assert_not_called()

    def test_unknown_context_ignored(self, input_manager):
        input_manager.set_context("cutscene", pressed())
        assert input_manager.context == "gameplay"


# ===========================================================
# Menu Routing
# ===========================================================

class TestRouting:

    def to_ui(self, input_manager, keys):
        input_manager.sync_context(GameState.HOME, pressed())
        input_manager.update(keys)

    def test_pause_in_gameplay(self, input_manager, menu_machine):
        input_manager.update(pressed(pygame.K_ESCAPE))
        input_manager.route_menu_actions(menu_machine)
        menu_machine.back.assert_called_once()

    def test_vertical_navigation(self, input_manager, menu_machine):
        self.to_ui(input_manager, pressed(pygame.K_DOWN))
        input_manager.route_menu_actions(menu_machine)
        menu_machine.navigate.assert_called_once_with(1)

    def test_back_wins_over_confirm(self, input_manager, menu_machine):
        self.to_ui(input_manager, pressed(pygame.K_ESCAPE, pygame.K_RETURN))
        input_manager.route_menu_actions(menu_machine)
        menu_machine.back.assert_called_once()
        menu_machine.confirm.assert_not_called()

    def test_horizontal_browses_stages(self, input_manager, menu_machine):
        menu_machine.state = GameState.LEVEL_SELECT
        self.to_ui(input_manager, pressed(pygame.K_RIGHT))
        input_manager.route_menu_actions(menu_machine)
        menu_machine.change_stage.assert_called_once_with(1)

    def test_horizontal_ignored_on_home(self, input_manager, menu_machine):
        self.to_ui(input_manager, pressed(pygame.K_LEFT))
        input_manager.route_menu_actions(menu_machine)
        menu_machine.navigate.assert_not_called()

    def test_horizontal_moves_shop_cursor(self, input_manager, menu_machine):
        menu_machine.state = GameState.SHOP
        self.to_ui(input_manager, pressed(pygame.K_a))
        input_manager.route_menu_actions(menu_machine)
        menu_machine.navigate.assert_called_once_with(-1)

    @pytest.mark.parametrize("key, tile", [(pygame.K_1, 1), (pygame.K_5, 5), (pygame.K_0, 10)])
    def test_number_keys_pick_level_tiles(self, input_manager, menu_machine, key, tile):
        menu_machine.state = GameState.LEVEL_SELECT
        self.to_ui(input_manager, pressed(key, pygame.K_RETURN))
        input_manager.route_menu_actions(menu_machine)
        menu_machine.pick_level.assert_called_once_with(tile)
        menu_machine.confirm.assert_not_called()

    def test_number_keys_ignored_outside_level_select(self, input_manager, menu_machine):
        menu_machine.state = GameState.SHOP
        self.to_ui(input_manager, pressed(pygame.K_2))
        input_manager.route_menu_actions(menu_machine)
        menu_machine.pick_level.assert_not_called()

    def test_confirm(self, input_manager, menu_machine):
        self.to_ui(input_manager, pressed(pygame.K_RETURN))
        input_manager.route_menu_actions(menu_machine)
        menu_machine.confirm.assert_called_once()


# ===========================================================
# System Hotkeys
# ===========================================================

class TestSystemInput:

    def test_mute_hotkey(self, input_manager, menu_machine):
        input_manager.handle_system_input(SimpleNamespace(type=pygame.KEYDOWN, key=pygame.K_m), menu_machine)
        menu_machine.toggle_mute.assert_called_once()

    def test_vendor_hotkey(self, input_manager, menu_machine):
        input_manager.handle_system_input(SimpleNamespace(type=pygame.KEYDOWN, key=pygame.K_F8), menu_machine)
        menu_machine.cycle_ad_vendor.assert_called_once()

    def test_other_events_ignored(self, input_manager, menu_machine):
        input_manager.handle_system_input(SimpleNamespace(type=pygame.QUIT, key=pygame.K_m), menu_machine)
        menu_machine.toggle_mute.assert_not_called()
