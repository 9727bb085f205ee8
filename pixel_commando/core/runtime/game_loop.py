"""
game_loop.py
------------
Defines the GameLoop class responsible for orchestrating the runtime
cycle of the game.

Responsibilities
----------------
- Initialize pygame and the window
- Maintain the fixed-timestep loop (event -> update -> render)
- Advance the ad broker in the same loop so ad timers never block play
"""

import pygame

from pixel_commando.core.runtime.game_settings import Display, Physics
from pixel_commando.core.debug.debug_logger import DebugLogger
from pixel_commando.core.services.input_manager import InputManager
from pixel_commando.graphics.draw_manager import DrawManager


class GameLoop:
    """Core runtime controller that manages the game's main loop."""

    def __init__(self, machine, broker, input_manager=None, draw_manager=None):
        """
        Args:
            machine: GameStateMachine to drive
            broker: AdBroker advanced once per fixed tick
            input_manager: InputManager (default bindings if None)
            draw_manager: DrawManager (created if None)
        """
        DebugLogger.section("Initializing GameLoop")

        pygame.init()
        pygame.font.init()
        self.screen = pygame.display.set_mode((Display.WIDTH, Display.HEIGHT))
        pygame.display.set_caption(Display.CAPTION)
        DebugLogger.init_entry("Pygame")
        DebugLogger.init_sub(f"Window {Display.WIDTH}x{Display.HEIGHT}")

        self.machine = machine
        self.broker = broker
        self.input_manager = input_manager or InputManager()
        self.draw_manager = draw_manager or DrawManager()

        self.clock = pygame.time.Clock()
        self.running = True
        self.accumulator = 0.0
        DebugLogger.init_entry("GameLoop Runtime")

    # ===========================================================
    # Core Runtime Loop
    # ===========================================================

    def run(self):
        """Main loop that runs until the window is closed."""
        DebugLogger.section("Game Loop")

        while self.running:
            frame_time = self.clock.tick(Display.FPS) / 1000.0
            self.frame(frame_time)

        pygame.quit()
        DebugLogger.system("Pygame terminated")

    def frame(self, frame_time: float) -> int:
        """
        Process one display frame.

        Args:
            frame_time: Seconds since the previous frame

        Returns:
            int: Number of fixed ticks run
        """
        self.accumulator += min(frame_time, Physics.MAX_FRAME_TIME)

        self._handle_events()

        ticks = 0
        while self.accumulator >= Physics.FIXED_DT:
            self.tick()
            self.accumulator -= Physics.FIXED_DT
            ticks += 1

        self._draw()
        return ticks

    def tick(self):
        """One fixed update: input, state machine, then ad broker timers."""
        self.input_manager.sync_context(self.machine.state)
        self.input_manager.update()
        self.input_manager.route_menu_actions(self.machine)
        self.machine.update(self.input_manager.build_controls())
        self.broker.update(Physics.FIXED_DT)

    # ===========================================================
    # Event Handling
    # ===========================================================

    def _handle_events(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
                DebugLogger.action("Quit signal received")
                break
            self.input_manager.handle_system_input(event, self.machine)

    # ===========================================================
    # Rendering
    # ===========================================================

    def _draw(self):
        self.draw_manager.draw_snapshot(self.machine.snapshot())
        self.draw_manager.render(self.screen)
        pygame.display.flip()
