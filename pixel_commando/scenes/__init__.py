"""
Scene module exports.

Provides the game states, the per-attempt session, the state machine
and the presentation snapshot types.
"""

from pixel_commando.scenes.game_state import GameState
from pixel_commando.scenes.game_session import GameSession
from pixel_commando.scenes.snapshot import GameSnapshot, EntityView, ProgressView
from pixel_commando.scenes.state_machine import GameStateMachine, RewardOpportunity

__all__ = [
    # Core
    'GameState',
    'GameSession',
    'GameStateMachine',
    'RewardOpportunity',
    # Presentation
    'GameSnapshot',
    'EntityView',
    'ProgressView',
]
