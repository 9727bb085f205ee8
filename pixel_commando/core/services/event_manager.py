"""
event_manager.py
----------------
Event-driven system for decoupled game component communication.
Lets combat, progression and audio react to each other without
direct dependencies.
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, Type
from pixel_commando.core.debug.debug_logger import DebugLogger


# ===========================================================
# Event Definitions
# ===========================================================

@dataclass(frozen=True)
class BaseEvent:
    """Base class for all events."""
    pass


@dataclass(frozen=True)
class ShotFiredEvent(BaseEvent):
    """Dispatched when any entity fires. shooter is 'player', 'enemy' or 'boss'."""
    shooter: str
    position: tuple


@dataclass(frozen=True)
class PlayerJumpedEvent(BaseEvent):
    """Dispatched when the player leaves the ground by jumping."""
    position: tuple


@dataclass(frozen=True)
class PlayerDamagedEvent(BaseEvent):
    """Dispatched when damage actually lands on the player."""
    amount: int
    health: int
    source: str


@dataclass(frozen=True)
class PlayerDiedEvent(BaseEvent):
    """Dispatched when player health reaches zero."""
    level: int
    position: tuple


@dataclass(frozen=True)
class EnemyKilledEvent(BaseEvent):
    """Dispatched when a player bullet destroys an enemy."""
    position: tuple
    reward: int


@dataclass(frozen=True)
class BossSpawnedEvent(BaseEvent):
    """Dispatched once per level attempt when the boss appears."""
    level: int


@dataclass(frozen=True)
class BossDefeatedEvent(BaseEvent):
    """Dispatched when boss health drops to zero."""
    level: int
    reward: int


@dataclass(frozen=True)
class LevelCompletedEvent(BaseEvent):
    """Dispatched on transition into the win state."""
    level: int
    reward: int
    unlocked_level: int


@dataclass(frozen=True)
class StateChangedEvent(BaseEvent):
    """Dispatched on every state machine transition."""
    previous: str
    current: str


# ===========================================================
# Event Manager
# ===========================================================

class EventManager:
    """
    Synchronous pub-sub hub shared by physics, combat, audio and the
    state machine.

    Subscribing to a base class receives every subclass event, so a
    subscriber on BaseEvent sees all traffic.
    """

    def __init__(self):
        self._subscribers: Dict[Type[BaseEvent], List[Callable]] = {}
        DebugLogger.init("EventManager initialized", category="event_manager")

    # ===========================================================
    # Subscription
    # ===========================================================

    def subscribe(self, event_type: Type[BaseEvent], callback: Callable) -> None:
        """Register callback for event_type (and its subclasses). Duplicates are ignored."""
        subscribers = self._subscribers.setdefault(event_type, [])
        if callback in subscribers:
            return
        subscribers.append(callback)
        DebugLogger.system(
            f"Subscribed '{_callback_name(callback)}' to '{event_type.__name__}'",
            category="event_manager"
        )

    def unsubscribe(self, event_type: Type[BaseEvent], callback: Callable) -> bool:
        """Returns True if the callback was registered."""
        subscribers = self._subscribers.get(event_type, [])
        if callback not in subscribers:
            return False
        subscribers.remove(callback)
        return True

    # ===========================================================
    # Dispatch
    # ===========================================================

    def dispatch(self, event: BaseEvent) -> int:
        """
        Deliver an event to subscribers of its class and of every base
        event class, most specific first. A failing subscriber is logged
        and skipped.

        Returns:
            int: Number of callbacks that completed
        """
        delivered = 0
        for event_type in type(event).__mro__:
            if event_type is object:
                break
            for callback in list(self._subscribers.get(event_type, ())):
                try:
                    callback(event)
                except Exception as e:
                    DebugLogger.warn(
                        f"{type(event).__name__} subscriber '{_callback_name(callback)}' raised: {e}",
                        category="event_manager"
                    )
                    continue
                delivered += 1

        DebugLogger.trace(f"{type(event).__name__} -> {delivered} subscriber(s)", category="event_manager")
        return delivered

    # ===========================================================
    # Lifecycle
    # ===========================================================

    def clear_all(self) -> None:
        self._subscribers.clear()

    def get_subscriber_count(self, event_type: Type[BaseEvent] = None) -> int:
        """Subscribers registered directly on event_type, or in total if None."""
        if event_type:
            return len(self._subscribers.get(event_type, []))
        return sum(len(subs) for subs in self._subscribers.values())


def _callback_name(callback) -> str:
    return getattr(callback, '__qualname__', None) or repr(callback)
