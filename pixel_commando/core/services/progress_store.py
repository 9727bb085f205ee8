"""
progress_store.py
-----------------
Persistent player progress: coin balance, level frontier, owned and
equipped characters.

Responsibilities
----------------
- Deserialize the saved blob, falling back to defaults field by field
  when values are missing or malformed.
- Enforce progress invariants (non-negative coins, frontier within
  [1, TOTAL_LEVELS] and never regressing, character 0 always owned,
  equipped character always owned).
- Flush to storage after every mutation.
"""

from dataclasses import dataclass, field
from typing import List

from pixel_commando.core.debug.debug_logger import DebugLogger
from pixel_commando.core.runtime.game_settings import World, Progression, Storage


CHARACTER_COUNT = len(Progression.CHARACTERS)


def _default_chars() -> List[bool]:
    return [i == 0 for i in range(CHARACTER_COUNT)]


def _as_int(value):
    """Return value as int if it is an integral number (bools excluded), else None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


# ===========================================================
# Progress Model
# ===========================================================

@dataclass
class Progress:
    """Saved progress values."""
    coins: int = 0
    unlocked_level: int = 1
    unlocked_chars: List[bool] = field(default_factory=_default_chars)
    selected_char: int = 0

    def to_dict(self) -> dict:
        """Serialize using the persisted key names."""
        return {
            "coins": self.coins,
            "unlockedLevel": self.unlocked_level,
            "unlockedChars": list(self.unlocked_chars),
            "selectedChar": self.selected_char,
        }

    @classmethod
    def from_dict(cls, data) -> "Progress":
        """
        Build progress from a saved blob. Each field that is absent or
        malformed falls back to its default; out-of-range levels clamp.
        """
        progress = cls()
        if not isinstance(data, dict):
            return progress

        coins = _as_int(data.get("coins"))
        if coins is not None and coins >= 0:
            progress.coins = coins

        level = _as_int(data.get("unlockedLevel"))
        if level is not None:
            progress.unlocked_level = max(1, min(level, World.TOTAL_LEVELS))

        chars = data.get("unlockedChars")
        if (isinstance(chars, list) and len(chars) == CHARACTER_COUNT
                and all(isinstance(c, bool) for c in chars)):
            progress.unlocked_chars = list(chars)
        progress.unlocked_chars[0] = True

        selected = _as_int(data.get("selectedChar"))
        if selected is not None and 0 <= selected < CHARACTER_COUNT and progress.unlocked_chars[selected]:
            progress.selected_char = selected

        return progress


# ===========================================================
# Progress Store
# ===========================================================

class ProgressStore:
    """Owns the live Progress and persists it on every mutation."""

    def __init__(self, storage, key: str = Storage.PROGRESS_KEY):
        """
        Args:
            storage: KeyValueStore-like object with get/set
            key: Storage key for the progress blob
        """
        self.storage = storage
        self.key = key
        self.progress = self.load()

    # ===========================================================
    # Persistence
    # ===========================================================

    def load(self) -> Progress:
        """Read progress from storage, defaulting on absence or corruption."""
        raw = self.storage.get(self.key)
        if raw is None:
            DebugLogger.system("No saved progress - using defaults", category="progress")
            return Progress()

        progress = Progress.from_dict(raw)
        if progress.to_dict() != raw:
            DebugLogger.warn("Saved progress was incomplete or malformed - repaired", category="progress")
        return progress

    def save(self) -> None:
        """Flush current progress to storage."""
        self.storage.set(self.key, self.progress.to_dict())

    # ===========================================================
    # Accessors
    # ===========================================================

    @property
    def coins(self) -> int:
        return self.progress.coins

    @property
    def unlocked_level(self) -> int:
        return self.progress.unlocked_level

    @property
    def selected_char(self) -> int:
        return self.progress.selected_char

    def is_char_unlocked(self, index: int) -> bool:
        return 0 <= index < CHARACTER_COUNT and self.progress.unlocked_chars[index]

    def is_level_unlocked(self, level: int) -> bool:
        return 1 <= level <= self.progress.unlocked_level

    # ===========================================================
    # Mutations
    # ===========================================================

    def add_coins(self, amount: int) -> None:
        """Credit coins and persist."""
        if amount <= 0:
            return
        self.progress.coins += amount
        self.save()
        DebugLogger.trace(f"+{amount} coins (balance {self.progress.coins})", category="progress")

    def advance_frontier(self, cleared_level: int) -> bool:
        """
        Unlock the next level if cleared_level is the current frontier.

        Returns:
            bool: True if the frontier moved
        """
        progress = self.progress
        if cleared_level != progress.unlocked_level or progress.unlocked_level >= World.TOTAL_LEVELS:
            return False
        progress.unlocked_level += 1
        self.save()
        DebugLogger.action(f"Unlocked level {progress.unlocked_level}", category="progress")
        return True

    def select_or_buy_character(self, index: int) -> bool:
        """
        Equip an owned character, or buy and equip it if affordable.

        Returns:
            bool: True if the equipped character changed or was bought
        """
        if not 0 <= index < CHARACTER_COUNT:
            return False

        progress = self.progress
        if not progress.unlocked_chars[index]:
            name, _, price = Progression.CHARACTERS[index]
            if progress.coins < price:
                DebugLogger.trace(f"Cannot afford {name} ({price})", category="progress")
                return False
            progress.coins -= price
            progress.unlocked_chars[index] = True
            DebugLogger.action(f"Bought {name} for {price} coins", category="progress")

        progress.selected_char = index
        self.save()
        return True
