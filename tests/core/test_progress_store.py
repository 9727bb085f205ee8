"""
test_progress_store.py
----------------------
Persistence and invariants of player progress.

Covers:
1. Round-trip of valid progress through the persisted blob
2. Field-by-field fallback for missing or malformed data
3. Coin, frontier and shop mutations flush immediately
"""

import pytest

from pixel_commando.core.runtime.game_settings import World, Storage
from pixel_commando.core.services.progress_store import Progress, ProgressStore
from pixel_commando.core.services.storage import KeyValueStore


# ===========================================================
# Serialization
# ===========================================================

class TestProgressSerialization:

    @pytest.mark.parametrize("progress", [
        Progress(),
        Progress(coins=1234, unlocked_level=37, unlocked_chars=[True, True, False, True, False], selected_char=3),
        Progress(coins=0, unlocked_level=World.TOTAL_LEVELS, unlocked_chars=[True] * 5, selected_char=4),
    ])
    def test_round_trip(self, progress):
        assert Progress.from_dict(progress.to_dict()) == progress

    def test_uses_persisted_key_names(self):
        assert set(Progress().to_dict()) == {"coins", "unlockedLevel", "unlockedChars", "selectedChar"}

    @pytest.mark.parametrize("raw", [None, [], "garbage", 42])
    def test_non_mapping_gives_defaults(self, raw):
        assert Progress.from_dict(raw) == Progress()

    def test_malformed_fields_fall_back_individually(self):
        progress = Progress.from_dict({
            "coins": -5,
            "unlockedLevel": 12,
            "unlockedChars": [True, "yes", False, False, False],
            "selectedChar": 2,
        })
        assert progress.coins == 0
        assert progress.unlocked_level == 12
        assert progress.unlocked_chars == [True, False, False, False, False]
        assert progress.selected_char == 0

    @pytest.mark.parametrize("level, expected", [(0, 1), (-3, 1), (500, World.TOTAL_LEVELS), (7.0, 7)])
    def test_level_is_clamped(self, level, expected):
        assert Progress.from_dict({"unlockedLevel": level}).unlocked_level == expected

    def test_boolean_coins_rejected(self):
        assert Progress.from_dict({"coins": True}).coins == 0

    def test_first_character_always_owned(self):
        progress = Progress.from_dict({"unlockedChars": [False, True, False, False, False], "selectedChar": 1})
        assert progress.unlocked_chars[0] is True
        assert progress.selected_char == 1


# ===========================================================
# Store
# ===========================================================

class TestProgressStore:

    def test_defaults_without_save(self, progress_store):
        assert progress_store.progress == Progress()

    def test_repairs_corrupt_save(self):
        storage = KeyValueStore()
        storage.set(Storage.PROGRESS_KEY, {"coins": "lots", "unlockedLevel": 3})
        store = ProgressStore(storage)

        assert store.coins == 0
        assert store.unlocked_level == 3

    def test_add_coins_persists(self, progress_store, storage):
        progress_store.add_coins(20)
        progress_store.add_coins(0)
        progress_store.add_coins(-10)

        assert progress_store.coins == 20
        assert storage.get(Storage.PROGRESS_KEY)["coins"] == 20

    def test_frontier_advances_only_from_frontier(self, progress_store):
        assert progress_store.advance_frontier(1) is True
        assert progress_store.unlocked_level == 2

        assert progress_store.advance_frontier(1) is False
        assert progress_store.advance_frontier(5) is False
        assert progress_store.unlocked_level == 2

    def test_frontier_stops_at_last_level(self, progress_store):
        progress_store.progress.unlocked_level = World.TOTAL_LEVELS
        assert progress_store.advance_frontier(World.TOTAL_LEVELS) is False
        assert progress_store.unlocked_level == World.TOTAL_LEVELS

    def test_buy_and_select_character(self, progress_store, storage):
        progress_store.add_coins(700)

        assert progress_store.select_or_buy_character(1) is True
        assert progress_store.coins == 100
        assert progress_store.is_char_unlocked(1)
        assert progress_store.selected_char == 1

        assert progress_store.select_or_buy_character(0) is True
        assert progress_store.select_or_buy_character(1) is True
        assert progress_store.coins == 100
        assert storage.get(Storage.PROGRESS_KEY)["selectedChar"] == 1

    def test_cannot_buy_unaffordable(self, progress_store):
        assert progress_store.select_or_buy_character(4) is False
        assert not progress_store.is_char_unlocked(4)
        assert progress_store.selected_char == 0

    @pytest.mark.parametrize("index", [-1, 5, 99])
    def test_out_of_range_character_ignored(self, progress_store, index):
        assert progress_store.select_or_buy_character(index) is False

    def test_reload_restores_saved_progress(self, tmp_path):
        path = str(tmp_path / "save.json")
        store = ProgressStore(KeyValueStore(path))
        store.add_coins(260)
        store.advance_frontier(1)

        reloaded = ProgressStore(KeyValueStore(path))
        assert reloaded.coins == 260
        assert reloaded.unlocked_level == 2
