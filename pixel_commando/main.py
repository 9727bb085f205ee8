"""
main.py
-------
Entry point: loads configuration, wires the services together and hands
control to the GameLoop.
"""

import random

from pixel_commando.ads.ad_broker import AdBroker
from pixel_commando.ads.vendors import browser_window, create_vendor, normalize_vendor_name
from pixel_commando.audio.sound_manager import SoundManager
from pixel_commando.core.debug.debug_logger import DebugLogger, LoggerConfig
from pixel_commando.core.runtime.game_loop import GameLoop
from pixel_commando.core.runtime.game_settings import Ads, Storage
from pixel_commando.core.services.config_manager import load_config, config_value
from pixel_commando.core.services.event_manager import EventManager
from pixel_commando.core.services.progress_store import ProgressStore
from pixel_commando.core.services.storage import KeyValueStore
from pixel_commando.scenes.game_session import GameSession
from pixel_commando.scenes.state_machine import GameStateMachine


DEFAULT_CONFIG = {
    "ads": {
        "vendor": Ads.DEFAULT_VENDOR,
        "game_id": "",
        "simulated_delay": Ads.SIMULATED_DELAY,
        "request_timeout": Ads.REQUEST_TIMEOUT,
        "init_timeout": Ads.INIT_TIMEOUT,
    },
    "storage": {
        "path": Storage.SAVE_FILE,
    },
    "logging": {},
}


def resolve_vendor_name(storage, config) -> str:
    """Persisted in-game choice first, then config, then no vendor."""
    persisted = storage.get(Storage.VENDOR_KEY)
    if persisted:
        return normalize_vendor_name(persisted)
    return normalize_vendor_name((config.get("ads") or {}).get("vendor") or Ads.DEFAULT_VENDOR)


def build_game(config=None, storage=None, host=None, audio=None, rng=None):
    """
    Assemble the game's services.

    Args:
        config: Merged config dict (DEFAULT_CONFIG if None)
        storage: KeyValueStore (file from config['storage']['path'] if None)
        host: Object exposing vendor SDK globals (browser window if None)
        audio: SoundManager or None for silent play
        rng: Random source for the session

    Returns:
        (GameStateMachine, AdBroker, EventManager)
    """
    config = config or DEFAULT_CONFIG
    ads_config = config.get("ads") or {}
    if storage is None:
        storage = KeyValueStore((config.get("storage") or {}).get("path"))
    if host is None:
        host = browser_window()

    events = EventManager()
    if audio is not None:
        audio.subscribe(events)

    vendor = create_vendor(resolve_vendor_name(storage, config), host=host, config=ads_config)
    broker = AdBroker(
        vendor,
        audio=audio,
        request_timeout=config_value(config, "ads.request_timeout", Ads.REQUEST_TIMEOUT),
        init_timeout=config_value(config, "ads.init_timeout", Ads.INIT_TIMEOUT),
    )

    progress_store = ProgressStore(storage)
    machine = GameStateMachine(
        progress_store,
        broker,
        events=events,
        session=GameSession(rng or random.Random()),
        audio=audio,
    )
    return machine, broker, events


def main():
    DebugLogger.section("Pixel Commando")
    config = load_config("game.yaml", DEFAULT_CONFIG)
    LoggerConfig.configure(config.get("logging"))
    machine, broker, _ = build_game(config, audio=SoundManager())
    GameLoop(machine, broker).run()


if __name__ == "__main__":
    main()
