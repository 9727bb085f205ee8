"""
gamemonetize_vendor.py
----------------------
Adapter for the GameMonetize SDK (event style).

The SDK reports everything through a single ``onEvent`` hook configured
in ``SDK_OPTIONS``:

    SDK_READY       SDK finished loading
    SDK_GAME_PAUSE  an ad took over the screen
    SDK_GAME_START  the ad closed, gameplay may resume (reward earned)
    SDK_ERROR       the ad failed

Depending on the SDK build the rewarded entry point is ``showReward``,
``showAd("rewarded")`` or, as a last resort, ``showBanner``.
"""

from pixel_commando.ads.vendors.base_vendor import AdVendorAdapter, AdOutcome, lookup, event_name
from pixel_commando.core.debug.debug_logger import DebugLogger
from pixel_commando.core.runtime.game_settings import Ads


class GameMonetizeVendor(AdVendorAdapter):
    """Event-driven rewarded ads."""

    name = "gamemonetize"

    def __init__(self, host=None, config=None):
        super().__init__(host, config)
        self._since_init = 0.0
        self._hooked = False

    @property
    def sdk(self):
        return lookup(self.host, "sdk")

    # ===========================================================
    # Initialization
    # ===========================================================

    def initialize(self) -> bool:
        if not self._hooked:
            self._install_event_hook()
        return self.ready

    def _install_event_hook(self):
        """Point SDK_OPTIONS.onEvent at this adapter, keeping any existing hook."""
        if self.host is None:
            return
        try:
            options = lookup(self.host, "SDK_OPTIONS")
            if options is None:
                options = {}
                setattr(self.host, "SDK_OPTIONS", options)
            if isinstance(options, dict):
                options.setdefault("gameId", self.config.get("game_id") or "your_gamemonetize_game_id")
                options.setdefault("onEvent", self.handle_event)
            else:
                if lookup(options, "gameId") is None:
                    options.gameId = self.config.get("game_id") or "your_gamemonetize_game_id"
                if lookup(options, "onEvent") is None:
                    options.onEvent = self.handle_event
            self._hooked = True
        except (AttributeError, TypeError) as e:
            DebugLogger.warn(f"Could not install GameMonetize event hook: {e}", category="ads")

    def update(self, dt: float):
        # The SDK does not always announce SDK_READY; accept it once the global exists
        if self.ready:
            return
        self._since_init += dt
        if self._since_init >= Ads.READY_GRACE and self.sdk is not None:
            self.ready = True
            DebugLogger.system("GameMonetize SDK detected", category="ads")

    # ===========================================================
    # Requests
    # ===========================================================

    def request_rewarded_ad(self):
        sdk = self.sdk
        if sdk is None:
            return self._resolved(AdOutcome.UNAVAILABLE)

        show_reward = lookup(sdk, "showReward")
        show_ad = lookup(sdk, "showAd")
        show_banner = lookup(sdk, "showBanner")
        if not (callable(show_reward) or callable(show_ad) or callable(show_banner)):
            return self._resolved(AdOutcome.UNAVAILABLE)

        future = self._new_request()
        self._notify_started()
        try:
            if callable(show_reward):
                show_reward()
            elif callable(show_ad):
                show_ad("rewarded")
            else:
                show_banner()
        except Exception as e:
            DebugLogger.warn(f"GameMonetize show call raised: {e}", category="ads")
            self._notify_stopped()
            self._settle(future, AdOutcome.FAILED)

        return future

    # ===========================================================
    # Events
    # ===========================================================

    def handle_event(self, event):
        name = event_name(event)
        if name is None:
            DebugLogger.warn(f"Ignoring malformed GameMonetize event: {event!r}", category="ads")
            return

        if name == "SDK_READY":
            self.ready = True
        elif name == "SDK_GAME_PAUSE":
            if self._pending is not None:
                self._notify_started()
        elif name == "SDK_GAME_START":
            if self._pending is not None:
                self._notify_stopped()
                self._settle(self._pending, AdOutcome.GRANTED)
        elif name == "SDK_ERROR":
            if self._pending is not None:
                self._notify_stopped()
                self._settle(self._pending, AdOutcome.FAILED)
        else:
            DebugLogger.trace(f"Unhandled GameMonetize event {name}", category="ads")
