"""
gamedistribution_vendor.py
--------------------------
Adapter for the GameDistribution SDK (promise style).

``gdsdk.showAd("rewarded")`` returns a promise. A fulfilled value of
``True``, ``"rewarded"`` or an object whose ``status`` is ``"rewarded"``
counts as a granted reward; any other value or a rejection is a failure.
A build that returns no promise at all is treated as having shown the ad.
"""

from pixel_commando.ads.vendors.base_vendor import AdVendorAdapter, AdOutcome, lookup, event_name
from pixel_commando.core.debug.debug_logger import DebugLogger


def is_rewarded(result) -> bool:
    """Interpret a showAd fulfilment value."""
    if result is True or result == "rewarded":
        return True
    return lookup(result, "status") == "rewarded"


class GameDistributionVendor(AdVendorAdapter):
    """Promise-driven rewarded ads."""

    name = "gamedistribution"

    def __init__(self, host=None, config=None):
        super().__init__(host, config)
        self._hooked = False

    @property
    def sdk(self):
        return lookup(self.host, "gdsdk")

    def initialize(self) -> bool:
        if not self._hooked and self.host is not None:
            self._install_event_hook()
        if self.sdk is not None:
            self.ready = True
        return self.ready

    def _install_event_hook(self):
        try:
            options = lookup(self.host, "GD_OPTIONS")
            if options is None:
                options = {}
                setattr(self.host, "GD_OPTIONS", options)
            if isinstance(options, dict):
                options.setdefault("gameId", self.config.get("game_id") or "your_gamedistribution_game_id")
                options.setdefault("advertisementSettings", {"autoplay": False})
                options.setdefault("onEvent", self.handle_event)
            elif lookup(options, "onEvent") is None:
                options.onEvent = self.handle_event
            self._hooked = True
        except (AttributeError, TypeError) as e:
            DebugLogger.warn(f"Could not install GameDistribution event hook: {e}", category="ads")

    # ===========================================================
    # Requests
    # ===========================================================

    def request_rewarded_ad(self):
        show_ad = lookup(self.sdk, "showAd")
        if not callable(show_ad):
            return self._resolved(AdOutcome.UNAVAILABLE)

        future = self._new_request()
        self._notify_started()

        def fulfilled(result=None):
            self._notify_stopped()
            self._settle(future, AdOutcome.GRANTED if is_rewarded(result) else AdOutcome.FAILED)

        def rejected(reason=None):
            self._notify_stopped()
            DebugLogger.warn(f"GameDistribution showAd rejected: {reason}", category="ads")
            self._settle(future, AdOutcome.FAILED)

        try:
            promise = show_ad("rewarded")
            self._chain(promise, fulfilled, rejected)
        except Exception as e:
            DebugLogger.warn(f"GameDistribution showAd raised: {e}", category="ads")
            self._notify_stopped()
            self._settle(future, AdOutcome.FAILED)

        return future

    @staticmethod
    def _chain(promise, fulfilled, rejected):
        """Attach handlers to a JS promise or a Python future; settle at once otherwise."""
        then = lookup(promise, "then")
        if callable(then):
            then(fulfilled, rejected)
            return

        add_done_callback = lookup(promise, "add_done_callback")
        if callable(add_done_callback):
            def on_done(fut):
                if fut.cancelled() or fut.exception() is not None:
                    rejected(fut.exception() if not fut.cancelled() else "cancelled")
                else:
                    fulfilled(fut.result())
            add_done_callback(on_done)
            return

        fulfilled(True)

    # ===========================================================
    # Events
    # ===========================================================

    def handle_event(self, event):
        name = event_name(event)
        if name is None:
            DebugLogger.warn(f"Ignoring malformed GameDistribution event: {event!r}", category="ads")
            return

        if name == "SDK_READY":
            self.ready = True
        elif name == "SDK_GAME_PAUSE":
            if self._pending is not None:
                self._notify_started()
        elif name == "SDK_GAME_START":
            if self._pending is not None:
                self._notify_stopped()
