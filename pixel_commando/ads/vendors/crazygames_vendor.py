"""
crazygames_vendor.py
--------------------
Adapter for the CrazyGames SDK (callback style).

    window.CrazyGames.SDK.ad.requestAd("rewarded", {
        adStarted, adFinished, adError
    })

Also forwards gameplay start/stop notifications, which the platform
uses for its own analytics.
"""

from pixel_commando.ads.vendors.base_vendor import AdVendorAdapter, AdOutcome, lookup
from pixel_commando.core.debug.debug_logger import DebugLogger


class CrazyGamesVendor(AdVendorAdapter):
    """Callback-driven rewarded ads."""

    name = "crazygames"

    @property
    def sdk(self):
        return lookup(self.host, "CrazyGames", "SDK")

    def initialize(self) -> bool:
        self.ready = self.sdk is not None
        return self.ready

    def request_rewarded_ad(self):
        request_ad = lookup(self.sdk, "ad", "requestAd")
        if not callable(request_ad):
            return self._resolved(AdOutcome.UNAVAILABLE)

        future = self._new_request()

        def ad_started(*_):
            self._notify_started()

        def ad_finished(*_):
            self._notify_stopped()
            self._settle(future, AdOutcome.GRANTED)

        def ad_error(*args):
            self._notify_stopped()
            DebugLogger.warn(f"CrazyGames ad error: {args[0] if args else 'unknown'}", category="ads")
            self._settle(future, AdOutcome.FAILED)

        callbacks = {
            "adStarted": ad_started,
            "adFinished": ad_finished,
            "adError": ad_error,
        }

        try:
            request_ad("rewarded", callbacks)
        except Exception as e:
            DebugLogger.warn(f"CrazyGames requestAd raised: {e}", category="ads")
            self._settle(future, AdOutcome.FAILED)

        return future

    # ===========================================================
    # Gameplay Notifications
    # ===========================================================

    def gameplay_start(self):
        self._call_game("gameplayStart")

    def gameplay_stop(self):
        self._call_game("gameplayStop")

    def _call_game(self, method: str):
        fn = lookup(self.sdk, "game", method)
        if not callable(fn):
            return
        try:
            fn()
        except Exception as e:
            DebugLogger.warn(f"CrazyGames {method} raised: {e}", category="ads")
