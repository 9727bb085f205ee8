"""
ad_broker.py
------------
Single entry point for rewarded ads, independent of the vendor behind it.

Responsibilities
----------------
- Keep at most one ad request in flight; extra requests are dropped.
- Duck game audio while a request is in flight.
- Race every vendor request against a timeout so each request resolves.
- Run exactly one of on_reward / on_fail per accepted request.
- Poll vendor readiness until the SDK is up or the init window expires.

Timing is driven by ``update(dt)`` from the main loop; nothing here
blocks or sleeps.
"""

from concurrent.futures import Future
from typing import Callable, Optional

from pixel_commando.ads.vendors.base_vendor import AdOutcome
from pixel_commando.core.debug.debug_logger import DebugLogger
from pixel_commando.core.runtime.game_settings import Ads


class AdBroker:
    """Vendor-agnostic rewarded-ad request/resolve coordinator."""

    def __init__(self, vendor, audio=None,
                 request_timeout: float = Ads.REQUEST_TIMEOUT,
                 init_timeout: float = Ads.INIT_TIMEOUT):
        """
        Args:
            vendor: AdVendorAdapter to delegate to
            audio: Object with set_ad_active(bool) for ducking (optional)
            request_timeout: Seconds before an unanswered request fails
            init_timeout: Seconds to keep polling vendor readiness
        """
        self.audio = audio
        self.request_timeout = request_timeout
        self.init_timeout = init_timeout

        self.vendor = None
        self._init_elapsed = 0.0
        self._init_done = False

        self._result: Optional[Future] = None
        self._vendor_future: Optional[Future] = None
        self._on_reward: Optional[Callable] = None
        self._on_fail: Optional[Callable] = None
        self._elapsed = 0.0

        self._attach(vendor)
        DebugLogger.init_entry(f"AdBroker [{vendor.name}]")

    # ===========================================================
    # Vendor Lifecycle
    # ===========================================================

    def _attach(self, vendor):
        self.vendor = vendor
        vendor.bind(self)
        self._init_elapsed = 0.0
        self._init_done = False
        self._poll_ready()

    def _poll_ready(self):
        try:
            ready = self.vendor.initialize()
        except Exception as e:
            DebugLogger.warn(f"{self.vendor.name} initialize raised: {e}", category="ads")
            ready = False
        if ready:
            self._init_done = True
            DebugLogger.system(f"Ad vendor '{self.vendor.name}' ready", category="ads")

    def switch_vendor(self, vendor) -> bool:
        """Replace the active vendor. Refused while an ad is in flight."""
        if self.busy:
            DebugLogger.warn("Cannot switch ad vendor while an ad is in flight", category="ads")
            return False
        self.vendor.bind(None)
        self._attach(vendor)
        DebugLogger.state(f"Ad vendor switched to '{vendor.name}'", category="ads")
        return True

    # ===========================================================
    # Public API
    # ===========================================================

    @property
    def busy(self) -> bool:
        """True while a request is in flight."""
        return self._result is not None

    @property
    def vendor_name(self) -> str:
        return self.vendor.name

    def request_rewarded_ad(self, on_reward: Callable, on_fail: Optional[Callable] = None) -> Optional[Future]:
        """
        Request one rewarded ad.

        Args:
            on_reward: Called once if the ad is granted
            on_fail: Called once on failure, timeout or unavailability

        Returns:
            Future resolving to an AdOutcome, or None if the call was
            dropped because another ad is already in flight
        """
        if self.busy:
            DebugLogger.trace("Ad request dropped - another ad is in flight", category="ads")
            return None

        self._result = Future()
        self._on_reward = on_reward
        self._on_fail = on_fail
        self._elapsed = 0.0
        result = self._result

        self._set_ducked(True)
        DebugLogger.action(f"Rewarded ad requested via '{self.vendor.name}'", category="ads")

        if not self.vendor.ready:
            self._finish(AdOutcome.UNAVAILABLE)
            return result

        try:
            vendor_future = self.vendor.request_rewarded_ad()
        except Exception as e:
            DebugLogger.warn(f"{self.vendor.name} request raised: {e}", category="ads")
            self._finish(AdOutcome.FAILED)
            return result

        self._vendor_future = vendor_future
        vendor_future.add_done_callback(self._on_vendor_done)
        return result

    def update(self, dt: float):
        """Advance vendor timers, readiness polling and the request timeout."""
        try:
            self.vendor.update(dt)
        except Exception as e:
            DebugLogger.warn(f"{self.vendor.name} update raised: {e}", category="ads")

        if not self._init_done:
            self._init_elapsed += dt
            if self.vendor.ready:
                self._init_done = True
                DebugLogger.system(f"Ad vendor '{self.vendor.name}' ready", category="ads")
            elif self._init_elapsed >= self.init_timeout:
                self._init_done = True
                DebugLogger.warn(f"Ad vendor '{self.vendor.name}' not ready after {self.init_timeout:.1f}s",
                                 category="ads")
            else:
                self._poll_ready()

        if not self.busy:
            return

        self._elapsed += dt
        if self._elapsed >= self.request_timeout:
            DebugLogger.warn(f"Rewarded ad timed out after {self._elapsed:.1f}s", category="ads")
            future = self._vendor_future
            if future is None or not future.cancel():
                self._finish(AdOutcome.FAILED)

    # ===========================================================
    # Vendor Listener
    # ===========================================================

    def on_ad_started(self):
        if self.busy:
            self._set_ducked(True)

    def on_ad_stopped(self):
        # Ducking is held until resolution; nothing to undo early
        pass

    def gameplay_start(self):
        self._notify_vendor("gameplay_start")

    def gameplay_stop(self):
        self._notify_vendor("gameplay_stop")

    def _notify_vendor(self, method: str):
        try:
            getattr(self.vendor, method)()
        except Exception as e:
            DebugLogger.warn(f"{self.vendor.name} {method} raised: {e}", category="ads")

    # ===========================================================
    # Resolution
    # ===========================================================

    def _on_vendor_done(self, future: Future):
        if future is not self._vendor_future:
            return

        if future.cancelled():
            outcome = AdOutcome.FAILED
        elif future.exception() is not None:
            DebugLogger.warn(f"{self.vendor.name} request errored: {future.exception()}", category="ads")
            outcome = AdOutcome.FAILED
        else:
            outcome = future.result()
            if not isinstance(outcome, AdOutcome):
                DebugLogger.warn(f"{self.vendor.name} returned unexpected result {outcome!r}", category="ads")
                outcome = AdOutcome.FAILED

        self._finish(outcome)

    def _finish(self, outcome: AdOutcome):
        """Single resolution point: clear busy state, unduck, run one callback."""
        result = self._result
        if result is None:
            return

        on_reward, on_fail = self._on_reward, self._on_fail
        self._result = None
        self._vendor_future = None
        self._on_reward = None
        self._on_fail = None
        self._set_ducked(False)

        DebugLogger.state(f"Rewarded ad resolved: {outcome.value}", category="ads")
        result.set_result(outcome)

        callback = on_reward if outcome is AdOutcome.GRANTED else on_fail
        if callback is None:
            return
        try:
            callback()
        except Exception as e:
            DebugLogger.fail(f"Ad {outcome.value} callback raised: {e}", category="ads")

    def _set_ducked(self, active: bool):
        if self.audio is None:
            return
        try:
            self.audio.set_ad_active(active)
        except Exception as e:
            DebugLogger.warn(f"Audio ducking failed: {e}", category="audio")
