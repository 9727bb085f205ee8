"""
none_vendor.py
--------------
Stand-in adapter used when no ad vendor is configured. Simulates the
full lifecycle (busy, short delay, granted) so game logic never has to
special-case the absence of a vendor.
"""

from pixel_commando.ads.vendors.base_vendor import AdVendorAdapter, AdOutcome
from pixel_commando.core.runtime.game_settings import Ads
from pixel_commando.core.services.config_manager import config_value


class NoneVendor(AdVendorAdapter):
    """Grants every request after a fixed simulated delay."""

    name = "none"

    def __init__(self, host=None, config=None):
        super().__init__(host, config)
        self.delay = config_value(self.config, "simulated_delay", Ads.SIMULATED_DELAY)
        self._remaining = 0.0

    def initialize(self) -> bool:
        self.ready = True
        return True

    def request_rewarded_ad(self):
        self._remaining = self.delay
        return self._new_request()

    def update(self, dt: float):
        if self._pending is None:
            return
        self._remaining -= dt
        if self._remaining <= 0:
            self._settle(self._pending, AdOutcome.GRANTED)
