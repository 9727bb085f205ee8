"""
Ad vendor adapter exports.

Provides the adapter interface, the concrete vendors and a factory
keyed by vendor name.
"""

from pixel_commando.ads.vendors.base_vendor import AdVendorAdapter, AdOutcome, browser_window
from pixel_commando.ads.vendors.none_vendor import NoneVendor
from pixel_commando.ads.vendors.crazygames_vendor import CrazyGamesVendor
from pixel_commando.ads.vendors.gamemonetize_vendor import GameMonetizeVendor
from pixel_commando.ads.vendors.gamedistribution_vendor import GameDistributionVendor
from pixel_commando.core.debug.debug_logger import DebugLogger

VENDOR_CLASSES = {
    NoneVendor.name: NoneVendor,
    CrazyGamesVendor.name: CrazyGamesVendor,
    GameMonetizeVendor.name: GameMonetizeVendor,
    GameDistributionVendor.name: GameDistributionVendor,
}


def normalize_vendor_name(name) -> str:
    """Lower-case a vendor name; unknown names fall back to 'none'."""
    key = str(name or "none").strip().lower()
    if key not in VENDOR_CLASSES:
        DebugLogger.warn(f"Unknown ad vendor '{name}' - using 'none'", category="ads")
        return NoneVendor.name
    return key


def create_vendor(name, host=None, config=None) -> AdVendorAdapter:
    """Build the adapter for a vendor name."""
    return VENDOR_CLASSES[normalize_vendor_name(name)](host=host, config=config)


__all__ = [
    'AdVendorAdapter',
    'AdOutcome',
    'NoneVendor',
    'CrazyGamesVendor',
    'GameMonetizeVendor',
    'GameDistributionVendor',
    'VENDOR_CLASSES',
    'browser_window',
    'create_vendor',
    'normalize_vendor_name',
]
