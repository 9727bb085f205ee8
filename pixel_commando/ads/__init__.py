"""
Rewarded ad exports.

Provides the vendor-agnostic broker plus the vendor adapter factory.
"""

from pixel_commando.ads.ad_broker import AdBroker
from pixel_commando.ads.vendors import (
    AdOutcome,
    AdVendorAdapter,
    browser_window,
    create_vendor,
    normalize_vendor_name,
)

__all__ = [
    'AdBroker',
    'AdOutcome',
    'AdVendorAdapter',
    'browser_window',
    'create_vendor',
    'normalize_vendor_name',
]
