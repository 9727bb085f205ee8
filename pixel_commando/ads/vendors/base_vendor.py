"""
base_vendor.py
--------------
Common interface for rewarded-ad vendor adapters.

Every adapter turns one vendor SDK's lifecycle (callbacks, events or
promises) into a ``concurrent.futures.Future`` that resolves to a single
AdOutcome. Adapters never raise to the broker for vendor-side problems;
a missing SDK or capability resolves as UNAVAILABLE right away.

Vendor SDKs live in the hosting page. ``host`` is the object exposing
their globals (the browser ``window`` when running under pygbag, a test
double otherwise).
"""

import sys
from abc import ABC, abstractmethod
from concurrent.futures import Future
from enum import Enum
from typing import Optional

from pixel_commando.core.debug.debug_logger import DebugLogger


class AdOutcome(Enum):
    """Uniform result of one rewarded-ad request."""
    GRANTED = "granted"
    FAILED = "failed"
    UNAVAILABLE = "unavailable"


# ===========================================================
# Host Access
# ===========================================================

def browser_window():
    """Return the JS window when running in a browser build, else None."""
    if sys.platform != "emscripten":
        return None
    try:
        import platform as host_platform
    except ImportError:
        return None
    return getattr(host_platform, "window", None)


def lookup(root, *path):
    """Walk attribute/key path on a host object. Missing links yield None."""
    node = root
    for name in path:
        if node is None:
            return None
        if isinstance(node, dict):
            node = node.get(name)
        else:
            node = getattr(node, name, None)
    return node


def event_name(event) -> Optional[str]:
    """Extract an SDK event's name, or None if the event is malformed."""
    name = lookup(event, "name")
    if isinstance(name, str) and name:
        return name
    return None


# ===========================================================
# Adapter Base
# ===========================================================

class AdVendorAdapter(ABC):
    """Base class for all vendor adapters."""

    name = "base"

    def __init__(self, host=None, config: Optional[dict] = None):
        """
        Args:
            host: Object exposing the vendor SDK globals
            config: The 'ads' config section
        """
        self.host = host
        self.config = config or {}
        self.ready = False
        self.listener = None
        self._pending: Optional[Future] = None

    def bind(self, listener):
        """Attach the broker that receives ad started/stopped notifications."""
        self.listener = listener

    # ===========================================================
    # Contract
    # ===========================================================

    @abstractmethod
    def initialize(self) -> bool:
        """Prepare the SDK. Returns readiness; may be polled again until ready."""

    @abstractmethod
    def request_rewarded_ad(self) -> Future:
        """Start one rewarded ad and return a future resolving to an AdOutcome."""

    def update(self, dt: float):
        """Advance time-based vendor behaviour. Called every frame."""
        pass

    def handle_event(self, event):
        """Receive an out-of-band SDK event. Default ignores everything."""
        pass

    def gameplay_start(self):
        pass

    def gameplay_stop(self):
        pass

    # ===========================================================
    # Helpers
    # ===========================================================

    def _new_request(self) -> Future:
        self._pending = Future()
        return self._pending

    def _settle(self, future: Optional[Future], outcome: AdOutcome) -> bool:
        """
        Resolve a request future once. Late or duplicate signals (for
        example after a broker timeout cancelled the future) are ignored.
        """
        if future is None:
            return False
        if future is self._pending:
            self._pending = None
        if future.done():
            return False
        future.set_result(outcome)
        DebugLogger.trace(f"{self.name} request -> {outcome.value}", category="ads")
        return True

    def _resolved(self, outcome: AdOutcome) -> Future:
        """Return an already-resolved request future."""
        future = Future()
        future.set_result(outcome)
        return future

    def _notify_started(self):
        if self.listener is not None:
            self.listener.on_ad_started()

    def _notify_stopped(self):
        if self.listener is not None:
            self.listener.on_ad_stopped()
