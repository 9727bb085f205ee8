"""
test_vendors.py
---------------
Vendor adapters against stand-in SDK globals.

Each adapter must turn its SDK's callbacks, events or promises into one
AdOutcome, and report UNAVAILABLE when the SDK or its entry point is
missing.
"""

from concurrent.futures import Future
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from pixel_commando.ads.vendors import (
    create_vendor, normalize_vendor_name,
    CrazyGamesVendor, GameMonetizeVendor, GameDistributionVendor, NoneVendor,
)
from pixel_commando.ads.vendors.base_vendor import AdOutcome, lookup, event_name
from pixel_commando.ads.vendors.gamedistribution_vendor import is_rewarded


class FakePromise:
    """Minimal thenable recording its handlers."""

    def __init__(self):
        self.on_fulfilled = None
        self.on_rejected = None

    def then(self, on_fulfilled, on_rejected):
        self.on_fulfilled = on_fulfilled
        self.on_rejected = on_rejected


@pytest.fixture
def listener():
    return MagicMock(name="broker")


# ===========================================================
# Helpers
# ===========================================================

class TestHostLookup:

    def test_walks_attributes_and_keys(self):
        host = SimpleNamespace(CrazyGames={"SDK": SimpleNamespace(version=3)})
        assert lookup(host, "CrazyGames", "SDK", "version") == 3

    def test_missing_links_yield_none(self):
        assert lookup(None, "anything") is None
        assert lookup(SimpleNamespace(), "sdk", "showAd") is None

    @pytest.mark.parametrize("event, expected", [
        ({"name": "SDK_READY"}, "SDK_READY"),
        (SimpleNamespace(name="SDK_ERROR"), "SDK_ERROR"),
        ({"name": ""}, None),
        ({"type": "SDK_READY"}, None),
        (None, None),
        ("SDK_READY", None),
    ])
    def test_event_name(self, event, expected):
        assert event_name(event) == expected


# ===========================================================
# CrazyGames (callbacks)
# ===========================================================

class TestCrazyGames:

    def make(self, request_ad, listener=None):
        sdk = SimpleNamespace(
            ad=SimpleNamespace(requestAd=request_ad),
            game=SimpleNamespace(gameplayStart=MagicMock(), gameplayStop=MagicMock()),
        )
        vendor = CrazyGamesVendor(host=SimpleNamespace(CrazyGames=SimpleNamespace(SDK=sdk)))
        vendor.bind(listener)
        return vendor, sdk

    def test_finished_grants(self, listener):
        captured = {}
        vendor, _ = self.make(lambda kind, callbacks: captured.update(kind=kind, cb=callbacks), listener)
        assert vendor.initialize() is True

        future = vendor.request_rewarded_ad()
        assert captured["kind"] == "rewarded"
        assert not future.done()

        captured["cb"]["adStarted"]()
        captured["cb"]["adFinished"]()

        assert future.result() is AdOutcome.GRANTED
        listener.on_ad_started.assert_called_once()
        listener.on_ad_stopped.assert_called_once()

    def test_error_fails_and_duplicate_signal_ignored(self):
        captured = {}
        vendor, _ = self.make(lambda kind, callbacks: captured.update(cb=callbacks))

        future = vendor.request_rewarded_ad()
        captured["cb"]["adError"]("no fill")
        captured["cb"]["adFinished"]()

        assert future.result() is AdOutcome.FAILED

    def test_raising_request_fails(self):
        vendor, _ = self.make(MagicMock(side_effect=RuntimeError("blocked")))
        assert vendor.request_rewarded_ad().result() is AdOutcome.FAILED

    def test_missing_sdk_is_unavailable(self):
        vendor = CrazyGamesVendor(host=SimpleNamespace())
        assert vendor.initialize() is False
        assert vendor.request_rewarded_ad().result() is AdOutcome.UNAVAILABLE

    def test_gameplay_notifications(self):
        vendor, sdk = self.make(MagicMock())
        vendor.gameplay_start()
        vendor.gameplay_stop()
        sdk.game.gameplayStart.assert_called_once()
        sdk.game.gameplayStop.assert_called_once()


# ===========================================================
# GameMonetize (events)
# ===========================================================

class TestGameMonetize:

    def make(self, sdk=None):
        host = SimpleNamespace()
        if sdk is not None:
            host.sdk = sdk
        vendor = GameMonetizeVendor(host=host, config={"game_id": "abc123"})
        vendor.initialize()
        return vendor, host

    def test_installs_event_hook(self):
        vendor, host = self.make(SimpleNamespace(showBanner=MagicMock()))
        assert host.SDK_OPTIONS["gameId"] == "abc123"
        assert host.SDK_OPTIONS["onEvent"] == vendor.handle_event

    def test_existing_hook_kept(self):
        existing = MagicMock()
        host = SimpleNamespace(SDK_OPTIONS={"gameId": "mine", "onEvent": existing})
        GameMonetizeVendor(host=host).initialize()
        assert host.SDK_OPTIONS["onEvent"] is existing

    def test_ready_event(self):
        vendor, _ = self.make(SimpleNamespace(showBanner=MagicMock()))
        assert vendor.ready is False
        vendor.handle_event({"name": "SDK_READY"})
        assert vendor.ready is True

    def test_ready_after_grace_period(self):
        vendor, _ = self.make(SimpleNamespace(showBanner=MagicMock()))
        vendor.update(1.0)
        assert vendor.ready is False
        vendor.update(0.6)
        assert vendor.ready is True

    def test_game_start_grants(self, listener):
        sdk = SimpleNamespace(showReward=MagicMock(), showAd=MagicMock())
        vendor, _ = self.make(sdk)
        vendor.bind(listener)

        future = vendor.request_rewarded_ad()
        sdk.showReward.assert_called_once()
        sdk.showAd.assert_not_called()

        vendor.handle_event({"name": "SDK_GAME_PAUSE"})
        vendor.handle_event({"name": "SDK_GAME_START"})

        assert future.result() is AdOutcome.GRANTED
        listener.on_ad_stopped.assert_called_once()

    def test_show_ad_fallback(self):
        sdk = SimpleNamespace(showAd=MagicMock())
        vendor, _ = self.make(sdk)
        vendor.request_rewarded_ad()
        sdk.showAd.assert_called_once_with("rewarded")

    def test_error_event_fails(self):
        vendor, _ = self.make(SimpleNamespace(showBanner=MagicMock()))
        future = vendor.request_rewarded_ad()
        vendor.handle_event(SimpleNamespace(name="SDK_ERROR"))
        assert future.result() is AdOutcome.FAILED

    @pytest.mark.parametrize("event", [None, {}, {"name": 5}, "SDK_GAME_START"])
    def test_malformed_events_ignored(self, event):
        vendor, _ = self.make(SimpleNamespace(showBanner=MagicMock()))
        future = vendor.request_rewarded_ad()
        vendor.handle_event(event)
        assert not future.done()

    def test_events_without_request_are_harmless(self):
        vendor, _ = self.make(SimpleNamespace(showBanner=MagicMock()))
        vendor.handle_event({"name": "SDK_GAME_START"})
        vendor.handle_event({"name": "SDK_ERROR"})

    def test_missing_sdk_is_unavailable(self):
        vendor, _ = self.make()
        assert vendor.request_rewarded_ad().result() is AdOutcome.UNAVAILABLE

    def test_sdk_without_show_methods_is_unavailable(self):
        vendor, _ = self.make(SimpleNamespace())
        assert vendor.request_rewarded_ad().result() is AdOutcome.UNAVAILABLE


# ===========================================================
# GameDistribution (promises)
# ===========================================================

class TestGameDistribution:

    def make(self, show_ad):
        host = SimpleNamespace(gdsdk=SimpleNamespace(showAd=show_ad))
        vendor = GameDistributionVendor(host=host)
        vendor.initialize()
        return vendor, host

    @pytest.mark.parametrize("value, expected", [
        (True, True),
        ("rewarded", True),
        ({"status": "rewarded"}, True),
        (SimpleNamespace(status="rewarded"), True),
        (False, False),
        ("dismissed", False),
        ({"status": "skipped"}, False),
        (None, False),
    ])
    def test_is_rewarded(self, value, expected):
        assert is_rewarded(value) is expected

    def test_ready_and_hook(self):
        vendor, host = self.make(MagicMock())
        assert vendor.ready is True
        assert host.GD_OPTIONS["onEvent"] == vendor.handle_event
        assert host.GD_OPTIONS["advertisementSettings"] == {"autoplay": False}

    def test_future_promise_granted(self):
        promise = Future()
        vendor, _ = self.make(MagicMock(return_value=promise))

        future = vendor.request_rewarded_ad()
        assert not future.done()

        promise.set_result("rewarded")
        assert future.result() is AdOutcome.GRANTED

    def test_future_promise_rejected(self):
        promise = Future()
        vendor, _ = self.make(MagicMock(return_value=promise))

        future = vendor.request_rewarded_ad()
        promise.set_exception(RuntimeError("adblock"))
        assert future.result() is AdOutcome.FAILED

    def test_thenable_promise(self, listener):
        promise = FakePromise()
        vendor, _ = self.make(MagicMock(return_value=promise))
        vendor.bind(listener)

        future = vendor.request_rewarded_ad()
        listener.on_ad_started.assert_called_once()

        promise.on_fulfilled({"status": "closed"})
        assert future.result() is AdOutcome.FAILED
        listener.on_ad_stopped.assert_called_once()

    def test_thenable_rejection(self):
        promise = FakePromise()
        vendor, _ = self.make(MagicMock(return_value=promise))
        future = vendor.request_rewarded_ad()
        promise.on_rejected("timeout")
        assert future.result() is AdOutcome.FAILED

    def test_no_promise_counts_as_shown(self):
        vendor, _ = self.make(MagicMock(return_value=None))
        assert vendor.request_rewarded_ad().result() is AdOutcome.GRANTED

    def test_missing_show_ad_is_unavailable(self):
        vendor = GameDistributionVendor(host=SimpleNamespace())
        assert vendor.initialize() is False
        assert vendor.request_rewarded_ad().result() is AdOutcome.UNAVAILABLE


# ===========================================================
# Factory
# ===========================================================

class TestFactory:

    @pytest.mark.parametrize("raw, expected", [
        ("CrazyGames", "crazygames"),
        (" gamemonetize ", "gamemonetize"),
        ("gamedistribution", "gamedistribution"),
        ("unity", "none"),
        (None, "none"),
        ("", "none"),
    ])
    def test_normalize(self, raw, expected):
        assert normalize_vendor_name(raw) == expected

    def test_create_vendor_passes_host_and_config(self):
        host = SimpleNamespace()
        vendor = create_vendor("GameMonetize", host=host, config={"game_id": "x"})
        assert isinstance(vendor, GameMonetizeVendor)
        assert vendor.host is host
        assert vendor.config == {"game_id": "x"}

    def test_unknown_vendor_builds_simulator(self):
        vendor = create_vendor("mystery")
        assert isinstance(vendor, NoneVendor)
        assert vendor.initialize() is True
