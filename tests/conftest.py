"""Shared fixtures for the slvlan test suite."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from slvlan.config import VlanSettings
from slvlan.models.remote import Datacenter, NetworkVlan, ProductItem, ProductPackage, Router

# ── transport / client mocks ──────────────────────────────────────────


@pytest.fixture()
def mock_transport():
    """MagicMock of SoftLayerRESTTransport with call()."""
    transport = MagicMock()
    transport.call.return_value = None
    transport.is_connected.return_value = True
    return transport


@pytest.fixture()
def mock_client():
    """MagicMock of SoftLayerClient whose managers answer a happy-path VLAN order."""
    client = MagicMock()
    client.location.get_datacenter_by_name.return_value = Datacenter(id=138124, name="dal09")
    client.product.get_package_by_type.return_value = ProductPackage(id=0, key_name="ADDITIONAL_SERVICES_NETWORK_VLAN")
    client.product.get_package_items.return_value = [
        ProductItem.model_validate({"id": 1, "keyName": "PUBLIC_NETWORK_VLAN", "prices": [{"id": 2021}]}),
        ProductItem.model_validate({"id": 2, "keyName": "PRIVATE_NETWORK_VLAN", "prices": [{"id": 2019}]}),
        ProductItem.model_validate({"id": 3, "keyName": "8_STATIC_PUBLIC_IP_ADDRESSES", "prices": [{"id": 21}]}),
        ProductItem.model_validate({"id": 4, "keyName": "16_STATIC_PUBLIC_IP_ADDRESSES", "prices": [{"id": 22}]}),
    ]
    client.hardware.get_router_by_hostname.return_value = Router(id=4711, hostname="fcr01a.dal09")
    client.order.place_order.return_value = MagicMock(order_id=9001)
    client.account.get_vlans_by_order_id.return_value = [NetworkVlan(id=1234567)]
    client.network_vlan.rename.return_value = True
    client.billing.cancel_service.return_value = True
    return client


# ── timing ────────────────────────────────────────────────────────────


class FakeClock:
    """Monotonic clock that only moves when sleep() is called."""

    def __init__(self, start: float = 0.0):
        self.now = start
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture()
def fake_clock():
    return FakeClock()


@pytest.fixture()
def settings():
    """Default timing: 5s delay, 3s interval, 10 min timeout, 60s delete backoff, 5 retries."""
    return VlanSettings()


# ── remote payloads ───────────────────────────────────────────────────


@pytest.fixture()
def sample_vlan_payload():
    """Factory fixture returning a getObject payload as SoftLayer sends it."""

    def _make(**overrides):
        payload = {
            "id": 1234567,
            "name": "web",
            "vlanNumber": 1402,
            "guestNetworkComponentCount": 3,
            "primaryRouter": {"hostname": "fcr01a.dal09", "datacenter": {"name": "dal09"}},
            "billingItem": {"recurringFee": "0"},
            "subnets": [
                {"networkIdentifier": "169.45.10.0", "cidr": 29, "subnetType": "ADDITIONAL_PRIMARY"},
                {"networkIdentifier": "169.45.20.0", "cidr": 30, "subnetType": "SECONDARY"},
            ],
        }
        payload.update(overrides)
        return payload

    return _make


@pytest.fixture()
def sample_vlan(sample_vlan_payload):
    """Factory fixture returning a parsed NetworkVlan."""

    def _make(**overrides):
        return NetworkVlan.model_validate(sample_vlan_payload(**overrides))

    return _make
