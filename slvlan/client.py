"""SoftLayer API client exposing the managers the VLAN resource needs."""

from __future__ import annotations

from types import TracebackType
from typing import Self

from slvlan.base.transport import BaseTransport
from slvlan.config import SoftLayerCredentials
from slvlan.managers import (
    AccountManager,
    BillingManager,
    HardwareManager,
    LocationManager,
    NetworkVlanManager,
    OrderManager,
    ProductManager,
)
from slvlan.rest import SoftLayerRESTTransport


class SoftLayerClient:
    """High-level client holding one API session.

    The transport connects lazily on first manager access. The client is
    passed explicitly to every component that talks to SoftLayer.

    Usage::

        with SoftLayerClient.from_credentials(SoftLayerCredentials.from_env()) as client:
            vlan = client.network_vlan.get_vlan(1234567)
            print(vlan.vlan_number, vlan.primary_router.hostname)
    """

    def __init__(self, transport: BaseTransport):
        self._transport = transport

        # Lazy-initialized managers
        self._location: LocationManager | None = None
        self._product: ProductManager | None = None
        self._hardware: HardwareManager | None = None
        self._order: OrderManager | None = None
        self._account: AccountManager | None = None
        self._network_vlan: NetworkVlanManager | None = None
        self._billing: BillingManager | None = None

    @classmethod
    def from_credentials(cls, credentials: SoftLayerCredentials) -> SoftLayerClient:
        return cls(SoftLayerRESTTransport.from_credentials(credentials))

    @property
    def transport(self) -> BaseTransport:
        self._ensure_connected()
        return self._transport

    @property
    def location(self) -> LocationManager:
        if self._location is None:
            self._location = LocationManager(self.transport)
        return self._location

    @property
    def product(self) -> ProductManager:
        if self._product is None:
            self._product = ProductManager(self.transport)
        return self._product

    @property
    def hardware(self) -> HardwareManager:
        if self._hardware is None:
            self._hardware = HardwareManager(self.transport)
        return self._hardware

    @property
    def order(self) -> OrderManager:
        if self._order is None:
            self._order = OrderManager(self.transport)
        return self._order

    @property
    def account(self) -> AccountManager:
        if self._account is None:
            self._account = AccountManager(self.transport)
        return self._account

    @property
    def network_vlan(self) -> NetworkVlanManager:
        if self._network_vlan is None:
            self._network_vlan = NetworkVlanManager(self.transport)
        return self._network_vlan

    @property
    def billing(self) -> BillingManager:
        if self._billing is None:
            self._billing = BillingManager(self.transport)
        return self._billing

    def connect(self) -> None:
        self._transport.connect()

    def disconnect(self) -> None:
        """Drop cached managers and close the transport."""
        self._location = None
        self._product = None
        self._hardware = None
        self._order = None
        self._account = None
        self._network_vlan = None
        self._billing = None

        if self._transport.is_connected():
            self._transport.disconnect()

    def _ensure_connected(self) -> None:
        if not self._transport.is_connected():
            self._transport.connect()

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self, exc_type: type[BaseException] | None, exc_val: BaseException | None, exc_tb: TracebackType | None
    ) -> None:
        self.disconnect()
