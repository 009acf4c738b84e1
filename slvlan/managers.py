"""SoftLayer service managers used by the VLAN resource.

Each manager wraps one area of the SoftLayer API on top of a transport and
returns parsed models instead of raw JSON.
"""

from __future__ import annotations

from typing import Any, TypeVar

import pydantic
from loguru import logger

from slvlan.base.transport import BaseTransport
from slvlan.exceptions import NotFoundError, RemoteError, TransientRemoteError
from slvlan.models.order import VlanOrder
from slvlan.models.remote import (
    BillingItem,
    Datacenter,
    NetworkVlan,
    OrderReceipt,
    ProductItem,
    ProductPackage,
    Router,
)

VLAN_MASK = (
    "id,name,primaryRouter[datacenter[name]],primaryRouter[hostname],vlanNumber,"
    "billingItem[recurringFee],guestNetworkComponentCount,subnets[networkIdentifier,cidr,subnetType]"
)
PACKAGE_MASK = "id,name,description,isActive,type.keyName"
PACKAGE_ITEMS_MASK = "id,capacity,description,units,keyName,prices[id,categories[id,name,categoryCode]]"

# Returned by Billing_Item::cancelService while guests are still attached.
SERVERS_ON_VLAN_MESSAGE = "servers still on the VLAN"

_ModelT = TypeVar("_ModelT", bound=pydantic.BaseModel)


def _parse(model: type[_ModelT], payload: Any, service: str, method: str) -> _ModelT:
    """Validate one API object, reporting a malformed payload as RemoteError."""
    try:
        return model.model_validate(payload)
    except pydantic.ValidationError as e:
        raise RemoteError(f"{service}::{method} returned an unexpected payload: {e}") from e


class LocationManager:
    """Datacenter lookups."""

    def __init__(self, transport: BaseTransport):
        self._transport = transport

    def get_datacenter_by_name(self, name: str, mask: str = "id") -> Datacenter:
        """Resolve a datacenter short name (e.g. ``dal09``) to its record.

        Raises:
            NotFoundError: If no datacenter carries that name.
        """
        result = self._transport.call(
            "SoftLayer_Location_Datacenter",
            "getDatacenters",
            mask=mask,
            filter={"name": {"operation": name}},
        )
        if not result:
            raise NotFoundError(f"No datacenter with name {name}")
        return _parse(Datacenter, result[0], "SoftLayer_Location_Datacenter", "getDatacenters")


class ProductManager:
    """Product catalog lookups."""

    def __init__(self, transport: BaseTransport):
        self._transport = transport

    def get_package_by_type(self, package_type: str) -> ProductPackage:
        """Return the first catalog package whose type key is ``package_type``.

        Raises:
            NotFoundError: If the account sees no package of that type.
        """
        result = self._transport.call(
            "SoftLayer_Product_Package",
            "getAllObjects",
            mask=PACKAGE_MASK,
            filter={"type": {"keyName": {"operation": package_type}}},
        )
        if not result:
            raise NotFoundError(f"No product packages found for type {package_type}")
        return _parse(ProductPackage, result[0], "SoftLayer_Product_Package", "getAllObjects")

    def get_package_items(self, package_id: int) -> list[ProductItem]:
        """Return the priced items of a package in the order the API lists them."""
        result = self._transport.call(
            "SoftLayer_Product_Package",
            "getItems",
            id=package_id,
            mask=PACKAGE_ITEMS_MASK,
        )
        return [_parse(ProductItem, item, "SoftLayer_Product_Package", "getItems") for item in result or []]


class HardwareManager:
    """Network hardware lookups."""

    def __init__(self, transport: BaseTransport):
        self._transport = transport

    def get_router_by_hostname(self, hostname: str, mask: str = "id") -> Router:
        """Resolve a router hostname (e.g. ``bcr01a.dal09``) to its record.

        Raises:
            NotFoundError: If the account has no router with that hostname.
        """
        result = self._transport.call(
            "SoftLayer_Account",
            "getRouters",
            mask=mask,
            filter={"routers": {"hostname": {"operation": hostname}}},
        )
        if not result:
            raise NotFoundError(f"No routers found with hostname of {hostname}")
        return _parse(Router, result[0], "SoftLayer_Account", "getRouters")


class OrderManager:
    """Product order placement."""

    def __init__(self, transport: BaseTransport):
        self._transport = transport

    def place_order(self, order: VlanOrder, save_as_quote: bool = False) -> OrderReceipt:
        container = order.to_container()
        logger.debug(f"Placing order: {container}")
        result = self._transport.call("SoftLayer_Product_Order", "placeOrder", container, save_as_quote)
        return _parse(OrderReceipt, result, "SoftLayer_Product_Order", "placeOrder")


class AccountManager:
    """Account-level collections."""

    def __init__(self, transport: BaseTransport):
        self._transport = transport

    def get_vlans_by_order_id(self, order_id: int, mask: str = "id") -> list[NetworkVlan]:
        """List the account VLANs whose billing item originates from ``order_id``."""
        result = self._transport.call(
            "SoftLayer_Account",
            "getNetworkVlans",
            mask=mask,
            filter={"networkVlans": {"billingItem": {"orderItem": {"order": {"id": {"operation": order_id}}}}}},
        )
        return [_parse(NetworkVlan, vlan, "SoftLayer_Account", "getNetworkVlans") for vlan in result or []]


class NetworkVlanManager:
    """Operations on a single network VLAN."""

    def __init__(self, transport: BaseTransport):
        self._transport = transport

    def get_vlan(self, vlan_id: int, mask: str = VLAN_MASK) -> NetworkVlan:
        result = self._transport.call("SoftLayer_Network_Vlan", "getObject", id=vlan_id, mask=mask)
        return _parse(NetworkVlan, result, "SoftLayer_Network_Vlan", "getObject")

    def rename(self, vlan_id: int, name: str) -> bool:
        result = self._transport.call("SoftLayer_Network_Vlan", "editObject", {"name": name}, id=vlan_id)
        logger.info(f"Renamed vlan {vlan_id} to '{name}'")
        return bool(result)

    def get_billing_item(self, vlan_id: int) -> BillingItem | None:
        """Return the VLAN's billing item, or None when SoftLayer manages the VLAN."""
        result = self._transport.call("SoftLayer_Network_Vlan", "getBillingItem", id=vlan_id)
        if not result:
            return None
        item = _parse(BillingItem, result, "SoftLayer_Network_Vlan", "getBillingItem")
        return item if item.id is not None else None


class BillingManager:
    """Billing item cancellation."""

    def __init__(self, transport: BaseTransport):
        self._transport = transport

    def cancel_service(self, billing_item_id: int) -> bool:
        """Cancel a billing item immediately.

        Raises:
            TransientRemoteError: With reason ``VLAN_HAS_ATTACHED_SERVERS`` if
                guests are still attached to the VLAN behind the item.
            RemoteError: On any other failure.
        """
        try:
            result: Any = self._transport.call("SoftLayer_Billing_Item", "cancelService", id=billing_item_id)
        except TransientRemoteError:
            raise
        except RemoteError as e:
            # The API has no structured code for this condition; match the message.
            if SERVERS_ON_VLAN_MESSAGE in str(e):
                raise TransientRemoteError(
                    str(e),
                    reason=TransientRemoteError.VLAN_HAS_ATTACHED_SERVERS,
                    status_code=e.status_code,
                    fault_code=e.fault_code,
                ) from e
            raise
        return bool(result)
