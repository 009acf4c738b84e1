"""Data models for VLAN provisioning."""

from slvlan.models.order import VlanOrder
from slvlan.models.remote import (
    BillingItem,
    Datacenter,
    NetworkVlan,
    OrderReceipt,
    ProductItem,
    ProductItemPrice,
    ProductPackage,
    RemoteSubnet,
    Router,
)
from slvlan.models.vlan import VlanRecord, VlanSubnet, VlanType

__all__ = [
    "VlanRecord",
    "VlanSubnet",
    "VlanType",
    "VlanOrder",
    "BillingItem",
    "Datacenter",
    "NetworkVlan",
    "OrderReceipt",
    "ProductItem",
    "ProductItemPrice",
    "ProductPackage",
    "RemoteSubnet",
    "Router",
]
