"""Pydantic models for SoftLayer API responses.

SoftLayer returns camelCase keys and only the properties selected by the
object mask, so every field other than ``id`` is optional.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class SoftLayerObject(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class Datacenter(SoftLayerObject):
    id: int | None = None
    name: str | None = None


class Router(SoftLayerObject):
    id: int | None = None
    hostname: str | None = None
    datacenter: Datacenter | None = None


class BillingItem(SoftLayerObject):
    id: int | None = None
    recurring_fee: float | None = None


class RemoteSubnet(SoftLayerObject):
    network_identifier: str
    cidr: int
    subnet_type: str


class NetworkVlan(SoftLayerObject):
    id: int | None = None
    name: str | None = None
    vlan_number: int | None = None
    guest_network_component_count: int | None = None
    primary_router: Router | None = None
    billing_item: BillingItem | None = None
    subnets: list[RemoteSubnet] = Field(default_factory=list)


class ProductItemPrice(SoftLayerObject):
    id: int


class ProductItem(SoftLayerObject):
    id: int | None = None
    key_name: str = ""
    description: str = ""
    prices: list[ProductItemPrice] = Field(default_factory=list)


class ProductPackage(SoftLayerObject):
    id: int
    name: str = ""
    key_name: str = ""


class OrderReceipt(SoftLayerObject):
    order_id: int
