"""VLAN product order container."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

ORDER_COMPLEX_TYPE = "SoftLayer_Container_Product_Order_Network_Vlan"


class VlanOrder(BaseModel):
    """Priced order for one VLAN and its primary subnet."""

    package_id: int
    location: str
    prices: list[int] = Field(default_factory=list)
    quantity: int = 1
    router_id: int | None = None

    def to_container(self) -> dict[str, Any]:
        """Serialise to the SoftLayer order container complex type."""
        container: dict[str, Any] = {
            "complexType": ORDER_COMPLEX_TYPE,
            "packageId": self.package_id,
            "location": self.location,
            "prices": [{"id": price_id} for price_id in self.prices],
            "quantity": self.quantity,
        }
        if self.router_id is not None:
            container["routerId"] = self.router_id
        return container
