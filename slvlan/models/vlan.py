"""Tracked VLAN record and its subnets."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from slvlan.exceptions import ValidationError


class VlanType(str, Enum):
    """Network side a VLAN lives on."""

    PRIVATE = "PRIVATE"
    PUBLIC = "PUBLIC"


class VlanSubnet(BaseModel):
    """A subnet attached to a VLAN, as ``address/prefix``."""

    subnet: str
    subnet_type: str
    subnet_size: int = 0


class VlanRecord(BaseModel):
    """Declarative VLAN record mirrored from SoftLayer.

    ``datacenter``, ``type``, ``subnet_size`` and ``router_hostname`` are fixed
    at creation; ``name`` is the only field that can change afterwards. The
    remaining fields are computed and overwritten on every read.
    """

    model_config = ConfigDict(validate_assignment=True)

    id: int | None = None
    datacenter: str = ""
    type: VlanType = VlanType.PRIVATE
    subnet_size: int = 0
    name: str = ""
    router_hostname: str = ""

    vlan_number: int | None = None
    softlayer_managed: bool = False
    child_resource_count: int = 0
    subnets: list[VlanSubnet] = Field(default_factory=list)

    @property
    def resource_id(self) -> str:
        """Durable key of the record: the remote VLAN id as a string."""
        return "" if self.id is None else str(self.id)

    def check_router_consistency(self) -> None:
        """Reject a router hostname that belongs to the other network side.

        Private VLANs must not sit behind an ``fcr`` router and public VLANs
        must not sit behind a ``bcr`` router.

        Raises:
            ValidationError: On a type/router mismatch.
        """
        router = self.router_hostname
        if not router:
            return
        if (self.type == VlanType.PRIVATE and "fcr" in router) or (self.type == VlanType.PUBLIC and "bcr" in router):
            raise ValidationError(
                f"mismatch between vlan type '{self.type.value}' and router_hostname '{router}'"
            )
