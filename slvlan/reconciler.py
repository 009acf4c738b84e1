"""Mirror a remote SoftLayer VLAN into the tracked record."""

from __future__ import annotations

import re

from slvlan.exceptions import ValidationError
from slvlan.models.remote import NetworkVlan, RemoteSubnet
from slvlan.models.vlan import VlanRecord, VlanSubnet, VlanType

PRIMARY_SUBNET_TYPE = re.compile(r".*PRIMARY.*")
PUBLIC_ROUTER_PREFIX = "fcr"


def subnet_size_from_cidr(prefix: int) -> int:
    """Number of addresses in an IPv4 block with the given prefix length."""
    if not 0 <= prefix <= 32:
        raise ValidationError(f"Invalid IPv4 prefix length: {prefix}")
    return 1 << (32 - prefix)


def vlan_type_from_router(hostname: str) -> VlanType:
    return VlanType.PUBLIC if hostname.startswith(PUBLIC_ROUTER_PREFIX) else VlanType.PRIVATE


def is_primary_subnet(subnet_type: str) -> bool:
    return PRIMARY_SUBNET_TYPE.match(subnet_type) is not None


def convert_subnets(remote_subnets: list[RemoteSubnet]) -> tuple[list[VlanSubnet], list[VlanSubnet]]:
    """Convert remote subnets, returning ``(all_subnets, primary_subnets)`` in API order."""
    subnets: list[VlanSubnet] = []
    primary: list[VlanSubnet] = []
    for elem in remote_subnets:
        subnet = VlanSubnet(
            subnet=f"{elem.network_identifier}/{elem.cidr}",
            subnet_type=elem.subnet_type,
            subnet_size=subnet_size_from_cidr(elem.cidr),
        )
        subnets.append(subnet)
        if is_primary_subnet(elem.subnet_type):
            primary.append(subnet)
    return subnets, primary


def primary_subnet_size(subnets: list[VlanSubnet], primary: list[VlanSubnet]) -> int:
    """Size of the first primary subnet, else of the first subnet, else 0."""
    if primary:
        return primary[0].subnet_size
    if subnets:
        return subnets[0].subnet_size
    return 0


def apply_remote_vlan(record: VlanRecord, vlan: NetworkVlan) -> VlanRecord:
    """Overwrite ``record`` with everything derivable from ``vlan``.

    The remote side wins: ``type``, ``name`` and ``subnet_size`` are replaced
    even if the record held other values. ``datacenter`` and
    ``router_hostname`` are only touched when the VLAN reports a primary
    router.
    """
    record.id = vlan.id
    record.vlan_number = vlan.vlan_number
    record.child_resource_count = vlan.guest_network_component_count or 0
    record.name = vlan.name or ""

    router = vlan.primary_router
    if router is not None and router.hostname is not None:
        record.router_hostname = router.hostname
        record.type = vlan_type_from_router(router.hostname)
        if router.datacenter is not None and router.datacenter.name is not None:
            record.datacenter = router.datacenter.name

    record.softlayer_managed = vlan.billing_item is None

    subnets, primary = convert_subnets(vlan.subnets)
    record.subnets = subnets
    record.subnet_size = primary_subnet_size(subnets, primary)
    return record
