"""Build priced VLAN orders from the SoftLayer product catalog."""

from __future__ import annotations

from loguru import logger

from slvlan.client import SoftLayerClient
from slvlan.exceptions import NotFoundError, SoftLayerVlanError, ValidationError
from slvlan.models.order import VlanOrder
from slvlan.models.remote import ProductItem
from slvlan.models.vlan import VlanType

ADDITIONAL_SERVICES_NETWORK_VLAN = "ADDITIONAL_SERVICES_NETWORK_VLAN"
ADDITIONAL_SERVICES = "ADDITIONAL_SERVICES"

# Tried in order; which one carries VLAN items depends on the account.
PACKAGE_TYPES = (ADDITIONAL_SERVICES_NETWORK_VLAN, ADDITIONAL_SERVICES)


def vlan_key_name(vlan_type: VlanType) -> str:
    return f"{VlanType(vlan_type).value}_NETWORK_VLAN"


def subnet_key_name(subnet_size: int) -> str:
    return f"{subnet_size}_STATIC_PUBLIC_IP_ADDRESSES"


def _first_price_id(items: list[ProductItem], key_name: str) -> int:
    # Catalog order is taken as received; the API does not promise a stable one.
    for item in items:
        if item.prices:
            return item.prices[0].id
    raise NotFoundError(f"No prices found on product items matching {key_name}")


def build_vlan_order(
    client: SoftLayerClient,
    datacenter: str,
    vlan_type: VlanType,
    subnet_size: int,
    package_type: str,
    router_hostname: str = "",
) -> VlanOrder:
    """Build a priced order for one VLAN plus its primary subnet.

    Args:
        client: SoftLayer API client.
        datacenter: Datacenter short name, e.g. ``dal09``.
        vlan_type: PRIVATE or PUBLIC.
        subnet_size: Number of addresses in the primary subnet.
        package_type: Catalog package type key to take the items from.
        router_hostname: Optional primary router to place the VLAN behind.

    Returns:
        The order, referencing the first price of the VLAN item and of the
        subnet item.

    Raises:
        ValidationError: If the datacenter name is empty.
        NotFoundError: If the datacenter, package, a catalog item or the
            router cannot be resolved.
    """
    if not datacenter:
        raise ValidationError("datacenter name is empty")

    dc = client.location.get_datacenter_by_name(datacenter, mask="id")
    package = client.product.get_package_by_type(package_type)
    items = client.product.get_package_items(package.id)

    vlan_key = vlan_key_name(vlan_type)
    subnet_key = subnet_key_name(subnet_size)

    vlan_items = [item for item in items if item.key_name == vlan_key]
    subnet_items = [item for item in items if subnet_key in item.key_name]

    if not vlan_items:
        raise NotFoundError(f"No product items matching {vlan_key} could be found")
    if not subnet_items:
        raise NotFoundError(f"No product items matching {subnet_key} could be found")

    order = VlanOrder(
        package_id=package.id,
        location=str(dc.id),
        prices=[_first_price_id(vlan_items, vlan_key), _first_price_id(subnet_items, subnet_key)],
        quantity=1,
    )

    if router_hostname:
        router = client.hardware.get_router_by_hostname(router_hostname, mask="id")
        order.router_id = router.id

    logger.debug(f"Built {vlan_key} order from package {package_type} ({package.id}) in {datacenter}")
    return order


def build_vlan_order_with_fallback(
    client: SoftLayerClient,
    datacenter: str,
    vlan_type: VlanType,
    subnet_size: int,
    router_hostname: str = "",
    package_types: tuple[str, ...] = PACKAGE_TYPES,
) -> VlanOrder:
    """Try :func:`build_vlan_order` against each package type in turn.

    Raises:
        SoftLayerVlanError: The error from the last package type tried.
    """
    last_error: SoftLayerVlanError | None = None
    for package_type in package_types:
        try:
            return build_vlan_order(
                client,
                datacenter=datacenter,
                vlan_type=vlan_type,
                subnet_size=subnet_size,
                package_type=package_type,
                router_hostname=router_hostname,
            )
        except SoftLayerVlanError as e:
            logger.debug(f"No usable VLAN order from package {package_type}: {e}")
            last_error = e

    if last_error is None:
        raise ValidationError("no package types to order from")
    raise last_error
