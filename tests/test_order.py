"""Tests for VLAN order building."""

from __future__ import annotations

import pytest

from slvlan.exceptions import NotFoundError, ValidationError
from slvlan.models.remote import ProductItem, ProductPackage
from slvlan.models.vlan import VlanType
from slvlan.order import (
    ADDITIONAL_SERVICES,
    ADDITIONAL_SERVICES_NETWORK_VLAN,
    build_vlan_order,
    build_vlan_order_with_fallback,
    subnet_key_name,
    vlan_key_name,
)


class TestKeyNames:
    """Test catalog key name construction."""

    def test_vlan_key_name(self):
        assert vlan_key_name(VlanType.PUBLIC) == "PUBLIC_NETWORK_VLAN"
        assert vlan_key_name(VlanType.PRIVATE) == "PRIVATE_NETWORK_VLAN"

    def test_subnet_key_name(self):
        assert subnet_key_name(8) == "8_STATIC_PUBLIC_IP_ADDRESSES"


class TestBuildVlanOrder:
    """Test build_vlan_order against a mocked catalog."""

    def test_builds_priced_order(self, mock_client):
        """The order references package, datacenter and the first price of each item."""
        order = build_vlan_order(
            mock_client, datacenter="dal09", vlan_type=VlanType.PUBLIC, subnet_size=8, package_type=ADDITIONAL_SERVICES
        )

        assert order.package_id == 0
        assert order.location == "138124"
        assert order.prices == [2021, 21]
        assert order.quantity == 1
        assert order.router_id is None
        mock_client.location.get_datacenter_by_name.assert_called_once_with("dal09", mask="id")
        mock_client.product.get_package_by_type.assert_called_once_with(ADDITIONAL_SERVICES)
        mock_client.hardware.get_router_by_hostname.assert_not_called()

    def test_empty_datacenter(self, mock_client):
        """An empty datacenter name fails before any API call."""
        with pytest.raises(ValidationError, match="datacenter name is empty"):
            build_vlan_order(mock_client, "", VlanType.PUBLIC, 8, ADDITIONAL_SERVICES)
        mock_client.location.get_datacenter_by_name.assert_not_called()

    def test_unknown_datacenter(self, mock_client):
        """Datacenter resolution errors propagate."""
        mock_client.location.get_datacenter_by_name.side_effect = NotFoundError("No datacenter with name xyz01")
        with pytest.raises(NotFoundError):
            build_vlan_order(mock_client, "xyz01", VlanType.PUBLIC, 8, ADDITIONAL_SERVICES)

    def test_vlan_key_must_match_exactly(self, mock_client):
        """Only an exact {TYPE}_NETWORK_VLAN key name matches."""
        mock_client.product.get_package_items.return_value = [
            ProductItem.model_validate({"keyName": "PUBLIC_NETWORK_VLAN_EXTRA", "prices": [{"id": 1}]}),
            ProductItem.model_validate({"keyName": "8_STATIC_PUBLIC_IP_ADDRESSES", "prices": [{"id": 21}]}),
        ]
        with pytest.raises(NotFoundError, match="PUBLIC_NETWORK_VLAN"):
            build_vlan_order(mock_client, "dal09", VlanType.PUBLIC, 8, ADDITIONAL_SERVICES)

    def test_subnet_key_matches_substring(self, mock_client):
        """The subnet item only needs to contain the key name."""
        mock_client.product.get_package_items.return_value = [
            ProductItem.model_validate({"keyName": "PRIVATE_NETWORK_VLAN", "prices": [{"id": 2019}]}),
            ProductItem.model_validate({"keyName": "16_STATIC_PUBLIC_IP_ADDRESSES_FOR_VLAN", "prices": [{"id": 99}]}),
        ]
        order = build_vlan_order(mock_client, "dal09", VlanType.PRIVATE, 16, ADDITIONAL_SERVICES)
        assert order.prices == [2019, 99]

    def test_missing_subnet_item(self, mock_client):
        """No subnet item of the requested size fails."""
        with pytest.raises(NotFoundError, match="64_STATIC_PUBLIC_IP_ADDRESSES"):
            build_vlan_order(mock_client, "dal09", VlanType.PUBLIC, 64, ADDITIONAL_SERVICES)

    def test_first_item_in_catalog_order_wins(self, mock_client):
        """Several matching items resolve to the first one returned by the API."""
        mock_client.product.get_package_items.return_value = [
            ProductItem.model_validate({"keyName": "PUBLIC_NETWORK_VLAN", "prices": [{"id": 300}, {"id": 301}]}),
            ProductItem.model_validate({"keyName": "PUBLIC_NETWORK_VLAN", "prices": [{"id": 100}]}),
            ProductItem.model_validate({"keyName": "8_STATIC_PUBLIC_IP_ADDRESSES", "prices": [{"id": 21}]}),
        ]
        order = build_vlan_order(mock_client, "dal09", VlanType.PUBLIC, 8, ADDITIONAL_SERVICES)
        assert order.prices == [300, 21]

    def test_router_attached(self, mock_client):
        """A router hostname is resolved and attached to the order."""
        order = build_vlan_order(
            mock_client, "dal09", VlanType.PUBLIC, 8, ADDITIONAL_SERVICES, router_hostname="fcr01a.dal09"
        )
        assert order.router_id == 4711
        mock_client.hardware.get_router_by_hostname.assert_called_once_with("fcr01a.dal09", mask="id")

    def test_router_failure_aborts(self, mock_client):
        """An unresolvable router aborts the order although items were found."""
        mock_client.hardware.get_router_by_hostname.side_effect = NotFoundError("No routers found")
        with pytest.raises(NotFoundError, match="No routers found"):
            build_vlan_order(mock_client, "dal09", VlanType.PUBLIC, 8, ADDITIONAL_SERVICES, router_hostname="fcr99")


class TestBuildVlanOrderWithFallback:
    """Test falling back from the network VLAN package to additional services."""

    def test_first_package_used(self, mock_client):
        """The network VLAN package is tried first."""
        build_vlan_order_with_fallback(mock_client, "dal09", VlanType.PUBLIC, 8)
        mock_client.product.get_package_by_type.assert_called_once_with(ADDITIONAL_SERVICES_NETWORK_VLAN)

    def test_falls_back_to_second_package(self, mock_client):
        """A missing first package falls back to ADDITIONAL_SERVICES."""
        mock_client.product.get_package_by_type.side_effect = [
            NotFoundError("No product packages found for type ADDITIONAL_SERVICES_NETWORK_VLAN"),
            ProductPackage(id=46),
        ]

        order = build_vlan_order_with_fallback(mock_client, "dal09", VlanType.PUBLIC, 8)

        assert order.package_id == 46
        types = [c.args[0] for c in mock_client.product.get_package_by_type.call_args_list]
        assert types == [ADDITIONAL_SERVICES_NETWORK_VLAN, ADDITIONAL_SERVICES]

    def test_both_packages_fail(self, mock_client):
        """The error of the last package type surfaces."""
        mock_client.product.get_package_items.return_value = []
        with pytest.raises(NotFoundError, match="PUBLIC_NETWORK_VLAN"):
            build_vlan_order_with_fallback(mock_client, "dal09", VlanType.PUBLIC, 8)
        assert mock_client.product.get_package_by_type.call_count == 2
