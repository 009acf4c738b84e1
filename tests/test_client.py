"""Tests for SoftLayerClient."""

from __future__ import annotations

from unittest.mock import MagicMock

from slvlan.client import SoftLayerClient
from slvlan.config import SoftLayerCredentials
from slvlan.managers import BillingManager, NetworkVlanManager
from slvlan.rest import SoftLayerRESTTransport


class TestSoftLayerClient:
    """Test lazy connection and manager caching."""

    def test_manager_access_connects(self):
        """First manager access connects a disconnected transport."""
        transport = MagicMock()
        transport.is_connected.return_value = False

        client = SoftLayerClient(transport)
        manager = client.network_vlan

        transport.connect.assert_called_once()
        assert isinstance(manager, NetworkVlanManager)

    def test_managers_are_cached(self, mock_transport):
        """Managers are created once per client."""
        client = SoftLayerClient(mock_transport)
        assert client.billing is client.billing
        assert isinstance(client.billing, BillingManager)
        mock_transport.connect.assert_not_called()

    def test_context_manager_disconnects(self, mock_transport):
        """Leaving the with-block closes the transport and drops managers."""
        with SoftLayerClient(mock_transport) as client:
            first = client.account

        mock_transport.disconnect.assert_called_once()
        assert client._account is None
        assert client.account is not first

    def test_from_credentials(self):
        """from_credentials builds a REST transport."""
        client = SoftLayerClient.from_credentials(SoftLayerCredentials(username="u", api_key="k"))
        assert isinstance(client._transport, SoftLayerRESTTransport)
        assert client._transport.username == "u"
