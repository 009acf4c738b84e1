"""Exception hierarchy for VLAN provisioning."""

from __future__ import annotations


class SoftLayerVlanError(Exception):
    """Base exception for all VLAN provisioning errors."""


class ValidationError(SoftLayerVlanError):
    """Declarative input is invalid (type/router mismatch, empty datacenter, bad id)."""


class NotFoundError(SoftLayerVlanError):
    """A catalog package, catalog item, datacenter or router could not be resolved."""


class AmbiguousStateError(SoftLayerVlanError):
    """More than one VLAN matches a single order."""


class OrderTimeoutError(SoftLayerVlanError):
    """The ordered VLAN did not become visible in time."""


class OrderWaitCancelled(SoftLayerVlanError):
    """Waiting for an order was aborted by the caller."""


class AuthenticationError(SoftLayerVlanError):
    """SoftLayer API credentials were rejected or missing."""


class RemoteError(SoftLayerVlanError):
    """SoftLayer API request failed."""

    def __init__(self, message: str, status_code: int | None = None, fault_code: str | None = None):
        self.status_code = status_code
        self.fault_code = fault_code
        super().__init__(message)

    def with_context(self, context: str) -> RemoteError:
        """Return a copy of this error with ``context`` prefixed to the message."""
        return RemoteError(f"{context}: {self}", status_code=self.status_code, fault_code=self.fault_code)


class TransientRemoteError(RemoteError):
    """SoftLayer API request failed for a reason expected to clear on its own."""

    VLAN_HAS_ATTACHED_SERVERS = "VLAN_HAS_ATTACHED_SERVERS"

    def __init__(
        self,
        message: str,
        reason: str,
        status_code: int | None = None,
        fault_code: str | None = None,
    ):
        self.reason = reason
        super().__init__(message, status_code=status_code, fault_code=fault_code)

    def with_context(self, context: str) -> TransientRemoteError:
        return TransientRemoteError(
            f"{context}: {self}", reason=self.reason, status_code=self.status_code, fault_code=self.fault_code
        )
