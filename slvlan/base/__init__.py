"""Abstract base classes for the SoftLayer API client."""

from slvlan.base.transport import BaseTransport

__all__ = ["BaseTransport"]
