"""Abstract base transport for SoftLayer API communication."""

from __future__ import annotations

from abc import ABC, abstractmethod
from types import TracebackType
from typing import Any, Self


class BaseTransport(ABC):
    """Abstract base class for SoftLayer API transports.

    A transport invokes ``method`` on ``service`` (optionally bound to an
    object id) and returns the decoded result.
    """

    def __init__(self, endpoint_url: str, username: str, api_key: str):
        self.endpoint_url = endpoint_url.rstrip("/")
        self.username = username
        self.api_key = api_key

    @abstractmethod
    def connect(self) -> None:
        """Open an authenticated session."""

    @abstractmethod
    def disconnect(self) -> None:
        """Close the session."""

    @abstractmethod
    def is_connected(self) -> bool:
        """Check if transport is currently connected."""

    @abstractmethod
    def call(
        self,
        service: str,
        method: str,
        *args: Any,
        id: int | None = None,
        mask: str | None = None,
        filter: dict[str, Any] | None = None,
    ) -> Any:
        """Invoke ``service::method`` and return the decoded result."""

    def __enter__(self) -> Self:
        self.connect()
        return self

    def __exit__(
        self, exc_type: type[BaseException] | None, exc_val: BaseException | None, exc_tb: TracebackType | None
    ) -> None:
        self.disconnect()
