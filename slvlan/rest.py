"""SoftLayer REST API transport."""

from __future__ import annotations

import json
from typing import Any

import requests
from loguru import logger

from slvlan.base.transport import BaseTransport
from slvlan.config import DEFAULT_ENDPOINT_URL, SoftLayerCredentials
from slvlan.exceptions import AuthenticationError, RemoteError

# Methods REST addresses by HTTP verb on the object URL instead of by name.
SPECIAL_METHODS = {
    "createObject": "POST",
    "createObjects": "POST",
    "editObject": "PUT",
    "editObjects": "PUT",
    "deleteObject": "DELETE",
}


class SoftLayerRESTTransport(BaseTransport):
    """HTTP REST transport using Basic Auth with the API username and key.

    Calls map to ``{endpoint}/{service}[/{id}]/{method}.json``. Methods with
    arguments are POSTed as ``{"parameters": [...]}``; ``SPECIAL_METHODS`` go to
    ``{service}[/{id}].json`` with their own HTTP verb instead. Object masks and
    filters travel as the ``objectMask`` / ``objectFilter`` query parameters.
    """

    def __init__(
        self,
        username: str,
        api_key: str,
        endpoint_url: str = DEFAULT_ENDPOINT_URL,
        timeout: float = 60.0,
    ):
        super().__init__(endpoint_url, username, api_key)
        self.timeout = timeout
        self._session: requests.Session | None = None

    @classmethod
    def from_credentials(cls, credentials: SoftLayerCredentials) -> SoftLayerRESTTransport:
        return cls(
            username=credentials.username,
            api_key=credentials.api_key,
            endpoint_url=credentials.endpoint_url,
            timeout=credentials.timeout,
        )

    def connect(self) -> None:
        """Open a session and verify the credentials with a cheap account lookup."""
        self._session = requests.Session()
        self._session.auth = (self.username, self.api_key)
        self._session.headers["Accept"] = "application/json"

        try:
            resp = self._session.get(
                f"{self.endpoint_url}/SoftLayer_Account/getCurrentUser.json",
                params={"objectMask": "mask[id]"},
                timeout=self.timeout,
            )
            resp.raise_for_status()
        except requests.RequestException as e:
            self._session.close()
            self._session = None
            raise AuthenticationError(f"SoftLayer authentication failed: {e}") from e

        logger.info(f"SoftLayer REST connected to {self.endpoint_url} as {self.username}")

    def disconnect(self) -> None:
        """Close the REST session."""
        if self._session:
            self._session.close()
            self._session = None

    def is_connected(self) -> bool:
        return self._session is not None

    def call(
        self,
        service: str,
        method: str,
        *args: Any,
        id: int | None = None,
        mask: str | None = None,
        filter: dict[str, Any] | None = None,
    ) -> Any:
        """Invoke ``service::method`` and return the decoded JSON result.

        Raises:
            RemoteError: On transport failure or an API fault, carrying the
                HTTP status and the SoftLayer fault code when available.
        """
        self._ensure_connected()
        assert self._session is not None

        url = self._build_url(service, method, id)
        params: dict[str, str] = {}
        if mask:
            params["objectMask"] = mask if mask.startswith("mask") else f"mask[{mask}]"
        if filter:
            params["objectFilter"] = json.dumps(filter)

        try:
            if method in SPECIAL_METHODS:
                resp = self._session.request(
                    SPECIAL_METHODS[method],
                    url,
                    params=params,
                    json={"parameters": list(args)} if args else None,
                    timeout=self.timeout,
                )
            elif args:
                resp = self._session.post(url, params=params, json={"parameters": list(args)}, timeout=self.timeout)
            else:
                resp = self._session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            raise RemoteError(f"{service}::{method} failed: {e}") from e

        if not resp.ok:
            raise self._fault_from_response(service, method, resp)

        if not resp.content:
            return None
        return resp.json()

    def _build_url(self, service: str, method: str, id: int | None) -> str:
        if method in SPECIAL_METHODS:
            if id is None:
                return f"{self.endpoint_url}/{service}.json"
            return f"{self.endpoint_url}/{service}/{id}.json"
        if id is None:
            return f"{self.endpoint_url}/{service}/{method}.json"
        return f"{self.endpoint_url}/{service}/{id}/{method}.json"

    @staticmethod
    def _fault_from_response(service: str, method: str, resp: requests.Response) -> RemoteError:
        message = resp.reason or "request failed"
        fault_code = None
        try:
            body = resp.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            message = body.get("error", message)
            fault_code = body.get("code")

        return RemoteError(
            f"{service}::{method} failed ({resp.status_code}): {message}",
            status_code=resp.status_code,
            fault_code=fault_code,
        )

    def _ensure_connected(self) -> None:
        if not self.is_connected():
            raise RemoteError("Not connected. Call connect() first.")
