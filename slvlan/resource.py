"""Lifecycle entry points of the SoftLayer VLAN resource."""

from __future__ import annotations

import threading
import time
from typing import Callable

from loguru import logger

from slvlan.client import SoftLayerClient
from slvlan.config import VlanSettings
from slvlan.exceptions import RemoteError, SoftLayerVlanError, TransientRemoteError, ValidationError
from slvlan.managers import VLAN_MASK
from slvlan.models.vlan import VlanRecord
from slvlan.order import build_vlan_order_with_fallback
from slvlan.poller import OrderPoller
from slvlan.reconciler import apply_remote_vlan

# Defaults on VlanRecord only serve records built from an id; ordering needs these set.
CREATE_REQUIRED_FIELDS = ("type", "subnet_size")


def parse_vlan_id(resource_id: str | int | None) -> int:
    """Turn a stored resource id back into the numeric VLAN id.

    Raises:
        ValidationError: If the id is not an integer.
    """
    try:
        return int(resource_id)  # type: ignore[arg-type]
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Not a valid vlan ID, must be an integer: {resource_id!r}") from e


class VlanResource:
    """Create, read, update, delete and existence check for one VLAN record.

    Usage::

        with SoftLayerClient.from_credentials(SoftLayerCredentials.from_env()) as client:
            resource = VlanResource(client)
            record = VlanRecord(datacenter="dal09", type=VlanType.PUBLIC, subnet_size=8, name="web")
            resource.create(record)
            print(record.resource_id, record.vlan_number)
    """

    def __init__(
        self,
        client: SoftLayerClient,
        settings: VlanSettings | None = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
        cancel_event: threading.Event | None = None,
    ):
        self._client = client
        self._settings = settings or VlanSettings()
        self._sleep = sleep
        self._poller = OrderPoller(client, self._settings, clock=clock, sleep=sleep, cancel_event=cancel_event)

    def create(self, record: VlanRecord) -> VlanRecord:
        """Order a VLAN for ``record``, wait for it, name it and read it back.

        ``type`` and ``subnet_size`` must be set explicitly on the record.
        """
        try:
            missing = [field for field in CREATE_REQUIRED_FIELDS if field not in record.model_fields_set]
            if missing:
                raise ValidationError(f"{', '.join(missing)} must be set")
            record.check_router_consistency()

            order = build_vlan_order_with_fallback(
                self._client,
                datacenter=record.datacenter,
                vlan_type=record.type,
                subnet_size=record.subnet_size,
                router_hostname=record.router_hostname,
            )
            logger.info(f"Creating {record.type.value} vlan in {record.datacenter}")
            vlan = self._poller.place_and_wait(order)
        except RemoteError as e:
            raise e.with_context("Error creating vlan") from e
        except SoftLayerVlanError as e:
            raise type(e)(f"Error creating vlan: {e}") from e

        assert vlan.id is not None
        if record.name:
            self._rename(vlan.id, record.name)

        record.id = vlan.id
        return self.read(record)

    def read(self, record: VlanRecord) -> VlanRecord:
        """Refresh every field of ``record`` from SoftLayer.

        Any API failure, a missing VLAN included, surfaces as RemoteError.
        """
        vlan_id = parse_vlan_id(record.id)
        try:
            vlan = self._client.network_vlan.get_vlan(vlan_id, mask=VLAN_MASK)
        except RemoteError as e:
            raise e.with_context(f"Error retrieving vlan {vlan_id}") from e
        return apply_remote_vlan(record, vlan)

    def update(self, desired: VlanRecord, current: VlanRecord) -> VlanRecord:
        """Apply a name change from ``current`` to ``desired`` and read back into ``desired``."""
        vlan_id = parse_vlan_id(current.id)
        desired.id = vlan_id
        if desired.name != current.name:
            self._rename(vlan_id, desired.name)
        return self.read(desired)

    def exists(self, record: VlanRecord) -> bool:
        """Check whether the VLAN behind ``record`` still exists.

        A 404 from SoftLayer means it does not; other errors surface.
        """
        vlan_id = parse_vlan_id(record.id)
        try:
            vlan = self._client.network_vlan.get_vlan(vlan_id, mask="id")
        except RemoteError as e:
            if e.status_code == 404:
                return False
            raise e.with_context(f"Error obtaining vlan {vlan_id}") from e
        return vlan.id == vlan_id

    def delete(self, record: VlanRecord) -> None:
        """Cancel the VLAN's billing item.

        SoftLayer-managed VLANs have no billing item; nothing is cancelled
        remotely and the caller just drops the record. Cancellation is retried
        while servers are still attached to the VLAN.
        """
        vlan_id = parse_vlan_id(record.id)
        try:
            billing_item = self._client.network_vlan.get_billing_item(vlan_id)
            if billing_item is None or billing_item.id is None:
                logger.info(f"Vlan {vlan_id} is managed by SoftLayer, removing it from tracking only")
                return
            self._cancel_with_retry(vlan_id, billing_item.id)
        except RemoteError as e:
            raise e.with_context(f"Error deleting vlan {vlan_id}") from e

        logger.info(f"Cancelled billing item {billing_item.id} of vlan {vlan_id}")

    def import_vlan(self, vlan_id: str | int) -> VlanRecord:
        """Adopt an existing VLAN by id and return its populated record."""
        record = VlanRecord(id=parse_vlan_id(vlan_id))
        return self.read(record)

    def _cancel_with_retry(self, vlan_id: int, billing_item_id: int) -> None:
        max_retries = self._settings.delete_max_retries
        tries = 0
        while True:
            try:
                self._client.billing.cancel_service(billing_item_id)
                return
            except TransientRemoteError as e:
                if e.reason != TransientRemoteError.VLAN_HAS_ATTACHED_SERVERS or tries >= max_retries:
                    raise
                tries += 1
                logger.debug(
                    f"Vlan {vlan_id} still has servers, retry {tries}/{max_retries} "
                    f"in {self._settings.delete_retry_wait:g}s"
                )
                self._sleep(self._settings.delete_retry_wait)

    def _rename(self, vlan_id: int, name: str) -> None:
        try:
            self._client.network_vlan.rename(vlan_id, name)
        except RemoteError as e:
            raise e.with_context(f"Error updating vlan {vlan_id}") from e
