"""Submit VLAN orders and wait for the ordered VLAN to appear on the account."""

from __future__ import annotations

import threading
import time
from enum import Enum
from typing import Callable

from loguru import logger

from slvlan.client import SoftLayerClient
from slvlan.config import VlanSettings
from slvlan.exceptions import AmbiguousStateError, OrderTimeoutError, OrderWaitCancelled
from slvlan.models.order import VlanOrder
from slvlan.models.remote import NetworkVlan


class OrderState(str, Enum):
    PENDING = "pending"
    COMPLETE = "complete"


class OrderPoller:
    """Places a VLAN order and polls until exactly one VLAN carries its order id.

    Polling starts after ``settings.poll_delay``, repeats every
    ``settings.poll_interval`` and gives up after ``settings.poll_timeout``
    seconds in total. Setting ``cancel_event`` aborts the wait with
    :class:`OrderWaitCancelled`; the remote order is left untouched.
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
        self._clock = clock
        self._sleep = sleep
        self._cancel_event = cancel_event

    def submit(self, order: VlanOrder) -> int:
        """Place the order once and return its order id."""
        receipt = self._client.order.place_order(order)
        logger.info(f"Placed vlan order {receipt.order_id}")
        return receipt.order_id

    def refresh(self, order_id: int) -> tuple[OrderState, NetworkVlan | None]:
        """Look up the VLANs created by ``order_id`` once.

        Raises:
            AmbiguousStateError: If more than one VLAN matches the order.
        """
        vlans = self._client.account.get_vlans_by_order_id(order_id, mask="id")
        if len(vlans) == 1:
            return OrderState.COMPLETE, vlans[0]
        if not vlans:
            return OrderState.PENDING, None
        raise AmbiguousStateError(f"Expected one vlan for order {order_id}, found {len(vlans)}")

    def wait_for_vlan(self, order_id: int) -> NetworkVlan:
        """Block until the order's VLAN is visible and return it.

        Raises:
            AmbiguousStateError: If more than one VLAN matches the order.
            OrderTimeoutError: If no VLAN shows up within the timeout.
            OrderWaitCancelled: If the cancel event is set while waiting.
        """
        timeout = self._settings.poll_timeout
        deadline = self._clock() + timeout

        self._pause(min(self._settings.poll_delay, timeout))
        while True:
            state, vlan = self.refresh(order_id)
            if state == OrderState.COMPLETE and vlan is not None:
                logger.info(f"Order {order_id} completed with vlan {vlan.id}")
                return vlan

            remaining = deadline - self._clock()
            if remaining <= 0:
                raise OrderTimeoutError(f"Timed out after {timeout:g}s waiting for vlan of order {order_id}")

            logger.debug(f"Order {order_id} still {state.value}, {remaining:.0f}s left")
            self._pause(min(self._settings.poll_interval, remaining))

    def place_and_wait(self, order: VlanOrder) -> NetworkVlan:
        return self.wait_for_vlan(self.submit(order))

    def _pause(self, seconds: float) -> None:
        if self._cancel_event is None:
            self._sleep(seconds)
            return
        if self._cancel_event.wait(seconds):
            raise OrderWaitCancelled("Stopped waiting for vlan order")
