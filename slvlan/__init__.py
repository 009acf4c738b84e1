"""SoftLayer VLAN provisioning resource.

Orders, polls, reconciles and cancels SoftLayer network VLANs against a
declarative record, using the SoftLayer REST API.
"""

__version__ = "0.0.1"

import os
import sys
from typing import Any, Callable, Dict

from loguru import logger as glogger

glogger.disable(__name__)


def _loguru_skiplog_filter(record: dict) -> bool:  # type: ignore[type-arg]
    """Filter function to hide records with ``extra['skiplog']`` set."""
    return not record.get("extra", {}).get("skiplog", False)


def configure_logging(
    loguru_filter: Callable[[Dict[str, Any]], bool] = _loguru_skiplog_filter,
) -> None:
    """Configure a default ``loguru`` sink and enable logging for this package."""
    os.environ["LOGURU_LEVEL"] = os.getenv("LOGURU_LEVEL", "DEBUG")
    glogger.remove()
    logger_fmt: str = (
        "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | <cyan>{module}</cyan>::<cyan>{extra[classname]}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
    )
    glogger.add(sys.stderr, level=os.getenv("LOGURU_LEVEL"), format=logger_fmt, filter=loguru_filter)  # type: ignore[arg-type]
    glogger.configure(extra={"classname": "None", "skiplog": False})
    glogger.enable(__name__)


from slvlan.client import SoftLayerClient  # noqa: E402
from slvlan.config import SoftLayerCredentials, VlanSettings  # noqa: E402
from slvlan.exceptions import (  # noqa: E402
    AmbiguousStateError,
    AuthenticationError,
    NotFoundError,
    OrderTimeoutError,
    OrderWaitCancelled,
    RemoteError,
    SoftLayerVlanError,
    TransientRemoteError,
    ValidationError,
)
from slvlan.models import VlanRecord, VlanSubnet, VlanType  # noqa: E402
from slvlan.resource import VlanResource  # noqa: E402

__all__ = [
    "glogger",
    "configure_logging",
    "SoftLayerClient",
    "SoftLayerCredentials",
    "VlanSettings",
    "VlanResource",
    "VlanRecord",
    "VlanSubnet",
    "VlanType",
    "SoftLayerVlanError",
    "ValidationError",
    "NotFoundError",
    "AmbiguousStateError",
    "OrderTimeoutError",
    "OrderWaitCancelled",
    "AuthenticationError",
    "RemoteError",
    "TransientRemoteError",
]
