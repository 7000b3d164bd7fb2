"""
UPS XML shipping client: ShipConfirm, ShipAccept, Void and LabelRecovery.
"""
from ups_shipping.core.exceptions import (
    InvalidArgumentError,
    UPSBaseError,
    UPSResponseError,
    UPSTransportError,
    UPSUnknownError,
)
from ups_shipping.services.requests import REQ_NONVALIDATE, REQ_VALIDATE
from ups_shipping.services.response_formatter import ResponseDocument
from ups_shipping.services.shipping import Shipping, UPSCredentials
from ups_shipping.services.transport import HttpxTransport, Transport, TransportResponse

__version__ = "1.0.0"
