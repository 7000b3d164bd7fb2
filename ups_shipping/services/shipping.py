"""
UPS XML Shipping API facade

Implements the four shipping operations of the UPS XML API:
- ShipConfirm (validate a shipment, receive a shipment digest)
- ShipAccept (accept the digest, receive labels and tracking numbers)
- Void (cancel a shipment or selected packages)
- LabelRecovery (re-fetch a label by tracking or reference number)

Every call sends the AccessRequest credentials document followed by the
request document, checks Response/ResponseStatusCode, and either raises or
returns a ResponseDocument.
"""
import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

from ups_shipping.core.config import settings
from ups_shipping.core.exceptions import UPSResponseError, UPSUnknownError
from ups_shipping.core.sanitize import mask_secret
from ups_shipping.models.label import (
    LabelDelivery,
    LabelRecoverySpecification,
    LabelSpecification,
    ReceiptSpecification,
    Translate,
)
from ups_shipping.models.shipment import Shipment
from ups_shipping.models.tracking import ReferenceTracking, VoidShipment
from ups_shipping.services.requests import (
    build_accept_request,
    build_access_request,
    build_confirm_request,
    build_label_recovery_request,
    build_void_request,
    to_xml_string,
)
from ups_shipping.services.response_formatter import ResponseDocument, local_name
from ups_shipping.services.transport import HttpxTransport, Transport, TransportResponse

logger = logging.getLogger(__name__)

# API endpoints, relative to the base URL
SHIP_CONFIRM_PATH = "/ShipConfirm"
SHIP_ACCEPT_PATH = "/ShipAccept"
VOID_PATH = "/Void"
LABEL_RECOVERY_PATH = "/LabelRecovery"


@dataclass
class UPSCredentials:
    """UPS XML access credentials."""
    access_key: str
    user_id: str
    password: str
    use_integration: bool = False

    @property
    def base_url(self) -> str:
        return settings.get_base_url(self.use_integration)

    def __repr__(self) -> str:
        return (
            f"UPSCredentials(access_key={mask_secret(self.access_key)!r}, "
            f"user_id={self.user_id!r}, use_integration={self.use_integration})"
        )


def _child(element: Optional[ET.Element], name: str) -> Optional[ET.Element]:
    if element is None:
        return None
    for child in element:
        if local_name(child.tag) == name:
            return child
    return None


def _child_text(element: Optional[ET.Element], name: str) -> Optional[str]:
    child = _child(element, name)
    if child is None or child.text is None:
        return None
    return child.text.strip()


class Shipping:
    """
    UPS XML shipping client.

    Arguments left as None fall back to the UPS_* settings. The transport is
    injectable; by default an HttpxTransport is created on first use and
    closed by close().

    Usage:
        with Shipping() as ups:
            confirmed = ups.confirm(REQ_NONVALIDATE, shipment)
            results = ups.accept(confirmed["ShipmentDigest"])
    """

    def __init__(
        self,
        access_key: Optional[str] = None,
        user_id: Optional[str] = None,
        password: Optional[str] = None,
        use_integration: Optional[bool] = None,
        transport: Optional[Transport] = None,
        logger: Optional[logging.Logger] = None,
        customer_context: Optional[str] = None,
    ):
        self.credentials = UPSCredentials(
            access_key=access_key if access_key is not None else settings.UPS_ACCESS_KEY,
            user_id=user_id if user_id is not None else settings.UPS_USER_ID,
            password=password if password is not None else settings.UPS_PASSWORD,
            use_integration=use_integration if use_integration is not None else settings.UPS_USE_INTEGRATION,
        )
        self.customer_context = (
            customer_context if customer_context is not None else settings.UPS_CUSTOMER_CONTEXT
        ) or None
        self.logger = logger or logging.getLogger(__name__)
        self._transport = transport
        self._owns_transport = transport is None
        self.last_response: Optional[TransportResponse] = None

    @property
    def transport(self) -> Transport:
        """Get or create the transport."""
        if self._transport is None:
            self._transport = HttpxTransport()
        return self._transport

    def close(self) -> None:
        """Close the transport if this client created it."""
        if self._owns_transport and self._transport is not None:
            self._transport.close()
            self._transport = None

    def __enter__(self) -> "Shipping":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def compile_endpoint_url(self, path: str) -> str:
        return f"{self.credentials.base_url}{path}"

    def create_access(self) -> str:
        """Serialized AccessRequest document."""
        return to_xml_string(
            build_access_request(
                self.credentials.access_key,
                self.credentials.user_id,
                self.credentials.password,
            )
        )

    # ==================== Operations ====================

    def confirm(
        self,
        validation: Optional[str],
        shipment: Union[Shipment, Mapping[str, Any]],
        label_spec: Optional[Union[LabelSpecification, Mapping[str, Any]]] = None,
        receipt_spec: Optional[Union[ReceiptSpecification, Mapping[str, Any]]] = None,
    ) -> ResponseDocument:
        """
        Create a Shipment Confirm request (generate a digest).

        Args:
            validation: REQ_VALIDATE, REQ_NONVALIDATE, or None for nonvalidate
            shipment: Shipment to confirm
            label_spec: Optional label print options
            receipt_spec: Optional receipt image options

        Returns:
            The whole ShipmentConfirmResponse, including ShipmentDigest

        Raises:
            InvalidArgumentError: Bad validation mode or shipment data
            UPSResponseError: UPS reported a failure
            UPSUnknownError: No parseable response
        """
        document = build_confirm_request(
            validation, shipment, label_spec, receipt_spec, customer_context=self.customer_context
        )
        root = self._send(document, SHIP_CONFIRM_PATH)
        return ResponseDocument.from_element(root)

    def accept(self, shipment_digest: str) -> ResponseDocument:
        """
        Create a Shipment Accept request (generate a shipping label).

        Returns:
            The ShipmentResults subtree
        """
        document = build_accept_request(shipment_digest, customer_context=self.customer_context)
        root = self._send(document, SHIP_ACCEPT_PATH)
        return ResponseDocument.from_element(_child(root, "ShipmentResults"))

    def void(self, shipment_data: Union[str, Mapping[str, Any], VoidShipment]) -> ResponseDocument:
        """
        Void a shipment, or selected packages of it.

        Args:
            shipment_data: Shipment identification number, or a mapping
                {"shipmentId": ..., "trackingNumbers": [...]}

        Returns:
            The response without its Response status section
        """
        document = build_void_request(shipment_data, customer_context=self.customer_context)
        root = self._send(document, VOID_PATH)
        return ResponseDocument.from_element(root, exclude=("Response",))

    def recover_label(
        self,
        tracking_data: Union[str, Mapping[str, Any], ReferenceTracking],
        label_specification: Optional[Union[LabelRecoverySpecification, Mapping[str, Any]]] = None,
        label_delivery: Optional[Union[LabelDelivery, Mapping[str, Any]]] = None,
        translate: Optional[Union[Translate, Mapping[str, Any]]] = None,
    ) -> ResponseDocument:
        """
        Recover a shipping label.

        Args:
            tracking_data: Tracking number, or a mapping
                {"value": <reference number>, "shipperNumber": ...}
            label_specification: {"userAgent": ..., "imageFormat": "HTML|PDF"}
            label_delivery: {"link": True}
            translate: {"language": ..., "dialect": ...}, defaulting to eng / US

        Returns:
            The response without its Response status section
        """
        document = build_label_recovery_request(
            tracking_data,
            label_specification,
            label_delivery,
            translate,
            customer_context=self.customer_context,
        )
        root = self._send(document, LABEL_RECOVERY_PATH)
        return ResponseDocument.from_element(root, exclude=("Response",))

    # ==================== Internals ====================

    def _send(self, document: ET.Element, path: str) -> ET.Element:
        """Send a request document and return the checked response root."""
        url = self.compile_endpoint_url(path)
        self.logger.info(f"UPS {document.tag} -> {url}")

        self.last_response = self.transport.request(self.create_access(), to_xml_string(document), url)
        root = self.last_response.xml

        self._check_response(root, document.tag)
        return root

    def _check_response(self, root: Optional[ET.Element], action: str) -> None:
        if root is None:
            self.logger.error(f"UPS {action}: no parseable response")
            raise UPSUnknownError()

        response = _child(root, "Response")
        status = _child_text(response, "ResponseStatusCode")

        try:
            succeeded = int(status) != 0
        except (TypeError, ValueError):
            succeeded = False

        if succeeded:
            return

        error = _child(response, "Error")
        raw_code = _child_text(error, "ErrorCode")
        try:
            error_code = int(raw_code)
        except (TypeError, ValueError):
            error_code = 0

        severity = _child_text(error, "ErrorSeverity")
        description = _child_text(error, "ErrorDescription")

        self.logger.error(f"UPS {action} failed: {error_code} ({severity}) {description}")
        raise UPSResponseError(error_code, severity, description)
