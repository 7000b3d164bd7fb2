"""
UPS XML request documents

Builds the AccessRequest credentials document and the four shipping request
documents (ShipConfirm, ShipAccept, Void, LabelRecovery). Every request
document opens with a <Request> section:

    <Request>
        <TransactionReference><CustomerContext/></TransactionReference>
        <RequestAction/>
        <RequestOption/>     (confirm only)
    </Request>

Argument checks raise InvalidArgumentError before anything is sent.
"""
import xml.etree.ElementTree as ET
from typing import Any, Mapping, Optional, Union

from pydantic import ValidationError

from ups_shipping.core.exceptions import InvalidArgumentError
from ups_shipping.models.base import add_entity, add_optional, sub_element
from ups_shipping.models.label import (
    LabelDelivery,
    LabelRecoverySpecification,
    LabelSpecification,
    ReceiptSpecification,
    Translate,
)
from ups_shipping.models.shipment import Shipment
from ups_shipping.models.tracking import ReferenceTracking, VoidShipment

REQ_VALIDATE = "validate"
REQ_NONVALIDATE = "nonvalidate"
VALIDATION_MODES = (REQ_VALIDATE, REQ_NONVALIDATE)

ACTION_SHIP_CONFIRM = "ShipConfirm"
ACTION_SHIP_ACCEPT = "ShipAccept"
ACTION_VOID = "1"
ACTION_LABEL_RECOVERY = "LabelRecovery"

XML_DECLARATION = '<?xml version="1.0"?>\n'


def to_xml_string(node: ET.Element) -> str:
    """Serialize a document with an XML declaration."""
    ET.indent(node)
    return XML_DECLARATION + ET.tostring(node, encoding="unicode")


def build_access_request(access_key: str, user_id: str, password: str) -> ET.Element:
    node = ET.Element("AccessRequest", {"xml:lang": "en-US"})
    sub_element(node, "AccessLicenseNumber", access_key)
    sub_element(node, "UserId", user_id)
    sub_element(node, "Password", password)
    return node


def build_transaction_reference(customer_context: Optional[str] = None) -> ET.Element:
    node = ET.Element("TransactionReference")
    if customer_context:
        sub_element(node, "CustomerContext", customer_context)
    return node


def add_request_section(
    document: ET.Element,
    action: str,
    option: Optional[str] = None,
    customer_context: Optional[str] = None,
) -> ET.Element:
    request = sub_element(document, "Request")
    request.append(build_transaction_reference(customer_context))
    sub_element(request, "RequestAction", action)
    add_optional(request, "RequestOption", option)
    return request


# ==================== Argument normalization ====================

def _pick(data: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if data.get(key) is not None:
            return data[key]
    return None


def _coerce(model, value: Any, argument: str):
    """Accept a model instance or a plain mapping of its fields."""
    if value is None or isinstance(value, model):
        return value
    if not isinstance(value, Mapping):
        raise InvalidArgumentError(
            f"{argument} must be a {model.__name__} or a mapping, got {type(value).__name__}",
            argument=argument,
        )
    try:
        return model.model_validate(dict(value))
    except ValidationError as e:
        raise InvalidArgumentError(f"Invalid {argument}: {e}", argument=argument) from e


def normalize_validation(validation: Optional[str]) -> str:
    if validation is None:
        return REQ_NONVALIDATE
    if validation not in VALIDATION_MODES:
        raise InvalidArgumentError(
            f"validation must be one of {VALIDATION_MODES}, got {validation!r}",
            argument="validation",
        )
    return validation


def normalize_void_target(shipment_data: Union[str, Mapping[str, Any], VoidShipment]) -> Union[str, VoidShipment]:
    if isinstance(shipment_data, VoidShipment):
        return shipment_data
    if isinstance(shipment_data, str):
        if not shipment_data.strip():
            raise InvalidArgumentError("shipment_data must not be empty", argument="shipment_data")
        return shipment_data.strip().upper()
    if not isinstance(shipment_data, Mapping):
        raise InvalidArgumentError(
            "shipment_data must be a shipment identification number or a mapping",
            argument="shipment_data",
        )

    shipment_id = _pick(shipment_data, "shipmentId", "shipment_id")
    if shipment_id is None:
        raise InvalidArgumentError(
            "shipment_data is required to contain a key `shipmentId`",
            argument="shipmentId",
        )

    return _coerce(
        VoidShipment,
        {
            "shipment_id": str(shipment_id),
            "tracking_numbers": _pick(shipment_data, "trackingNumbers", "tracking_numbers"),
        },
        "shipment_data",
    )


def normalize_tracking_data(
    tracking_data: Union[str, Mapping[str, Any], ReferenceTracking]
) -> Union[str, ReferenceTracking]:
    if isinstance(tracking_data, ReferenceTracking):
        return tracking_data
    if isinstance(tracking_data, str):
        if not tracking_data.strip():
            raise InvalidArgumentError("tracking_data must not be empty", argument="tracking_data")
        return tracking_data.strip()
    if not isinstance(tracking_data, Mapping):
        raise InvalidArgumentError(
            "tracking_data must be a tracking number or a mapping",
            argument="tracking_data",
        )

    value = _pick(tracking_data, "value")
    if value is None:
        raise InvalidArgumentError("tracking_data is required to contain `value`", argument="value")

    shipper_number = _pick(tracking_data, "shipperNumber", "shipper_number")
    if shipper_number is None:
        raise InvalidArgumentError(
            "tracking_data is required to contain `shipperNumber`",
            argument="shipperNumber",
        )

    return ReferenceTracking(value=str(value), shipper_number=str(shipper_number))


# ==================== Documents ====================

def build_confirm_request(
    validation: Optional[str],
    shipment: Shipment,
    label_spec: Optional[LabelSpecification] = None,
    receipt_spec: Optional[ReceiptSpecification] = None,
    customer_context: Optional[str] = None,
) -> ET.Element:
    """
    ShipmentConfirmRequest: Request, Shipment, then the optional label and
    receipt specifications.
    """
    option = normalize_validation(validation)
    shipment = _coerce(Shipment, shipment, "shipment")
    if shipment is None:
        raise InvalidArgumentError("shipment is required", argument="shipment")
    label_spec = _coerce(LabelSpecification, label_spec, "label_spec")
    receipt_spec = _coerce(ReceiptSpecification, receipt_spec, "receipt_spec")

    document = ET.Element("ShipmentConfirmRequest")
    add_request_section(document, ACTION_SHIP_CONFIRM, option, customer_context)
    add_entity(document, shipment)
    add_entity(document, label_spec)
    add_entity(document, receipt_spec)
    return document


def build_accept_request(shipment_digest: str, customer_context: Optional[str] = None) -> ET.Element:
    if not shipment_digest or not str(shipment_digest).strip():
        raise InvalidArgumentError("shipment_digest is required", argument="shipment_digest")

    document = ET.Element("ShipmentAcceptRequest")
    add_request_section(document, ACTION_SHIP_ACCEPT, customer_context=customer_context)
    sub_element(document, "ShipmentDigest", str(shipment_digest).strip())
    return document


def build_void_request(
    shipment_data: Union[str, Mapping[str, Any], VoidShipment],
    customer_context: Optional[str] = None,
) -> ET.Element:
    """
    VoidShipmentRequest for a whole shipment (identification number) or for
    selected packages (ExpandedVoidShipment).
    """
    target = normalize_void_target(shipment_data)

    document = ET.Element("VoidShipmentRequest")
    add_request_section(document, ACTION_VOID, customer_context=customer_context)

    if isinstance(target, str):
        sub_element(document, "ShipmentIdentificationNumber", target)
    else:
        add_entity(document, target)

    return document


def build_label_recovery_request(
    tracking_data: Union[str, Mapping[str, Any], ReferenceTracking],
    label_specification: Optional[Union[LabelRecoverySpecification, Mapping[str, Any]]] = None,
    label_delivery: Optional[Union[LabelDelivery, Mapping[str, Any]]] = None,
    translate: Optional[Union[Translate, Mapping[str, Any]]] = None,
    customer_context: Optional[str] = None,
) -> ET.Element:
    """
    LabelRecoveryRequest by tracking number, or by reference number plus
    shipper number.

    Empty option mappings are treated as not given. A translation request
    without language or dialect defaults to eng / US.
    """
    target = normalize_tracking_data(tracking_data)
    label_specification = _coerce(LabelRecoverySpecification, label_specification or None, "label_specification")
    translate = _coerce(Translate, translate or None, "translate")
    label_delivery = _coerce(LabelDelivery, label_delivery or None, "label_delivery")

    document = ET.Element("LabelRecoveryRequest")
    add_request_section(document, ACTION_LABEL_RECOVERY, customer_context=customer_context)
    add_entity(document, label_specification)
    add_entity(document, translate)
    add_entity(document, label_delivery)

    if isinstance(target, str):
        sub_element(document, "TrackingNumber", target)
    else:
        add_entity(document, target)
        sub_element(document, "ShipperNumber", target.shipper_number)

    return document
