"""
Identifiers for existing shipments: void targets and label recovery lookups.
"""
import xml.etree.ElementTree as ET
from typing import ClassVar, List

from pydantic import Field, field_validator

from ups_shipping.models.base import UPSEntity, UpperStr, as_list, sub_element


class VoidShipment(UPSEntity):
    """Shipment plus the individual packages to void."""

    TAG: ClassVar[str] = "ExpandedVoidShipment"

    shipment_id: UpperStr = Field(alias="shipmentId")
    tracking_numbers: List[UpperStr] = Field(default_factory=list, alias="trackingNumbers")

    @field_validator("tracking_numbers", mode="before")
    @classmethod
    def coerce_tracking_numbers(cls, v):
        return as_list(v)

    def to_node(self) -> ET.Element:
        node = ET.Element(self.TAG)
        sub_element(node, "ShipmentIdentificationNumber", self.shipment_id)
        for tracking_number in self.tracking_numbers:
            sub_element(node, "TrackingNumber", tracking_number)
        return node


class ReferenceTracking(UPSEntity):
    """Label recovery by shipment reference number instead of tracking number."""

    TAG: ClassVar[str] = "ReferenceNumber"

    value: str
    shipper_number: str = Field(alias="shipperNumber")

    def to_node(self) -> ET.Element:
        node = ET.Element(self.TAG)
        sub_element(node, "Value", self.value)
        return node
