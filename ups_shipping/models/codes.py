"""
Small code-bearing entities shared across shipments and packages.
"""
import xml.etree.ElementTree as ET
from typing import Annotated, ClassVar, Optional

from pydantic import Field

from ups_shipping.models.base import (
    Indicator,
    UPSEntity,
    UpperStr,
    add_indicator,
    add_optional,
    capped,
    sub_element,
)


class CodeDescription(UPSEntity):
    """{Code, Description?} node rendered under the subclass TAG."""

    code: str = Field(alias="Code")
    description: Optional[str] = Field(None, alias="Description")

    def to_node(self) -> ET.Element:
        node = ET.Element(self.TAG)
        sub_element(node, "Code", self.code)
        add_optional(node, "Description", self.description)
        return node


class Service(CodeDescription):
    """UPS service level, e.g. 03 = Ground."""

    TAG: ClassVar[str] = "Service"


class ShipmentIndicationType(CodeDescription):
    """01 = Hold for Pickup at UPS Access Point, 02 = Access Point Delivery."""

    TAG: ClassVar[str] = "ShipmentIndicationType"


class PackagingType(CodeDescription):
    TAG: ClassVar[str] = "PackagingType"


class ReturnService(UPSEntity):
    TAG: ClassVar[str] = "ReturnService"

    code: str = Field(alias="Code")

    def to_node(self) -> ET.Element:
        node = ET.Element(self.TAG)
        sub_element(node, "Code", self.code)
        return node


class UnitOfMeasurement(UPSEntity):
    TAG: ClassVar[str] = "UnitOfMeasurement"

    code: UpperStr = Field(alias="Code")
    description: Optional[str] = Field(None, alias="Description")

    def to_node(self) -> ET.Element:
        node = ET.Element(self.TAG)
        sub_element(node, "Code", self.code)
        add_optional(node, "Description", self.description)
        return node


class DeliveryConfirmation(UPSEntity):
    """DCISType: 1 = confirmation, 2 = signature required, 3 = adult signature."""

    TAG: ClassVar[str] = "DeliveryConfirmation"

    dcis_type: str = Field(alias="DCISType")

    def to_node(self) -> ET.Element:
        node = ET.Element(self.TAG)
        sub_element(node, "DCISType", self.dcis_type)
        return node


class ReferenceNumber(UPSEntity):
    TAG: ClassVar[str] = "ReferenceNumber"

    value: Annotated[str, capped(35)] = Field(alias="Value")
    code: Optional[str] = Field(None, alias="Code")
    bar_code_indicator: Indicator = Field(False, alias="BarCodeIndicator")

    def to_node(self) -> ET.Element:
        node = ET.Element(self.TAG)
        add_indicator(node, "BarCodeIndicator", self.bar_code_indicator)
        add_optional(node, "Code", self.code)
        sub_element(node, "Value", self.value)
        return node


class RateInformation(UPSEntity):
    TAG: ClassVar[str] = "RateInformation"

    negotiated_rates_indicator: Indicator = Field(True, alias="NegotiatedRatesIndicator")

    def to_node(self) -> ET.Element:
        node = ET.Element(self.TAG)
        add_indicator(node, "NegotiatedRatesIndicator", self.negotiated_rates_indicator)
        return node
