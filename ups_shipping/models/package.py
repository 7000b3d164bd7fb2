"""
Package entities: Package, Dimensions, PackageWeight, PackageServiceOptions.
"""
import xml.etree.ElementTree as ET
from decimal import Decimal
from typing import Annotated, ClassVar, List, Optional

from pydantic import Field, field_validator

from ups_shipping.models.base import (
    Indicator,
    UPSEntity,
    add_entities,
    add_entity,
    add_indicator,
    add_optional,
    as_list,
    capped,
    round_to,
    sub_element,
)
from ups_shipping.models.charges import DeclaredValue
from ups_shipping.models.codes import (
    DeliveryConfirmation,
    PackagingType,
    ReferenceNumber,
    UnitOfMeasurement,
)

# UPS allows at most two reference numbers per package
MAX_PACKAGE_REFERENCES = 2

Weight = Annotated[Decimal, round_to(1)]
Length = Annotated[Decimal, round_to(2)]


class Dimensions(UPSEntity):
    TAG: ClassVar[str] = "Dimensions"

    length: Length = Field(alias="Length")
    width: Length = Field(alias="Width")
    height: Length = Field(alias="Height")
    unit_of_measurement: UnitOfMeasurement = Field(
        default_factory=lambda: UnitOfMeasurement(code="IN"), alias="UnitOfMeasurement"
    )

    def to_node(self) -> ET.Element:
        node = ET.Element(self.TAG)
        add_entity(node, self.unit_of_measurement)
        sub_element(node, "Length", self.length)
        sub_element(node, "Width", self.width)
        sub_element(node, "Height", self.height)
        return node


class PackageWeight(UPSEntity):
    TAG: ClassVar[str] = "PackageWeight"

    weight: Weight = Field(alias="Weight")
    unit_of_measurement: Optional[UnitOfMeasurement] = Field(None, alias="UnitOfMeasurement")

    def to_node(self) -> ET.Element:
        node = ET.Element(self.TAG)
        add_entity(node, self.unit_of_measurement)
        sub_element(node, "Weight", self.weight)
        return node


class PackageServiceOptions(UPSEntity):
    TAG: ClassVar[str] = "PackageServiceOptions"

    delivery_confirmation: Optional[DeliveryConfirmation] = Field(None, alias="DeliveryConfirmation")
    declared_value: Optional[DeclaredValue] = Field(None, alias="DeclaredValue")
    shipper_release: Indicator = Field(False, alias="ShipperReleaseIndicator")

    def to_node(self) -> ET.Element:
        node = ET.Element(self.TAG)
        add_entity(node, self.delivery_confirmation)
        add_entity(node, self.declared_value)
        add_indicator(node, "ShipperReleaseIndicator", self.shipper_release)
        return node


class Package(UPSEntity):
    TAG: ClassVar[str] = "Package"

    description: Optional[Annotated[str, capped(35)]] = Field(None, alias="Description")
    packaging_type: Optional[PackagingType] = Field(None, alias="PackagingType")
    dimensions: Optional[Dimensions] = Field(None, alias="Dimensions")
    package_weight: Optional[PackageWeight] = Field(None, alias="PackageWeight")
    large_package: Indicator = Field(False, alias="LargePackageIndicator")
    reference_numbers: List[ReferenceNumber] = Field(default_factory=list, alias="ReferenceNumber")
    additional_handling: Indicator = Field(False, alias="AdditionalHandling")
    package_service_options: Optional[PackageServiceOptions] = Field(None, alias="PackageServiceOptions")

    @field_validator("reference_numbers", mode="before")
    @classmethod
    def coerce_reference_numbers(cls, v):
        return as_list(v)

    @field_validator("reference_numbers")
    @classmethod
    def limit_reference_numbers(cls, v):
        if len(v) > MAX_PACKAGE_REFERENCES:
            raise ValueError(f"A package takes at most {MAX_PACKAGE_REFERENCES} reference numbers")
        return v

    def to_node(self) -> ET.Element:
        node = ET.Element(self.TAG)
        add_optional(node, "Description", self.description)
        add_entity(node, self.packaging_type)
        add_entity(node, self.dimensions)
        add_entity(node, self.package_weight)
        add_indicator(node, "LargePackageIndicator", self.large_package)
        add_entities(node, self.reference_numbers)
        add_indicator(node, "AdditionalHandling", self.additional_handling)
        add_entity(node, self.package_service_options)
        return node
