"""
Shipment entity for ShipConfirm requests.
"""
import xml.etree.ElementTree as ET
from typing import Annotated, ClassVar, List, Optional

from pydantic import Field, PositiveInt, field_validator

from ups_shipping.models.address import AlternateDeliveryAddress, Shipper, ShipFrom, ShipTo, SoldTo
from ups_shipping.models.base import (
    Indicator,
    UPSEntity,
    add_entities,
    add_entity,
    add_indicator,
    add_optional,
    as_list,
    capped,
)
from ups_shipping.models.charges import InvoiceLineTotal
from ups_shipping.models.codes import (
    RateInformation,
    ReferenceNumber,
    ReturnService,
    Service,
    ShipmentIndicationType,
)
from ups_shipping.models.package import Package
from ups_shipping.models.payment import PaymentInformation, parse_payment_information
from ups_shipping.models.service_options import ShipmentServiceOptions


class Shipment(UPSEntity):
    """
    A single shipment: parties, billing, service level and packages.

    Children are rendered in the order UPS requires; unset fields are
    omitted.
    """

    TAG: ClassVar[str] = "Shipment"

    shipper: Shipper = Field(alias="Shipper")
    ship_to: ShipTo = Field(alias="ShipTo")
    service: Service = Field(alias="Service")

    description: Optional[Annotated[str, capped(50)]] = Field(None, alias="Description")
    return_service: Optional[ReturnService] = Field(None, alias="ReturnService")
    documents_only: Indicator = Field(False, alias="DocumentsOnly")
    ship_from: Optional[ShipFrom] = Field(None, alias="ShipFrom")
    sold_to: Optional[SoldTo] = Field(None, alias="SoldTo")
    alternate_delivery_address: Optional[AlternateDeliveryAddress] = Field(
        None, alias="AlternateDeliveryAddress"
    )
    payment_information: Optional[PaymentInformation] = Field(None, alias="PaymentInformation")
    goods_not_in_free_circulation: Indicator = Field(False, alias="GoodsNotInFreeCirculationIndicator")
    movement_reference_number: Optional[str] = Field(None, alias="MovementReferenceNumber")
    invoice_line_total: Optional[InvoiceLineTotal] = Field(None, alias="InvoiceLineTotal")
    num_of_pieces: Optional[PositiveInt] = Field(None, alias="NumOfPiecesInShipment")
    rate_information: Optional[RateInformation] = Field(None, alias="RateInformation")
    packages: List[Package] = Field(default_factory=list, alias="Package")
    shipment_service_options: Optional[ShipmentServiceOptions] = Field(None, alias="ShipmentServiceOptions")
    reference_number: Optional[ReferenceNumber] = Field(None, alias="ReferenceNumber")
    shipment_indication_type: Optional[ShipmentIndicationType] = Field(None, alias="ShipmentIndicationType")

    @field_validator("payment_information", mode="before")
    @classmethod
    def coerce_payment_information(cls, v):
        return parse_payment_information(v)

    @field_validator("packages", mode="before")
    @classmethod
    def coerce_packages(cls, v):
        return as_list(v)

    def add_package(self, package: Package) -> "Shipment":
        self.packages = [*self.packages, package]
        return self

    def to_node(self) -> ET.Element:
        node = ET.Element(self.TAG)
        add_optional(node, "Description", self.description)
        add_entity(node, self.return_service)
        add_indicator(node, "DocumentsOnly", self.documents_only)
        add_entity(node, self.shipper)
        add_entity(node, self.ship_to)
        add_entity(node, self.ship_from)
        add_entity(node, self.sold_to)
        add_entity(node, self.alternate_delivery_address)
        add_entity(node, self.payment_information)
        add_indicator(node, "GoodsNotInFreeCirculationIndicator", self.goods_not_in_free_circulation)
        add_optional(node, "MovementReferenceNumber", self.movement_reference_number)
        add_entity(node, self.service)
        add_entity(node, self.invoice_line_total)
        add_optional(node, "NumOfPiecesInShipment", self.num_of_pieces)
        add_entity(node, self.rate_information)
        add_entities(node, self.packages)
        add_entity(node, self.shipment_service_options)
        add_entity(node, self.reference_number)
        add_entity(node, self.shipment_indication_type)
        return node
