"""
Address and party entities: Address, Shipper, ShipTo, ShipFrom, SoldTo,
AlternateDeliveryAddress.
"""
import xml.etree.ElementTree as ET
from typing import Annotated, Any, ClassVar, Optional

from pydantic import Field, model_validator

from ups_shipping.models.base import (
    Indicator,
    UPSEntity,
    UpperStr,
    add_entity,
    add_indicator,
    add_optional,
    capped,
    sub_element,
)

# UPS field limits
Name = Annotated[str, capped(35)]
AddressLine = Annotated[str, capped(35)]
City = Annotated[str, capped(30)]
Phone = Annotated[str, capped(15)]
Email = Annotated[str, capped(50)]


class Address(UPSEntity):
    """Standard <Address> node shared by every party."""

    TAG: ClassVar[str] = "Address"

    address_line1: Optional[AddressLine] = Field(None, alias="AddressLine1")
    address_line2: Optional[AddressLine] = Field(None, alias="AddressLine2")
    address_line3: Optional[AddressLine] = Field(None, alias="AddressLine3")
    city: Optional[City] = Field(None, alias="City")
    state_province_code: Optional[str] = Field(None, alias="StateProvinceCode")
    postal_code: Optional[str] = Field(None, alias="PostalCode")
    country_code: Optional[UpperStr] = Field(None, alias="CountryCode")
    residential: Indicator = Field(False, alias="ResidentialAddress")

    def to_node(self) -> ET.Element:
        node = ET.Element(self.TAG)
        add_optional(node, "AddressLine1", self.address_line1)
        add_optional(node, "AddressLine2", self.address_line2)
        add_optional(node, "AddressLine3", self.address_line3)
        add_optional(node, "City", self.city)
        add_optional(node, "StateProvinceCode", self.state_province_code)
        add_optional(node, "PostalCode", self.postal_code)
        add_optional(node, "CountryCode", self.country_code)
        add_indicator(node, "ResidentialAddress", self.residential)
        return node


class Shipper(UPSEntity):
    """The account holder shipping the package."""

    TAG: ClassVar[str] = "Shipper"

    name: Name = Field(alias="Name")
    shipper_number: str = Field(alias="ShipperNumber")
    attention_name: Optional[Name] = Field(None, alias="AttentionName")
    company_displayable_name: Optional[Name] = Field(None, alias="CompanyDisplayableName")
    tax_identification_number: Optional[str] = Field(None, alias="TaxIdentificationNumber")
    phone_number: Optional[Phone] = Field(None, alias="PhoneNumber")
    fax_number: Optional[Phone] = Field(None, alias="FaxNumber")
    email_address: Optional[Email] = Field(None, alias="EMailAddress")
    address: Optional[Address] = Field(None, alias="Address")

    def to_node(self) -> ET.Element:
        node = ET.Element(self.TAG)
        sub_element(node, "Name", self.name)
        add_optional(node, "AttentionName", self.attention_name)
        add_optional(node, "CompanyDisplayableName", self.company_displayable_name)
        sub_element(node, "ShipperNumber", self.shipper_number)
        add_optional(node, "TaxIdentificationNumber", self.tax_identification_number)
        add_optional(node, "PhoneNumber", self.phone_number)
        add_optional(node, "FaxNumber", self.fax_number)
        add_optional(node, "EMailAddress", self.email_address)
        add_entity(node, self.address)
        return node


class ShipTo(UPSEntity):
    """Consignee. LocationID is rendered inside the address node."""

    TAG: ClassVar[str] = "ShipTo"

    company_name: Name = Field(alias="CompanyName")
    attention_name: Optional[Name] = Field(None, alias="AttentionName")
    phone_number: Optional[Phone] = Field(None, alias="PhoneNumber")
    fax_number: Optional[Phone] = Field(None, alias="FaxNumber")
    email_address: Optional[Email] = Field(None, alias="EMailAddress")
    address: Optional[Address] = Field(None, alias="Address")
    location_id: Optional[UpperStr] = Field(None, alias="LocationID")

    @model_validator(mode="before")
    @classmethod
    def lift_location_id(cls, data: Any) -> Any:
        if isinstance(data, dict) and isinstance(data.get("Address"), dict) and "LocationID" in data["Address"]:
            data = dict(data)
            data.setdefault("LocationID", data["Address"]["LocationID"])
        return data

    def to_node(self) -> ET.Element:
        node = ET.Element(self.TAG)
        sub_element(node, "CompanyName", self.company_name)
        add_optional(node, "AttentionName", self.attention_name)
        add_optional(node, "PhoneNumber", self.phone_number)
        add_optional(node, "FaxNumber", self.fax_number)
        add_optional(node, "EMailAddress", self.email_address)

        if self.address is not None or self.location_id is not None:
            address_node = self.address.to_node() if self.address is not None else ET.Element("Address")
            add_optional(address_node, "LocationID", self.location_id)
            node.append(address_node)

        return node


class ShipFrom(UPSEntity):
    TAG: ClassVar[str] = "ShipFrom"

    company_name: Name = Field(alias="CompanyName")
    attention_name: Optional[Name] = Field(None, alias="AttentionName")
    phone_number: Optional[Phone] = Field(None, alias="PhoneNumber")
    fax_number: Optional[Phone] = Field(None, alias="FaxNumber")
    address: Optional[Address] = Field(None, alias="Address")

    def to_node(self) -> ET.Element:
        node = ET.Element(self.TAG)
        sub_element(node, "CompanyName", self.company_name)
        add_optional(node, "AttentionName", self.attention_name)
        add_optional(node, "PhoneNumber", self.phone_number)
        add_optional(node, "FaxNumber", self.fax_number)
        add_entity(node, self.address)
        return node


class SoldTo(UPSEntity):
    """Purchaser, used for international forms."""

    TAG: ClassVar[str] = "SoldTo"

    company_name: Name = Field(alias="CompanyName")
    option: Optional[str] = Field(None, alias="Option")
    attention_name: Optional[Name] = Field(None, alias="AttentionName")
    phone_number: Optional[Phone] = Field(None, alias="PhoneNumber")
    fax_number: Optional[Phone] = Field(None, alias="FaxNumber")
    address: Optional[Address] = Field(None, alias="Address")

    def to_node(self) -> ET.Element:
        node = ET.Element(self.TAG)
        add_optional(node, "Option", self.option)
        sub_element(node, "CompanyName", self.company_name)
        add_optional(node, "AttentionName", self.attention_name)
        add_optional(node, "PhoneNumber", self.phone_number)
        add_optional(node, "FaxNumber", self.fax_number)
        add_entity(node, self.address)
        return node


class AlternateDeliveryAddress(UPSEntity):
    """UPS Access Point delivery address."""

    TAG: ClassVar[str] = "AlternateDeliveryAddress"

    name: Optional[Name] = Field(None, alias="Name")
    attention_name: Optional[Name] = Field(None, alias="AttentionName")
    ups_access_point_id: Optional[UpperStr] = Field(None, alias="UPSAccessPointID")
    address: Optional[Address] = Field(None, alias="Address")

    def to_node(self) -> ET.Element:
        node = ET.Element(self.TAG)
        add_optional(node, "Name", self.name)
        add_optional(node, "AttentionName", self.attention_name)
        add_optional(node, "UPSAccessPointID", self.ups_access_point_id)
        add_entity(node, self.address)
        return node
