"""
Shipment payment information.

UPS accepts exactly one billing arrangement per shipment. Each arrangement is
its own model, discriminated by ``method``:

    prepaid           Prepaid/BillShipper (account number or credit card)
    third_party       BillThirdParty/BillThirdPartyShipper
    freight_collect   FreightCollect/BillReceiver
    consignee_billed  ConsigneeBilled

Every variant renders wrapped in a <PaymentInformation> element. Response
mappings in the vendor shape (``{"Prepaid": {"BillShipper": ...}}``) are
recognized by ``parse_payment_information``.
"""
import xml.etree.ElementTree as ET
from abc import abstractmethod
from typing import Annotated, Any, ClassVar, Literal, Optional, Union

from pydantic import Field, model_validator

from ups_shipping.models.address import Address
from ups_shipping.models.base import UPSEntity, UpperStr, add_entity, add_optional, sub_element


class CreditCard(UPSEntity):
    """Card charged for a prepaid shipment. ExpirationDate is MMYYYY."""

    TAG: ClassVar[str] = "CreditCard"

    type: str = Field(alias="Type")
    number: str = Field(alias="Number")
    expiration_date: str = Field(alias="ExpirationDate")
    security_code: Optional[str] = Field(None, alias="SecurityCode")
    address: Optional[Address] = Field(None, alias="Address")

    def to_node(self) -> ET.Element:
        node = ET.Element(self.TAG)
        sub_element(node, "Type", self.type)
        sub_element(node, "Number", self.number)
        sub_element(node, "ExpirationDate", self.expiration_date)
        add_optional(node, "SecurityCode", self.security_code)
        add_entity(node, self.address)
        return node


class BillShipper(UPSEntity):
    TAG: ClassVar[str] = "BillShipper"

    account_number: Optional[str] = Field(None, alias="AccountNumber")
    credit_card: Optional[CreditCard] = Field(None, alias="CreditCard")

    @model_validator(mode="after")
    def require_single_source(self):
        if (self.account_number is None) == (self.credit_card is None):
            raise ValueError("BillShipper takes exactly one of AccountNumber or CreditCard")
        return self

    def to_node(self) -> ET.Element:
        node = ET.Element(self.TAG)
        if self.account_number is not None:
            sub_element(node, "AccountNumber", self.account_number)
        else:
            add_entity(node, self.credit_card)
        return node


class PaymentMethod(UPSEntity):
    """Base for the billing variants."""

    TAG: ClassVar[str] = "PaymentInformation"
    VARIANT_TAG: ClassVar[str] = ""

    @abstractmethod
    def method_node(self) -> ET.Element:
        """Render the variant element inside PaymentInformation."""
        pass

    @classmethod
    @abstractmethod
    def from_vendor(cls, data: Any) -> "PaymentMethod":
        """Build the variant from its vendor-shaped mapping."""
        pass

    def to_node(self) -> ET.Element:
        node = ET.Element(self.TAG)
        node.append(self.method_node())
        return node


class Prepaid(PaymentMethod):
    VARIANT_TAG: ClassVar[str] = "Prepaid"

    method: Literal["prepaid"] = "prepaid"
    bill_shipper: BillShipper = Field(alias="BillShipper")

    @classmethod
    def from_vendor(cls, data: Any) -> "Prepaid":
        return cls.model_validate(dict(data or {}))

    def method_node(self) -> ET.Element:
        node = ET.Element(self.VARIANT_TAG)
        add_entity(node, self.bill_shipper)
        return node


class BillThirdParty(PaymentMethod):
    VARIANT_TAG: ClassVar[str] = "BillThirdParty"

    method: Literal["third_party"] = "third_party"
    account_number: str = Field(alias="AccountNumber")
    country_code: UpperStr = Field(alias="CountryCode")
    postal_code: Optional[str] = Field(None, alias="PostalCode")

    @classmethod
    def from_vendor(cls, data: Any) -> "BillThirdParty":
        shipper = (data or {}).get("BillThirdPartyShipper") or {}
        address = (shipper.get("ThirdParty") or {}).get("Address") or {}
        return cls(
            account_number=shipper.get("AccountNumber"),
            country_code=address.get("CountryCode"),
            postal_code=address.get("PostalCode"),
        )

    def method_node(self) -> ET.Element:
        node = ET.Element(self.VARIANT_TAG)
        shipper = sub_element(node, "BillThirdPartyShipper")
        sub_element(shipper, "AccountNumber", self.account_number)
        address = sub_element(sub_element(shipper, "ThirdParty"), "Address")
        add_optional(address, "PostalCode", self.postal_code)
        sub_element(address, "CountryCode", self.country_code)
        return node


class FreightCollect(PaymentMethod):
    VARIANT_TAG: ClassVar[str] = "FreightCollect"

    method: Literal["freight_collect"] = "freight_collect"
    account_number: str = Field(alias="AccountNumber")
    postal_code: Optional[str] = Field(None, alias="PostalCode")

    @classmethod
    def from_vendor(cls, data: Any) -> "FreightCollect":
        receiver = (data or {}).get("BillReceiver") or {}
        address = receiver.get("Address") or {}
        return cls(account_number=receiver.get("AccountNumber"), postal_code=address.get("PostalCode"))

    def method_node(self) -> ET.Element:
        node = ET.Element(self.VARIANT_TAG)
        receiver = sub_element(node, "BillReceiver")
        sub_element(receiver, "AccountNumber", self.account_number)
        if self.postal_code is not None:
            sub_element(sub_element(receiver, "Address"), "PostalCode", self.postal_code)
        return node


class ConsigneeBilled(PaymentMethod):
    VARIANT_TAG: ClassVar[str] = "ConsigneeBilled"

    method: Literal["consignee_billed"] = "consignee_billed"

    @classmethod
    def from_vendor(cls, data: Any) -> "ConsigneeBilled":
        return cls()

    def method_node(self) -> ET.Element:
        return ET.Element(self.VARIANT_TAG)


PAYMENT_VARIANTS = (Prepaid, BillThirdParty, FreightCollect, ConsigneeBilled)

PaymentInformation = Annotated[
    Union[Prepaid, BillThirdParty, FreightCollect, ConsigneeBilled],
    Field(discriminator="method"),
]


def parse_payment_information(value: Any) -> Any:
    """Map a vendor-shaped PaymentInformation mapping onto its variant."""
    if not isinstance(value, dict) or "method" in value:
        return value

    for variant in PAYMENT_VARIANTS:
        if variant.VARIANT_TAG in value:
            return variant.from_vendor(value[variant.VARIANT_TAG])

    return value
