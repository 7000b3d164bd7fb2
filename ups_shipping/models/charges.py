"""
Monetary entities.

Every MonetaryValue is rounded to 2 decimal places and may not exceed
15 characters once rounded.
"""
import xml.etree.ElementTree as ET
from typing import ClassVar, Optional

from pydantic import Field

from ups_shipping.models.base import MonetaryValue, UPSEntity, UpperStr, add_optional, sub_element


class FreightCharges(UPSEntity):
    """Freight charges on international forms."""

    TAG: ClassVar[str] = "FreightCharges"

    monetary_value: MonetaryValue = Field(alias="MonetaryValue")

    def to_node(self) -> ET.Element:
        node = ET.Element(self.TAG)
        sub_element(node, "MonetaryValue", self.monetary_value)
        return node


class MonetaryAmount(UPSEntity):
    """{CurrencyCode?, MonetaryValue} container, rendered under the subclass TAG."""

    currency_code: Optional[UpperStr] = Field(None, alias="CurrencyCode")
    monetary_value: MonetaryValue = Field(alias="MonetaryValue")

    def to_node(self) -> ET.Element:
        node = ET.Element(self.TAG)
        add_optional(node, "CurrencyCode", self.currency_code)
        sub_element(node, "MonetaryValue", self.monetary_value)
        return node


class InvoiceLineTotal(MonetaryAmount):
    TAG: ClassVar[str] = "InvoiceLineTotal"


class DeclaredValue(MonetaryAmount):
    TAG: ClassVar[str] = "DeclaredValue"


class CODAmount(MonetaryAmount):
    TAG: ClassVar[str] = "CODAmount"
