"""
Label and receipt options for ShipConfirm and LabelRecovery requests.
"""
import xml.etree.ElementTree as ET
from typing import ClassVar, Optional

from pydantic import Field, PositiveInt

from ups_shipping.models.base import Indicator, UPSEntity, UpperStr, add_indicator, add_optional, code_node, sub_element

# Label print method codes
PRINT_METHOD_GIF = "GIF"
PRINT_METHOD_EPL = "EPL"
PRINT_METHOD_ZPL = "ZPL"
PRINT_METHOD_SPL = "SPL"
PRINT_METHOD_STARPL = "STARPL"

# Thermal stock, inches
DEFAULT_STOCK_HEIGHT = 6
DEFAULT_STOCK_WIDTH = 4


class LabelSpecification(UPSEntity):
    """
    ShipConfirm label options.

    GIF labels carry a LabelImageFormat; thermal labels (EPL, ZPL, SPL,
    STARPL) carry a LabelStockSize instead.
    """

    TAG: ClassVar[str] = "LabelSpecification"
    NESTED: ClassVar = {
        "LabelPrintMethod": {"Code": "print_method_code", "Description": "print_method_description"},
        "LabelImageFormat": {"Code": "image_format_code", "Description": "image_format_description"},
        "LabelStockSize": {"Height": "stock_size_height", "Width": "stock_size_width"},
        "Instruction": {"Code": "instruction_code", "Description": "instruction_description"},
    }

    print_method_code: UpperStr = PRINT_METHOD_GIF
    print_method_description: Optional[str] = None
    http_user_agent: Optional[str] = Field(None, alias="HTTPUserAgent")
    image_format_code: Optional[UpperStr] = None
    image_format_description: Optional[str] = None
    stock_size_height: PositiveInt = DEFAULT_STOCK_HEIGHT
    stock_size_width: PositiveInt = DEFAULT_STOCK_WIDTH
    instruction_code: Optional[str] = None
    instruction_description: Optional[str] = None

    @property
    def is_image(self) -> bool:
        return self.print_method_code == PRINT_METHOD_GIF

    def to_node(self) -> ET.Element:
        node = ET.Element(self.TAG)
        code_node(node, "LabelPrintMethod", self.print_method_code, self.print_method_description)
        add_optional(node, "HTTPUserAgent", self.http_user_agent)

        if self.is_image:
            code_node(
                node,
                "LabelImageFormat",
                self.image_format_code or self.print_method_code,
                self.image_format_description,
            )
        else:
            stock = sub_element(node, "LabelStockSize")
            sub_element(stock, "Height", self.stock_size_height)
            sub_element(stock, "Width", self.stock_size_width)

        if self.instruction_code:
            code_node(node, "Instruction", self.instruction_code, self.instruction_description)

        return node


class ReceiptSpecification(UPSEntity):
    """Receipt image options (HTML, PDF, EPL, ...)."""

    TAG: ClassVar[str] = "ReceiptSpecification"
    NESTED: ClassVar = {
        "ImageFormat": {"Code": "image_format_code", "Description": "image_format_description"},
    }

    image_format_code: UpperStr
    image_format_description: Optional[str] = None

    def to_node(self) -> ET.Element:
        node = ET.Element(self.TAG)
        code_node(node, "ImageFormat", self.image_format_code, self.image_format_description)
        return node


class LabelRecoverySpecification(UPSEntity):
    TAG: ClassVar[str] = "LabelSpecification"

    user_agent: Optional[str] = Field(None, alias="userAgent")
    image_format: Optional[UpperStr] = Field(None, alias="imageFormat")

    def to_node(self) -> ET.Element:
        node = ET.Element(self.TAG)
        add_optional(node, "HTTPUserAgent", self.user_agent)
        if self.image_format is not None:
            code_node(node, "LabelImageFormat", self.image_format)
        return node


class LabelDelivery(UPSEntity):
    """Ask UPS for a link to the recovered label."""

    TAG: ClassVar[str] = "LabelDelivery"

    link: Indicator = True

    def to_node(self) -> ET.Element:
        node = ET.Element(self.TAG)
        add_indicator(node, "LabelLinkIndicator", self.link)
        return node


class Translate(UPSEntity):
    """Language of the recovered label instructions. Code 01 = all content."""

    TAG: ClassVar[str] = "Translate"

    language: str = "eng"
    dialect: str = "US"
    code: str = "01"

    def to_node(self) -> ET.Element:
        node = ET.Element(self.TAG)
        sub_element(node, "LanguageCode", self.language)
        sub_element(node, "DialectCode", self.dialect)
        sub_element(node, "Code", self.code)
        return node
