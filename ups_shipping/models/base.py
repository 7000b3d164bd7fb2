"""
Base entity for UPS XML request/response objects.

Entities are pydantic models:
- field aliases are the UPS tag names, so converted responses validate directly
- validate_assignment=True, so setters run the same normalization as construction
- to_node() renders the entity as an ElementTree element in UPS element order
"""
import xml.etree.ElementTree as ET
from abc import abstractmethod
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Annotated, Any, ClassVar, Dict, Iterable, Mapping, Optional

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, model_validator

# UPS MonetaryValue: max 15 characters, 2 decimal places
MONETARY_MAX_LENGTH = 15
_CENTS = Decimal("0.01")


def _trimmed(amount: Decimal) -> str:
    # length is measured without trailing zeros: 150.00 counts as "150"
    text = str(amount)
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def round_monetary(value: Any) -> Decimal:
    """Round to two decimal places and enforce the UPS length limit."""
    if isinstance(value, Decimal):
        amount = value
    else:
        try:
            amount = Decimal(str(value).strip())
        except (InvalidOperation, ValueError):
            raise ValueError(f"Invalid monetary value: {value!r}")

    if not amount.is_finite():
        raise ValueError(f"Invalid monetary value: {value!r}")

    try:
        amount = amount.quantize(_CENTS, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        raise ValueError("Value too long")

    if len(_trimmed(amount)) > MONETARY_MAX_LENGTH:
        raise ValueError("Value too long")

    return amount


def round_to(places: int):
    """Decimal rounding validator for weights and dimensions."""
    quantum = Decimal(1).scaleb(-places)

    def _round(value: Any) -> Decimal:
        try:
            amount = Decimal(str(value).strip())
        except (InvalidOperation, ValueError):
            raise ValueError(f"Invalid numeric value: {value!r}")
        if not amount.is_finite() or amount < 0:
            raise ValueError(f"Invalid numeric value: {value!r}")
        return amount.quantize(quantum, rounding=ROUND_HALF_UP)

    return BeforeValidator(_round)


def capped(length: int):
    """Truncate a string to a UPS field limit."""
    return AfterValidator(lambda v: v[:length] if v else v)


def _presence(value: Any) -> Any:
    # converted responses carry a present indicator as an empty string;
    # everything else goes through bool parsing
    if value is None:
        return False
    if isinstance(value, str) and not value.strip():
        return True
    return value


def as_list(value: Any) -> Any:
    """A single repeated element converts to a dict, not a list."""
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


MonetaryValue = Annotated[Decimal, BeforeValidator(round_monetary)]
Indicator = Annotated[bool, BeforeValidator(_presence)]
UpperStr = Annotated[str, AfterValidator(lambda v: v.strip().upper())]


def sub_element(parent: ET.Element, tag: str, text: Any = None) -> ET.Element:
    """Append a child element, with text when given."""
    node = ET.SubElement(parent, tag)
    if text is not None:
        node.text = str(text)
    return node


def add_optional(parent: ET.Element, tag: str, value: Any) -> Optional[ET.Element]:
    """Append a text child only when the value is set."""
    if value is None:
        return None
    return sub_element(parent, tag, value)


def add_indicator(parent: ET.Element, tag: str, flag: bool) -> Optional[ET.Element]:
    """Append an empty indicator element when the flag is set."""
    if not flag:
        return None
    return ET.SubElement(parent, tag)


def add_entity(parent: ET.Element, entity: Optional["UPSEntity"]) -> Optional[ET.Element]:
    """Append a rendered child entity when it is set."""
    if entity is None:
        return None
    node = entity.to_node()
    parent.append(node)
    return node


def add_entities(parent: ET.Element, entities: Iterable["UPSEntity"]) -> None:
    for entity in entities:
        parent.append(entity.to_node())


def code_node(parent: ET.Element, tag: str, code: Any, description: Optional[str] = None) -> ET.Element:
    """Render the common UPS {Code, Description?} container."""
    node = sub_element(parent, tag)
    sub_element(node, "Code", code)
    add_optional(node, "Description", description)
    return node


class UPSEntity(BaseModel):
    """Base class for every UPS XML entity."""

    model_config = ConfigDict(populate_by_name=True, validate_assignment=True, extra="ignore")

    TAG: ClassVar[str] = ""

    # Vendor container tag -> {child tag: field name}, flattened when
    # populating from a response
    NESTED: ClassVar[Dict[str, Dict[str, str]]] = {}

    @model_validator(mode="before")
    @classmethod
    def flatten_vendor_containers(cls, data: Any) -> Any:
        if not cls.NESTED or not isinstance(data, dict):
            return data

        data = dict(data)
        for container, mapping in cls.NESTED.items():
            nested = data.pop(container, None)
            if not isinstance(nested, dict):
                continue
            for tag, field_name in mapping.items():
                if tag in nested:
                    data.setdefault(field_name, nested[tag])
        return data

    @abstractmethod
    def to_node(self) -> ET.Element:
        """Render the entity in UPS element order."""
        pass

    @classmethod
    def from_response(cls, data: Optional[Mapping[str, Any]]):
        """Populate the entity from a converted UPS response mapping."""
        if hasattr(data, "to_dict"):
            data = data.to_dict()
        return cls.model_validate(dict(data or {}))

    def to_xml(self) -> str:
        return ET.tostring(self.to_node(), encoding="unicode")
