"""
Shipment-level service options: COD, notifications, international forms.
"""
import xml.etree.ElementTree as ET
from typing import Annotated, ClassVar, List, Optional

from pydantic import Field, field_validator

from ups_shipping.models.base import (
    Indicator,
    UPSEntity,
    UpperStr,
    add_entities,
    add_entity,
    add_indicator,
    add_optional,
    as_list,
    capped,
    sub_element,
)
from ups_shipping.models.charges import CODAmount, FreightCharges
from ups_shipping.models.codes import DeliveryConfirmation


class COD(UPSEntity):
    """Collect on delivery. CODFundsCode 0 = check, 8 = cashier's check or money order."""

    TAG: ClassVar[str] = "COD"

    cod_code: str = Field("3", alias="CODCode")
    cod_funds_code: str = Field(alias="CODFundsCode")
    cod_amount: CODAmount = Field(alias="CODAmount")

    def to_node(self) -> ET.Element:
        node = ET.Element(self.TAG)
        sub_element(node, "CODCode", self.cod_code)
        sub_element(node, "CODFundsCode", self.cod_funds_code)
        add_entity(node, self.cod_amount)
        return node


class Notification(UPSEntity):
    """Quantum View notification, e.g. code 6 = ship notification by e-mail."""

    TAG: ClassVar[str] = "Notification"
    NESTED: ClassVar = {
        "EMailMessage": {
            "EMailAddress": "email_addresses",
            "UndeliverableEMailAddress": "undeliverable_email_address",
            "Subject": "subject",
            "Memo": "memo",
        },
    }

    notification_code: str = Field(alias="NotificationCode")
    email_addresses: List[Annotated[str, capped(50)]] = Field(default_factory=list)
    undeliverable_email_address: Optional[Annotated[str, capped(50)]] = None
    subject: Optional[Annotated[str, capped(50)]] = None
    memo: Optional[Annotated[str, capped(150)]] = None

    @field_validator("email_addresses", mode="before")
    @classmethod
    def coerce_email_addresses(cls, v):
        return as_list(v)

    def to_node(self) -> ET.Element:
        node = ET.Element(self.TAG)
        sub_element(node, "NotificationCode", self.notification_code)

        if self.email_addresses:
            message = sub_element(node, "EMailMessage")
            for address in self.email_addresses:
                sub_element(message, "EMailAddress", address)
            add_optional(message, "UndeliverableEMailAddress", self.undeliverable_email_address)
            add_optional(message, "Subject", self.subject)
            add_optional(message, "Memo", self.memo)

        return node


class InternationalForms(UPSEntity):
    """Customs paperwork. FormType 01 = invoice, 03 = CO, 04 = NAFTA CO."""

    TAG: ClassVar[str] = "InternationalForms"

    form_types: List[str] = Field(alias="FormType")
    invoice_number: Optional[str] = Field(None, alias="InvoiceNumber")
    invoice_date: Optional[str] = Field(None, alias="InvoiceDate")
    purchase_order_number: Optional[str] = Field(None, alias="PurchaseOrderNumber")
    reason_for_export: Optional[UpperStr] = Field(None, alias="ReasonForExport")
    currency_code: Optional[UpperStr] = Field(None, alias="CurrencyCode")
    freight_charges: Optional[FreightCharges] = Field(None, alias="FreightCharges")
    comments: Optional[Annotated[str, capped(150)]] = Field(None, alias="Comments")

    @field_validator("form_types", mode="before")
    @classmethod
    def coerce_form_types(cls, v):
        return as_list(v)

    @field_validator("form_types")
    @classmethod
    def require_form_type(cls, v):
        if not v:
            raise ValueError("At least one FormType is required")
        return v

    @field_validator("invoice_date")
    @classmethod
    def validate_invoice_date(cls, v):
        # yyyyMMdd
        if v is not None and (len(v) != 8 or not v.isdigit()):
            raise ValueError("InvoiceDate must be formatted as yyyyMMdd")
        return v

    def to_node(self) -> ET.Element:
        node = ET.Element(self.TAG)
        for form_type in self.form_types:
            sub_element(node, "FormType", form_type)
        add_optional(node, "InvoiceNumber", self.invoice_number)
        add_optional(node, "InvoiceDate", self.invoice_date)
        add_optional(node, "PurchaseOrderNumber", self.purchase_order_number)
        add_optional(node, "ReasonForExport", self.reason_for_export)
        add_optional(node, "CurrencyCode", self.currency_code)
        add_entity(node, self.freight_charges)
        add_optional(node, "Comments", self.comments)
        return node


class ShipmentServiceOptions(UPSEntity):
    TAG: ClassVar[str] = "ShipmentServiceOptions"

    saturday_pickup: Indicator = Field(False, alias="SaturdayPickupIndicator")
    saturday_delivery: Indicator = Field(False, alias="SaturdayDeliveryIndicator")
    cod: Optional[COD] = Field(None, alias="COD")
    notifications: List[Notification] = Field(default_factory=list, alias="Notification")
    international_forms: Optional[InternationalForms] = Field(None, alias="InternationalForms")
    delivery_confirmation: Optional[DeliveryConfirmation] = Field(None, alias="DeliveryConfirmation")
    carbon_neutral: Indicator = Field(False, alias="UPScarbonneutralIndicator")

    @field_validator("notifications", mode="before")
    @classmethod
    def coerce_notifications(cls, v):
        return as_list(v)

    def to_node(self) -> ET.Element:
        node = ET.Element(self.TAG)
        add_indicator(node, "SaturdayPickupIndicator", self.saturday_pickup)
        add_indicator(node, "SaturdayDeliveryIndicator", self.saturday_delivery)
        add_entity(node, self.cod)
        add_entities(node, self.notifications)
        add_entity(node, self.international_forms)
        add_entity(node, self.delivery_confirmation)
        add_indicator(node, "UPScarbonneutralIndicator", self.carbon_neutral)
        return node
