"""
Pytest configuration and fixtures for the UPS shipping client tests.
"""
import os
import xml.etree.ElementTree as ET
from unittest.mock import MagicMock

import pytest

# Set test environment before importing package modules
os.environ["ENVIRONMENT"] = "development"
os.environ["UPS_ACCESS_KEY"] = "test-access-key"
os.environ["UPS_USER_ID"] = "test-user"
os.environ["UPS_PASSWORD"] = "test-password"
os.environ.pop("UPS_USE_INTEGRATION", None)
os.environ.pop("UPS_CUSTOMER_CONTEXT", None)

from ups_shipping.models import (  # noqa: E402
    Address,
    Dimensions,
    InternationalForms,
    InvoiceLineTotal,
    Notification,
    Package,
    PackageServiceOptions,
    PackageWeight,
    PackagingType,
    Prepaid,
    RateInformation,
    ReferenceNumber,
    Service,
    Shipment,
    ShipmentServiceOptions,
    Shipper,
    ShipFrom,
    ShipTo,
    SoldTo,
)
from ups_shipping.services.shipping import Shipping  # noqa: E402
from ups_shipping.services.transport import Transport, TransportResponse  # noqa: E402


CONFIRM_SUCCESS_XML = """<?xml version="1.0"?>
<ShipmentConfirmResponse>
    <Response>
        <TransactionReference><CustomerContext>order-1001</CustomerContext></TransactionReference>
        <ResponseStatusCode>1</ResponseStatusCode>
        <ResponseStatusDescription>Success</ResponseStatusDescription>
    </Response>
    <ShipmentCharges>
        <TotalCharges>
            <CurrencyCode>USD</CurrencyCode>
            <MonetaryValue>11.50</MonetaryValue>
        </TotalCharges>
    </ShipmentCharges>
    <BillingWeight>
        <UnitOfMeasurement><Code>LBS</Code></UnitOfMeasurement>
        <Weight>3.0</Weight>
    </BillingWeight>
    <ShipmentIdentificationNumber>1Z999AA10123456784</ShipmentIdentificationNumber>
    <ShipmentDigest>rO0ABXNyACpjb20udXBzLmVjaXMuY29yZS5zaGlwbWVudHMuU2hpcG1lbnREaWdlc3Q</ShipmentDigest>
</ShipmentConfirmResponse>
"""

ACCEPT_SUCCESS_XML = """<?xml version="1.0"?>
<ShipmentAcceptResponse>
    <Response>
        <ResponseStatusCode>1</ResponseStatusCode>
        <ResponseStatusDescription>Success</ResponseStatusDescription>
    </Response>
    <ShipmentResults>
        <ShipmentIdentificationNumber>1Z999AA10123456784</ShipmentIdentificationNumber>
        <PackageResults>
            <TrackingNumber>1Z999AA10123456784</TrackingNumber>
            <LabelImage>
                <LabelImageFormat><Code>GIF</Code></LabelImageFormat>
                <GraphicImage>R0lGODlhAQABAIAAAAAAAP///yH5BAEAAAAALAAAAAABAAEAAAIBRAA7</GraphicImage>
            </LabelImage>
        </PackageResults>
        <PackageResults>
            <TrackingNumber>1Z999AA10123456795</TrackingNumber>
            <LabelImage>
                <LabelImageFormat><Code>GIF</Code></LabelImageFormat>
                <GraphicImage>R0lGODlhAQABAIAAAAAAAP///yH5BAEAAAAALAAAAAABAAEAAAIBRAA7</GraphicImage>
            </LabelImage>
        </PackageResults>
    </ShipmentResults>
</ShipmentAcceptResponse>
"""

VOID_SUCCESS_XML = """<?xml version="1.0"?>
<VoidShipmentResponse>
    <Response>
        <ResponseStatusCode>1</ResponseStatusCode>
        <ResponseStatusDescription>Success</ResponseStatusDescription>
    </Response>
    <Status>
        <StatusType><Code>1</Code><Description>Success</Description></StatusType>
        <StatusCode><Code>1</Code><Description>Success</Description></StatusCode>
    </Status>
</VoidShipmentResponse>
"""

RECOVERY_SUCCESS_XML = """<?xml version="1.0"?>
<LabelRecoveryResponse>
    <Response>
        <ResponseStatusCode>1</ResponseStatusCode>
    </Response>
    <ShipperNumber>A1B2C3</ShipperNumber>
    <LabelResults>
        <TrackingNumber>1Z999AA10123456784</TrackingNumber>
        <LabelImage>
            <LabelImageFormat><Code>GIF</Code></LabelImageFormat>
            <GraphicImage>R0lGODlhAQABAIAAAAAAAP</GraphicImage>
        </LabelImage>
    </LabelResults>
</LabelRecoveryResponse>
"""

FAILURE_XML = """<?xml version="1.0"?>
<ShipmentConfirmResponse>
    <Response>
        <ResponseStatusCode>0</ResponseStatusCode>
        <ResponseStatusDescription>Failure</ResponseStatusDescription>
        <Error>
            <ErrorSeverity>Hard</ErrorSeverity>
            <ErrorCode>120802</ErrorCode>
            <ErrorDescription>Address Validation Error on ShipTo address</ErrorDescription>
        </Error>
    </Response>
</ShipmentConfirmResponse>
"""


def make_response(xml_text, status_code=200):
    """Build a TransportResponse the way HttpxTransport would."""
    root = ET.fromstring(xml_text.encode("utf-8")) if xml_text else None
    return TransportResponse(status_code=status_code, body=xml_text or "", xml=root)


def tree_shape(element):
    """(tag, [child shapes]) for order-sensitive tree comparison."""
    return (element.tag, [tree_shape(child) for child in element])


def child_tags(element):
    return [child.tag for child in element]


@pytest.fixture
def minimal_shipment() -> Shipment:
    """Shipper name/number, ship-to company, one package, a service code."""
    return Shipment(
        shipper=Shipper(name="Acme Supply", shipper_number="A1B2C3"),
        ship_to=ShipTo(company_name="Jane Reader"),
        service=Service(code="03"),
        packages=[
            Package(
                packaging_type=PackagingType(code="02"),
                package_weight=PackageWeight(weight="2.25"),
            )
        ],
    )


@pytest.fixture
def sample_address() -> Address:
    return Address(
        address_line1="123 Main Street",
        city="Timonium",
        state_province_code="MD",
        postal_code="21093",
        country_code="us",
    )


@pytest.fixture
def full_shipment(sample_address) -> Shipment:
    """Shipment with every top-level section populated."""
    return Shipment(
        description="Printed catalogs",
        shipper=Shipper(
            name="Acme Supply",
            shipper_number="A1B2C3",
            attention_name="Shipping Desk",
            phone_number="4105550100",
            address=sample_address,
        ),
        ship_to=ShipTo(
            company_name="Jane Reader",
            attention_name="Jane Reader",
            address=Address(
                address_line1="1 Elm Street",
                city="Springfield",
                state_province_code="IL",
                postal_code="62701",
                country_code="US",
                residential=True,
            ),
        ),
        ship_from=ShipFrom(company_name="Acme Supply Warehouse", address=sample_address),
        sold_to=SoldTo(company_name="Jane Reader", option="01"),
        payment_information=Prepaid(bill_shipper={"account_number": "A1B2C3"}),
        service=Service(code="03", description="Ground"),
        invoice_line_total=InvoiceLineTotal(currency_code="usd", monetary_value="150"),
        num_of_pieces=1,
        rate_information=RateInformation(),
        packages=[
            Package(
                description="CGC slab",
                packaging_type=PackagingType(code="02"),
                dimensions=Dimensions(length=12, width=9, height=2),
                package_weight=PackageWeight(weight=2, unit_of_measurement={"code": "lbs"}),
                reference_numbers=[ReferenceNumber(value="ORDER-1001")],
                package_service_options=PackageServiceOptions(
                    declared_value={"currency_code": "USD", "monetary_value": "150.00"},
                ),
            )
        ],
        shipment_service_options=ShipmentServiceOptions(
            notifications=[Notification(notification_code="6", email_addresses=["jane@example.com"])],
            international_forms=InternationalForms(form_types=["01"], currency_code="USD"),
        ),
        reference_number=ReferenceNumber(value="ORDER-1001"),
    )


@pytest.fixture
def mock_transport() -> MagicMock:
    """Transport double returning a successful confirm response."""
    transport = MagicMock(spec=Transport)
    transport.request.return_value = make_response(CONFIRM_SUCCESS_XML)
    return transport


@pytest.fixture
def shipping(mock_transport) -> Shipping:
    """Shipping client on the integration environment with a mock transport."""
    return Shipping(
        access_key="test-access-key",
        user_id="test-user",
        password="test-password",
        use_integration=True,
        transport=mock_transport,
    )
