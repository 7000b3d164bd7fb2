"""
Tests for UPS request document builders.
"""
import pytest

from conftest import child_tags, tree_shape
from ups_shipping.core.exceptions import InvalidArgumentError
from ups_shipping.models import LabelDelivery, LabelSpecification, ReceiptSpecification, Translate, VoidShipment
from ups_shipping.services.requests import (
    REQ_NONVALIDATE,
    REQ_VALIDATE,
    build_accept_request,
    build_access_request,
    build_confirm_request,
    build_label_recovery_request,
    build_void_request,
    to_xml_string,
)


class TestAccessRequest:
    """Test the AccessRequest credentials document."""

    def test_children_and_language(self):
        """Test credentials order and xml:lang attribute."""
        node = build_access_request("KEY", "user", "secret")

        assert child_tags(node) == ["AccessLicenseNumber", "UserId", "Password"]
        assert node.findtext("Password") == "secret"
        assert 'xml:lang="en-US"' in to_xml_string(node)

    def test_serialized_with_declaration(self):
        """Test documents start with an XML declaration."""
        assert to_xml_string(build_access_request("KEY", "user", "secret")).startswith('<?xml version="1.0"?>')


class TestConfirmRequest:
    """Test ShipmentConfirmRequest construction."""

    def test_minimal_shipment_shape(self, minimal_shipment):
        """Test the document tree for a minimal shipment."""
        document = build_confirm_request(REQ_NONVALIDATE, minimal_shipment)

        assert tree_shape(document) == (
            "ShipmentConfirmRequest",
            [
                ("Request", [
                    ("TransactionReference", []),
                    ("RequestAction", []),
                    ("RequestOption", []),
                ]),
                ("Shipment", [
                    ("Shipper", [("Name", []), ("ShipperNumber", [])]),
                    ("ShipTo", [("CompanyName", [])]),
                    ("Service", [("Code", [])]),
                    ("Package", [
                        ("PackagingType", [("Code", [])]),
                        ("PackageWeight", [("Weight", [])]),
                    ]),
                ]),
            ],
        )
        assert document.findtext("Request/RequestAction") == "ShipConfirm"
        assert document.findtext("Request/RequestOption") == "nonvalidate"
        assert document.findtext("Shipment/Package/PackageWeight/Weight") == "2.3"

    def test_full_shipment_order(self, full_shipment):
        """Test Shipment children follow UPS order."""
        document = build_confirm_request(REQ_VALIDATE, full_shipment)

        assert child_tags(document.find("Shipment")) == [
            "Description",
            "Shipper",
            "ShipTo",
            "ShipFrom",
            "SoldTo",
            "PaymentInformation",
            "Service",
            "InvoiceLineTotal",
            "NumOfPiecesInShipment",
            "RateInformation",
            "Package",
            "ShipmentServiceOptions",
            "ReferenceNumber",
        ]
        assert document.findtext("Request/RequestOption") == "validate"

    def test_packages_stay_inside_shipment(self, full_shipment):
        """Test packages are never appended to the document root."""
        document = build_confirm_request(None, full_shipment)
        assert document.find("Package") is None
        assert len(document.findall("Shipment/Package")) == 1

    def test_missing_validation_defaults_to_nonvalidate(self, minimal_shipment):
        """Test None validation mode."""
        document = build_confirm_request(None, minimal_shipment)
        assert document.findtext("Request/RequestOption") == REQ_NONVALIDATE

    def test_unknown_validation_rejected(self, minimal_shipment):
        """Test unsupported validation modes."""
        with pytest.raises(InvalidArgumentError) as exc_info:
            build_confirm_request("strict", minimal_shipment)

        assert exc_info.value.code == "INVALID_ARGUMENT"
        assert exc_info.value.details["argument"] == "validation"

    def test_label_and_receipt_after_shipment(self, minimal_shipment):
        """Test label and receipt specifications at document level."""
        document = build_confirm_request(
            REQ_NONVALIDATE,
            minimal_shipment,
            LabelSpecification(print_method_code="GIF"),
            ReceiptSpecification(image_format_code="HTML"),
        )

        assert child_tags(document) == ["Request", "Shipment", "LabelSpecification", "ReceiptSpecification"]

    def test_mapping_label_spec(self, minimal_shipment):
        """Test option arguments accept plain mappings."""
        document = build_confirm_request(REQ_NONVALIDATE, minimal_shipment, {"print_method_code": "ZPL"})
        assert document.find("LabelSpecification/LabelStockSize") is not None

    def test_customer_context(self, minimal_shipment):
        """Test CustomerContext inside TransactionReference."""
        document = build_confirm_request(REQ_NONVALIDATE, minimal_shipment, customer_context="order-1001")
        assert document.findtext("Request/TransactionReference/CustomerContext") == "order-1001"

    def test_missing_shipment_rejected(self):
        """Test a None shipment."""
        with pytest.raises(InvalidArgumentError):
            build_confirm_request(REQ_NONVALIDATE, None)

    def test_invalid_shipment_mapping_rejected(self):
        """Test mapping shipments missing required parties."""
        with pytest.raises(InvalidArgumentError) as exc_info:
            build_confirm_request(REQ_NONVALIDATE, {"Service": {"Code": "03"}})

        assert exc_info.value.details["argument"] == "shipment"


class TestAcceptRequest:
    """Test ShipmentAcceptRequest construction."""

    def test_digest(self):
        """Test the digest follows the Request section."""
        document = build_accept_request("DIGEST123")

        assert child_tags(document) == ["Request", "ShipmentDigest"]
        assert document.findtext("Request/RequestAction") == "ShipAccept"
        assert document.find("Request/RequestOption") is None
        assert document.findtext("ShipmentDigest") == "DIGEST123"

    @pytest.mark.parametrize("digest", ["", "   ", None])
    def test_empty_digest_rejected(self, digest):
        """Test empty digests."""
        with pytest.raises(InvalidArgumentError):
            build_accept_request(digest)


class TestVoidRequest:
    """Test VoidShipmentRequest construction."""

    def test_identification_number(self):
        """Test a plain shipment id is uppercased."""
        document = build_void_request("1z999aa10123456784")

        assert child_tags(document) == ["Request", "ShipmentIdentificationNumber"]
        assert document.findtext("Request/RequestAction") == "1"
        assert document.findtext("ShipmentIdentificationNumber") == "1Z999AA10123456784"

    def test_expanded(self):
        """Test shipment plus tracking numbers."""
        document = build_void_request({
            "shipmentId": "1z999aa10123456784",
            "trackingNumbers": ["1z999aa10123456784", "1z999aa10123456795"],
        })

        expanded = document.find("ExpandedVoidShipment")
        assert child_tags(expanded) == ["ShipmentIdentificationNumber", "TrackingNumber", "TrackingNumber"]
        assert [n.text for n in expanded.findall("TrackingNumber")] == [
            "1Z999AA10123456784",
            "1Z999AA10123456795",
        ]

    def test_snake_case_keys(self):
        """Test shipment_id / tracking_numbers spellings."""
        document = build_void_request({"shipment_id": "abc", "tracking_numbers": "def"})
        assert document.findtext("ExpandedVoidShipment/ShipmentIdentificationNumber") == "ABC"
        assert document.findtext("ExpandedVoidShipment/TrackingNumber") == "DEF"

    def test_model_argument(self):
        """Test a VoidShipment instance."""
        document = build_void_request(VoidShipment(shipment_id="abc"))
        assert child_tags(document.find("ExpandedVoidShipment")) == ["ShipmentIdentificationNumber"]

    def test_mapping_without_shipment_id(self):
        """Test the shipmentId key is required."""
        with pytest.raises(InvalidArgumentError) as exc_info:
            build_void_request({"trackingNumbers": ["1Z1"]})

        assert "shipmentId" in exc_info.value.message

    def test_wrong_type(self):
        """Test non-string, non-mapping arguments."""
        with pytest.raises(InvalidArgumentError):
            build_void_request(12345)


class TestLabelRecoveryRequest:
    """Test LabelRecoveryRequest construction."""

    def test_tracking_number(self):
        """Test recovery by tracking number only."""
        document = build_label_recovery_request("1Z999AA10123456784")

        assert child_tags(document) == ["Request", "TrackingNumber"]
        assert document.findtext("Request/RequestAction") == "LabelRecovery"

    def test_reference_number(self):
        """Test recovery by reference number and shipper number."""
        document = build_label_recovery_request({"value": "ORDER-1001", "shipperNumber": "A1B2C3"})

        assert child_tags(document) == ["Request", "ReferenceNumber", "ShipperNumber"]
        assert document.findtext("ReferenceNumber/Value") == "ORDER-1001"
        assert document.findtext("ShipperNumber") == "A1B2C3"

    @pytest.mark.parametrize("tracking_data", [{"shipperNumber": "A1B2C3"}, {"value": "ORDER-1001"}])
    def test_incomplete_reference_rejected(self, tracking_data):
        """Test value and shipperNumber are both required."""
        with pytest.raises(InvalidArgumentError):
            build_label_recovery_request(tracking_data)

    def test_all_options(self):
        """Test option order and contents."""
        document = build_label_recovery_request(
            "1Z999AA10123456784",
            label_specification={"userAgent": "Mozilla/4.5", "imageFormat": "pdf"},
            label_delivery={"link": True},
            translate={"language": "spa"},
        )

        assert child_tags(document) == [
            "Request",
            "LabelSpecification",
            "Translate",
            "LabelDelivery",
            "TrackingNumber",
        ]
        assert child_tags(document.find("LabelSpecification")) == ["HTTPUserAgent", "LabelImageFormat"]
        assert document.findtext("LabelSpecification/LabelImageFormat/Code") == "PDF"
        assert document.find("LabelDelivery/LabelLinkIndicator") is not None

    def test_translate_defaults(self):
        """Test a translation request without language or dialect."""
        document = build_label_recovery_request("1Z1", translate=Translate())

        translate = document.find("Translate")
        assert child_tags(translate) == ["LanguageCode", "DialectCode", "Code"]
        assert translate.findtext("LanguageCode") == "eng"
        assert translate.findtext("DialectCode") == "US"
        assert translate.findtext("Code") == "01"

    def test_partial_translate_keeps_other_default(self):
        """Test a given language keeps the default dialect."""
        document = build_label_recovery_request("1Z1", translate={"language": "spa"})
        assert document.findtext("Translate/LanguageCode") == "spa"
        assert document.findtext("Translate/DialectCode") == "US"

    def test_empty_options_omitted(self):
        """Test empty option mappings are treated as not given."""
        document = build_label_recovery_request("1Z1", label_specification={}, label_delivery={}, translate={})
        assert child_tags(document) == ["Request", "TrackingNumber"]

    def test_label_delivery_without_link(self):
        """Test LabelDelivery with the link indicator off."""
        document = build_label_recovery_request("1Z1", label_delivery=LabelDelivery(link=False))
        assert len(document.find("LabelDelivery")) == 0
