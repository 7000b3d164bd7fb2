from ups_shipping.models.base import UPSEntity
from ups_shipping.models.address import (
    Address,
    AlternateDeliveryAddress,
    ShipFrom,
    Shipper,
    ShipTo,
    SoldTo,
)
from ups_shipping.models.charges import CODAmount, DeclaredValue, FreightCharges, InvoiceLineTotal
from ups_shipping.models.codes import (
    DeliveryConfirmation,
    PackagingType,
    RateInformation,
    ReferenceNumber,
    ReturnService,
    Service,
    ShipmentIndicationType,
    UnitOfMeasurement,
)
from ups_shipping.models.package import Dimensions, Package, PackageServiceOptions, PackageWeight
from ups_shipping.models.service_options import COD, InternationalForms, Notification, ShipmentServiceOptions
from ups_shipping.models.payment import (
    BillShipper,
    BillThirdParty,
    ConsigneeBilled,
    CreditCard,
    FreightCollect,
    PaymentInformation,
    Prepaid,
)
from ups_shipping.models.shipment import Shipment
from ups_shipping.models.label import (
    LabelDelivery,
    LabelRecoverySpecification,
    LabelSpecification,
    ReceiptSpecification,
    Translate,
)
from ups_shipping.models.tracking import ReferenceTracking, VoidShipment
