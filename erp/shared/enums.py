"""Shared enumerations for the ERP application.

Cross-cutting enums used by storage and API layers: audit actions and the
status/type vocabularies of the workflow documents.
"""

from enum import Enum


class AuditAction(str, Enum):
    """Audit action recorded for each entity mutation."""

    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


class CustomerType(str, Enum):
    RETAIL = "Retail"
    WHOLESALE = "Wholesale"


class CustomerClassification(str, Enum):
    INTERNAL = "Internal"
    CORPORATE = "Corporate"
    INDIVIDUAL = "Individual"
    FAMILY = "Family"
    MINISTRY = "Ministry"


class EnquiryStatus(str, Enum):
    NEW = "New"
    IN_PROGRESS = "In Progress"
    QUOTED = "Quoted"
    CLOSED = "Closed"


class EnquirySource(str, Enum):
    EMAIL = "Email"
    PHONE = "Phone"
    WEB_FORM = "Web Form"
    WALK_IN = "Walk-in"


class QuotationStatus(str, Enum):
    DRAFT = "Draft"
    SENT = "Sent"
    ACCEPTED = "Accepted"
    REJECTED = "Rejected"
    EXPIRED = "Expired"


class SalesOrderStatus(str, Enum):
    DRAFT = "Draft"
    CONFIRMED = "Confirmed"
    PROCESSING = "Processing"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"


class DeliveryStatus(str, Enum):
    PENDING = "Pending"
    PARTIAL = "Partial"
    COMPLETE = "Complete"
    CANCELLED = "Cancelled"


class DeliveryType(str, Enum):
    FULL = "Full"
    PARTIAL = "Partial"


class ReceiptReturnStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    RETURNED = "returned"
    CANCELLED = "cancelled"


class InvoiceStatus(str, Enum):
    DRAFT = "Draft"
    SENT = "Sent"
    PAID = "Paid"
    OVERDUE = "Overdue"
    CANCELLED = "Cancelled"


class InvoiceType(str, Enum):
    PROFORMA = "Proforma"
    FINAL = "Final"
    CREDIT_NOTE = "Credit Note"
