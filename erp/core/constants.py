"""Core constants: shared literal values for attribution and document numbering."""

# Well-known identity used when no user can be attributed to a mutation.
SYSTEM_USER_ID = "e459998e-0a4d-4652-946e-44b2ba161d16"

# Role allowed to change another user's role or active flag.
ADMIN_ROLE = "admin"

# Document number prefixes (<PREFIX>-<year>-<sequence>)
ENQUIRY_NUMBER_PREFIX = "ENQ"
QUOTATION_NUMBER_PREFIX = "QT"
SALES_ORDER_NUMBER_PREFIX = "SO"
DELIVERY_NUMBER_PREFIX = "DN"
RECEIPT_RETURN_NUMBER_PREFIX = "RR"
INVOICE_NUMBER_PREFIX = "INV"

# Currency of invoices created without one
DEFAULT_CURRENCY = "BHD"

# Quotation pricing defaults (percent markup over cost, by customer type)
RETAIL_MARKUP_PERCENT = 70
WHOLESALE_MARKUP_PERCENT = 40
QUOTATION_VALIDITY_DAYS = 30
