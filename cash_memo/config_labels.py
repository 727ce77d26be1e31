# cash_memo/config_labels.py
"""Fixed labels, messages and defaults shown on and around the cash memo."""
from __future__ import annotations

PAYMENT_MODES = ("Cash", "UPI", "Card", "Bank Transfer")

# Business header printed at the top of every memo
BUSINESS_NAME = "Neetu Tiffin Service"
BUSINESS_CONTACT = (
    "Phone: +91-999-918-3175, +91-701-178-6085",
    "Email: neetutiffinservice@gmail.com",
)
SIGNATORY = "Neetu"

TABLE_HEADERS = ("Description", "Qty", "Rate (Rs.)", "Amount (Rs.)")
CURRENCY_PREFIX = "Rs. "

FOOTER_TITLE = "Thank you for your business!"
FOOTER_SUBTITLE = "Cash Memo - All transactions are subject to terms and conditions"

# Export filename parts
FALLBACK_CUSTOMER_NAME = "Customer"
FILENAME_SUFFIX = "Cash_Memo"
IMAGE_EXTENSION = "jpg"
DOCUMENT_EXTENSION = "pdf"

# Capture defaults
CAPTURE_FORMAT = "jpg"
CAPTURE_QUALITY = 0.9
CAPTURE_RESULT = "tmpfile"
CAPTURE_WIDTH = 900

NOTICE_SECONDS = 3.0  # transient error banner lifetime

# User-facing messages
MSG_FILL_REQUIRED = "Please fill in all required fields before saving!"
MSG_MIN_ITEMS = "At least one item is required."
MSG_PERMISSION_TITLE = "Permission Denied"
MSG_PERMISSION = "Storage permission is required to save files."
MSG_CLEAR_TITLE = "Clear All Data"
MSG_CLEAR_PROMPT = "Are you sure you want to clear all data?"
MSG_SUCCESS_TITLE = "Success"
MSG_ERROR_TITLE = "Error"
MSG_SAVED = {
    "pdf": "PDF saved successfully!",
    "jpg": "Image saved successfully!",
}
MSG_FAILED = {
    "pdf": "Failed to save PDF. Please try again.",
    "jpg": "Failed to save image. Please try again.",
}
