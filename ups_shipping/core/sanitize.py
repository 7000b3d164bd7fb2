"""
Log sanitization for UPS XML payloads.

Request and response documents carry credentials, card data and recipient PII.
Nothing from a document reaches the log without passing through here.
"""
import re

# Elements whose text is always replaced, regardless of content
SECRET_ELEMENTS = (
    "AccessLicenseNumber",
    "UserId",
    "Password",
    "Number",
    "SecurityCode",
    "ExpirationDate",
    "TaxIdentificationNumber",
)

_SECRET_ELEMENT_RE = re.compile(
    r"<(?P<tag>%s)>[^<]*</(?P=tag)>" % "|".join(SECRET_ELEMENTS)
)

# Labels and receipts come back as large base64 blobs
_GRAPHIC_RE = re.compile(r"<(?P<tag>GraphicImage|HTMLImage|Image)>[^<]{64,}</(?P=tag)>")

_PII_PATTERNS = [
    # Phone numbers
    (r'\b\d{3}[-.\s]?\d{3}[-.\s]?\d{4}\b', '[PHONE]'),
    (r'\b\(\d{3}\)\s*\d{3}[-.\s]?\d{4}\b', '[PHONE]'),
    (r'\+\d{1,3}[-.\s]?\d{1,4}[-.\s]?\d{1,4}[-.\s]?\d{1,9}\b', '[PHONE]'),
    # Emails
    (r'\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Z|a-z]{2,}\b', '[EMAIL]'),
    # Postal codes
    (r'\b\d{5}-\d{4}\b', '[ZIP]'),
    (r'\b[A-Z]\d[A-Z]\s*\d[A-Z]\d\b', '[POSTAL]'),  # Canada
]


def redact_secrets(xml_text: str) -> str:
    """Blank out credential and card elements in an XML string."""
    if not xml_text:
        return ""

    redacted = _SECRET_ELEMENT_RE.sub(lambda m: f"<{m.group('tag')}>[REDACTED]</{m.group('tag')}>", xml_text)
    return _GRAPHIC_RE.sub(lambda m: f"<{m.group('tag')}>[BINARY]</{m.group('tag')}>", redacted)


def sanitize_for_logging(text: str, max_length: int = 2000) -> str:
    """
    Remove secrets and PII from text for safe logging.

    Args:
        text: Text that may contain secrets or PII
        max_length: Maximum length of result

    Returns:
        Sanitized text safe for logging
    """
    if not text:
        return ""

    sanitized = redact_secrets(text)[:max_length]

    for pattern, replacement in _PII_PATTERNS:
        sanitized = re.sub(pattern, replacement, sanitized, flags=re.IGNORECASE)

    return sanitized


def mask_secret(value: str) -> str:
    """Mask a credential for display, keeping the last two characters."""
    if not value:
        return "***"
    if len(value) <= 4:
        return "*" * len(value)
    return "***" + value[-2:]
