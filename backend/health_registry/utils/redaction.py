"""Redaction of identifying numbers on output."""

REDACTION_MASK = "****-****-"


def redact_national_id(value: str | None) -> str | None:
    """Mask a national ID number down to its last four digits.

    >>> redact_national_id("1234567890123456")
    '****-****-3456'
    """
    if not value:
        return None
    compact = "".join(ch for ch in value if ch not in "- ")
    return REDACTION_MASK + compact[-4:]


