"""E.164 phone normalization, used to match contacts by phone number."""

import phonenumbers


def normalize_phone(raw: str | None, default_region: str | None = None) -> str | None:
    """Return the E.164 form of raw, or None if it cannot be parsed as a valid number.

    default_region applies only to numbers without a leading + (e.g. "202 555 1234"
    with "US").
    """
    text = (raw or "").strip()
    if not text:
        return None
    try:
        parsed = phonenumbers.parse(text, default_region)
    except phonenumbers.NumberParseException:
        return None
    if not phonenumbers.is_valid_number(parsed):
        return None
    return phonenumbers.format_number(parsed, phonenumbers.PhoneNumberFormat.E164)


def same_number(a: str | None, b: str | None, default_region: str | None = None) -> bool:
    """True when both parse to the same E.164 number."""
    left = normalize_phone(a, default_region)
    return left is not None and left == normalize_phone(b, default_region)
