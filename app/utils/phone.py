import re

MIN_PHONE_DIGITS = 10


def phone_digits(raw: str | None) -> str:
    if not raw:
        return ""
    return re.sub(r"[^0-9]", "", raw)


def has_min_digits(raw: str | None, minimum: int = MIN_PHONE_DIGITS) -> bool:
    return len(phone_digits(raw)) >= minimum


def normalize_phone(raw: str | None) -> str:
    """Digits only, keeping a leading '+' for international numbers."""
    if not raw:
        return ""
    digits = phone_digits(raw)
    if raw.strip().startswith("+") and digits:
        return "+" + digits
    return digits
