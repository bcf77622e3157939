from __future__ import annotations

import re

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
# YYYYMMDD-XXXX or YYMMDD-XXXX, hyphen optional
_PERSONAL_NUMBER_RE = re.compile(r"^(\d{4}|\d{2})(0[1-9]|1[0-2])(0[1-9]|[12]\d|3[01])-?\d{4}$")
_PHONE_RE = re.compile(r"^\+?\d{6,15}$")


def is_valid_email(email: str | None) -> bool:
    return bool(email) and bool(_EMAIL_RE.match(email.strip()))


def is_valid_phone(phone: str | None) -> bool:
    """Accepts digits with an optional leading +; spaces, dashes and parentheses are ignored."""
    if not phone:
        return False
    return bool(_PHONE_RE.match(re.sub(r"[\s\-()]", "", phone)))


def is_valid_personal_number(personal_number: str | None) -> bool:
    """
    Swedish personnummer in YYYYMMDD-XXXX or YYMMDD-XXXX form.
    Spaces are ignored, the hyphen is optional, month and day must be plausible.
    """
    if not personal_number:
        return False
    return bool(_PERSONAL_NUMBER_RE.match(personal_number.replace(" ", "")))


def normalize_personal_number(personal_number: str) -> str:
    """Return the number with a single hyphen before the last four digits."""
    digits = re.sub(r"\D", "", personal_number)
    if len(digits) < 5:
        return personal_number.strip()
    return f"{digits[:-4]}-{digits[-4:]}"
