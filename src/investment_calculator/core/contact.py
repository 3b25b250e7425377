"""Contact details collected before a calculation (name, e-mail, WhatsApp)."""

import re
from dataclasses import dataclass

from .exceptions import ValidationError, ValidationReason
from .locale import FieldResult, ValidationReport

PHONE_PATTERN = re.compile(r"^\(\d{2}\) \d \d{4}-\d{4}$")
PHONE_MAX_DIGITS = 11


@dataclass(frozen=True)
class ContactInfo:
    name: str
    email: str
    whatsapp: str
    accept_terms: bool = False


def format_phone_number(text: str) -> str:
    """Mask typed digits as a Brazilian mobile number: (99) 9 1111-1111."""
    digits = re.sub(r"\D", "", text or "")[:PHONE_MAX_DIGITS]
    if len(digits) > 6:
        return f"({digits[:2]}) {digits[2:3]} {digits[3:7]}-{digits[7:]}"
    if len(digits) > 2:
        return f"({digits[:2]}) {digits[2:]}"
    return digits


def validate_phone_number(text: str) -> bool:
    return bool(PHONE_PATTERN.match(text or ""))


def validate_contact(contact: ContactInfo) -> ValidationReport:
    """Validate every contact field; the report carries one result per field."""
    report = ValidationReport()

    def record(name: str, ok: bool, value, reason: ValidationReason, message: str):
        if ok:
            report.results[name] = FieldResult(name, True, value)
        else:
            report.results[name] = FieldResult(
                name, False, error=ValidationError(reason, name, message)
            )

    record("name", bool(contact.name.strip()), contact.name.strip(),
           ValidationReason.MISSING_FIELD, "Required field")
    record("email", bool(contact.email.strip()), contact.email.strip(),
           ValidationReason.MISSING_FIELD, "Required field")
    record("whatsapp", validate_phone_number(contact.whatsapp), contact.whatsapp,
           ValidationReason.MALFORMED_PHONE, "Invalid phone number. Use (99) 9 1111-1111")
    record("accept_terms", contact.accept_terms, contact.accept_terms,
           ValidationReason.TERMS_NOT_ACCEPTED, "You must accept the terms")
    return report
