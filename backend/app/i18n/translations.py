"""Localized label tables for rendered documents."""

import enum
import logging
from typing import Dict, Optional

logger = logging.getLogger(__name__)

TRANSLATION_MISSING = "TRANSLATION_MISSING"


class Language(str, enum.Enum):
    ENGLISH = "en"
    GERMAN = "de"


DEFAULT_LANGUAGE = Language.GERMAN

_INVOICE_EN = {
    "invoice": "INVOICE",
    "date": "Date",
    "due_date": "Due date",
    "from": "FROM",
    "to": "TO",
    "contact": "Contact",
    "tax_id": "Tax ID",
    "service": "Service",
    "start": "Start",
    "end": "End",
    "hours": "Hours",
    "amount": "Amount",
    "total_hours": "Total Hours",
    "total_amount": "Total Amount",
    "payment_details": "Payment Details",
    "no_payment_details": "Please contact for payment details.",
}

_INVOICE_DE = {
    "invoice": "RECHNUNG",
    "date": "Datum",
    "due_date": "Fällig am",
    "from": "VON",
    "to": "AN",
    "contact": "Ansprechpartner",
    "tax_id": "Steuernummer",
    "service": "Leistung",
    "start": "Beginn",
    "end": "Ende",
    "hours": "Stunden",
    "amount": "Betrag",
    "total_hours": "Gesamtstunden",
    "total_amount": "Gesamtbetrag",
    "payment_details": "Zahlungsinformationen",
    "no_payment_details": "Bitte kontaktieren Sie uns für Zahlungsdetails.",
}

TRANSLATIONS: Dict[Language, Dict[str, Dict[str, str]]] = {
    Language.ENGLISH: {"invoice": _INVOICE_EN},
    Language.GERMAN: {"invoice": _INVOICE_DE},
}


def parse_language(tag: Optional[str]) -> Language:
    """Map a language tag to a supported Language; unknown or missing tags fall back to German."""
    if not tag:
        return DEFAULT_LANGUAGE
    try:
        return Language(tag.strip().lower())
    except ValueError:
        logger.debug("Unsupported language tag %r, using %s", tag, DEFAULT_LANGUAGE.value)
        return DEFAULT_LANGUAGE


def translate(language: Language, category: str, key: str) -> str:
    table = TRANSLATIONS.get(language, {}).get(category, {})
    value = table.get(key)
    if value is None:
        logger.warning("Translation missing for key %r in category %r (%s)", key, category, language.value)
        return TRANSLATION_MISSING
    return value
