from datetime import date, time
from decimal import Decimal
from types import SimpleNamespace

from backend.app.i18n.translations import Language
from backend.app.services.invoice_pdf import (
    bank_detail_lines,
    format_amount,
    format_date,
    format_number,
    render_invoice_pdf,
)
from backend.app.services.invoices import InvoiceDocument, InvoiceLineItem


def _document(bank_details="IBAN: DE00 1234 5678\nVerwendungszweck: {invoice_number}", tax_id="DE123"):
    profile = SimpleNamespace(name="Max Müller", address="Musterweg 5\n80331 München", tax_id=tax_id,
                              bank_details=bank_details)
    client = SimpleNamespace(name="Acme GmbH", address="Hauptstr. 1\n10115 Berlin", contact_person="Jane Doe")
    items = [
        InvoiceLineItem(name="Backend work", date=date(2025, 3, 3), start_time=time(9, 0), end_time=time(17, 30),
                        duration_hours=8.5, amount=Decimal("680.00")),
        InvoiceLineItem(name="Night deploy", date=date(2025, 3, 4), start_time=time(23, 0), end_time=time(1, 0),
                        duration_hours=2.0, amount=Decimal("160.00")),
    ]
    return InvoiceDocument(
        invoice_number="2025-0001",
        year=2025,
        sequence_number=1,
        issue_date=date(2025, 3, 10),
        due_date=date(2025, 4, 9),
        profile=profile,
        client=client,
        line_items=items,
        total_hours=10.5,
        total_amount=Decimal("840.00"),
    )


def test_render_invoice_pdf_produces_pdf_bytes():
    for language in (Language.GERMAN, Language.ENGLISH):
        pdf_bytes = render_invoice_pdf(_document(), language)
        assert pdf_bytes.startswith(b"%PDF")


def test_render_without_optional_profile_fields():
    pdf_bytes = render_invoice_pdf(_document(bank_details=None, tax_id=None), Language.ENGLISH)
    assert pdf_bytes.startswith(b"%PDF")


def test_render_replaces_characters_outside_latin1():
    pdf_bytes = render_invoice_pdf(_document(bank_details="Betrag in € an {invoice_number}"), Language.GERMAN)
    assert pdf_bytes.startswith(b"%PDF")


def test_bank_detail_lines_substitute_invoice_number():
    lines = bank_detail_lines("IBAN: DE00\r\nReference: {invoice_number}", "2025-0007")
    assert lines == ["IBAN: DE00", "Reference: 2025-0007"]
    assert bank_detail_lines(None, "2025-0007") == []
    assert bank_detail_lines("", "2025-0007") == []


def test_number_and_amount_formatting():
    assert format_number(Decimal("1234.5"), Language.GERMAN) == "1.234,50"
    assert format_number(Decimal("1234.5"), Language.ENGLISH) == "1,234.50"
    assert format_number(8.5, Language.GERMAN) == "8,50"
    assert format_amount(Decimal("255"), Language.GERMAN) == "255,00 EUR"
    assert format_amount(Decimal("255"), Language.ENGLISH) == "255.00 EUR"


def test_date_formatting():
    assert format_date(date(2025, 3, 10), Language.GERMAN) == "10.03.2025"
    assert format_date(date(2025, 3, 10), Language.ENGLISH) == "2025-03-10"
