"""Render an aggregated invoice document to PDF bytes (fpdf2)."""

from datetime import date, time
from decimal import Decimal
from typing import TYPE_CHECKING, Optional

from fpdf import FPDF

from backend.app.i18n.translations import DEFAULT_LANGUAGE, Language, translate

if TYPE_CHECKING:
    from backend.app.services.invoices import InvoiceDocument

INVOICE_NUMBER_PLACEHOLDER = "{invoice_number}"
CURRENCY = "EUR"

# (translation key, column width in mm, alignment)
LINE_ITEM_COLUMNS = [
    ("service", 56, "L"),
    ("date", 24, "L"),
    ("start", 18, "C"),
    ("end", 18, "C"),
    ("hours", 24, "R"),
    ("amount", 40, "R"),
]


def _t(language: Language, key: str) -> str:
    return translate(language, "invoice", key)


def _latin1(text: str) -> str:
    # Core PDF fonts only cover latin-1.
    return text.encode("latin-1", "replace").decode("latin-1")


def format_date(value: date, language: Language) -> str:
    if language is Language.GERMAN:
        return value.strftime("%d.%m.%Y")
    return value.isoformat()


def format_time(value: time) -> str:
    return value.strftime("%H:%M")


def format_number(value: float | Decimal, language: Language) -> str:
    text = f"{value:,.2f}"
    if language is Language.GERMAN:
        text = text.replace(",", "_").replace(".", ",").replace("_", ".")
    return text


def format_amount(value: float | Decimal, language: Language) -> str:
    return f"{format_number(value, language)} {CURRENCY}"


def bank_detail_lines(bank_details: Optional[str], invoice_number: str) -> list[str]:
    """Substitute the invoice number placeholder and split into one line per paragraph."""
    if not bank_details:
        return []
    text = bank_details.replace(INVOICE_NUMBER_PLACEHOLDER, invoice_number)
    return [line.rstrip("\r") for line in text.split("\n")]


def render_invoice_pdf(document: "InvoiceDocument", language: Language = DEFAULT_LANGUAGE) -> bytes:
    pdf = FPDF(format="A4")
    pdf.set_margins(15, 15, 15)
    pdf.set_auto_page_break(auto=True, margin=15)
    pdf.set_title(_latin1(f"{_t(language, 'invoice')} {document.invoice_number}"))
    pdf.add_page()

    # --- Header ---
    pdf.set_font("Helvetica", "B", 20)
    pdf.cell(0, 10, _latin1(f"{_t(language, 'invoice')} #{document.invoice_number}"), new_x="LMARGIN", new_y="NEXT")
    pdf.set_font("Helvetica", "", 10)
    pdf.cell(0, 6, _latin1(f"{_t(language, 'date')}: {format_date(document.issue_date, language)}"),
             new_x="LMARGIN", new_y="NEXT")
    pdf.cell(0, 6, _latin1(f"{_t(language, 'due_date')}: {format_date(document.due_date, language)}"),
             new_x="LMARGIN", new_y="NEXT")
    pdf.ln(4)

    # --- Sender ---
    profile = document.profile
    pdf.set_font("Helvetica", "B", 11)
    pdf.cell(0, 7, _latin1(f"{_t(language, 'from')}:"), new_x="LMARGIN", new_y="NEXT")
    pdf.set_font("Helvetica", "", 10)
    pdf.cell(0, 5, _latin1(profile.name), new_x="LMARGIN", new_y="NEXT")
    pdf.multi_cell(0, 5, _latin1(profile.address), new_x="LMARGIN", new_y="NEXT")
    if profile.tax_id:
        pdf.cell(0, 5, _latin1(f"{_t(language, 'tax_id')}: {profile.tax_id}"), new_x="LMARGIN", new_y="NEXT")
    pdf.ln(4)

    # --- Recipient ---
    client = document.client
    pdf.set_font("Helvetica", "B", 11)
    pdf.cell(0, 7, _latin1(f"{_t(language, 'to')}:"), new_x="LMARGIN", new_y="NEXT")
    pdf.set_font("Helvetica", "", 10)
    pdf.cell(0, 5, _latin1(client.name), new_x="LMARGIN", new_y="NEXT")
    pdf.multi_cell(0, 5, _latin1(client.address), new_x="LMARGIN", new_y="NEXT")
    if client.contact_person:
        pdf.cell(0, 5, _latin1(f"{_t(language, 'contact')}: {client.contact_person}"),
                 new_x="LMARGIN", new_y="NEXT")
    pdf.ln(6)

    # --- Line items ---
    pdf.set_fill_color(220, 220, 220)
    pdf.set_font("Helvetica", "B", 9)
    for key, width, align in LINE_ITEM_COLUMNS:
        pdf.cell(width, 7, _latin1(_t(language, key)), border=1, align=align, fill=True)
    pdf.ln()

    pdf.set_font("Helvetica", "", 9)
    for item in document.line_items:
        row = [
            item.name,
            format_date(item.date, language),
            format_time(item.start_time),
            format_time(item.end_time),
            format_number(item.duration_hours, language),
            format_amount(item.amount, language),
        ]
        for (_, width, align), value in zip(LINE_ITEM_COLUMNS, row):
            pdf.cell(width, 6, _latin1(value), border=1, align=align)
        pdf.ln()
    pdf.ln(4)

    # --- Totals ---
    pdf.set_font("Helvetica", "B", 10)
    pdf.cell(130, 6, _latin1(f"{_t(language, 'total_hours')}:"), align="R")
    pdf.set_font("Helvetica", "", 10)
    pdf.cell(50, 6, _latin1(format_number(document.total_hours, language)), align="R", new_x="LMARGIN", new_y="NEXT")
    pdf.set_font("Helvetica", "B", 11)
    pdf.cell(130, 7, _latin1(f"{_t(language, 'total_amount')}:"), align="R")
    pdf.cell(50, 7, _latin1(format_amount(document.total_amount, language)), align="R", new_x="LMARGIN", new_y="NEXT")
    pdf.ln(6)

    # --- Payment details ---
    pdf.set_font("Helvetica", "B", 11)
    pdf.cell(0, 7, _latin1(f"{_t(language, 'payment_details')}:"), new_x="LMARGIN", new_y="NEXT")
    pdf.set_font("Helvetica", "", 10)
    lines = bank_detail_lines(profile.bank_details, document.invoice_number)
    if not lines:
        lines = [_t(language, "no_payment_details")]
    for line in lines:
        pdf.multi_cell(0, 5, _latin1(line) or " ", new_x="LMARGIN", new_y="NEXT")

    return bytes(pdf.output())
