import logging

from fpdf import FPDF

from .errors import IOFailure
from .models import format_date

logger = logging.getLogger(__name__)

TITLE = "Bookings Report"
CUSTOMER_WIDTH = 25

# PDF layout, in points on a Letter page.
MARGIN = 50
TITLE_GAP = 25
HEADER_GAP = 15
LINE_HEIGHT = 14
BOTTOM_LIMIT = 60


def sort_for_report(bookings):
    return sorted(bookings, key=lambda b: (b.date, b.room_number))


def truncate(text, width=CUSTOMER_WIDTH):
    if len(text) <= width:
        return text
    return text[: width - 3] + "..."


def format_row(room, customer, day):
    return "%-10s %-25s %-12s" % (room, customer, day)


def format_table(bookings):
    """Header line plus one fixed-width line per booking, in report order."""
    lines = [format_row("Room", "Customer", "Date")]
    for b in sort_for_report(bookings):
        lines.append(format_row(b.room_number, truncate(b.customer), format_date(b.date)))
    return lines


def write_text_report(path, bookings):
    lines = [TITLE, ""] + format_table(bookings)
    try:
        with open(path, "w", encoding="utf-8") as f:
            f.write("\n".join(lines) + "\n")
    except OSError as e:
        raise IOFailure(f"Failed to write report {path}: {e}") from e
    logger.info("Wrote text report with %d bookings to %s", len(bookings), path)


def pdf_safe(text):
    """Replace characters the core PDF fonts cannot encode (Latin-1 only) with "?"."""
    return text.encode("latin-1", "replace").decode("latin-1")


def build_pdf(bookings):
    """Lay the table out on Letter pages.

    A new page starts once the cursor passes the bottom limit; continuation
    pages do not repeat the column header.
    """
    pdf = FPDF(unit="pt", format="Letter")
    pdf.set_auto_page_break(False)
    pdf.add_page()
    page_height = pdf.h

    y = MARGIN
    pdf.set_font("Courier", "B", 14)
    pdf.text(MARGIN, y, TITLE)
    y += TITLE_GAP

    header, *rows = format_table(bookings)
    pdf.set_font("Courier", size=10)
    pdf.text(MARGIN, y, header)
    y += HEADER_GAP

    for line in rows:
        if y > page_height - BOTTOM_LIMIT:
            pdf.add_page()
            pdf.set_font("Courier", size=10)
            y = MARGIN
        pdf.text(MARGIN, y, pdf_safe(line))
        y += LINE_HEIGHT
    return pdf


def write_pdf_report(path, bookings):
    pdf = build_pdf(bookings)
    try:
        pdf.output(path)
    except OSError as e:
        raise IOFailure(f"Failed to write PDF {path}: {e}") from e
    logger.info("Wrote PDF report (%d pages) to %s", pdf.page_no(), path)
