from datetime import date

from hotelms import report
from hotelms.models import Booking

BOOKINGS = [
    Booking(102, "Bob", date(2024, 5, 1)),
    Booking(101, "A" * 30, date(2024, 5, 1)),
    Booking(101, "Carol", date(2024, 4, 30)),
]


def test_truncate():
    assert report.truncate("short") == "short"
    assert report.truncate("x" * 25) == "x" * 25
    assert report.truncate("x" * 26) == "x" * 22 + "..."
    assert len(report.truncate("y" * 40)) == 25


def test_table_layout_and_order():
    lines = report.format_table(BOOKINGS)
    assert lines[0] == "Room       Customer                  Date        "
    assert lines[1] == "101        Carol                     2024-04-30  "
    assert lines[2] == "101        " + "A" * 22 + "... 2024-05-01  "
    assert lines[3].startswith("102        Bob")
    assert len(lines) == 4


def test_text_report(tmp_path):
    out = tmp_path / "report.txt"
    report.write_text_report(out, BOOKINGS)
    text = out.read_text(encoding="utf-8").splitlines()
    assert text[0] == "Bookings Report"
    assert text[1] == ""
    assert text[2:] == report.format_table(BOOKINGS)


def test_pdf_single_page(tmp_path):
    out = tmp_path / "report.pdf"
    report.write_pdf_report(str(out), BOOKINGS)
    assert out.read_bytes().startswith(b"%PDF")


def test_pdf_breaks_pages():
    many = [Booking(100 + i, "Guest %d" % i, date(2024, 1, 1)) for i in range(120)]
    assert report.build_pdf(many).page_no() > 1
    assert report.build_pdf([]).page_no() == 1


def test_pdf_with_non_latin1_customer(tmp_path):
    out = tmp_path / "report.pdf"
    report.write_pdf_report(str(out), [Booking(101, "Łukasz 王", date(2024, 5, 1))])
    assert out.read_bytes().startswith(b"%PDF")
    assert report.pdf_safe("Łukasz 王") == "?ukasz ?"
    assert report.pdf_safe("Café") == "Café"
