"""Flat CSV persistence for rooms and bookings.

Lines are plain ``a,b,c`` with no header and no quoting, so a comma inside a
room type or customer name breaks that row. The format is kept as is.
"""
import logging
import os

from .config import SAMPLE_ROOMS
from .errors import IOFailure, MalformedRecord
from .models import Booking, Room, format_date, parse_date, parse_int
from .store import RecordStore

logger = logging.getLogger(__name__)

EXPORT_HEADER = "room,customer,date"


def _read_rows(path, parse):
    """Parse every non-blank line of ``path`` with ``parse(fields)``.

    A bad line is logged and skipped; the rest of the file still loads.
    """
    if not os.path.exists(path):
        return []
    try:
        with open(path, "rb") as f:
            raw_lines = f.read().splitlines()
    except OSError:
        logger.exception("Failed to read %s", path)
        return []

    records = []
    for line_no, raw in enumerate(raw_lines, start=1):
        try:
            line = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            logger.warning("%s", MalformedRecord(path, line_no, raw, e))
            continue
        if not line.strip():
            continue
        fields = line.split(",")
        if len(fields) < 3:
            continue
        try:
            records.append(parse([p.strip() for p in fields]))
        except ValueError as e:
            logger.warning("%s", MalformedRecord(path, line_no, line, e))
    return records


def _write_lines(path, lines):
    try:
        with open(path, "w", newline="", encoding="utf-8") as f:
            for line in lines:
                f.write(line + "\n")
    except OSError as e:
        logger.error("Failed to write %s: %s", path, e)
        raise IOFailure(f"Failed to save {path}: {e}") from e


def _parse_room(p):
    return Room(parse_int(p[0]), p[1], float(p[2]))


def _parse_booking(p):
    return Booking(parse_int(p[0]), p[1], parse_date(p[2]))


def room_line(room):
    return f"{room.number},{room.type},{room.price}"


def booking_line(booking):
    return f"{booking.room_number},{booking.customer},{format_date(booking.date)}"


# ---------- ROOMS ----------
def load_rooms(path):
    return _read_rows(path, _parse_room)


def save_rooms(path, rooms):
    _write_lines(path, [room_line(r) for r in sorted(rooms, key=lambda r: r.number)])


# ---------- BOOKINGS ----------
def load_bookings(path):
    return _read_rows(path, _parse_booking)


def save_bookings(path, bookings):
    _write_lines(path, [booking_line(b) for b in bookings])


# ---------- STORE ----------
def load_store(rooms_path, bookings_path, seed=False):
    """Build a RecordStore from both files.

    With ``seed`` and no rooms on disk, the sample rooms are added (in memory
    only; the caller persists).
    """
    rooms = load_rooms(rooms_path)
    bookings = load_bookings(bookings_path)
    if seed and not rooms:
        rooms = [Room(*r) for r in SAMPLE_ROOMS]
        logger.info("No rooms found, seeded %d sample rooms", len(rooms))
    store = RecordStore(rooms, bookings)
    logger.info(
        "Loaded %d rooms and %d bookings",
        len(store.list_rooms()),
        len(store.list_bookings()),
    )
    return store


def persist(store, rooms_path, bookings_path):
    """Rewrite both files from the store."""
    save_rooms(rooms_path, store.list_rooms())
    save_bookings(bookings_path, store.list_bookings())


# ---------- EXPORT ----------
def export_bookings_csv(path, bookings):
    _write_lines(path, [EXPORT_HEADER] + [booking_line(b) for b in bookings])
