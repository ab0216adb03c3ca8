"""One function per user action.

Each takes the store plus the raw text the user typed, raises a HotelError
with the message to show, and returns a status message on success. None of
them write to disk: the caller persists after every successful call.
"""
import logging
import math
from datetime import date

from . import rules
from .errors import BookingNotFound, DuplicateRoom, RoomNotFound, SlotTaken, ValidationError
from .models import Booking, Room, format_date, parse_date, parse_int

logger = logging.getLogger(__name__)


def _parse_room_number(text):
    try:
        number = parse_int(str(text))
    except ValueError:
        raise ValidationError("Room number must be a whole number.") from None
    if number <= 0:
        raise ValidationError("Room number must be positive.")
    return number


def _parse_day(text):
    try:
        return parse_date(str(text))
    except ValueError:
        raise ValidationError(f"Date format should be YYYY-MM-DD: {text}") from None


def add_room(store, number, room_type, price):
    number = _parse_room_number(number)
    room_type = room_type.strip()
    if not room_type:
        raise ValidationError("Type required.")
    try:
        price_f = float(str(price).strip())
    except ValueError:
        raise ValidationError("Price must be a number.") from None
    if not math.isfinite(price_f):
        raise ValidationError("Price must be a number.")
    if price_f < 0:
        raise ValidationError("Price must not be negative.")

    if not rules.is_room_number_free(store, number):
        raise DuplicateRoom(number)
    store.add_room(Room(number, room_type, price_f))
    logger.info("Added room %s (%s, %s)", number, room_type, price_f)
    return f"Added room {number}"


def delete_room(store, number, cascade):
    number = _parse_room_number(number)
    if not rules.room_exists(store, number):
        raise RoomNotFound(number)
    removed = store.remove_room(number, cascade=cascade)
    logger.info("Deleted room %s (cascade=%s, %d bookings removed)", number, cascade, len(removed))
    if removed:
        return f"Deleted room {number} and {len(removed)} bookings"
    return f"Deleted room {number}"


def book_room(store, room_number, customer, day):
    customer = customer.strip()
    if not customer:
        raise ValidationError("Customer name required.")
    room_number = _parse_room_number(room_number)
    if not isinstance(day, date):
        day = _parse_day(day)

    if not rules.room_exists(store, room_number):
        raise RoomNotFound(room_number)
    if not rules.is_slot_available(store, room_number, day):
        raise SlotTaken(room_number, day)
    store.add_booking(Booking(room_number, customer, day))
    logger.info("Booked room %s for %s on %s", room_number, customer, day)
    return f"Booked room {room_number} for {customer} on {format_date(day)}"


def cancel_booking(store, room_number, day):
    room_number = _parse_room_number(room_number)
    if not isinstance(day, date):
        day = _parse_day(day)
    if rules.is_slot_available(store, room_number, day):
        raise BookingNotFound(room_number, day)
    booking = store.remove_booking(room_number, day)
    logger.info("Canceled booking for room %s on %s", room_number, day)
    return f"Canceled booking for {booking.customer} in room {room_number} on {format_date(day)}."
