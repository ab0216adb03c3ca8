import logging

from .errors import BookingNotFound, DuplicateRoom, RoomNotFound, SlotTaken

logger = logging.getLogger(__name__)


class RecordStore:
    """In-memory rooms and bookings.

    Rooms are keyed by number and bookings by slot ``(room_number, date)``,
    so both uniqueness invariants hold by construction. Nothing here touches
    disk; callers persist after each successful mutation.
    """

    def __init__(self, rooms=(), bookings=()):
        self._rooms = {}
        self._bookings = {}
        self.replace_all(rooms, bookings)

    # ---------- ROOMS ----------
    def list_rooms(self):
        return tuple(sorted(self._rooms.values(), key=lambda r: r.number))

    def get_room(self, number):
        return self._rooms.get(number)

    def add_room(self, room):
        if room.number in self._rooms:
            raise DuplicateRoom(room.number)
        self._rooms[room.number] = room

    def remove_room(self, number, cascade=False):
        """Delete a room; with ``cascade`` also drop its bookings.

        Returns the bookings removed by the cascade. Without it the room's
        bookings are left in place as orphans.
        """
        if number not in self._rooms:
            raise RoomNotFound(number)
        del self._rooms[number]
        removed = []
        if cascade:
            removed = [b for b in self._bookings.values() if b.room_number == number]
            for b in removed:
                del self._bookings[b.slot]
        return removed

    # ---------- BOOKINGS ----------
    def list_bookings(self):
        return list(self._bookings.values())

    def find_booking(self, room_number, day):
        return self._bookings.get((room_number, day))

    def add_booking(self, booking):
        if booking.room_number not in self._rooms:
            raise RoomNotFound(booking.room_number)
        if booking.slot in self._bookings:
            raise SlotTaken(booking.room_number, booking.date)
        self._bookings[booking.slot] = booking

    def remove_booking(self, room_number, day):
        try:
            return self._bookings.pop((room_number, day))
        except KeyError:
            raise BookingNotFound(room_number, day) from None

    # ---------- BULK ----------
    def replace_all(self, rooms, bookings):
        """Swap in freshly loaded records.

        Later duplicates of a room number or slot are dropped. Bookings for
        unknown rooms are kept, since the reference is not enforced at load.
        """
        self._rooms = {}
        self._bookings = {}
        for room in rooms:
            if room.number in self._rooms:
                logger.warning("Dropping duplicate room %s", room.number)
                continue
            self._rooms[room.number] = room
        for booking in bookings:
            if booking.slot in self._bookings:
                logger.warning(
                    "Dropping duplicate booking for room %s on %s",
                    booking.room_number,
                    booking.date,
                )
                continue
            self._bookings[booking.slot] = booking

    def orphan_bookings(self):
        return [b for b in self._bookings.values() if b.room_number not in self._rooms]
