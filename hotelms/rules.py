"""Read-only checks run before a mutation so the UI can explain a refusal.

The store still rejects the same cases on its own.
"""


def is_room_number_free(store, number):
    return store.get_room(number) is None


def room_exists(store, room_number):
    return store.get_room(room_number) is not None


def is_slot_available(store, room_number, day):
    return store.find_booking(room_number, day) is None


def availability(store, day):
    """(room, booked) for every room on the given day, ordered by number."""
    return [(room, not is_slot_available(store, room.number, day)) for room in store.list_rooms()]


def occupancy(store, day):
    """(room, customer) for every room on the given day; customer is "" when free."""
    rows = []
    for room in store.list_rooms():
        booking = store.find_booking(room.number, day)
        rows.append((room, booking.customer if booking else ""))
    return rows


def search_bookings(store, query):
    q = query.strip()
    if not q:
        return store.list_bookings()
    needle = q.lower()
    return [
        b for b in store.list_bookings()
        if needle in b.customer.lower() or str(b.room_number) == q
    ]


def summary(store):
    rooms = len(store.list_rooms())
    bookings = len(store.list_bookings())
    text = f"{rooms} rooms and {bookings} bookings"
    orphans = len(store.orphan_bookings())
    if orphans:
        text += f" ({orphans} without a room)"
    return text
