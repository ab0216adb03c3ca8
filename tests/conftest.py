from datetime import date

import pytest

from hotelms.models import Booking, Room
from hotelms.store import RecordStore


@pytest.fixture
def store():
    return RecordStore()


@pytest.fixture
def room_101():
    return Room(101, "Single", 1200.0)


@pytest.fixture
def booked_store(room_101):
    s = RecordStore()
    s.add_room(room_101)
    s.add_booking(Booking(101, "Alice", date(2024, 5, 1)))
    return s


@pytest.fixture
def paths(tmp_path):
    return tmp_path / "rooms.csv", tmp_path / "bookings.csv"
