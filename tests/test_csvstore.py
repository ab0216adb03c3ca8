import logging
from datetime import date

import pytest

from hotelms import csvstore
from hotelms.errors import IOFailure
from hotelms.models import Booking, Room

ROOMS = [Room(102, "Double", 1800.0), Room(101, "Single", 1200.0), Room(201, "Deluxe", 3000.5)]
BOOKINGS = [
    Booking(101, "Alice", date(2024, 5, 1)),
    Booking(102, "Bob", date(2023, 12, 31)),
]


def test_missing_file_loads_empty(tmp_path):
    assert csvstore.load_rooms(tmp_path / "nope.csv") == []
    assert csvstore.load_bookings(tmp_path / "nope.csv") == []


def test_rooms_round_trip(paths):
    rooms_path, _ = paths
    csvstore.save_rooms(rooms_path, ROOMS)
    assert set(csvstore.load_rooms(rooms_path)) == set(ROOMS)


def test_rooms_file_format(paths):
    rooms_path, _ = paths
    csvstore.save_rooms(rooms_path, ROOMS)
    assert rooms_path.read_text(encoding="utf-8") == (
        "101,Single,1200.0\n102,Double,1800.0\n201,Deluxe,3000.5\n"
    )


def test_save_is_idempotent(paths):
    rooms_path, _ = paths
    csvstore.save_rooms(rooms_path, ROOMS)
    first = rooms_path.read_bytes()
    csvstore.save_rooms(rooms_path, ROOMS)
    assert rooms_path.read_bytes() == first


def test_save_truncates(paths):
    rooms_path, _ = paths
    csvstore.save_rooms(rooms_path, ROOMS)
    csvstore.save_rooms(rooms_path, ROOMS[:1])
    assert csvstore.load_rooms(rooms_path) == ROOMS[:1]


def test_bookings_round_trip(paths):
    _, bookings_path = paths
    csvstore.save_bookings(bookings_path, BOOKINGS)
    assert bookings_path.read_text(encoding="utf-8") == "101,Alice,2024-05-01\n102,Bob,2023-12-31\n"
    assert csvstore.load_bookings(bookings_path) == BOOKINGS


def test_malformed_room_line_is_skipped(paths, caplog):
    rooms_path, _ = paths
    rooms_path.write_text("101,Single,1200.0\n102,Double,abc\n", encoding="utf-8")
    with caplog.at_level(logging.WARNING, logger="hotelms.csvstore"):
        assert csvstore.load_rooms(rooms_path) == [Room(101, "Single", 1200.0)]
    assert "rooms.csv:2" in caplog.text


def test_bad_line_does_not_drop_later_lines(paths):
    rooms_path, bookings_path = paths
    rooms_path.write_text("x,Single,1\n\n  \n7,Suite\n8, Suite ,99\n", encoding="utf-8")
    assert csvstore.load_rooms(rooms_path) == [Room(8, "Suite", 99.0)]
    bookings_path.write_text("101,Alice,2024-13-01\n101,Bob,2024-05-02,extra\n", encoding="utf-8")
    assert csvstore.load_bookings(bookings_path) == [Booking(101, "Bob", date(2024, 5, 2))]


def test_comma_in_customer_is_not_escaped(paths):
    _, bookings_path = paths
    csvstore.save_bookings(bookings_path, [Booking(101, "Smith, John", date(2024, 5, 1))])
    assert bookings_path.read_text(encoding="utf-8") == "101,Smith, John,2024-05-01\n"
    # the extra comma shifts the date column, so the row no longer parses
    assert csvstore.load_bookings(bookings_path) == []


def test_save_failure_raises_io_failure(tmp_path):
    with pytest.raises(IOFailure):
        csvstore.save_rooms(tmp_path / "missing" / "rooms.csv", ROOMS)


def test_persist_and_load_store(paths, booked_store):
    csvstore.persist(booked_store, *paths)
    loaded = csvstore.load_store(*paths)
    assert loaded.list_rooms() == booked_store.list_rooms()
    assert loaded.list_bookings() == booked_store.list_bookings()


def test_load_store_seeds_sample_rooms(paths):
    store = csvstore.load_store(*paths, seed=True)
    assert [r.number for r in store.list_rooms()] == [101, 102, 201]
    assert not paths[0].exists()


def test_load_store_does_not_seed_over_existing(paths):
    csvstore.save_rooms(paths[0], [Room(5, "Suite", 10.0)])
    store = csvstore.load_store(*paths, seed=True)
    assert [r.number for r in store.list_rooms()] == [5]


def test_export_csv(tmp_path, booked_store):
    out = tmp_path / "export.csv"
    csvstore.export_bookings_csv(out, booked_store.list_bookings())
    assert out.read_text(encoding="utf-8") == "room,customer,date\n101,Alice,2024-05-01\n"


def test_undecodable_line_is_skipped(paths, caplog):
    rooms_path, _ = paths
    rooms_path.write_bytes(b"101,Single,1200.0\n102,Caf\xe9,900.0\n103,Suite,50\n")
    with caplog.at_level(logging.WARNING, logger="hotelms.csvstore"):
        rooms = csvstore.load_rooms(rooms_path)
    assert rooms == [Room(101, "Single", 1200.0), Room(103, "Suite", 50.0)]
    assert "rooms.csv:2" in caplog.text


def test_unreadable_file_loads_empty_and_logs(tmp_path, caplog):
    unreadable = tmp_path / "rooms.csv"
    unreadable.mkdir()
    with caplog.at_level(logging.ERROR, logger="hotelms.csvstore"):
        assert csvstore.load_rooms(unreadable) == []
    assert "Failed to read" in caplog.text


@pytest.mark.parametrize("line", ["1_0,Single,5", "-4,Single,5", "7,Single,nan", "8,Single,inf"])
def test_rejected_room_values(paths, line):
    rooms_path, _ = paths
    rooms_path.write_text(line + "\n", encoding="utf-8")
    assert csvstore.load_rooms(rooms_path) == []
