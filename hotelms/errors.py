class HotelError(Exception):
    """Base class for errors shown to the user as a message."""

    title = "Error"

    def __init__(self, message=""):
        super().__init__(message)
        self.message = message

    def __str__(self):
        return self.message


class ValidationError(HotelError):
    title = "Validation"


class DuplicateRoom(HotelError):
    title = "Duplicate"

    def __init__(self, number):
        super().__init__(f"Room {number} already exists.")
        self.number = number


class RoomNotFound(HotelError):
    title = "Not found"

    def __init__(self, number):
        super().__init__(f"Room {number} does not exist.")
        self.number = number


class SlotTaken(HotelError):
    title = "Room Occupied"

    def __init__(self, room_number, day):
        super().__init__(f"Room {room_number} is already booked for {day:%Y-%m-%d}.")
        self.room_number = room_number
        self.date = day


class BookingNotFound(HotelError):
    title = "Not found"

    def __init__(self, room_number, day):
        super().__init__(f"No booking for room {room_number} on {day:%Y-%m-%d}.")
        self.room_number = room_number
        self.date = day


class MalformedRecord(HotelError):
    """A CSV line that could not be parsed."""

    title = "Malformed record"

    def __init__(self, path, line_no, line, reason):
        super().__init__(f"{path}:{line_no}: {reason}: {line!r}")
        self.path = path
        self.line_no = line_no
        self.line = line


class IOFailure(HotelError):
    title = "File Error"
