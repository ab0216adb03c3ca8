import math
import re
from dataclasses import dataclass
from datetime import date, datetime

from .config import DATE_FORMAT

INT_RE = re.compile(r"[+-]?[0-9]+")


def parse_int(text):
    """Parse a plain decimal integer; unlike ``int()`` rejects ``1_0`` and non-ASCII digits."""
    text = text.strip()
    if not INT_RE.fullmatch(text):
        raise ValueError(f"invalid integer: {text!r}")
    return int(text)


def parse_date(text):
    """Parse a ``YYYY-MM-DD`` string into a ``date``; raises ValueError."""
    return datetime.strptime(text.strip(), DATE_FORMAT).date()


def format_date(day):
    return day.strftime(DATE_FORMAT)


@dataclass(frozen=True)
class Room:
    number: int
    type: str
    price: float

    def __post_init__(self):
        if self.number <= 0:
            raise ValueError("room number must be positive")
        if not self.type:
            raise ValueError("room type is required")
        if not math.isfinite(self.price) or self.price < 0:
            raise ValueError("price must be a finite, non-negative number")


@dataclass(frozen=True)
class Booking:
    room_number: int
    customer: str
    date: date

    def __post_init__(self):
        if not self.customer:
            raise ValueError("customer name is required")

    @property
    def slot(self):
        return (self.room_number, self.date)


@dataclass(frozen=True)
class User:
    username: str
    is_admin: bool = False
