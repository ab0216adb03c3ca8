import logging
import os

DATA_DIR = os.environ.get("HOTELMS_DATA_DIR", "")

ROOMS_CSV = os.path.join(DATA_DIR, "rooms.csv")
BOOKINGS_CSV = os.path.join(DATA_DIR, "bookings.csv")

DATE_FORMAT = "%Y-%m-%d"

# Fixed admin identity; the login step is a placeholder, not a security boundary.
ADMIN_USER = "admin"
ADMIN_PASS = "admin123"

# Rooms created on first start when rooms.csv is empty or missing.
SAMPLE_ROOMS = [
    (101, "Single", 1200.0),
    (102, "Double", 1800.0),
    (201, "Deluxe", 3000.0),
]

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level=logging.INFO):
    logging.basicConfig(format=LOG_FORMAT, level=level)
