"""Hotel rooms and bookings, kept in flat CSV files."""

__version__ = "1.0.0"
