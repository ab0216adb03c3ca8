"""Login gate for the desktop app.

The admin check is a plain comparison against a fixed pair; it only decides
whether the Admin Panel tab is shown.
"""
import logging

from . import config
from .errors import ValidationError
from .models import User

logger = logging.getLogger(__name__)

GUEST_NAME = "Guest"


def login(username, password):
    username = username.strip()
    if username == config.ADMIN_USER and password == config.ADMIN_PASS:
        logger.info("Admin login for %s", username)
        return User(username, True)
    if not username:
        raise ValidationError("Invalid credentials or username empty.")
    logger.info("User login for %s", username)
    return User(username, False)


def guest():
    return User(GUEST_NAME, False)


def window_title(user):
    title = f"Hotel Reservation - Logged in as: {user.username}"
    if user.is_admin:
        title += " (Admin)"
    return title
