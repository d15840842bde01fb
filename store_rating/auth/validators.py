"""
Field format policy shared by every path that accepts user data.

Names are 20 to 60 characters everywhere (registration, admin create,
admin update and profile update).
"""

import re

NAME_MIN_LENGTH = 20
NAME_MAX_LENGTH = 60
PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 16
ADDRESS_MAX_LENGTH = 400
PASSWORD_SPECIAL_CHARS = '!@#$%^&*(),.?":{}|<>'

EMAIL_RE = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
UPPERCASE_RE = re.compile(r"[A-Z]")

NAME_MESSAGE = f"Name must be between {NAME_MIN_LENGTH} and {NAME_MAX_LENGTH} characters"
EMAIL_MESSAGE = "Invalid email format"
PASSWORD_MESSAGE = (
    f"Password must be {PASSWORD_MIN_LENGTH}-{PASSWORD_MAX_LENGTH} characters with at least "
    "one uppercase letter and one special character"
)
ADDRESS_MESSAGE = f"Address must be {ADDRESS_MAX_LENGTH} characters or less"


def validate_name(name: str) -> bool:
    return NAME_MIN_LENGTH <= len(name) <= NAME_MAX_LENGTH


def validate_email(email: str) -> bool:
    return EMAIL_RE.fullmatch(email) is not None


def validate_password(password: str) -> bool:
    return (
        PASSWORD_MIN_LENGTH <= len(password) <= PASSWORD_MAX_LENGTH
        and UPPERCASE_RE.search(password) is not None
        and any(ch in PASSWORD_SPECIAL_CHARS for ch in password)
    )


def validate_address(address: str) -> bool:
    return len(address) <= ADDRESS_MAX_LENGTH
