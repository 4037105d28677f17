# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Contact field rules for enquiries."""

import re

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MIN_PHONE_DIGITS = 10

_NON_DIGITS = re.compile(r"\D")


class ContactValidationError(ValueError):
    """Raised when an enquiry's contact details are unusable."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field
        self.message = message


def normalize_email(email: str) -> str:
    """Trim and lowercase an email address, then check its shape.

    Raises:
        ContactValidationError: If the address does not look like an email.
    """
    value = email.strip().lower()
    if not EMAIL_PATTERN.match(value):
        raise ContactValidationError("email", "Please provide a valid email")
    return value


def normalize_phone(phone: str) -> str:
    """Trim a phone number and require at least ten digits.

    Formatting characters are kept as entered; only the digit count is
    checked.

    Raises:
        ContactValidationError: If fewer than ten digits are present.
    """
    value = phone.strip()
    if len(_NON_DIGITS.sub("", value)) < MIN_PHONE_DIGITS:
        raise ContactValidationError("phone", "Please provide a valid phone number")
    return value


def normalize_name(name: str) -> str:
    value = name.strip()
    if not value:
        raise ContactValidationError("name", "Name is required")
    return value
