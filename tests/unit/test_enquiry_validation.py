# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for enquiry contact field rules."""

import pytest

from src.domains.enquiry.validation import (
    ContactValidationError,
    normalize_email,
    normalize_name,
    normalize_phone,
)


class TestNormalizeEmail:
    def test_trims_and_lowercases(self) -> None:
        assert normalize_email("  Priya.Sharma@Example.COM ") == "priya.sharma@example.com"

    @pytest.mark.parametrize("email", ["", "priya", "priya@", "priya@example", "a b@c.d"])
    def test_rejects_malformed(self, email: str) -> None:
        with pytest.raises(ContactValidationError) as exc_info:
            normalize_email(email)

        assert exc_info.value.field == "email"
        assert exc_info.value.message == "Please provide a valid email"


class TestNormalizePhone:
    def test_keeps_formatting(self) -> None:
        assert normalize_phone(" +91 98765-43210 ") == "+91 98765-43210"

    def test_ten_digits_is_enough(self) -> None:
        assert normalize_phone("9876543210") == "9876543210"

    @pytest.mark.parametrize("phone", ["", "12345", "(987) 654-321", "phone number"])
    def test_rejects_too_few_digits(self, phone: str) -> None:
        with pytest.raises(ContactValidationError) as exc_info:
            normalize_phone(phone)

        assert exc_info.value.field == "phone"


class TestNormalizeName:
    def test_trims(self) -> None:
        assert normalize_name("  Priya Sharma ") == "Priya Sharma"

    def test_rejects_blank(self) -> None:
        with pytest.raises(ContactValidationError, match="Name is required"):
            normalize_name("   ")
