# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for database models.

Tests table definitions, constraints and relationships.
"""

from sqlalchemy import CheckConstraint

from src.infrastructure.database.models import Admin, Base, Enquiry, Program, University
from src.infrastructure.database.models.base import TimestampMixin, new_uuid


def _foreign_key(table, column: str):
    (fk,) = table.c[column].foreign_keys
    return fk


def _check_names(table) -> set[str]:
    return {c.name for c in table.constraints if isinstance(c, CheckConstraint)}


class TestBase:
    """Test base model functionality."""

    def test_all_tables_registered(self):
        assert set(Base.metadata.tables) == {"admins", "universities", "programs", "enquiries"}

    def test_timestamp_mixin_has_columns(self):
        assert hasattr(TimestampMixin, "created_at")
        assert hasattr(TimestampMixin, "updated_at")

    def test_new_uuid_is_unique_string(self):
        first, second = new_uuid(), new_uuid()

        assert isinstance(first, str)
        assert len(first) == 36
        assert first != second


class TestUniversityModel:
    def test_slug_is_unique(self):
        assert University.__table__.c.slug.unique is True

    def test_fee_range_constraint(self):
        assert "university_fee_range_ordered" in _check_names(University.__table__)
        assert "valid_university_rating" in _check_names(University.__table__)

    def test_repr(self):
        assert repr(University(slug="amity")) == "<University amity>"


class TestProgramModel:
    def test_slug_is_unique(self):
        assert Program.__table__.c.slug.unique is True

    def test_programs_cascade_with_university(self):
        fk = _foreign_key(Program.__table__, "university_id")

        assert fk.column.table.name == "universities"
        assert fk.ondelete == "CASCADE"
        assert Program.__table__.c.university_id.nullable is False

    def test_fee_non_negative_constraint(self):
        assert "program_fee_non_negative" in _check_names(Program.__table__)

    def test_university_relationship(self, sample_program):
        assert sample_program in sample_program.university.programs


class TestEnquiryModel:
    def test_references_are_nulled_on_delete(self):
        table = Enquiry.__table__

        for column in ("program_id", "university_id", "assigned_to"):
            assert _foreign_key(table, column).ondelete == "SET NULL"
            assert table.c[column].nullable is True

    def test_status_is_indexed(self):
        assert Enquiry.__table__.c.status.index is True


class TestAdminModel:
    def test_email_is_unique(self):
        assert Admin.__table__.c.email.unique is True

    def test_role_defaults_to_admin(self):
        assert Admin.__table__.c.role.default.arg == "admin"
