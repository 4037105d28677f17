# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Initial schema.

Revision ID: 001_initial_schema
Revises: None
Create Date: 2025-01-06

Creates the admins, universities, programs and enquiries tables.
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

revision: str = "001_initial_schema"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _id_column() -> sa.Column:
    return sa.Column(
        "id",
        postgresql.UUID(as_uuid=False),
        server_default=sa.text("gen_random_uuid()"),
        primary_key=True,
    )


def _timestamp_columns() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
    ]


def _text_array(name: str) -> sa.Column:
    return sa.Column(
        name,
        postgresql.ARRAY(sa.Text),
        nullable=False,
        server_default=sa.text("'{}'::text[]"),
    )


def upgrade() -> None:
    """Create all tables."""
    # ==========================================================================
    # 1. admins table
    # ==========================================================================
    op.create_table(
        "admins",
        _id_column(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column("password", sa.String(255), nullable=False),
        sa.Column("role", sa.String(20), nullable=False, server_default="admin"),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("last_login", sa.DateTime(timezone=True), nullable=True),
        *_timestamp_columns(),
        sa.CheckConstraint(
            "role IN ('superadmin', 'admin', 'editor')",
            name="valid_admin_role",
        ),
    )
    op.create_index("ix_admins_email", "admins", ["email"])

    # ==========================================================================
    # 2. universities table
    # ==========================================================================
    op.create_table(
        "universities",
        _id_column(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("slug", sa.String(255), nullable=False, unique=True),
        sa.Column("short_name", sa.String(100), nullable=True),
        sa.Column("logo", sa.String(500), nullable=False, server_default=""),
        sa.Column("banner", sa.String(500), nullable=False, server_default=""),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column("established_year", sa.Integer, nullable=True),
        sa.Column("location", sa.String(255), nullable=False),
        sa.Column("address", sa.Text, nullable=True),
        sa.Column("website", sa.String(500), nullable=True),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("rating", sa.String(20), nullable=False, server_default="Not Rated"),
        _text_array("accreditations"),
        _text_array("approvals"),
        _text_array("facilities"),
        _text_array("highlights"),
        sa.Column("min_fee", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column("max_fee", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column("featured", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("ranking", sa.Integer, nullable=True),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.true()),
        *_timestamp_columns(),
        sa.CheckConstraint("min_fee <= max_fee", name="university_fee_range_ordered"),
        sa.CheckConstraint(
            "rating IN ('A++', 'A+', 'A', 'B++', 'B+', 'B', 'C', 'Not Rated')",
            name="valid_university_rating",
        ),
    )
    op.create_index("ix_universities_slug", "universities", ["slug"])
    op.create_index("ix_universities_featured", "universities", ["featured"])
    op.create_index("ix_universities_is_active", "universities", ["is_active"])

    # ==========================================================================
    # 3. programs table
    # ==========================================================================
    op.create_table(
        "programs",
        _id_column(),
        sa.Column(
            "university_id",
            postgresql.UUID(as_uuid=False),
            sa.ForeignKey("universities.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("slug", sa.String(300), nullable=False, unique=True),
        sa.Column("category", sa.String(30), nullable=False),
        sa.Column("level", sa.String(30), nullable=False),
        sa.Column("duration", sa.String(50), nullable=False, server_default="2 Years"),
        sa.Column("mode", sa.String(20), nullable=False, server_default="Online"),
        sa.Column("fee", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column("fee_period", sa.String(20), nullable=False, server_default="Total"),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column(
            "eligibility",
            sa.Text,
            nullable=False,
            server_default="Bachelor's degree from a recognized university",
        ),
        sa.Column("image", sa.String(500), nullable=False, server_default=""),
        sa.Column("brochure_url", sa.String(500), nullable=False, server_default=""),
        sa.Column("youtube_url", sa.String(500), nullable=False, server_default=""),
        _text_array("syllabus"),
        _text_array("highlights"),
        _text_array("career_options"),
        _text_array("specializations"),
        sa.Column("semesters", sa.Integer, nullable=False, server_default="4"),
        sa.Column("credits", sa.Integer, nullable=False, server_default="0"),
        sa.Column("featured", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("ranking", sa.Integer, nullable=True),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("meta_title", sa.String(255), nullable=True),
        sa.Column("meta_description", sa.Text, nullable=True),
        *_timestamp_columns(),
        sa.CheckConstraint("fee >= 0", name="program_fee_non_negative"),
    )
    op.create_index("ix_programs_university_id", "programs", ["university_id"])
    op.create_index("ix_programs_slug", "programs", ["slug"])
    op.create_index("ix_programs_category", "programs", ["category"])
    op.create_index("ix_programs_level", "programs", ["level"])
    op.create_index("ix_programs_featured", "programs", ["featured"])
    op.create_index("ix_programs_is_active", "programs", ["is_active"])

    # ==========================================================================
    # 4. enquiries table
    # ==========================================================================
    op.create_table(
        "enquiries",
        _id_column(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("phone", sa.String(50), nullable=False),
        sa.Column("message", sa.Text, nullable=False, server_default=""),
        sa.Column(
            "program_id",
            postgresql.UUID(as_uuid=False),
            sa.ForeignKey("programs.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column(
            "university_id",
            postgresql.UUID(as_uuid=False),
            sa.ForeignKey("universities.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("source", sa.String(30), nullable=False, server_default="Website"),
        sa.Column("status", sa.String(30), nullable=False, server_default="New"),
        sa.Column("notes", sa.Text, nullable=True),
        sa.Column(
            "assigned_to",
            postgresql.UUID(as_uuid=False),
            sa.ForeignKey("admins.id", ondelete="SET NULL"),
            nullable=True,
        ),
        *_timestamp_columns(),
    )
    op.create_index("ix_enquiries_email", "enquiries", ["email"])
    op.create_index("ix_enquiries_status", "enquiries", ["status"])
    op.create_index("ix_enquiries_created_at", "enquiries", ["created_at"])


def downgrade() -> None:
    """Drop all tables."""
    op.drop_table("enquiries")
    op.drop_table("programs")
    op.drop_table("universities")
    op.drop_table("admins")
