"""create portal tables

Revision ID: a1c4e7f20b31
Revises:
Create Date: 2026-10-19 10:00:00.000000

This migration creates:
1. users - registered students and admins (unique email)
2. schemes - scholarship scheme catalog
3. applications - one row per submission, payload kept verbatim in data_json
4. documents - uploaded files per application (cascade on application delete)
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "a1c4e7f20b31"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


user_role = sa.Enum("user", "admin", name="user_role")
application_status = sa.Enum("Pending", "Approved", "Rejected", name="application_status")


def upgrade() -> None:
    """Create users, schemes, applications and documents."""
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.Text(), nullable=False),
        sa.Column("age", sa.Integer(), nullable=True),
        sa.Column("gender", sa.String(length=50), nullable=True),
        sa.Column("role", user_role, nullable=False, server_default="user"),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "schemes",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("scheme_name", sa.String(length=255), nullable=False),
        sa.Column("scholarship_name", sa.String(length=255), nullable=True),
        sa.Column("amount", sa.Numeric(12, 2), nullable=True),
        sa.Column("academic_year", sa.String(length=20), nullable=True),
        sa.Column("type", sa.String(length=50), nullable=True),
        sa.Column("category", sa.String(length=50), nullable=True),
        sa.Column("is_international_eligible", sa.Boolean(), nullable=True),
        sa.Column("application_deadline", sa.Date(), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("eligibility", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_schemes_academic_year", "schemes", ["academic_year"])
    op.create_index("ix_schemes_category", "schemes", ["category"])
    op.create_index("ix_schemes_application_deadline", "schemes", ["application_deadline"])

    op.create_table(
        "applications",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("scheme_id", sa.Integer(), nullable=False),
        sa.Column(
            "application_date",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column("amount_applied", sa.Numeric(12, 2), nullable=True),
        sa.Column("data_json", sa.Text(), nullable=True),
        sa.Column("status", application_status, nullable=False, server_default="Pending"),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["scheme_id"], ["schemes.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_applications_user_id", "applications", ["user_id"])
    op.create_index("ix_applications_status", "applications", ["status"])
    op.create_index("ix_applications_application_date", "applications", ["application_date"])

    op.create_table(
        "documents",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("application_id", sa.Integer(), nullable=False),
        sa.Column("doc_type", sa.String(length=50), nullable=False),
        sa.Column("filename", sa.String(length=255), nullable=False),
        sa.Column(
            "uploaded_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(["application_id"], ["applications.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_documents_application_id", "documents", ["application_id"])


def downgrade() -> None:
    """Drop all portal tables and enum types."""
    op.drop_index("ix_documents_application_id", table_name="documents")
    op.drop_table("documents")

    op.drop_index("ix_applications_application_date", table_name="applications")
    op.drop_index("ix_applications_status", table_name="applications")
    op.drop_index("ix_applications_user_id", table_name="applications")
    op.drop_table("applications")

    op.drop_index("ix_schemes_application_deadline", table_name="schemes")
    op.drop_index("ix_schemes_category", table_name="schemes")
    op.drop_index("ix_schemes_academic_year", table_name="schemes")
    op.drop_table("schemes")

    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")

    application_status.drop(op.get_bind(), checkfirst=True)
    user_role.drop(op.get_bind(), checkfirst=True)
