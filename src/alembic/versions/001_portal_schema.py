"""Portal schema - tokens, branding, projects, estimates, invoices

Revision ID: 001
Revises:
Create Date: 2026-10-18 00:00:00.000000

"""

from collections.abc import Sequence

import sqlalchemy as sa
import sqlmodel

from alembic import op

revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _owner_columns(*, client_scoped: bool) -> list[sa.Column]:
    columns = [
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("company_id", sqlmodel.sql.sqltypes.AutoString(length=64), nullable=False),
    ]
    if client_scoped:
        columns.append(
            sa.Column("client_id", sqlmodel.sql.sqltypes.AutoString(length=64), nullable=False)
        )
    return columns


def _timestamp_columns() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.Column("deleted_at", sa.DateTime(), nullable=True),
    ]


def upgrade() -> None:
    # 1. Portal tokens (only the SHA-256 of the secret is stored)
    op.create_table(
        "portal_tokens",
        *_owner_columns(client_scoped=True),
        sa.Column("email", sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.Column("token_hash", sqlmodel.sql.sqltypes.AutoString(length=64), nullable=False),
        sa.Column(
            "source",
            sqlmodel.sql.sqltypes.AutoString(length=20),
            nullable=False,
            server_default="self_service",
        ),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("expires_at", sa.DateTime(), nullable=False),
        sa.Column("revoked_at", sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_portal_tokens_token_hash", "portal_tokens", ["token_hash"], unique=True)
    op.create_index("ix_portal_tokens_company_id", "portal_tokens", ["company_id"])
    op.create_index("ix_portal_tokens_client_id", "portal_tokens", ["client_id"])

    # 2. Portal branding (one row per company)
    op.create_table(
        "portal_branding",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("company_id", sqlmodel.sql.sqltypes.AutoString(length=64), nullable=False),
        sa.Column("logo_url", sqlmodel.sql.sqltypes.AutoString(length=2048), nullable=True),
        sa.Column(
            "accent_color",
            sqlmodel.sql.sqltypes.AutoString(length=16),
            nullable=False,
            server_default="#417394",
        ),
        sa.Column("welcome_message", sqlmodel.sql.sqltypes.AutoString(length=2000), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_portal_branding_company_id", "portal_branding", ["company_id"], unique=True)

    # 3. Projects (company scoped)
    op.create_table(
        "projects",
        *_owner_columns(client_scoped=False),
        sa.Column("title", sqlmodel.sql.sqltypes.AutoString(length=200), nullable=False),
        sa.Column("address", sqlmodel.sql.sqltypes.AutoString(length=500), nullable=True),
        sa.Column("description", sqlmodel.sql.sqltypes.AutoString(length=2000), nullable=True),
        sa.Column(
            "status",
            sqlmodel.sql.sqltypes.AutoString(length=20),
            nullable=False,
            server_default="active",
        ),
        sa.Column("start_date", sa.Date(), nullable=True),
        sa.Column("end_date", sa.Date(), nullable=True),
        *_timestamp_columns(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_projects_company_id", "projects", ["company_id"])

    # 4. Estimates (company + client scoped)
    op.create_table(
        "estimates",
        *_owner_columns(client_scoped=True),
        sa.Column("project_id", sa.Uuid(), nullable=True),
        sa.Column("estimate_number", sqlmodel.sql.sqltypes.AutoString(length=50), nullable=False),
        sa.Column("title", sqlmodel.sql.sqltypes.AutoString(length=200), nullable=True),
        sa.Column("total", sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column(
            "status",
            sqlmodel.sql.sqltypes.AutoString(length=20),
            nullable=False,
            server_default="draft",
        ),
        sa.Column("issue_date", sa.Date(), nullable=True),
        sa.Column("expiration_date", sa.Date(), nullable=True),
        sa.Column("viewed_at", sa.DateTime(), nullable=True),
        sa.Column("approved_at", sa.DateTime(), nullable=True),
        sa.Column("approved_by", sqlmodel.sql.sqltypes.AutoString(length=64), nullable=True),
        sa.Column("declined_at", sa.DateTime(), nullable=True),
        sa.Column("decline_reason", sqlmodel.sql.sqltypes.AutoString(length=2000), nullable=True),
        *_timestamp_columns(),
        sa.ForeignKeyConstraint(["project_id"], ["projects.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_estimates_company_id", "estimates", ["company_id"])
    op.create_index("ix_estimates_client_id", "estimates", ["client_id"])
    op.create_index("ix_estimates_project_id", "estimates", ["project_id"])

    # 5. Invoices (company + client scoped)
    op.create_table(
        "invoices",
        *_owner_columns(client_scoped=True),
        sa.Column("project_id", sa.Uuid(), nullable=True),
        sa.Column("invoice_number", sqlmodel.sql.sqltypes.AutoString(length=50), nullable=False),
        sa.Column("subject", sqlmodel.sql.sqltypes.AutoString(length=200), nullable=True),
        sa.Column("total", sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column("amount_paid", sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column("balance_due", sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column(
            "status",
            sqlmodel.sql.sqltypes.AutoString(length=20),
            nullable=False,
            server_default="draft",
        ),
        sa.Column("issue_date", sa.Date(), nullable=True),
        sa.Column("due_date", sa.Date(), nullable=True),
        *_timestamp_columns(),
        sa.ForeignKeyConstraint(["project_id"], ["projects.id"]),
        sa.CheckConstraint("balance_due >= 0", name="ck_invoices_balance_due_non_negative"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_invoices_company_id", "invoices", ["company_id"])
    op.create_index("ix_invoices_client_id", "invoices", ["client_id"])
    op.create_index("ix_invoices_project_id", "invoices", ["project_id"])


def downgrade() -> None:
    op.drop_index("ix_invoices_project_id", table_name="invoices")
    op.drop_index("ix_invoices_client_id", table_name="invoices")
    op.drop_index("ix_invoices_company_id", table_name="invoices")
    op.drop_table("invoices")

    op.drop_index("ix_estimates_project_id", table_name="estimates")
    op.drop_index("ix_estimates_client_id", table_name="estimates")
    op.drop_index("ix_estimates_company_id", table_name="estimates")
    op.drop_table("estimates")

    op.drop_index("ix_projects_company_id", table_name="projects")
    op.drop_table("projects")

    op.drop_index("ix_portal_branding_company_id", table_name="portal_branding")
    op.drop_table("portal_branding")

    op.drop_index("ix_portal_tokens_client_id", table_name="portal_tokens")
    op.drop_index("ix_portal_tokens_company_id", table_name="portal_tokens")
    op.drop_index("ix_portal_tokens_token_hash", table_name="portal_tokens")
    op.drop_table("portal_tokens")
