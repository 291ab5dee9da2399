"""Portal engagement - line items, payments, questions, messages, activity

Revision ID: 002
Revises: 001
Create Date: 2026-10-18 00:00:00.000000

"""

from collections.abc import Sequence

import sqlalchemy as sa
import sqlmodel
from sqlalchemy.dialects import postgresql

from alembic import op

revision: str = "002"
down_revision: str | None = "001"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _money(name: str, **kwargs) -> sa.Column:
    return sa.Column(name, sa.Numeric(precision=12, scale=2), nullable=False, **kwargs)


def upgrade() -> None:
    # 1. Line items (belong to an estimate or an invoice)
    op.create_table(
        "line_items",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("company_id", sqlmodel.sql.sqltypes.AutoString(length=64), nullable=False),
        sa.Column("estimate_id", sa.Uuid(), nullable=True),
        sa.Column("invoice_id", sa.Uuid(), nullable=True),
        sa.Column("name", sqlmodel.sql.sqltypes.AutoString(length=200), nullable=False),
        sa.Column("description", sqlmodel.sql.sqltypes.AutoString(length=2000), nullable=True),
        _money("quantity"),
        sa.Column(
            "unit",
            sqlmodel.sql.sqltypes.AutoString(length=20),
            nullable=False,
            server_default="each",
        ),
        _money("unit_price"),
        _money("line_total"),
        sa.Column("is_optional", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_selected", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("category", sqlmodel.sql.sqltypes.AutoString(length=100), nullable=True),
        sa.Column("sort_order", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["estimate_id"], ["estimates.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["invoice_id"], ["invoices.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_line_items_company_id", "line_items", ["company_id"])
    op.create_index("ix_line_items_estimate_id", "line_items", ["estimate_id"])
    op.create_index("ix_line_items_invoice_id", "line_items", ["invoice_id"])

    # 2. Payments (read-only from the portal)
    op.create_table(
        "payments",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("company_id", sqlmodel.sql.sqltypes.AutoString(length=64), nullable=False),
        sa.Column("client_id", sqlmodel.sql.sqltypes.AutoString(length=64), nullable=False),
        sa.Column("invoice_id", sa.Uuid(), nullable=False),
        _money("amount"),
        sa.Column("payment_method", sqlmodel.sql.sqltypes.AutoString(length=30), nullable=True),
        sa.Column("reference_number", sqlmodel.sql.sqltypes.AutoString(length=100), nullable=True),
        sa.Column("payment_date", sa.DateTime(), nullable=False),
        sa.Column(
            "stripe_payment_intent", sqlmodel.sql.sqltypes.AutoString(length=255), nullable=True
        ),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("voided_at", sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(["invoice_id"], ["invoices.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_payments_company_id", "payments", ["company_id"])
    op.create_index("ix_payments_client_id", "payments", ["client_id"])
    op.create_index("ix_payments_invoice_id", "payments", ["invoice_id"])

    # 3. Line-item questions and client answers
    op.create_table(
        "line_item_questions",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("company_id", sqlmodel.sql.sqltypes.AutoString(length=64), nullable=False),
        sa.Column("estimate_id", sa.Uuid(), nullable=False),
        sa.Column("line_item_id", sa.Uuid(), nullable=False),
        sa.Column("question_text", sqlmodel.sql.sqltypes.AutoString(length=1000), nullable=False),
        sa.Column(
            "answer_type",
            sqlmodel.sql.sqltypes.AutoString(length=20),
            nullable=False,
            server_default="text",
        ),
        sa.Column(
            "options",
            sa.JSON().with_variant(postgresql.JSONB(), "postgresql"),
            nullable=False,
        ),
        sa.Column("is_required", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("sort_order", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["estimate_id"], ["estimates.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["line_item_id"], ["line_items.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_line_item_questions_company_id", "line_item_questions", ["company_id"])
    op.create_index("ix_line_item_questions_estimate_id", "line_item_questions", ["estimate_id"])
    op.create_index(
        "ix_line_item_questions_line_item_id", "line_item_questions", ["line_item_id"]
    )

    op.create_table(
        "line_item_answers",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("question_id", sa.Uuid(), nullable=False),
        sa.Column("client_id", sqlmodel.sql.sqltypes.AutoString(length=64), nullable=False),
        sa.Column("answer_value", sqlmodel.sql.sqltypes.AutoString(length=2000), nullable=False),
        sa.Column("answered_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["question_id"], ["line_item_questions.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "question_id", "client_id", name="uq_line_item_answers_question_client"
        ),
    )
    op.create_index("ix_line_item_answers_question_id", "line_item_answers", ["question_id"])

    # 4. Client/company messages
    op.create_table(
        "portal_messages",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("company_id", sqlmodel.sql.sqltypes.AutoString(length=64), nullable=False),
        sa.Column("client_id", sqlmodel.sql.sqltypes.AutoString(length=64), nullable=False),
        sa.Column("project_id", sa.Uuid(), nullable=True),
        sa.Column("estimate_id", sa.Uuid(), nullable=True),
        sa.Column("invoice_id", sa.Uuid(), nullable=True),
        sa.Column(
            "sender_type",
            sqlmodel.sql.sqltypes.AutoString(length=10),
            nullable=False,
            server_default="client",
        ),
        sa.Column("sender_name", sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.Column("content", sqlmodel.sql.sqltypes.AutoString(length=5000), nullable=False),
        sa.Column("read_at", sa.DateTime(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["project_id"], ["projects.id"]),
        sa.ForeignKeyConstraint(["estimate_id"], ["estimates.id"]),
        sa.ForeignKeyConstraint(["invoice_id"], ["invoices.id"]),
        sa.CheckConstraint(
            "sender_type IN ('client', 'company')", name="ck_portal_messages_sender_type"
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_portal_messages_company_id", "portal_messages", ["company_id"])
    op.create_index("ix_portal_messages_client_id", "portal_messages", ["client_id"])
    op.create_index("ix_portal_messages_created_at", "portal_messages", ["created_at"])

    # 5. Activity timeline (no FKs: entries outlive the records they mention)
    op.create_table(
        "portal_activities",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("company_id", sqlmodel.sql.sqltypes.AutoString(length=64), nullable=False),
        sa.Column("client_id", sqlmodel.sql.sqltypes.AutoString(length=64), nullable=False),
        sa.Column("estimate_id", sa.Uuid(), nullable=True),
        sa.Column("invoice_id", sa.Uuid(), nullable=True),
        sa.Column("project_id", sa.Uuid(), nullable=True),
        sa.Column("type", sqlmodel.sql.sqltypes.AutoString(length=30), nullable=False),
        sa.Column("subject", sqlmodel.sql.sqltypes.AutoString(length=500), nullable=False),
        sa.Column("content", sqlmodel.sql.sqltypes.AutoString(length=5000), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_portal_activities_company_id", "portal_activities", ["company_id"])
    op.create_index("ix_portal_activities_client_id", "portal_activities", ["client_id"])
    op.create_index("ix_portal_activities_estimate_id", "portal_activities", ["estimate_id"])
    op.create_index("ix_portal_activities_invoice_id", "portal_activities", ["invoice_id"])


def downgrade() -> None:
    op.drop_index("ix_portal_activities_invoice_id", table_name="portal_activities")
    op.drop_index("ix_portal_activities_estimate_id", table_name="portal_activities")
    op.drop_index("ix_portal_activities_client_id", table_name="portal_activities")
    op.drop_index("ix_portal_activities_company_id", table_name="portal_activities")
    op.drop_table("portal_activities")

    op.drop_index("ix_portal_messages_created_at", table_name="portal_messages")
    op.drop_index("ix_portal_messages_client_id", table_name="portal_messages")
    op.drop_index("ix_portal_messages_company_id", table_name="portal_messages")
    op.drop_table("portal_messages")

    op.drop_index("ix_line_item_answers_question_id", table_name="line_item_answers")
    op.drop_table("line_item_answers")

    op.drop_index("ix_line_item_questions_line_item_id", table_name="line_item_questions")
    op.drop_index("ix_line_item_questions_estimate_id", table_name="line_item_questions")
    op.drop_index("ix_line_item_questions_company_id", table_name="line_item_questions")
    op.drop_table("line_item_questions")

    op.drop_index("ix_payments_invoice_id", table_name="payments")
    op.drop_index("ix_payments_client_id", table_name="payments")
    op.drop_index("ix_payments_company_id", table_name="payments")
    op.drop_table("payments")

    op.drop_index("ix_line_items_invoice_id", table_name="line_items")
    op.drop_index("ix_line_items_estimate_id", table_name="line_items")
    op.drop_index("ix_line_items_company_id", table_name="line_items")
    op.drop_table("line_items")
