"""Initial schema and seed data for Alexandria

Revision ID: 20260301_000000
Revises: None
Create Date: 2026-03-01 00:00:00.000000

This is the initial migration that creates all tables and seeds default data
for the Alexandria platform. This includes:
- Accounts, educator payout details and the social graph
- Courses, enrollments and tutoring hire requests
- The revenue ledger (payment logs, splits, gateway events, refunds)
- Libraries and their contents
- AlexPoints rules, levels and transactions, with the default rules and levels

Revision format: YYYYMMDD_HHMMSS_description

"""

from datetime import datetime, timezone
from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op
from alexandria.points.defaults import DEFAULT_LEVELS, DEFAULT_RULES

# revision identifiers, used by Alembic.
revision: str = "20260301_000000"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

MONEY = sa.Numeric(12, 2)


def _timestamps() -> list:
    return [
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    ]


def upgrade() -> None:
    """Create all tables and seed initial data."""

    # Create users table
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("username", sa.String(64), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("first_name", sa.String(128), nullable=True),
        sa.Column("last_name", sa.String(128), nullable=True),
        sa.Column("bio", sa.String(), nullable=True),
        sa.Column("role", sa.String(16), nullable=False),
        sa.Column("is_verified", sa.Boolean(), nullable=False),
        sa.Column("api_token_hash", sa.String(64), nullable=True),
        sa.Column("alex_points", sa.Integer(), nullable=False),
        sa.Column("point_level", sa.Integer(), nullable=False),
        sa.Column("points_to_next_level", sa.Integer(), nullable=False),
        sa.Column("last_login_at", sa.DateTime(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_users_username", "username", unique=True),
        sa.Index("ix_users_email", "email", unique=True),
        sa.Index("ix_users_api_token_hash", "api_token_hash", unique=True),
        sa.Index("ix_users_role", "role"),
        sa.Index("ix_users_alex_points", "alex_points"),
        sa.Index("ix_users_created_at", "created_at"),
    )

    # Create educator_payment_info table
    op.create_table(
        "educator_payment_info",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("bank_code", sa.String(16), nullable=False),
        sa.Column("bank_name", sa.String(128), nullable=True),
        sa.Column("account_number", sa.String(10), nullable=False),
        sa.Column("account_name", sa.String(255), nullable=True),
        sa.Column("subaccount_code", sa.String(64), nullable=True),
        sa.Column("is_verified", sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_educator_payment_info_user_id", "user_id", unique=True),
        sa.Index("ix_educator_payment_info_subaccount_code", "subaccount_code"),
    )

    # Create social graph tables
    for table, owner, target in (
        ("follows", "follower_id", "following_id"),
        ("blocked_users", "user_id", "blocked_user_id"),
        ("muted_users", "user_id", "muted_user_id"),
    ):
        op.create_table(
            table,
            sa.Column("id", sa.Integer(), nullable=False),
            sa.Column(owner, sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
            sa.Column(target, sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
            sa.Column("created_at", sa.DateTime(), nullable=False),
            sa.PrimaryKeyConstraint("id"),
            sa.UniqueConstraint(owner, target, name=f"uq_{table}_pair"),
            sa.Index(f"ix_{table}_{owner}", owner),
            sa.Index(f"ix_{table}_{target}", target),
        )

    # Create courses table
    op.create_table(
        "courses",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.String(), nullable=True),
        sa.Column("price", MONEY, nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_courses_user_id", "user_id"),
    )

    # Create enrollments table
    op.create_table(
        "enrollments",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("course_id", sa.Integer(), sa.ForeignKey("courses.id"), nullable=False),
        sa.Column("status", sa.String(16), nullable=False),
        sa.Column("transaction_reference", sa.String(64), nullable=True),
        sa.Column("enrolled_at", sa.DateTime(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_enrollments_user_id", "user_id"),
        sa.Index("ix_enrollments_course_id", "course_id"),
        sa.Index("ix_enrollments_status", "status"),
        sa.Index("ix_enrollments_transaction_reference", "transaction_reference"),
    )

    # Create hire_requests table
    op.create_table(
        "hire_requests",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("client_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("tutor_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("hours", sa.Integer(), nullable=False),
        sa.Column("amount", MONEY, nullable=False),
        sa.Column("message", sa.String(), nullable=True),
        sa.Column("status", sa.String(16), nullable=False),
        sa.Column("transaction_reference", sa.String(64), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_hire_requests_client_id", "client_id"),
        sa.Index("ix_hire_requests_tutor_id", "tutor_id"),
        sa.Index("ix_hire_requests_status", "status"),
        sa.Index("ix_hire_requests_transaction_reference", "transaction_reference"),
    )

    # Create payment_logs table
    op.create_table(
        "payment_logs",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("transaction_reference", sa.String(64), nullable=False),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("amount", MONEY, nullable=False),
        sa.Column("refunded_amount", MONEY, nullable=False, server_default="0"),
        sa.Column("status", sa.String(16), nullable=False),
        sa.Column("payment_type", sa.String(32), nullable=False),
        sa.Column("payment_url", sa.String(2048), nullable=True),
        sa.Column("course_id", sa.Integer(), sa.ForeignKey("courses.id"), nullable=True),
        sa.Column("enrollment_id", sa.Integer(), sa.ForeignKey("enrollments.id"), nullable=True),
        sa.Column("hire_request_id", sa.Integer(), sa.ForeignKey("hire_requests.id"), nullable=True),
        sa.Column("meta", sa.JSON(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_payment_logs_transaction_reference", "transaction_reference", unique=True),
        sa.Index("ix_payment_logs_user_id", "user_id"),
        sa.Index("ix_payment_logs_status", "status"),
        sa.Index("ix_payment_logs_payment_type", "payment_type"),
        sa.Index("ix_payment_logs_course_id", "course_id"),
        sa.Index("ix_payment_logs_created_at", "created_at"),
    )

    # Create payment_splits table
    op.create_table(
        "payment_splits",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("payment_log_id", sa.Integer(), sa.ForeignKey("payment_logs.id"), nullable=False),
        sa.Column("transaction_reference", sa.String(64), nullable=False),
        sa.Column("recipient_type", sa.String(16), nullable=False),
        sa.Column("recipient_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=True),
        sa.Column("amount", MONEY, nullable=False),
        sa.Column("refunded_amount", MONEY, nullable=False, server_default="0"),
        sa.Column("percentage", sa.Numeric(5, 2), nullable=False),
        sa.Column("status", sa.String(16), nullable=False),
        sa.Column("meta", sa.JSON(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_payment_splits_payment_log_id", "payment_log_id"),
        sa.Index("ix_payment_splits_transaction_reference", "transaction_reference"),
        sa.Index("ix_payment_splits_recipient_type", "recipient_type"),
        sa.Index("ix_payment_splits_recipient_id", "recipient_id"),
        sa.Index("ix_payment_splits_status", "status"),
        sa.Index("ix_payment_splits_created_at", "created_at"),
    )

    # Create gateway_events table
    op.create_table(
        "gateway_events",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("reference", sa.String(64), nullable=False),
        sa.Column("event", sa.String(64), nullable=False),
        sa.Column("payload", sa.JSON(), nullable=False),
        sa.Column("received_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("reference", "event", name="uq_gateway_events_reference_event"),
        sa.Index("ix_gateway_events_reference", "reference"),
    )

    # Create refunds table
    op.create_table(
        "refunds",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("payment_log_id", sa.Integer(), sa.ForeignKey("payment_logs.id"), nullable=False),
        sa.Column("transaction_reference", sa.String(64), nullable=False),
        sa.Column("reason", sa.String(), nullable=True),
        sa.Column("amount", MONEY, nullable=False),
        sa.Column("status", sa.String(16), nullable=False),
        sa.Column("processor", sa.String(16), nullable=False),
        sa.Column("processor_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=True),
        sa.Column("gateway_refund_id", sa.String(64), nullable=True),
        sa.Column("refunded_at", sa.DateTime(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_refunds_payment_log_id", "payment_log_id"),
        sa.Index("ix_refunds_transaction_reference", "transaction_reference"),
        sa.Index("ix_refunds_status", "status"),
        sa.Index("ix_refunds_created_at", "created_at"),
    )

    # Create open_libraries table
    op.create_table(
        "open_libraries",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("creator_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("course_id", sa.Integer(), sa.ForeignKey("courses.id"), nullable=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.String(), nullable=True),
        sa.Column("type", sa.String(32), nullable=False),
        sa.Column("is_approved", sa.Boolean(), nullable=False),
        sa.Column("approval_status", sa.String(16), nullable=False),
        sa.Column("approval_date", sa.DateTime(), nullable=True),
        sa.Column("approved_by", sa.Integer(), sa.ForeignKey("users.id"), nullable=True),
        sa.Column("rejection_reason", sa.String(500), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_open_libraries_creator_id", "creator_id"),
        sa.Index("ix_open_libraries_approval_status", "approval_status"),
        sa.Index("ix_open_libraries_created_at", "created_at"),
    )

    # Create library_contents table
    op.create_table(
        "library_contents",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("library_id", sa.Integer(), sa.ForeignKey("open_libraries.id"), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("url", sa.String(2048), nullable=False),
        sa.Column("summary", sa.String(), nullable=True),
        sa.Column("relevance_score", sa.Float(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_library_contents_library_id", "library_id"),
    )

    # Create AlexPoints tables
    rules_table = op.create_table(
        "alex_points_rules",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("action_type", sa.String(64), nullable=False),
        sa.Column("points", sa.Integer(), nullable=False),
        sa.Column("description", sa.String(255), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("is_one_time", sa.Boolean(), nullable=False),
        sa.Column("daily_limit", sa.Integer(), nullable=False),
        sa.Column("meta", sa.JSON(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_alex_points_rules_action_type", "action_type", unique=True),
    )

    levels_table = op.create_table(
        "alex_points_levels",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("level", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(64), nullable=False),
        sa.Column("points_required", sa.Integer(), nullable=False),
        sa.Column("description", sa.String(255), nullable=True),
        sa.Column("rewards", sa.JSON(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("points_required"),
        sa.Index("ix_alex_points_levels_level", "level", unique=True),
    )

    op.create_table(
        "alex_points_transactions",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("points", sa.Integer(), nullable=False),
        sa.Column("action_type", sa.String(64), nullable=False),
        sa.Column("description", sa.String(255), nullable=True),
        sa.Column("reference_id", sa.String(64), nullable=True),
        sa.Column("reference_type", sa.String(64), nullable=True),
        sa.Column("meta", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_alex_points_transactions_user_id", "user_id"),
        sa.Index("ix_alex_points_transactions_action_type", "action_type"),
        sa.Index("ix_alex_points_transactions_created_at", "created_at"),
    )

    # Seed default AlexPoints rules and levels
    now = datetime.now(timezone.utc).replace(tzinfo=None)
    op.bulk_insert(rules_table, [{**rule, "created_at": now, "updated_at": now} for rule in DEFAULT_RULES])
    op.bulk_insert(levels_table, [{**level, "created_at": now, "updated_at": now} for level in DEFAULT_LEVELS])


def downgrade() -> None:
    """Drop all tables created in upgrade."""
    op.drop_table("alex_points_transactions")
    op.drop_table("alex_points_levels")
    op.drop_table("alex_points_rules")
    op.drop_table("library_contents")
    op.drop_table("open_libraries")
    op.drop_table("refunds")
    op.drop_table("gateway_events")
    op.drop_table("payment_splits")
    op.drop_table("payment_logs")
    op.drop_table("hire_requests")
    op.drop_table("enrollments")
    op.drop_table("courses")
    op.drop_table("muted_users")
    op.drop_table("blocked_users")
    op.drop_table("follows")
    op.drop_table("educator_payment_info")
    op.drop_table("users")
