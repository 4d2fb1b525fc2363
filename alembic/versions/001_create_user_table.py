"""Create user table

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "user",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("first_name", sa.String(length=128), nullable=False),
        sa.Column("last_name", sa.String(length=128), nullable=False),
        sa.Column("email", sa.String(length=256), nullable=False),
        sa.Column("password_hash", sa.String(length=256), nullable=False),
        sa.Column("bio", sa.Text(), nullable=False, server_default=""),
        sa.Column("occupation", sa.String(length=256), nullable=False, server_default=""),
        sa.Column("photo_url", sa.String(length=1024), nullable=False, server_default=""),
        sa.Column("instagram", sa.String(length=512), nullable=False, server_default=""),
        sa.Column("facebook", sa.String(length=512), nullable=False, server_default=""),
        sa.Column("linkedin", sa.String(length=512), nullable=False, server_default=""),
        sa.Column("github", sa.String(length=512), nullable=False, server_default=""),
        sa.Column("reset_state", sa.String(length=16), nullable=False, server_default="normal"),
        sa.Column("password_reset_token", sa.String(length=128), nullable=True),
        sa.Column("password_reset_expires_at", sa.DateTime(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.Column("last_login_at", sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "(reset_state = 'normal' AND password_reset_token IS NULL AND password_reset_expires_at IS NULL)"
            " OR (reset_state = 'reset_pending' AND password_reset_token IS NOT NULL"
            " AND password_reset_expires_at IS NOT NULL)",
            name="ck_user_reset_state_consistent",
        ),
    )
    op.create_index(op.f("ix_user_email"), "user", ["email"], unique=True)
    op.create_index(op.f("ix_user_password_reset_token"), "user", ["password_reset_token"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_user_password_reset_token"), table_name="user")
    op.drop_index(op.f("ix_user_email"), table_name="user")
    op.drop_table("user")
