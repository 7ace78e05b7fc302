"""create account_user table

Revision ID: 001
Revises:
Create Date: 2026-10-17 09:00:00.000000

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "account_user",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("email", sa.String(50), nullable=False),
        sa.Column("password_hash", sa.String(100), nullable=False),
        sa.Column("full_name", sa.String(50), nullable=False),
        sa.Column("address", sa.String(100), nullable=False),
        sa.Column("phone_number", sa.String(20), nullable=False),
        sa.Column("role", sa.String(20), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_account_user_id", "account_user", ["id"], unique=False)
    op.create_index("ix_account_user_email", "account_user", ["email"], unique=True)


def downgrade() -> None:
    op.drop_index("ix_account_user_email", table_name="account_user")
    op.drop_index("ix_account_user_id", table_name="account_user")
    op.drop_table("account_user")
