"""create account_usersession table

Revision ID: 002
Revises: 001
Create Date: 2026-10-17 09:10:00.000000

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # The unique user_id is the one-session-per-user rule; do not drop it.
    op.create_table(
        "account_usersession",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("token", sa.String(255), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("token", name="uq_account_usersession_token"),
        sa.UniqueConstraint("user_id", name="uq_account_usersession_user_id"),
        sa.ForeignKeyConstraint(
            ["user_id"],
            ["account_user.id"],
            name="fk_account_usersession_user_id",
            ondelete="CASCADE",
        ),
    )
    op.create_index("ix_account_usersession_id", "account_usersession", ["id"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_account_usersession_id", table_name="account_usersession")
    op.drop_table("account_usersession")
