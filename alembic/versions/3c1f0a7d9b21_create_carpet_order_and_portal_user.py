"""
Create CarpetOrder and portal_user tables.
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "3c1f0a7d9b21"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "CarpetOrder",
        sa.Column("Carpetno", sa.String(length=100), nullable=False),
        sa.Column("Buyercode", sa.String(length=50), nullable=True),
        sa.Column("Design", sa.String(length=255), nullable=True),
        sa.Column("Size", sa.String(length=100), nullable=True),
        sa.Column("STATUS", sa.String(length=100), nullable=True),
        sa.Column("Order issued", sa.String(length=32), nullable=True),
        sa.Column("Delivery Date", sa.String(length=32), nullable=True),
        sa.Column("Delay reason", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("Carpetno"),
    )
    op.create_index("ix_CarpetOrder_Buyercode", "CarpetOrder", ["Buyercode"], unique=False)

    op.create_table(
        "portal_user",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("username", sa.String(length=100), nullable=False),
        sa.Column("hashed_password", sa.String(length=255), nullable=False),
        sa.Column("role", sa.String(length=50), nullable=False, server_default="client"),
        sa.Column("client_code", sa.String(length=50), nullable=True),
        sa.Column("client_name", sa.String(length=255), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.TIMESTAMP(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.TIMESTAMP(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_portal_user_username", "portal_user", ["username"], unique=True)


def downgrade() -> None:
    op.drop_index("ix_portal_user_username", table_name="portal_user")
    op.drop_table("portal_user")
    op.drop_index("ix_CarpetOrder_Buyercode", table_name="CarpetOrder")
    op.drop_table("CarpetOrder")
