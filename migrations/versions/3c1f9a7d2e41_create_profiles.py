"""create_profiles

Create the profile document store:
- Profiles (JSONB document keyed by generated id, looked up by email)

Revision ID: 3c1f9a7d2e41
Revises:
Create Date: 2026-10-18 10:12:44.512803

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c1f9a7d2e41"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "profiles",
        sa.Column("id", sa.String(length=64), nullable=False),
        # Email is deliberately not unique; the first match wins on lookup
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("document", postgresql.JSONB(), nullable=False),
        sa.Column(
            "created_at",
            postgresql.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.Column("update_dt", postgresql.TIMESTAMP(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_profiles_email", "profiles", ["email"])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("idx_profiles_email", table_name="profiles")
    op.drop_table("profiles")
