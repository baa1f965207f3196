"""SQLAlchemy table definitions for Dossier.

They match the schema defined in Alembic migrations.
"""

from sqlalchemy import Column, Index, MetaData, String, Table
from sqlalchemy.dialects.postgresql import JSONB, TIMESTAMP

metadata = MetaData()

# ============================================================================
# PROFILES TABLE
# ============================================================================
# The profile body lives in `document` exactly as the domain serializes it
# (camelCase keys, `_id`). `email` and `update_dt` are lifted out for lookups.
profiles_table = Table(
    "profiles",
    metadata,
    Column("id", String(64), primary_key=True),
    Column("email", String(255), nullable=False),  # Several documents may share an email
    Column("document", JSONB, nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("update_dt", TIMESTAMP(timezone=True), nullable=True),
)

Index("idx_profiles_email", profiles_table.c.email)
