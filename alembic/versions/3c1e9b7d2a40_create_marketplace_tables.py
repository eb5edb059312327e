"""Create profiles, categories and listings

Revision ID: 3c1e9b7d2a40
Revises:
Create Date: 2026-10-19 09:12:31.418207

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c1e9b7d2a40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "profiles",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("username", sa.String(50), nullable=False, unique=True),
        sa.Column("full_name", sa.String(100), nullable=True),
        sa.Column("avatar_url", sa.Text(), nullable=True),
        sa.Column("is_verified", sa.Boolean(), nullable=False, server_default=sa.false()),
    )

    op.create_table(
        "categories",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("slug", sa.String(100), nullable=False, unique=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("icon_url", sa.Text(), nullable=True),
        sa.Column(
            "parent_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("categories.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("sort_order", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_categories_sort_order_name", "categories", ["sort_order", "name"])

    op.create_table(
        "listings",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "seller_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("profiles.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("price", sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column("currency", sa.String(3), nullable=False, server_default="USD"),
        sa.Column(
            "category_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("categories.id"),
            nullable=False,
        ),
        sa.Column(
            "subcategory_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("categories.id"),
            nullable=True,
        ),
        sa.Column("brand", sa.String(100), nullable=True),
        sa.Column("size", sa.String(20), nullable=True),
        sa.Column("condition", sa.String(30), nullable=False),
        sa.Column("images", postgresql.JSONB(), nullable=False, server_default="[]"),
        sa.Column("location", sa.String(100), nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="active"),
        sa.Column("view_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("like_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_negotiable", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("shipping_included", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("shipping_cost", sa.Numeric(precision=10, scale=2), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("sold_at", sa.DateTime(timezone=True), nullable=True),
    )

    # Filter and sort columns used by browse
    op.create_index("ix_listings_status_created_at", "listings", ["status", "created_at"])
    op.create_index("ix_listings_category_id", "listings", ["category_id"])
    op.create_index("ix_listings_subcategory_id", "listings", ["subcategory_id"])
    op.create_index("ix_listings_price", "listings", ["price"])
    op.create_index("ix_listings_view_count", "listings", ["view_count"])
    op.create_index("ix_listings_like_count", "listings", ["like_count"])
    op.create_index("ix_listings_brand", "listings", ["brand"])

    # Full-text search on title and description
    op.execute(
        "CREATE INDEX ix_listings_title_fts ON listings "
        "USING GIN (to_tsvector('english'::regconfig, title))"
    )
    op.execute(
        "CREATE INDEX ix_listings_description_fts ON listings "
        "USING GIN (to_tsvector('english'::regconfig, description))"
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("listings")
    op.drop_index("ix_categories_sort_order_name", table_name="categories")
    op.drop_table("categories")
    op.drop_table("profiles")
