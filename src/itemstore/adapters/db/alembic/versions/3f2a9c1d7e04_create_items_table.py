"""create items table

Revision ID: 3f2a9c1d7e04
Revises:
Create Date: 2026-10-19 09:12:41.518204

"""

# pylint: disable=invalid-name

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# pylint: disable=no-member

# revision identifiers, used by Alembic.
revision: str = "3f2a9c1d7e04"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Upgrade schema."""

    op.create_table(
        "items",
        sa.Column(
            "id",
            sa.String(length=36),
            nullable=False,
            comment="Item identifier (immutable).",
        ),
        sa.Column(
            "parent_id",
            sa.String(length=36),
            nullable=False,
            comment="Containing item; all-zero GUID for top-level items.",
        ),
        sa.Column(
            "name",
            sa.Text(),
            nullable=False,
            comment="Display name.",
        ),
        sa.Column(
            "template_id",
            sa.String(length=36),
            nullable=False,
            comment="Template the item conforms to; all-zero GUID if none.",
        ),
        sa.Column(
            "branch_id",
            sa.String(length=36),
            nullable=False,
            comment="Branch template the item was created from; all-zero GUID if none.",
        ),
        sa.Column(
            "field_values",
            sa.JSON(none_as_null=True).with_variant(
                postgresql.JSONB(none_as_null=True), "postgresql"
            ),
            nullable=False,
            comment="Versioned/localized field values (array of documents).",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_items")),
        comment="Item documents. One row per content item.",
    )
    op.create_index(op.f("ix_items_parent_id"), "items", ["parent_id"])
    op.create_index(op.f("ix_items_template_id"), "items", ["template_id"])


def downgrade() -> None:
    """Downgrade schema."""

    op.drop_index(op.f("ix_items_template_id"), table_name="items")
    op.drop_index(op.f("ix_items_parent_id"), table_name="items")
    op.drop_table("items")
