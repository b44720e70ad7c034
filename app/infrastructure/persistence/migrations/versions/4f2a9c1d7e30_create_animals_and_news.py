"""Create animals and news tables

Revision ID: 4f2a9c1d7e30
Revises:
Create Date: 2026-10-19 10:04:51.118204

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "4f2a9c1d7e30"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create animals and news."""
    op.create_table(
        "animals",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("type", sa.String(), nullable=False),
        sa.Column("size", sa.String(), nullable=False),
        sa.Column("age", sa.String(), nullable=False),
        sa.Column("genre", sa.String(length=16), nullable=False),
        sa.Column(
            "adopted", sa.Boolean(), server_default=sa.text("false"), nullable=False
        ),
        # JSON array of locators, stored as text
        sa.Column("photos", sa.Text(), server_default=sa.text("'[]'"), nullable=False),
        sa.Column(
            "register_date",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.CheckConstraint(
            "genre IN ('male', 'female', 'unknown')", name="animals_genre_check"
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_animals_register_date", "animals", ["register_date"], unique=False
    )

    op.create_table(
        "news",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("type", sa.String(), nullable=True),
        sa.Column("image", sa.Text(), nullable=True),
        sa.Column("date", sa.DateTime(timezone=True), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_news_date", "news", ["date"], unique=False)


def downgrade() -> None:
    """Drop news and animals."""
    op.drop_index("ix_news_date", table_name="news")
    op.drop_table("news")
    op.drop_index("ix_animals_register_date", table_name="animals")
    op.drop_table("animals")
