"""Create movies table

Revision ID: a1b2c3d4e5f6
Revises:
Create Date: 2026-10-19 12:00:00.000000

"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "a1b2c3d4e5f6"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "movies",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("imdb_id", sa.String(length=20), nullable=False),
        sa.Column("title", sa.String(length=500), nullable=False),
        sa.Column("year", sa.Integer(), nullable=False),
        sa.Column("rated", sa.String(length=255), nullable=True),
        sa.Column("released", sa.String(length=255), nullable=False),
        sa.Column("runtime", sa.String(length=255), nullable=True),
        sa.Column("genre", sa.String(length=255), nullable=True),
        sa.Column("director", sa.Text(), nullable=True),
        sa.Column("writer", sa.Text(), nullable=True),
        sa.Column("actors", sa.Text(), nullable=True),
        sa.Column("plot", sa.Text(), nullable=False),
        sa.Column("poster", sa.String(length=1000), nullable=False),
        sa.Column("imdb_rating", sa.Numeric(precision=3, scale=1), nullable=True),
        sa.Column("box_office", sa.String(length=255), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    with op.batch_alter_table("movies", schema=None) as batch_op:
        # Unique so two concurrent imports of one IMDb id cannot both insert
        batch_op.create_index(batch_op.f("ix_movies_imdb_id"), ["imdb_id"], unique=True)
        batch_op.create_index(batch_op.f("ix_movies_created_at"), ["created_at"], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    with op.batch_alter_table("movies", schema=None) as batch_op:
        batch_op.drop_index(batch_op.f("ix_movies_created_at"))
        batch_op.drop_index(batch_op.f("ix_movies_imdb_id"))
    op.drop_table("movies")
