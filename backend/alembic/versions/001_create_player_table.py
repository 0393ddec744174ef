"""Create player table.

Revision ID: 001_player
Revises: None
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_player"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "player",
        sa.Column("id", sa.BigInteger, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String, nullable=False),
        sa.Column("title", sa.String, nullable=False, server_default=""),
        sa.Column("race", sa.String(20), nullable=False),
        sa.Column("profession", sa.String(20), nullable=False),
        sa.Column("birthday", sa.DateTime(timezone=True), nullable=False),
        sa.Column("banned", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("experience", sa.Integer, nullable=False),
        sa.Column("level", sa.Integer, nullable=False),
        sa.Column("until_next_level", sa.Integer, nullable=False),
    )
    op.create_index("ix_player_level", "player", ["level"])
    op.create_index("ix_player_experience", "player", ["experience"])


def downgrade() -> None:
    op.drop_index("ix_player_experience", table_name="player")
    op.drop_index("ix_player_level", table_name="player")
    op.drop_table("player")
