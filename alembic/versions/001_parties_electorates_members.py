"""Initial migration: parties, electorates and members tables.

Revision ID: 001
Revises: None
Create Date: 2026-10-19
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "parties",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("short_name", sa.String(20), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint("name", name="uq_party_name"),
    )

    # current_member_id FK is added after members exists
    op.create_table(
        "electorates",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("region_code", sa.String(10), nullable=False),
        sa.Column("total_votes_cast", sa.Integer, nullable=False),
        sa.Column("current_margin_votes", sa.Integer, nullable=False),
        sa.Column("current_margin_percent", sa.Float, nullable=False),
        sa.Column("winner_tpp_percent", sa.Float, nullable=False),
        sa.Column("loser_tpp_percent", sa.Float, nullable=False),
        sa.Column("winner_tpp_votes", sa.Integer, nullable=False),
        sa.Column("loser_tpp_votes", sa.Integer, nullable=False),
        sa.Column("previous_margin_percent", sa.Float, nullable=False),
        sa.Column("swing_percent", sa.Float, nullable=False),
        sa.Column("source_url", sa.Text, nullable=True),
        sa.Column("scraped_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("current_member_id", sa.Uuid, nullable=True),
        *_timestamps(),
        sa.UniqueConstraint("name", "region_code", name="uq_electorate_name_region"),
    )
    op.create_index("idx_electorates_region_code", "electorates", ["region_code"])

    op.create_table(
        "members",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("last_name", sa.String(100), nullable=False),
        sa.Column("party_id", sa.Uuid, sa.ForeignKey("parties.id"), nullable=False),
        sa.Column("electorate_id", sa.Uuid, sa.ForeignKey("electorates.id", ondelete="CASCADE"), nullable=False),
        sa.Column("start_date", sa.Date, nullable=True),
        *_timestamps(),
    )
    op.create_index("idx_members_electorate_id", "members", ["electorate_id"])

    with op.batch_alter_table("electorates") as batch_op:
        batch_op.create_foreign_key(
            "fk_electorate_current_member",
            "members",
            ["current_member_id"],
            ["id"],
            ondelete="SET NULL",
        )


def downgrade() -> None:
    with op.batch_alter_table("electorates") as batch_op:
        batch_op.drop_constraint("fk_electorate_current_member", type_="foreignkey")
    op.drop_index("idx_members_electorate_id", table_name="members")
    op.drop_table("members")
    op.drop_index("idx_electorates_region_code", table_name="electorates")
    op.drop_table("electorates")
    op.drop_table("parties")
