"""initial: projects, events

Revision ID: 0001_initial
Revises:
Create Date: 2026-03-01 00:00:00.000000

"""
from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

revision: str = "0001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

_BigId = sa.BigInteger().with_variant(sa.Integer(), "sqlite")


def upgrade() -> None:
    # --- projects ---
    op.create_table(
        "projects",
        sa.Column("id", _BigId, autoincrement=True, nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("overhead", sa.Integer(), nullable=False, server_default="0"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
        sa.CheckConstraint("overhead >= 0", name="ck_projects_overhead_non_negative"),
    )

    # --- events ---
    op.create_table(
        "events",
        sa.Column("id", _BigId, autoincrement=True, nullable=False),
        sa.Column("project_id", _BigId, nullable=False),
        sa.Column(
            "event_type",
            sa.Enum("in", "out", "note", name="event_type_enum"),
            nullable=False,
        ),
        sa.Column("clock", sa.DateTime(timezone=True), nullable=False),
        sa.Column("follows_event_id", _BigId, nullable=True),
        sa.ForeignKeyConstraint(["project_id"], ["projects.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "project_id",
            "follows_event_id",
            name="uq_events_punch_chain",
        ),
    )
    op.create_index("ix_events_project_clock", "events", ["project_id", "clock"])


def downgrade() -> None:
    op.drop_index("ix_events_project_clock", table_name="events")
    op.drop_table("events")
    op.drop_table("projects")
    if op.get_bind().dialect.name == "postgresql":
        op.execute("DROP TYPE IF EXISTS event_type_enum")
