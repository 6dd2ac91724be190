"""users, projects, project technologies, bids

Revision ID: 0001_users_projects_bids
Revises:
Create Date: 2026-10-17
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa

revision = "0001_users_projects_bids"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("email", sa.String(length=254), nullable=True),
        sa.Column("role", sa.String(length=16), nullable=False),
        sa.Column("company", sa.String(length=200), nullable=True),
        sa.Column("skills", sa.JSON(), nullable=False),
        sa.Column("experience", sa.Integer(), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.UniqueConstraint("email"),
    )
    op.create_index("ix_users_role", "users", ["role"])

    op.create_table(
        "projects",
        sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
        sa.Column("title", sa.String(length=100), nullable=False),
        sa.Column("description", sa.String(length=1000), nullable=False),
        sa.Column("estimated_budget", sa.Numeric(14, 2), nullable=False),
        sa.Column(
            "status",
            sa.String(length=16),
            nullable=False,
            server_default=sa.text("'open'"),
        ),
        sa.Column("created_by", sa.Uuid(), nullable=False),
        sa.Column("assigned_to", sa.Uuid(), nullable=True),
        sa.Column("deadline", sa.Date(), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.ForeignKeyConstraint(["created_by"], ["users.id"]),
        sa.ForeignKeyConstraint(["assigned_to"], ["users.id"]),
    )
    op.create_index("ix_projects_status_created", "projects", ["status", "created_at"])
    op.create_index("ix_projects_created_by", "projects", ["created_by"])

    op.create_table(
        "project_technologies",
        sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
        sa.Column("project_id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(length=64), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["project_id"], ["projects.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("project_id", "name", name="uq_project_technology"),
    )
    op.create_index("ix_project_technologies_name", "project_technologies", ["name"])

    op.create_table(
        "bids",
        sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
        sa.Column("project_id", sa.Uuid(), nullable=False),
        sa.Column("developer_id", sa.Uuid(), nullable=False),
        sa.Column("bid_amount", sa.Numeric(14, 2), nullable=False),
        sa.Column("message", sa.String(length=500), nullable=False),
        sa.Column(
            "status",
            sa.String(length=16),
            nullable=False,
            server_default=sa.text("'pending'"),
        ),
        sa.Column("estimated_delivery", sa.Date(), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.ForeignKeyConstraint(["project_id"], ["projects.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["developer_id"], ["users.id"]),
        # one bid per developer per project
        sa.UniqueConstraint("project_id", "developer_id", name="uq_bid_project_developer"),
    )
    op.create_index("ix_bids_project_created", "bids", ["project_id", "created_at"])
    op.create_index("ix_bids_developer_created", "bids", ["developer_id", "created_at"])

    # at most one accepted bid per project
    op.create_index(
        "uq_bids_one_accepted_per_project",
        "bids",
        ["project_id"],
        unique=True,
        postgresql_where=sa.text("status = 'accepted'"),
        sqlite_where=sa.text("status = 'accepted'"),
    )


def downgrade():
    op.drop_index("uq_bids_one_accepted_per_project", table_name="bids")
    op.drop_index("ix_bids_developer_created", table_name="bids")
    op.drop_index("ix_bids_project_created", table_name="bids")
    op.drop_table("bids")
    op.drop_index("ix_project_technologies_name", table_name="project_technologies")
    op.drop_table("project_technologies")
    op.drop_index("ix_projects_created_by", table_name="projects")
    op.drop_index("ix_projects_status_created", table_name="projects")
    op.drop_table("projects")
    op.drop_index("ix_users_role", table_name="users")
    op.drop_table("users")
