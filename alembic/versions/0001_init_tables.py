"""init tables

Revision ID: 0001_init_tables
Revises:
Create Date: 2026-10-19 00:00:00

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision = "0001_init_tables"
down_revision = None
branch_labels = None
depends_on = None

UUID = postgresql.UUID(as_uuid=True)


def _timestamps(updatable=True):
    columns = [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    ]
    if updatable:
        columns.append(
            sa.Column(
                "updated_at",
                sa.DateTime(timezone=True),
                server_default=sa.func.now(),
                nullable=False,
            )
        )
    return columns


def _meeting_fk():
    return sa.Column(
        "meeting_id",
        UUID,
        sa.ForeignKey("meetings.id", ondelete="CASCADE"),
        nullable=False,
    )


def _user_fk():
    return sa.Column(
        "user_id",
        UUID,
        sa.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )


def _action_item_columns():
    return [
        sa.Column("id", UUID, primary_key=True),
        _meeting_fk(),
        _user_fk(),
        sa.Column("action_item", sa.Text(), nullable=False),
        sa.Column("category", sa.String(100), nullable=True),
        sa.Column("priority", sa.String(20), nullable=True, server_default="Medium"),
        sa.Column("status", sa.String(20), nullable=True, server_default="Not Started"),
        sa.Column("due_date", sa.Date(), nullable=True),
        sa.Column("remarks", sa.Text(), nullable=True),
        sa.Column("additional_info", sa.Text(), nullable=True),
        sa.Column("assigned_to", sa.String(255), nullable=True),
        *_timestamps(),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", UUID, primary_key=True),
        sa.Column("username", sa.String(), nullable=False, unique=True),
        sa.Column("password_hash", sa.String(), nullable=False),
        sa.Column("display_name", sa.String(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    )

    op.create_table(
        "projects",
        sa.Column("id", UUID, primary_key=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="active"),
        *_timestamps(),
    )

    op.create_table(
        "meetings",
        sa.Column("id", UUID, primary_key=True),
        _user_fk(),
        sa.Column(
            "project_id",
            UUID,
            sa.ForeignKey("projects.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("meeting_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="upcoming"),
        sa.Column("participant_count", sa.Integer(), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_meetings_user_id", "meetings", ["user_id"])

    op.create_table(
        "documents",
        sa.Column("id", UUID, primary_key=True),
        _meeting_fk(),
        _user_fk(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("media_type", sa.String(255), nullable=False),
        sa.Column("byte_size", sa.BigInteger(), nullable=False),
        sa.Column("storage_path", sa.String(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    )

    op.create_table(
        "data_chunks",
        sa.Column("id", UUID, primary_key=True),
        _meeting_fk(),
        _user_fk(),
        sa.Column("source_document", sa.String(255), nullable=False),
        sa.Column("chunk_index", sa.Integer(), nullable=False),
        sa.Column("text", sa.Text(), nullable=False),
        sa.Column("file_path", sa.String(), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    )
    op.create_index("ix_data_chunks_meeting_id", "data_chunks", ["meeting_id"])

    op.create_table("action_items", *_action_item_columns())
    op.create_index("ix_action_items_meeting_id", "action_items", ["meeting_id"])

    op.create_table("tasks", *_action_item_columns())
    op.create_index("ix_tasks_meeting_id", "tasks", ["meeting_id"])

    op.create_table(
        "business_requirements",
        sa.Column("id", UUID, primary_key=True),
        _meeting_fk(),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("version", sa.Integer(), nullable=False, server_default="1"),
        *_timestamps(updatable=False),
        sa.UniqueConstraint(
            "meeting_id", "version", name="uq_business_requirements_meeting_version"
        ),
    )


def downgrade() -> None:
    op.drop_table("business_requirements")
    op.drop_index("ix_tasks_meeting_id", table_name="tasks")
    op.drop_table("tasks")
    op.drop_index("ix_action_items_meeting_id", table_name="action_items")
    op.drop_table("action_items")
    op.drop_index("ix_data_chunks_meeting_id", table_name="data_chunks")
    op.drop_table("data_chunks")
    op.drop_table("documents")
    op.drop_index("ix_meetings_user_id", table_name="meetings")
    op.drop_table("meetings")
    op.drop_table("projects")
    op.drop_table("users")
