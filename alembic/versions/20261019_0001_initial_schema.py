# File: /alembic/versions/20261019_0001_initial_schema.py | Version: 1.0 | Title: Users, projects, robots, message tasks, user views
"""initial schema"""

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "0001_initial_schema"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "user",
        sa.Column("id", sa.String(), primary_key=True, nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=True),
        sa.Column("hashed_password", sa.String(length=255), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=True),
        sa.Column("deleted", sa.Boolean(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_user_email", "user", ["email"], unique=True)

    op.create_table(
        "project",
        sa.Column("id", sa.String(), primary_key=True, nullable=False),
        sa.Column("organization_id", sa.String(), nullable=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("enable", sa.Boolean(), nullable=True),
        sa.Column("deleted", sa.Boolean(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_project_organization_id", "project", ["organization_id"])

    op.create_table(
        "project_member",
        sa.Column("id", sa.String(), primary_key=True, nullable=False),
        sa.Column("project_id", sa.String(), sa.ForeignKey("project.id"), nullable=False),
        sa.Column("user_id", sa.String(), sa.ForeignKey("user.id"), nullable=False),
        sa.Column("role", sa.String(length=50), nullable=True),
        sa.UniqueConstraint("project_id", "user_id", name="uq_project_member_project_user"),
    )
    op.create_index("ix_project_member_project_id", "project_member", ["project_id"])
    op.create_index("ix_project_member_user_id", "project_member", ["user_id"])

    op.create_table(
        "project_robot",
        sa.Column("id", sa.String(), primary_key=True, nullable=False),
        sa.Column("project_id", sa.String(), sa.ForeignKey("project.id"), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("platform", sa.String(length=50), nullable=False),
        sa.Column("webhook", sa.String(length=1024), nullable=True),
        sa.Column("enable", sa.Boolean(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_project_robot_project_id", "project_robot", ["project_id"])

    op.create_table(
        "message_task",
        sa.Column("id", sa.String(), primary_key=True, nullable=False),
        sa.Column("project_id", sa.String(), sa.ForeignKey("project.id"), nullable=False),
        sa.Column("task_type", sa.String(length=64), nullable=False),
        sa.Column("event", sa.String(length=64), nullable=False),
        sa.Column("receiver", sa.String(), nullable=False),
        sa.Column("project_robot_id", sa.String(), sa.ForeignKey("project_robot.id"), nullable=False),
        sa.Column("enable", sa.Boolean(), nullable=False),
        sa.Column("template", sa.Text(), nullable=True),
        sa.Column("use_default_template", sa.Boolean(), nullable=False),
        sa.Column("test_id", sa.String(), nullable=True),
        sa.Column("create_user", sa.String(), nullable=True),
        sa.Column("create_time", sa.DateTime(timezone=True), nullable=True),
        sa.Column("update_user", sa.String(), nullable=True),
        sa.Column("update_time", sa.DateTime(timezone=True), nullable=True),
        sa.UniqueConstraint(
            "task_type", "event", "receiver", "project_id",
            name="uq_message_task_type_event_receiver_project",
        ),
    )
    op.create_index("ix_message_task_project_id", "message_task", ["project_id"])

    op.create_table(
        "user_view",
        sa.Column("id", sa.String(), primary_key=True, nullable=False),
        sa.Column("user_id", sa.String(), nullable=False),
        sa.Column("scope_id", sa.String(), nullable=False),
        sa.Column("view_type", sa.String(length=50), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("pos", sa.BigInteger(), nullable=False),
        sa.Column("search_mode", sa.String(length=10), nullable=False),
        sa.Column("create_time", sa.DateTime(timezone=True), nullable=True),
        sa.Column("update_time", sa.DateTime(timezone=True), nullable=True),
        sa.UniqueConstraint(
            "user_id", "scope_id", "view_type", "name",
            name="uq_user_view_owner_scope_type_name",
        ),
    )
    op.create_index(
        "ix_user_view_scope_user_type_pos", "user_view", ["scope_id", "user_id", "view_type", "pos"]
    )

    op.create_table(
        "user_view_condition",
        sa.Column("id", sa.String(), primary_key=True, nullable=False),
        sa.Column(
            "user_view_id",
            sa.String(),
            sa.ForeignKey("user_view.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("name", sa.String(length=255), nullable=True),
        sa.Column("operator", sa.String(length=50), nullable=True),
        sa.Column("value", sa.Text(), nullable=True),
        sa.Column("value_type", sa.String(length=20), nullable=False),
        sa.Column("custom_field", sa.Boolean(), nullable=True),
        sa.Column("custom_field_type", sa.String(length=50), nullable=True),
    )
    op.create_index("ix_user_view_condition_user_view_id", "user_view_condition", ["user_view_id"])


def downgrade():
    op.drop_index("ix_user_view_condition_user_view_id", table_name="user_view_condition")
    op.drop_table("user_view_condition")
    op.drop_index("ix_user_view_scope_user_type_pos", table_name="user_view")
    op.drop_table("user_view")
    op.drop_index("ix_message_task_project_id", table_name="message_task")
    op.drop_table("message_task")
    op.drop_index("ix_project_robot_project_id", table_name="project_robot")
    op.drop_table("project_robot")
    op.drop_index("ix_project_member_user_id", table_name="project_member")
    op.drop_index("ix_project_member_project_id", table_name="project_member")
    op.drop_table("project_member")
    op.drop_index("ix_project_organization_id", table_name="project")
    op.drop_table("project")
    op.drop_index("ix_user_email", table_name="user")
    op.drop_table("user")
