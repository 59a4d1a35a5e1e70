"""initial daycare schema

Revision ID: 20261019_initial_schema
Revises:
Create Date: 2026-10-19 09:00:00

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


revision = "20261019_initial_schema"
down_revision = None
branch_labels = None
depends_on = None

# Created once up front; both assignment tables reference it
assignment_status = postgresql.ENUM("active", "removed", name="assignment_status", create_type=False)


def _timestamps():
    return [
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
    ]


def upgrade():
    assignment_status.create(op.get_bind(), checkfirst=True)

    op.create_table(
        "user_profiles",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("first_name", sa.String(), nullable=False),
        sa.Column("last_name", sa.String(), nullable=False),
        sa.Column("role", sa.String(), nullable=False),
        sa.Column("pin_code", sa.String(), nullable=False, unique=True),
        sa.Column("phone", sa.String(), nullable=True),
        sa.Column("is_active", sa.Boolean(), server_default=sa.true(), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_user_profiles_role", "user_profiles", ["role"])

    op.create_table(
        "children",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("first_name", sa.String(), nullable=False),
        sa.Column("last_name", sa.String(), nullable=False),
        sa.Column("date_of_birth", sa.Date(), nullable=True),
        sa.Column("is_kindergarten_enrolled", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column("allergies", sa.Text(), nullable=True),
        sa.Column("medical_notes", sa.Text(), nullable=True),
        sa.Column("enrollment_date", sa.Date(), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_children_first_name", "children", ["first_name"])
    op.create_index("ix_children_is_kindergarten_enrolled", "children", ["is_kindergarten_enrolled"])

    op.create_table(
        "child_parents",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("child_id", sa.String(), sa.ForeignKey("children.id", ondelete="CASCADE"), nullable=False),
        sa.Column("parent_id", sa.String(), sa.ForeignKey("user_profiles.id", ondelete="CASCADE"), nullable=False),
        sa.Column("relationship", sa.String(), nullable=True),
        sa.Column("is_primary", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint("child_id", "parent_id", name="uq_child_parent"),
    )
    op.create_index("ix_child_parents_child_id", "child_parents", ["child_id"])
    op.create_index("ix_child_parents_parent_id", "child_parents", ["parent_id"])

    op.create_table(
        "classrooms",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("capacity", sa.Integer(), nullable=False),
        sa.Column("age_group", sa.String(), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("is_active", sa.Boolean(), server_default=sa.true(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint("capacity > 0", name="ck_classrooms_capacity_positive"),
    )

    # Child roster and staff assignments share the active/removed lifecycle
    for table, person_col, person_fk in (
        ("classroom_assignments", "child_id", "children.id"),
        ("staff_classroom_assignments", "staff_id", "user_profiles.id"),
    ):
        op.create_table(
            table,
            sa.Column("id", sa.String(), primary_key=True),
            sa.Column(person_col, sa.String(), sa.ForeignKey(person_fk, ondelete="CASCADE"), nullable=False),
            sa.Column("classroom_id", sa.String(), sa.ForeignKey("classrooms.id", ondelete="CASCADE"), nullable=False),
            sa.Column("status", assignment_status, nullable=False),
            sa.Column("assigned_at", sa.DateTime(), nullable=False),
            sa.Column("status_changed_at", sa.DateTime(), nullable=False),
        )
        op.create_index(f"ix_{table}_{person_col}", table, [person_col])
        op.create_index(f"ix_{table}_classroom_id", table, ["classroom_id"])
        op.create_index(f"ix_{table}_status", table, ["classroom_id", "status"])

    op.create_table(
        "child_check_ins",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("child_id", sa.String(), sa.ForeignKey("children.id", ondelete="CASCADE"), nullable=False),
        sa.Column("classroom_id", sa.String(), sa.ForeignKey("classrooms.id", ondelete="CASCADE"), nullable=False),
        sa.Column("check_in_time", sa.DateTime(), nullable=False),
        sa.Column("check_out_time", sa.DateTime(), nullable=True),
        sa.Column("total_hours", sa.Numeric(5, 2), nullable=True),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("checked_in_by", sa.String(), sa.ForeignKey("user_profiles.id"), nullable=False),
        sa.Column("checked_out_by", sa.String(), sa.ForeignKey("user_profiles.id"), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        *_timestamps(),
        sa.CheckConstraint("total_hours IS NULL OR total_hours >= 0", name="ck_child_check_ins_hours_nonneg"),
    )
    op.create_index("ix_child_check_ins_child_id", "child_check_ins", ["child_id"])
    op.create_index("ix_child_check_ins_classroom_id", "child_check_ins", ["classroom_id"])
    op.create_index("ix_child_check_ins_date", "child_check_ins", ["date"])
    op.create_index("ix_child_check_ins_open", "child_check_ins", ["classroom_id", "date", "check_out_time"])

    op.create_table(
        "staff_attendance",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("staff_id", sa.String(), sa.ForeignKey("user_profiles.id", ondelete="CASCADE"), nullable=False),
        sa.Column("sign_in_time", sa.DateTime(), nullable=False),
        sa.Column("sign_out_time", sa.DateTime(), nullable=True),
        sa.Column("total_hours", sa.Numeric(5, 2), nullable=True),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        *_timestamps(),
        sa.CheckConstraint("total_hours IS NULL OR total_hours >= 0", name="ck_staff_attendance_hours_nonneg"),
    )
    op.create_index("ix_staff_attendance_staff_id", "staff_attendance", ["staff_id"])
    op.create_index("ix_staff_attendance_date", "staff_attendance", ["date"])
    op.create_index("ix_staff_attendance_open", "staff_attendance", ["date", "sign_out_time"])

    op.create_table(
        "daily_reports",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("child_id", sa.String(), sa.ForeignKey("children.id", ondelete="CASCADE"), nullable=False),
        sa.Column("staff_id", sa.String(), sa.ForeignKey("user_profiles.id"), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("meals", sa.JSON(), nullable=True),
        sa.Column("nap", sa.JSON(), nullable=True),
        sa.Column("activities", sa.Text(), nullable=True),
        sa.Column("mood", sa.String(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_daily_reports_child_id", "daily_reports", ["child_id"])
    op.create_index("ix_daily_reports_staff_id", "daily_reports", ["staff_id"])
    op.create_index("ix_daily_reports_date", "daily_reports", ["date"])


def downgrade():
    op.drop_table("daily_reports")
    op.drop_table("staff_attendance")
    op.drop_table("child_check_ins")
    op.drop_table("staff_classroom_assignments")
    op.drop_table("classroom_assignments")
    op.drop_table("classrooms")
    op.drop_table("child_parents")
    op.drop_table("children")
    op.drop_table("user_profiles")
    assignment_status.drop(op.get_bind(), checkfirst=True)
