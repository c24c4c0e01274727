"""Initial family tree schema.

Revision ID: a1f3c9d2e7b4
Revises:
Create Date: 2026-10-17 09:00:00.000000

"""

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision = "a1f3c9d2e7b4"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("modified_at", sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade():
    """Create accounts, trees, members, life records, guest access and the change log."""
    op.create_table(
        "user",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("full_name", sa.String(255), nullable=True),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_user_email", "user", ["email"], unique=True)

    op.create_table(
        "tree_owner",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.Integer(), nullable=False, unique=True),
        sa.Column("full_name", sa.String(255), nullable=True),
        sa.Column("email", sa.String(255), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["user_id"], ["user.id"], ondelete="CASCADE"),
    )

    op.create_table(
        "family_tree",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("family_name", sa.String(255), nullable=False),
        sa.Column("origin", sa.String(255), nullable=True),
        sa.Column("establish_year", sa.Integer(), nullable=True),
        sa.Column("tree_owner_id", sa.Integer(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["tree_owner_id"], ["tree_owner.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_family_tree_tree_owner_id", "family_tree", ["tree_owner_id"])

    op.create_table(
        "family_member",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("family_tree_id", sa.Integer(), nullable=False),
        sa.Column("full_name", sa.String(255), nullable=False),
        sa.Column("gender", sa.String(16), nullable=True),
        sa.Column("birthday", sa.Date(), nullable=True),
        sa.Column("address", sa.String(500), nullable=True),
        sa.Column("generation", sa.String(16), nullable=True),
        sa.Column("parent_id", sa.Integer(), nullable=True),
        sa.Column("is_root_person", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("relationship_established_date", sa.Date(), nullable=True),
        sa.Column("profile_picture", sa.LargeBinary(), nullable=True),
        sa.Column("profile_picture_content_type", sa.String(100), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["family_tree_id"], ["family_tree.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["parent_id"], ["family_member.id"], ondelete="SET NULL"),
    )
    op.create_index("ix_family_member_family_tree_id", "family_member", ["family_tree_id"])
    op.create_index("ix_family_member_parent_id", "family_member", ["parent_id"])

    for table, column in (("occupation", "job_title"), ("place_of_origin", "location")):
        op.create_table(
            table,
            sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
            sa.Column("family_member_id", sa.Integer(), nullable=False),
            sa.Column(column, sa.String(255), nullable=False),
            sa.Column("start_date", sa.Date(), nullable=True),
            sa.Column("end_date", sa.Date(), nullable=True),
            sa.ForeignKeyConstraint(
                ["family_member_id"], ["family_member.id"], ondelete="CASCADE"
            ),
        )
        op.create_index(f"ix_{table}_family_member_id", table, ["family_member_id"])

    op.create_table(
        "spouse_relationship",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("family_member1_id", sa.Integer(), nullable=False),
        sa.Column("family_member2_id", sa.Integer(), nullable=False),
        sa.Column("marriage_date", sa.Date(), nullable=False),
        sa.Column("divorce_date", sa.Date(), nullable=True),
        sa.ForeignKeyConstraint(["family_member1_id"], ["family_member.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["family_member2_id"], ["family_member.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("family_member1_id", "family_member2_id", name="uq_spouse_pair"),
        sa.CheckConstraint("family_member1_id < family_member2_id", name="ck_spouse_pair_order"),
    )
    op.create_index(
        "ix_spouse_relationship_family_member1_id", "spouse_relationship", ["family_member1_id"]
    )
    op.create_index(
        "ix_spouse_relationship_family_member2_id", "spouse_relationship", ["family_member2_id"]
    )

    op.create_table(
        "passing_record",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("family_member_id", sa.Integer(), nullable=False, unique=True),
        sa.Column("date_of_passing", sa.Date(), nullable=False),
        sa.ForeignKeyConstraint(["family_member_id"], ["family_member.id"], ondelete="CASCADE"),
    )
    op.create_table(
        "cause_of_death",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("passing_record_id", sa.Integer(), nullable=False),
        sa.Column("cause_name", sa.String(255), nullable=False),
        sa.ForeignKeyConstraint(["passing_record_id"], ["passing_record.id"], ondelete="CASCADE"),
    )
    op.create_index(
        "ix_cause_of_death_passing_record_id", "cause_of_death", ["passing_record_id"]
    )
    op.create_table(
        "buried_place",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("passing_record_id", sa.Integer(), nullable=False),
        sa.Column("location", sa.String(255), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=True),
        sa.ForeignKeyConstraint(["passing_record_id"], ["passing_record.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_buried_place_passing_record_id", "buried_place", ["passing_record_id"])

    op.create_table(
        "achievement_type",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("family_tree_id", sa.Integer(), nullable=False),
        sa.Column("type_name", sa.String(255), nullable=False),
        sa.ForeignKeyConstraint(["family_tree_id"], ["family_tree.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("family_tree_id", "type_name", name="uq_achievement_type_name"),
    )
    op.create_index(
        "ix_achievement_type_family_tree_id", "achievement_type", ["family_tree_id"]
    )
    op.create_table(
        "achievement",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("family_member_id", sa.Integer(), nullable=False),
        sa.Column("achievement_type_id", sa.Integer(), nullable=False),
        sa.Column("achieve_date", sa.Date(), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(["family_member_id"], ["family_member.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(
            ["achievement_type_id"], ["achievement_type.id"], ondelete="CASCADE"
        ),
    )
    op.create_index("ix_achievement_family_member_id", "achievement", ["family_member_id"])
    op.create_index("ix_achievement_achievement_type_id", "achievement", ["achievement_type_id"])

    op.create_table(
        "guest_editor",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("family_tree_id", sa.Integer(), nullable=False),
        sa.Column("family_member_id", sa.Integer(), nullable=False),
        sa.Column("access_code", sa.String(45), nullable=False, unique=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["family_tree_id"], ["family_tree.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["family_member_id"], ["family_member.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("family_tree_id", "family_member_id", name="uq_guest_editor_member"),
    )
    op.create_index("ix_guest_editor_family_tree_id", "guest_editor", ["family_tree_id"])

    op.create_table(
        "change_log",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("entity_type", sa.String(64), nullable=False),
        sa.Column("entity_id", sa.Integer(), nullable=False),
        sa.Column("action", sa.String(16), nullable=False),
        sa.Column("family_tree_id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=True),
        sa.Column("guest_editor_id", sa.Integer(), nullable=True),
        sa.Column("old_values", sa.JSON(), nullable=True),
        sa.Column("new_values", sa.JSON(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["family_tree_id"], ["family_tree.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["user.id"], ondelete="SET NULL"),
    )
    op.create_index(
        "idx_change_log_tree_created", "change_log", ["family_tree_id", "created_at"]
    )
    op.create_index("idx_change_log_entity", "change_log", ["entity_type", "entity_id"])


def downgrade():
    """Drop every table in reverse dependency order."""
    for table in (
        "change_log",
        "guest_editor",
        "achievement",
        "achievement_type",
        "buried_place",
        "cause_of_death",
        "passing_record",
        "spouse_relationship",
        "place_of_origin",
        "occupation",
        "family_member",
        "family_tree",
        "tree_owner",
        "user",
    ):
        op.drop_table(table)
