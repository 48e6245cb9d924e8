"""initial directory schema: houses, members, resources and access control

Revision ID: 0001_initial_directory_schema
Revises:
Create Date: 2026-09-14
"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "0001_initial_directory_schema"
down_revision = None
branch_labels = None
depends_on = None

ENUM_TYPES = (
    "member_gender",
    "member_occupation",
    "member_education",
    "member_quran",
    "member_maktab",
    "member_dawat",
    "member_role",
    "resource_category",
    "resource_status",
)


def upgrade() -> None:
    op.create_table(
        "houses",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("number", sa.String(length=50), nullable=False),
        sa.Column("street", sa.String(length=150), nullable=False),
        sa.Column("taleem", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("mashwara", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("notes", sa.String(length=1000), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("number", name="uq_houses_number"),
    )
    op.create_index("ix_houses_street", "houses", ["street"])

    op.create_table(
        "house_members",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("house_id", sa.Integer(), sa.ForeignKey("houses.id", ondelete="CASCADE"), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("name", sa.String(length=150), nullable=False),
        sa.Column("father_name", sa.String(length=150), nullable=True),
        sa.Column("age", sa.Integer(), nullable=False),
        sa.Column("gender", sa.Enum("Male", "Female", name="member_gender"), nullable=False),
        sa.Column(
            "occupation",
            sa.Enum(
                "Child",
                "Student",
                "Farmer",
                "Businessman",
                "Other",
                "Free",
                "Shopkeeper",
                "Worker",
                "Ulma",
                "Hafiz",
                "Teacher",
                "Engineer",
                "Doctor",
                name="member_occupation",
            ),
            nullable=False,
            server_default="Other",
        ),
        sa.Column(
            "education",
            sa.Enum("Below 8th", "10th", "12th", "Graduate", "Above Graduate", name="member_education"),
            nullable=False,
            server_default="Below 8th",
        ),
        sa.Column("quran", sa.Enum("yes", "no", name="member_quran"), nullable=False, server_default="no"),
        sa.Column("maktab", sa.Enum("yes", "no", name="member_maktab"), nullable=False, server_default="no"),
        sa.Column(
            "dawat",
            sa.Enum("Nil", "3-day", "10-day", "40-day", "4-month", name="member_dawat"),
            nullable=False,
            server_default="Nil",
        ),
        sa.Column("dawat_count_3_day", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("dawat_count_10_day", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("dawat_count_40_day", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("dawat_count_4_month", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("mobile", sa.String(length=25), nullable=True),
        sa.Column("role", sa.Enum("Head", "Member", name="member_role"), nullable=False, server_default="Member"),
        sa.Column("is_child", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_house_members_house_id", "house_members", ["house_id"])
    op.create_index("ix_house_members_name", "house_members", ["name"])
    op.create_index("ix_house_members_occupation", "house_members", ["occupation"])

    op.create_table(
        "resources",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("description", sa.String(length=1000), nullable=True),
        sa.Column(
            "category",
            sa.Enum("PDF", "Document", "Image", "Video", "Link", "Audio", "Other", name="resource_category"),
            nullable=False,
            server_default="Other",
        ),
        sa.Column("file_url", sa.String(length=500), nullable=False),
        sa.Column("file_name", sa.String(length=255), nullable=True),
        sa.Column("file_size", sa.Integer(), nullable=True),
        sa.Column("file_type", sa.String(length=100), nullable=True),
        sa.Column("tags", sa.JSON(), nullable=False),
        sa.Column("download_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("view_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_public", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("uploaded_by", sa.String(length=150), nullable=False, server_default="admin"),
        sa.Column(
            "status",
            sa.Enum("active", "inactive", "pending", name="resource_status"),
            nullable=False,
            server_default="active",
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_resources_category", "resources", ["category"])
    op.create_index("ix_resources_status", "resources", ["status"])



    op.create_table(
        "roles",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=64), nullable=False),
    )
    op.create_index("ix_roles_name", "roles", ["name"], unique=True)

    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("full_name", sa.String(length=255), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "user_roles",
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("role_id", sa.Integer(), sa.ForeignKey("roles.id", ondelete="CASCADE"), primary_key=True),
    )


def downgrade() -> None:
    op.drop_table("user_roles")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
    op.drop_index("ix_roles_name", table_name="roles")
    op.drop_table("roles")

    op.drop_index("ix_resources_status", table_name="resources")
    op.drop_index("ix_resources_category", table_name="resources")
    op.drop_table("resources")
    op.drop_index("ix_house_members_occupation", table_name="house_members")
    op.drop_index("ix_house_members_name", table_name="house_members")
    op.drop_index("ix_house_members_house_id", table_name="house_members")
    op.drop_table("house_members")
    op.drop_index("ix_houses_street", table_name="houses")
    op.drop_table("houses")
    for enum_name in ENUM_TYPES:
        op.execute(f"DROP TYPE IF EXISTS {enum_name};")
