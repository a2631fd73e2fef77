"""create portfolio tables

Revision ID: 4b1e0c2d9a7f
Revises:
Create Date: 2026-10-19 10:12:40.118305
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "4b1e0c2d9a7f"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "profiles",
        sa.Column("id", sa.String(length=64), primary_key=True),
        sa.Column("bio", sa.Text(), nullable=False),
        sa.Column("social_links", sa.Text(), nullable=False),
        sa.Column("education", sa.Text(), nullable=False),
        sa.Column("languages", sa.Text(), nullable=False),
        *_timestamps(),
    )

    op.create_table(
        "skills",
        sa.Column("id", sa.String(length=64), primary_key=True),
        sa.Column("category", sa.String(length=120), nullable=False),
        sa.Column("items", sa.Text(), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_skills_category", "skills", ["category"], unique=True)

    op.create_table(
        "experiences",
        sa.Column("id", sa.String(length=64), primary_key=True),
        sa.Column("company", sa.String(length=200), nullable=False),
        sa.Column("position", sa.String(length=200), nullable=False),
        sa.Column("start_date", sa.String(length=20), nullable=False),
        sa.Column("end_date", sa.String(length=20), nullable=True),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("technologies", sa.Text(), nullable=False),
        sa.Column("highlights", sa.Text(), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_experiences_start_date", "experiences", ["start_date"])

    op.create_table(
        "posts",
        sa.Column("id", sa.String(length=64), primary_key=True),
        sa.Column("title", sa.String(length=300), nullable=False),
        sa.Column("date", sa.String(length=20), nullable=False),
        sa.Column("tags", sa.Text(), nullable=False),
        sa.Column("excerpt", sa.Text(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_posts_date", "posts", ["date"])

    op.create_table(
        "projects",
        sa.Column("id", sa.String(length=64), primary_key=True),
        sa.Column("title", sa.String(length=300), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("technologies", sa.Text(), nullable=False),
        sa.Column("github_url", sa.String(length=500), nullable=True),
        sa.Column("live_url", sa.String(length=500), nullable=True),
        sa.Column("image_url", sa.String(length=500), nullable=True),
        sa.Column("image_urls", sa.Text(), nullable=True),
        sa.Column("year", sa.Integer(), nullable=False),
        sa.Column("highlights", sa.Text(), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_projects_year", "projects", ["year"])

    op.create_table(
        "github_stats",
        sa.Column("id", sa.String(length=64), primary_key=True),
        sa.Column("username", sa.String(length=100), nullable=False),
        sa.Column("repo_count", sa.Integer(), nullable=False),
        sa.Column("followers", sa.Integer(), nullable=False),
        sa.Column("contributions", sa.Integer(), nullable=False),
        sa.Column("top_languages", sa.Text(), nullable=False),
        sa.Column("recent_activity", sa.Text(), nullable=False),
        *_timestamps(),
    )

    op.create_table(
        "github_profiles",
        sa.Column("id", sa.String(length=64), primary_key=True),
        sa.Column("data", sa.Text(), nullable=False),
        sa.Column("last_updated", sa.DateTime(), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_github_profiles_last_updated", "github_profiles", ["last_updated"])

    op.create_table(
        "contacts",
        sa.Column("id", sa.String(length=64), primary_key=True),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        *_timestamps(),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("contacts")
    op.drop_index("ix_github_profiles_last_updated", table_name="github_profiles")
    op.drop_table("github_profiles")
    op.drop_table("github_stats")
    op.drop_index("ix_projects_year", table_name="projects")
    op.drop_table("projects")
    op.drop_index("ix_posts_date", table_name="posts")
    op.drop_table("posts")
    op.drop_index("ix_experiences_start_date", table_name="experiences")
    op.drop_table("experiences")
    op.drop_index("ix_skills_category", table_name="skills")
    op.drop_table("skills")
    op.drop_table("profiles")
