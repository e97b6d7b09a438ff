"""Initial directory schema."""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa

revision = "20261019_01_initial"
down_revision = None
branch_labels = None
depends_on = None

user_role = sa.Enum("MEMBER", "MODERATOR", "CURATOR", name="user_role")
skill_type = sa.Enum("GENERAL", "TOOL", "LANGUAGE", name="skill_type")


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("linkedin_url", sa.String(), nullable=True),
        sa.Column("email", sa.String(), nullable=True),
        sa.Column("name", sa.Text(), nullable=True),
        sa.Column("image", sa.Text(), nullable=True),
        sa.Column("role", user_role, nullable=False),
        sa.Column("claimed", sa.Boolean(), nullable=False),
        sa.Column("bio", sa.Text(), nullable=True),
        sa.Column("education", sa.Text(), nullable=True),
        sa.Column("years_experience", sa.Integer(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint(
            "years_experience IS NULL OR years_experience >= 0",
            name="ck_users_years_experience",
        ),
        sa.UniqueConstraint("linkedin_url"),
    )
    op.create_index("idx_users_name", "users", ["name"])

    op.create_table(
        "oauth_accounts",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column(
            "user_id",
            sa.Uuid(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("provider", sa.String(), nullable=False),
        sa.Column("provider_account_id", sa.String(), nullable=False),
        sa.Column("profile_url", sa.String(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint(
            "provider",
            "provider_account_id",
            name="uq_oauth_accounts_provider_subject",
        ),
    )
    op.create_index("idx_oauth_accounts_user", "oauth_accounts", ["user_id"])

    op.create_table(
        "expertise_areas",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("order", sa.Integer(), nullable=False),
        sa.UniqueConstraint("name"),
    )

    op.create_table(
        "skills",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("type", skill_type, nullable=False),
        sa.Column("order", sa.Integer(), nullable=False),
        sa.Column(
            "expertise_area_id",
            sa.Uuid(),
            sa.ForeignKey("expertise_areas.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.UniqueConstraint("name", "expertise_area_id", name="uq_skills_name_area"),
    )

    op.create_table(
        "user_skills",
        sa.Column(
            "user_id",
            sa.Uuid(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column(
            "skill_id",
            sa.Uuid(),
            sa.ForeignKey("skills.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column("rating", sa.Integer(), nullable=False),
        sa.Column("verified", sa.Boolean(), nullable=False),
        sa.CheckConstraint("rating BETWEEN 1 AND 5", name="ck_user_skills_rating"),
    )

    op.create_table(
        "questions",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column(
            "author_id",
            sa.Uuid(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("approved", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index(
        "idx_questions_approved_created",
        "questions",
        ["approved", "created_at"],
    )

    op.create_table(
        "answers",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column(
            "question_id",
            sa.Uuid(),
            sa.ForeignKey("questions.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "author_id",
            sa.Uuid(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("idx_answers_question", "answers", ["question_id", "created_at"])

    op.create_table(
        "comments",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column(
            "author_id",
            sa.Uuid(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "target_user_id",
            sa.Uuid(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("approved", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("idx_comments_target", "comments", ["target_user_id", "created_at"])
    op.create_index(
        "idx_comments_approved_created",
        "comments",
        ["approved", "created_at"],
    )


def downgrade() -> None:
    op.drop_index("idx_comments_approved_created", table_name="comments")
    op.drop_index("idx_comments_target", table_name="comments")
    op.drop_table("comments")
    op.drop_index("idx_answers_question", table_name="answers")
    op.drop_table("answers")
    op.drop_index("idx_questions_approved_created", table_name="questions")
    op.drop_table("questions")
    op.drop_table("user_skills")
    op.drop_table("skills")
    op.drop_table("expertise_areas")
    op.drop_index("idx_oauth_accounts_user", table_name="oauth_accounts")
    op.drop_table("oauth_accounts")
    op.drop_index("idx_users_name", table_name="users")
    op.drop_table("users")

    skill_type.drop(op.get_bind(), checkfirst=True)
    user_role.drop(op.get_bind(), checkfirst=True)
