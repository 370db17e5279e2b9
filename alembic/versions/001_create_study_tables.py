"""Create study_series and the item catalog tables.

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Create study_series, flashcards, mcq_questions and table_quizzes tables."""
    op.create_table(
        "study_series",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("kind", sa.String(20), nullable=False),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("sessions", sa.JSON(), nullable=False),
        sa.Column("started_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("last_session_number", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("version", sa.Integer(), nullable=False, server_default="1"),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("(CURRENT_TIMESTAMP)"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_study_series_id"), "study_series", ["id"], unique=False)
    op.create_index(op.f("ix_study_series_kind"), "study_series", ["kind"], unique=False)
    op.create_index(op.f("ix_study_series_status"), "study_series", ["status"], unique=False)

    op.create_table(
        "flashcards",
        sa.Column("id", sa.Integer(), autoincrement=False, nullable=False),
        sa.Column("front_text", sa.Text(), nullable=False),
        sa.Column("back_text", sa.Text(), nullable=False),
        sa.Column("subject", sa.String(200), nullable=True),
        sa.Column("chapter", sa.String(200), nullable=True),
        sa.Column("section", sa.String(200), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_flashcards_subject"), "flashcards", ["subject"], unique=False)

    op.create_table(
        "mcq_questions",
        sa.Column("id", sa.Integer(), autoincrement=False, nullable=False),
        sa.Column("question", sa.Text(), nullable=False),
        sa.Column("options", sa.JSON(), nullable=False),
        sa.Column("correct_answer", sa.String(10), nullable=False, server_default="unknown"),
        sa.Column("explanation", sa.Text(), nullable=True),
        sa.Column("subject", sa.String(200), nullable=True),
        sa.Column("chapter", sa.String(200), nullable=True),
        sa.Column("section", sa.String(200), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_mcq_questions_subject"), "mcq_questions", ["subject"], unique=False)

    op.create_table(
        "table_quizzes",
        sa.Column("id", sa.Integer(), autoincrement=False, nullable=False),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("rows", sa.Integer(), nullable=False),
        sa.Column("columns", sa.Integer(), nullable=False),
        sa.Column("cells", sa.JSON(), nullable=False),
        sa.Column("subject", sa.String(200), nullable=True),
        sa.Column("chapter", sa.String(200), nullable=True),
        sa.Column("section", sa.String(200), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_table_quizzes_subject"), "table_quizzes", ["subject"], unique=False)


def downgrade() -> None:
    """Drop the study tables."""
    op.drop_index(op.f("ix_table_quizzes_subject"), table_name="table_quizzes")
    op.drop_table("table_quizzes")
    op.drop_index(op.f("ix_mcq_questions_subject"), table_name="mcq_questions")
    op.drop_table("mcq_questions")
    op.drop_index(op.f("ix_flashcards_subject"), table_name="flashcards")
    op.drop_table("flashcards")
    op.drop_index(op.f("ix_study_series_status"), table_name="study_series")
    op.drop_index(op.f("ix_study_series_kind"), table_name="study_series")
    op.drop_index(op.f("ix_study_series_id"), table_name="study_series")
    op.drop_table("study_series")
