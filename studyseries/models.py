"""Database models."""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from studyseries.database import Base


class StudySeries(Base):
    """
    A study series stored as one row.

    Sessions, their items and recorded interactions live in the ``sessions``
    JSON document so the whole aggregate is written in a single
    version-checked UPDATE.
    """

    __tablename__ = "study_series"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    kind: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    sessions: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)
    started_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    last_session_number: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    def __repr__(self) -> str:
        """String representation of StudySeries."""
        return f"<StudySeries(id={self.id}, kind='{self.kind}', title='{self.title[:50]}')>"


class Flashcard(Base):
    """Flashcard catalog entry. Read-only for this service."""

    __tablename__ = "flashcards"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=False)
    front_text: Mapped[str] = mapped_column(Text, nullable=False)
    back_text: Mapped[str] = mapped_column(Text, nullable=False)
    subject: Mapped[str | None] = mapped_column(String(200), nullable=True, index=True)
    chapter: Mapped[str | None] = mapped_column(String(200), nullable=True)
    section: Mapped[str | None] = mapped_column(String(200), nullable=True)

    def __repr__(self) -> str:
        """String representation of Flashcard."""
        return f"<Flashcard(id={self.id}, front_text='{self.front_text[:50]}...')>"


class McqQuestion(Base):
    """Multiple-choice question catalog entry. Read-only for this service."""

    __tablename__ = "mcq_questions"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=False)
    question: Mapped[str] = mapped_column(Text, nullable=False)
    # Option letter -> option text
    options: Mapped[dict[str, str]] = mapped_column(JSON, nullable=False, default=dict)
    # One of A-E, or "unknown" when the source did not provide an answer key
    correct_answer: Mapped[str] = mapped_column(String(10), nullable=False, default="unknown")
    explanation: Mapped[str | None] = mapped_column(Text, nullable=True)
    subject: Mapped[str | None] = mapped_column(String(200), nullable=True, index=True)
    chapter: Mapped[str | None] = mapped_column(String(200), nullable=True)
    section: Mapped[str | None] = mapped_column(String(200), nullable=True)

    def __repr__(self) -> str:
        """String representation of McqQuestion."""
        return f"<McqQuestion(id={self.id}, question='{self.question[:50]}...')>"


class TableQuiz(Base):
    """Table quiz catalog entry. Read-only for this service."""

    __tablename__ = "table_quizzes"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=False)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    rows: Mapped[int] = mapped_column(Integer, nullable=False)
    columns: Mapped[int] = mapped_column(Integer, nullable=False)
    # [{"row": int, "column": int, "text": str, "isHeader": bool}, ...]
    cells: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)
    subject: Mapped[str | None] = mapped_column(String(200), nullable=True, index=True)
    chapter: Mapped[str | None] = mapped_column(String(200), nullable=True)
    section: Mapped[str | None] = mapped_column(String(200), nullable=True)

    def __repr__(self) -> str:
        """String representation of TableQuiz."""
        return f"<TableQuiz(id={self.id}, name='{self.name[:50]}')>"
