"""Pytest configuration and fixtures."""

from collections.abc import Generator
from typing import Any

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from studyseries import models
from studyseries.database import Base, get_db
from studyseries.main import app

# Test database URL (in-memory SQLite shared by every connection)
TEST_DATABASE_URL = "sqlite://"

test_engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


@pytest.fixture
def db_session() -> Generator[Session, None, None]:
    """Create a fresh database session for each test."""
    Base.metadata.create_all(bind=test_engine)

    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def client(db_session: Session) -> Generator[TestClient, Any, None]:
    """Create a test client with database session."""

    def override_get_db() -> Generator[Session, None, None]:
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def flashcards(db_session: Session) -> list[models.Flashcard]:
    """Flashcards with ids 1-5."""
    cards = [
        models.Flashcard(
            id=card_id,
            front_text=f"Question {card_id}",
            back_text=f"Answer {card_id}",
            subject="Biology",
            chapter="Cells",
        )
        for card_id in range(1, 6)
    ]
    db_session.add_all(cards)
    db_session.commit()
    return cards


@pytest.fixture
def mcq_questions(db_session: Session) -> list[models.McqQuestion]:
    """Questions 1-3 answer B; question 4 has no known answer."""
    options = {"A": "Mitochondria", "B": "Nucleus", "C": "Ribosome", "D": "Golgi", "E": "Lysosome"}
    questions = [
        models.McqQuestion(
            id=question_id,
            question=f"Which organelle holds the DNA? ({question_id})",
            options=options,
            correct_answer="B",
            subject="Biology",
        )
        for question_id in range(1, 4)
    ]
    questions.append(
        models.McqQuestion(
            id=4, question="Unanswerable", options=options, correct_answer="unknown"
        )
    )
    db_session.add_all(questions)
    db_session.commit()
    return questions


@pytest.fixture
def table_quizzes(db_session: Session) -> list[models.TableQuiz]:
    """Two 2x2 table quizzes."""
    quizzes = [
        models.TableQuiz(
            id=quiz_id,
            name=f"Organelles {quiz_id}",
            rows=2,
            columns=2,
            cells=[
                {"row": 0, "column": 0, "text": "Organelle", "isHeader": True},
                {"row": 0, "column": 1, "text": "Function", "isHeader": True},
                {"row": 1, "column": 0, "text": "Nucleus", "isHeader": False},
                {"row": 1, "column": 1, "text": "Stores DNA", "isHeader": False},
            ],
            subject="Biology",
        )
        for quiz_id in (1, 2)
    ]
    db_session.add_all(quizzes)
    db_session.commit()
    return quizzes
