"""Tests for flashcard series API endpoints."""

from typing import Any

from fastapi import status
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from studyseries import models

BASE_URL = "/api/v1/flashcard-series"


def create_series(client: TestClient, title: str = "Biology Review") -> int:
    response = client.post(f"{BASE_URL}/", json={"title": title})
    assert response.status_code == status.HTTP_201_CREATED
    return response.json()["seriesId"]


def start_session(client: TestClient, series_id: int, item_ids: list[int]) -> Any:
    return client.post(f"{BASE_URL}/{series_id}/sessions", json={"itemIds": item_ids})


def record(client: TestClient, series_id: int, session_id: int, card_id: int, **fields: Any) -> Any:
    payload = {
        "itemId": card_id,
        "result": "Right",
        "difficulty": "Medium",
        "confidenceWhileSolving": "High",
        "timeSpent": 30,
        **fields,
    }
    return client.post(f"{BASE_URL}/{series_id}/sessions/{session_id}/interactions", json=payload)


class TestCreateSeries:
    """Test suite for POST /flashcard-series/ endpoint."""

    def test_create_series_success(self, client: TestClient, db_session: Session) -> None:
        """Test successful creation of a series with a trimmed title."""
        response = client.post(f"{BASE_URL}/", json={"title": "  Biology Review  "})

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["success"] is True
        assert data["title"] == "Biology Review"
        assert data["status"] == "active"
        assert "startedAt" in data

        db_series = db_session.query(models.StudySeries).filter_by(id=data["seriesId"]).first()
        assert db_series is not None
        assert db_series.kind == "flashcard"
        assert db_series.sessions == []

    def test_create_series_blank_title(self, client: TestClient) -> None:
        """Test that a whitespace-only title is rejected."""
        response = client.post(f"{BASE_URL}/", json={"title": "   "})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["success"] is False

    def test_create_series_missing_title(self, client: TestClient) -> None:
        """Test that request validation errors list the offending fields."""
        response = client.post(f"{BASE_URL}/", json={})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        data = response.json()
        assert data["success"] is False
        assert data["message"] == "Validation failed"
        assert data["errors"][0]["field"] == "title"

    def test_create_series_title_too_long(self, client: TestClient) -> None:
        """Test that titles over 200 characters are rejected."""
        response = client.post(f"{BASE_URL}/", json={"title": "x" * 201})

        assert response.status_code == status.HTTP_400_BAD_REQUEST


class TestSessionLifecycle:
    """Test suite for the session lifecycle of a flashcard series."""

    def test_full_lifecycle(self, client: TestClient, flashcards: list[models.Flashcard]) -> None:
        """Test start, record, premature completion, and completion of a session."""
        series_id = create_series(client)

        response = start_session(client, series_id, [1, 2, 3])
        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["sessionId"] == 1
        assert data["itemCount"] == 3
        assert [item["itemId"] for item in data["items"]] == [1, 2, 3]
        assert data["items"][0]["title"] == "Question 1"

        response = record(client, series_id, 1, 2)
        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["isCorrect"] is True
        assert data["result"] == "Right"
        assert "selectedAnswer" not in data

        response = record(client, series_id, 1, 2, result="Wrong")
        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.json()["message"] == "Interaction already recorded for this item"

        response = client.put(f"{BASE_URL}/{series_id}/sessions/1/complete")
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        data = response.json()
        assert data["message"] == "Cannot complete session with unanswered items"
        assert data["unansweredCount"] == 2

        record(client, series_id, 1, 1, result="Wrong")
        record(client, series_id, 1, 3)
        response = client.put(f"{BASE_URL}/{series_id}/sessions/1/complete")
        assert response.status_code == status.HTTP_200_OK

        response = client.get(f"{BASE_URL}/{series_id}")
        session = response.json()["series"]["sessions"][0]
        assert session["status"] == "completed"
        assert session["completedAt"] is not None
        assert [item["interaction"]["result"] for item in session["items"]] == [
            "Wrong",
            "Right",
            "Right",
        ]

        response = client.get(f"{BASE_URL}/{series_id}/stats")
        stats = response.json()["stats"]
        assert stats["totalItems"] == 3
        assert stats["totalCorrect"] == 2
        assert stats["successRate"] == 67
        assert stats["activeSessionId"] is None
        assert stats["nextSessionId"] == 2

    def test_second_active_session_rejected(
        self, client: TestClient, flashcards: list[models.Flashcard]
    ) -> None:
        """Test that only one session can be active at a time."""
        series_id = create_series(client)
        start_session(client, series_id, [1])

        response = start_session(client, series_id, [2])

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        data = response.json()
        assert data["message"] == "An active session already exists for this series"
        assert data["activeSessionId"] == 1
        series = client.get(f"{BASE_URL}/").json()["items"][0]
        assert series["sessionCount"] == 1

    def test_start_session_unknown_cards(
        self, client: TestClient, flashcards: list[models.Flashcard]
    ) -> None:
        """Test that unknown card ids are reported and nothing is started."""
        series_id = create_series(client)

        response = start_session(client, series_id, [1, 404, 99])

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["missingItemIds"] == [99, 404]
        assert client.get(f"{BASE_URL}/{series_id}").json()["series"]["sessions"] == []

    def test_start_session_accepts_card_ids_alias(
        self, client: TestClient, flashcards: list[models.Flashcard]
    ) -> None:
        """Test that the legacy cardIds field is accepted."""
        series_id = create_series(client)

        response = client.post(
            f"{BASE_URL}/{series_id}/sessions", json={"cardIds": [5, 4], "generatedFrom": 3}
        )

        assert response.status_code == status.HTTP_201_CREATED
        session = client.get(f"{BASE_URL}/{series_id}").json()["series"]["sessions"][0]
        assert session["generatedFrom"] == 3
        assert [item["itemId"] for item in session["items"]] == [5, 4]

    def test_start_session_empty_ids(self, client: TestClient) -> None:
        """Test that at least one item is required."""
        series_id = create_series(client)

        response = start_session(client, series_id, [])

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_start_session_series_not_found(
        self, client: TestClient, flashcards: list[models.Flashcard]
    ) -> None:
        """Test starting a session in a non-existent series."""
        response = start_session(client, 99999, [1])

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["message"] == "Series not found"

    def test_record_on_completed_session(
        self, client: TestClient, flashcards: list[models.Flashcard]
    ) -> None:
        """Test that completed sessions reject interactions."""
        series_id = create_series(client)
        start_session(client, series_id, [1])
        record(client, series_id, 1, 1)
        client.put(f"{BASE_URL}/{series_id}/sessions/1/complete")

        response = record(client, series_id, 1, 1)

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.json()["message"] == "Cannot record interaction on completed session"

    def test_record_card_not_in_session(
        self, client: TestClient, flashcards: list[models.Flashcard]
    ) -> None:
        """Test recording an interaction for a card outside the session."""
        series_id = create_series(client)
        start_session(client, series_id, [1])

        response = record(client, series_id, 1, 2)

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["message"] == "Card not found in session"

    def test_record_session_not_found(
        self, client: TestClient, flashcards: list[models.Flashcard]
    ) -> None:
        """Test recording an interaction in a non-existent session."""
        series_id = create_series(client)

        response = record(client, series_id, 7, 1)

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["message"] == "Session not found"

    def test_record_invalid_result(
        self, client: TestClient, flashcards: list[models.Flashcard]
    ) -> None:
        """Test that an unknown result value is a validation error."""
        series_id = create_series(client)
        start_session(client, series_id, [1])

        response = record(client, series_id, 1, 1, result="Maybe")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["errors"][0]["field"] == "result"

    def test_duplicate_cards_get_separate_slots(
        self, client: TestClient, flashcards: list[models.Flashcard]
    ) -> None:
        """Test that a card listed twice takes two interactions."""
        series_id = create_series(client)
        start_session(client, series_id, [1, 1])

        assert record(client, series_id, 1, 1).status_code == status.HTTP_200_OK
        assert record(client, series_id, 1, 1).status_code == status.HTTP_200_OK
        assert record(client, series_id, 1, 1).status_code == status.HTTP_409_CONFLICT

    def test_complete_session_twice(
        self, client: TestClient, flashcards: list[models.Flashcard]
    ) -> None:
        """Test that a completed session cannot be completed again."""
        series_id = create_series(client)
        start_session(client, series_id, [1])
        record(client, series_id, 1, 1)
        client.put(f"{BASE_URL}/{series_id}/sessions/1/complete")

        response = client.put(f"{BASE_URL}/{series_id}/sessions/1/complete")

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.json()["message"] == "Session already completed"


class TestDeleteSession:
    """Test suite for DELETE /flashcard-series/:id/sessions/:number endpoint."""

    def test_delete_only_session_removes_series(
        self, client: TestClient, db_session: Session, flashcards: list[models.Flashcard]
    ) -> None:
        """Test that deleting the last session deletes the series."""
        series_id = create_series(client)
        start_session(client, series_id, [1, 2])

        response = client.delete(f"{BASE_URL}/{series_id}/sessions/1")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["seriesDeleted"] is True
        assert data["message"] == "Session deleted and series removed (no sessions remaining)"
        assert "remainingSessions" not in data

        response = client.get(f"{BASE_URL}/{series_id}")
        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert db_session.query(models.StudySeries).count() == 0

    def test_delete_completed_session(
        self, client: TestClient, flashcards: list[models.Flashcard]
    ) -> None:
        """Test that completed sessions are kept as history."""
        series_id = create_series(client)
        start_session(client, series_id, [1])
        record(client, series_id, 1, 1)
        client.put(f"{BASE_URL}/{series_id}/sessions/1/complete")

        response = client.delete(f"{BASE_URL}/{series_id}/sessions/1")

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.json()["message"] == "Cannot delete completed session"

    def test_session_numbers_are_not_reused(
        self, client: TestClient, flashcards: list[models.Flashcard]
    ) -> None:
        """Test that a deleted session number is never handed out again."""
        series_id = create_series(client)
        start_session(client, series_id, [1])
        record(client, series_id, 1, 1)
        client.put(f"{BASE_URL}/{series_id}/sessions/1/complete")
        start_session(client, series_id, [2])

        response = client.delete(f"{BASE_URL}/{series_id}/sessions/2")
        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["seriesDeleted"] is False
        assert data["remainingSessions"] == 1

        response = start_session(client, series_id, [3])
        assert response.json()["sessionId"] == 3

    def test_delete_session_not_found(self, client: TestClient) -> None:
        """Test deleting a non-existent session."""
        series_id = create_series(client)

        response = client.delete(f"{BASE_URL}/{series_id}/sessions/1")

        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestSeriesQueriesAndCompletion:
    """Test suite for list, get, complete and delete of whole series."""

    def test_list_series_filters(
        self, client: TestClient, flashcards: list[models.Flashcard]
    ) -> None:
        """Test status, search and pagination filters."""
        create_series(client, "Biology 1")
        done_id = create_series(client, "Biology 2")
        create_series(client, "Chemistry")
        client.put(f"{BASE_URL}/{done_id}/complete")
        client.post("/api/v1/mcq-series/", json={"title": "Biology MCQ"})

        response = client.get(f"{BASE_URL}/", params={"search": "bio"})
        data = response.json()
        assert data["total"] == 2
        assert {item["title"] for item in data["items"]} == {"Biology 1", "Biology 2"}

        response = client.get(f"{BASE_URL}/", params={"status": "completed"})
        data = response.json()
        assert data["total"] == 1
        assert data["items"][0]["seriesId"] == done_id

        response = client.get(f"{BASE_URL}/", params={"limit": 2, "offset": 2})
        data = response.json()
        assert data["total"] == 3
        assert len(data["items"]) == 1
        assert data["offset"] == 2
        assert data["limit"] == 2

    def test_list_series_limit_too_large(self, client: TestClient) -> None:
        """Test that the page size is capped."""
        response = client.get(f"{BASE_URL}/", params={"limit": 1000})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_get_series_of_other_kind(self, client: TestClient) -> None:
        """Test that a series is only reachable through its own kind."""
        response = client.post("/api/v1/table-series/", json={"title": "Tables"})
        series_id = response.json()["seriesId"]

        response = client.get(f"{BASE_URL}/{series_id}")

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_complete_series(self, client: TestClient, flashcards: list[models.Flashcard]) -> None:
        """Test completing a series leaves its active session alone."""
        series_id = create_series(client)
        start_session(client, series_id, [1])

        response = client.put(f"{BASE_URL}/{series_id}/complete")
        assert response.status_code == status.HTTP_200_OK

        series = client.get(f"{BASE_URL}/{series_id}").json()["series"]
        assert series["status"] == "completed"
        assert series["completedAt"] is not None
        assert series["sessions"][0]["status"] == "active"

        response = client.put(f"{BASE_URL}/{series_id}/complete")
        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.json()["message"] == "Series already completed"

    def test_delete_series(self, client: TestClient, flashcards: list[models.Flashcard]) -> None:
        """Test deleting a series with a completed session."""
        series_id = create_series(client)
        start_session(client, series_id, [1])
        record(client, series_id, 1, 1)
        client.put(f"{BASE_URL}/{series_id}/sessions/1/complete")

        response = client.delete(f"{BASE_URL}/{series_id}")
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["success"] is True

        response = client.delete(f"{BASE_URL}/{series_id}")
        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestContentFilters:
    """Test suite for subject, chapter and section filtering of the series list."""

    def _add_cards(self, db_session: Session) -> None:
        db_session.add_all(
            [
                models.Flashcard(
                    id=6,
                    front_text="pH of water",
                    back_text="7",
                    subject="Chemistry",
                    chapter="Acids and Bases",
                    section="Titration",
                ),
                models.Flashcard(
                    id=7, front_text="Untagged", back_text="-", subject="  ", chapter=None
                ),
            ]
        )
        db_session.commit()

    def test_list_series_by_subject(
        self, client: TestClient, db_session: Session, flashcards: list[models.Flashcard]
    ) -> None:
        """Test that a series is kept when any of its items matches."""
        self._add_cards(db_session)
        biology_id = create_series(client, "Mixed")
        start_session(client, biology_id, [6, 1])
        chemistry_id = create_series(client, "Chemistry only")
        start_session(client, chemistry_id, [6])
        create_series(client, "Not started")

        response = client.get(f"{BASE_URL}/", params={"subject": "BIOLOGY"})
        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["total"] == 1
        assert data["items"][0]["seriesId"] == biology_id
        assert data["filters"] == {
            "applied": {"subject": "BIOLOGY", "chapter": None, "section": None},
            "totalBeforeFiltering": 3,
        }

        response = client.get(f"{BASE_URL}/", params={"chapter": "acids", "section": "titr"})
        data = response.json()
        assert data["total"] == 2
        assert {item["seriesId"] for item in data["items"]} == {biology_id, chemistry_id}

    def test_list_series_subject_without_matches(
        self, client: TestClient, flashcards: list[models.Flashcard]
    ) -> None:
        """Test that a filter matching no catalog item returns nothing."""
        series_id = create_series(client)
        start_session(client, series_id, [1, 2])

        data = client.get(f"{BASE_URL}/", params={"subject": "Physics"}).json()
        assert data["total"] == 0
        assert data["items"] == []
        assert data["filters"]["totalBeforeFiltering"] == 1

    def test_list_series_accepts_lowercase_status(
        self, client: TestClient, flashcards: list[models.Flashcard]
    ) -> None:
        """Test the status filter values used by existing clients."""
        create_series(client)

        response = client.get(f"{BASE_URL}/", params={"status": "active"})
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["total"] == 1
        assert response.json()["filters"]["totalBeforeFiltering"] == 1

    def test_filter_options(
        self, client: TestClient, db_session: Session, flashcards: list[models.Flashcard]
    ) -> None:
        """Test that filter options are distinct, sorted and skip blank labels."""
        self._add_cards(db_session)

        response = client.get(f"{BASE_URL}/filter-options")
        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["success"] is True
        assert data["options"] == {
            "subjects": ["Biology", "Chemistry"],
            "chapters": ["Acids and Bases", "Cells"],
            "sections": ["Titration"],
        }

    def test_filter_options_per_kind(
        self, client: TestClient, table_quizzes: list[models.TableQuiz]
    ) -> None:
        """Test that each kind reads its own catalog."""
        response = client.get("/api/v1/table-series/filter-options")
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["options"]["subjects"] == ["Biology"]

        response = client.get(f"{BASE_URL}/filter-options")
        assert response.json()["options"] == {"subjects": [], "chapters": [], "sections": []}
