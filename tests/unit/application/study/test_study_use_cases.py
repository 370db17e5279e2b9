import pytest

from studyseries.application.study.dtos.study_dtos import (
    FlashcardAnswer,
    McqAnswer,
    TableAnswer,
    TablePlacementData,
)
from studyseries.application.study.services.interaction_factory import InteractionFactory
from studyseries.application.study.use_cases.series import (
    CompleteSeriesUseCase,
    CreateSeriesUseCase,
    DeleteSeriesUseCase,
    GetSeriesUseCase,
    ListSeriesUseCase,
)
from studyseries.application.study.use_cases.sessions import (
    CompleteSessionUseCase,
    DeleteSessionUseCase,
    RecordInteractionUseCase,
    StartSessionUseCase,
)
from studyseries.domain.common.exceptions import ValidationError
from studyseries.domain.study.exceptions import (
    ActiveSessionExistsError,
    InteractionAlreadyRecordedError,
    InteractionKindMismatchError,
    SeriesNotFoundError,
    SessionNotActiveError,
    UnansweredItemsError,
    UnknownCatalogItemsError,
)
from studyseries.domain.study.item_kind import ItemKind
from studyseries.domain.study.value_objects.enums import ProgressStatus

RIGHT = FlashcardAnswer(
    result="Right", difficulty="Medium", confidence_while_solving="High", time_spent=30
)


@pytest.fixture
def start_use_case(mutation_service, catalogs) -> StartSessionUseCase:
    return StartSessionUseCase(mutation_service=mutation_service, catalogs=catalogs)


@pytest.fixture
def record_use_case(mutation_service, catalogs) -> RecordInteractionUseCase:
    return RecordInteractionUseCase(
        mutation_service=mutation_service,
        interaction_factory=InteractionFactory(answer_key=catalogs[ItemKind.MCQ]),
    )


class TestCreateAndReadSeries:
    def test_create_series_persists_trimmed_title(self, repository) -> None:
        series = CreateSeriesUseCase(repository).create_series(ItemKind.MCQ, "  Cell Biology ")

        assert series.id.value == 1
        assert series.title == "Cell Biology"
        assert repository.rows[1].kind is ItemKind.MCQ

    def test_get_series_of_other_kind_is_not_found(self, repository, stored_series) -> None:
        use_case = GetSeriesUseCase(repository)

        assert use_case.get_series(ItemKind.FLASHCARD, stored_series.id.value).title == (
            "Biology Review"
        )
        with pytest.raises(SeriesNotFoundError):
            use_case.get_series(ItemKind.TABLE, stored_series.id.value)

    def test_list_series_filters_and_counts(self, repository, catalogs, start_use_case) -> None:
        create = CreateSeriesUseCase(repository)
        first = create.create_series(ItemKind.FLASHCARD, "Biology Review")
        create.create_series(ItemKind.FLASHCARD, "Chemistry")
        create.create_series(ItemKind.MCQ, "Biology MCQ")
        start_use_case.start_session(ItemKind.FLASHCARD, first.id.value, [1, 2])

        page = ListSeriesUseCase(repository, catalogs, max_page_size=100).list_series(
            ItemKind.FLASHCARD, status=ProgressStatus.ACTIVE, search="bio"
        )

        assert page.total == 1
        assert page.items[0].series.title == "Biology Review"
        assert page.items[0].session_count == 1
        assert page.items[0].completed_sessions == 0

    def test_list_series_by_content(self, repository, catalogs, start_use_case) -> None:
        create = CreateSeriesUseCase(repository)
        cells = create.create_series(ItemKind.FLASHCARD, "Cells")
        acids = create.create_series(ItemKind.FLASHCARD, "Acids")
        create.create_series(ItemKind.FLASHCARD, "Empty")
        start_use_case.start_session(ItemKind.FLASHCARD, cells.id.value, [1, 4])
        start_use_case.start_session(ItemKind.FLASHCARD, acids.id.value, [3])
        use_case = ListSeriesUseCase(repository, catalogs, max_page_size=100)

        page = use_case.list_series(ItemKind.FLASHCARD, subject="  bio ")

        assert [entry.series.title for entry in page.items] == ["Cells"]
        assert page.total == 1
        assert page.total_before_filtering == 3
        assert page.subject == "bio"

        # Both labels must belong to the same item
        page = use_case.list_series(ItemKind.FLASHCARD, subject="chem", chapter="cells")
        assert page.total == 0

        page = use_case.list_series(ItemKind.FLASHCARD, search="a")
        assert page.total_before_filtering == page.total == 1

    def test_list_series_rejects_oversized_page(self, repository, catalogs) -> None:
        with pytest.raises(ValidationError, match="Limit"):
            ListSeriesUseCase(repository, catalogs, max_page_size=10).list_series(
                ItemKind.MCQ, limit=11
            )

    def test_statistics(self, repository, stored_series, start_use_case, record_use_case) -> None:
        series_id = stored_series.id.value
        start_use_case.start_session(ItemKind.FLASHCARD, series_id, [1, 2])
        record_use_case.record_interaction(ItemKind.FLASHCARD, series_id, 1, 1, RIGHT)

        stats = GetSeriesUseCase(repository).get_statistics(ItemKind.FLASHCARD, series_id)

        assert stats.total_items == 2
        assert stats.answered_items == 1
        assert stats.total_correct == 1
        assert stats.success_rate == 50
        assert stats.active_session_number == 1
        assert stats.next_session_number == 2


class TestStartSession:
    def test_start_returns_session_and_summaries(self, start_use_case, stored_series) -> None:
        started = start_use_case.start_session(
            ItemKind.FLASHCARD, stored_series.id.value, [3, 1], generated_from=9
        )

        assert started.session.session_number == 1
        assert started.session.generated_from == 9
        assert [summary.item_id for summary in started.items] == [3, 1]

    def test_unknown_items_are_listed(self, start_use_case, repository, stored_series) -> None:
        with pytest.raises(UnknownCatalogItemsError) as exc_info:
            start_use_case.start_session(ItemKind.FLASHCARD, stored_series.id.value, [1, 99, 42])

        assert exc_info.value.details["missingItemIds"] == [42, 99]
        assert repository.rows[stored_series.id.value].session_count == 0

    @pytest.mark.parametrize("item_ids", [[], [1, -2]])
    def test_invalid_item_ids(self, start_use_case, stored_series, item_ids) -> None:
        with pytest.raises(ValidationError):
            start_use_case.start_session(ItemKind.FLASHCARD, stored_series.id.value, item_ids)

    def test_reject_policy_refuses_second_session(
        self, start_use_case, repository, stored_series
    ) -> None:
        start_use_case.start_session(ItemKind.FLASHCARD, stored_series.id.value, [1])

        with pytest.raises(ActiveSessionExistsError):
            start_use_case.start_session(ItemKind.FLASHCARD, stored_series.id.value, [2])

        assert repository.rows[stored_series.id.value].session_count == 1

    def test_auto_complete_policy_closes_active_session(
        self, mutation_service, catalogs, repository, stored_series
    ) -> None:
        use_case = StartSessionUseCase(
            mutation_service=mutation_service,
            catalogs=catalogs,
            session_start_policy="auto_complete",
        )
        use_case.start_session(ItemKind.FLASHCARD, stored_series.id.value, [1])

        started = use_case.start_session(ItemKind.FLASHCARD, stored_series.id.value, [2])

        stored = repository.rows[stored_series.id.value]
        assert started.session.session_number == 2
        assert stored.get_session(1).status is ProgressStatus.COMPLETED
        assert stored.active_session().session_number == 2

    def test_unknown_policy_is_rejected(self, mutation_service, catalogs) -> None:
        with pytest.raises(ValueError, match="policy"):
            StartSessionUseCase(mutation_service, catalogs, session_start_policy="merge")


class TestRecordInteraction:
    def test_flashcard_lifecycle(
        self, start_use_case, record_use_case, mutation_service, stored_series
    ) -> None:
        series_id = stored_series.id.value
        start_use_case.start_session(ItemKind.FLASHCARD, series_id, [1, 2, 3])
        complete = CompleteSessionUseCase(mutation_service)

        recorded = record_use_case.record_interaction(ItemKind.FLASHCARD, series_id, 1, 2, RIGHT)
        assert recorded.item.interaction.is_correct is True

        with pytest.raises(InteractionAlreadyRecordedError):
            record_use_case.record_interaction(ItemKind.FLASHCARD, series_id, 1, 2, RIGHT)
        with pytest.raises(UnansweredItemsError) as exc_info:
            complete.complete_session(ItemKind.FLASHCARD, series_id, 1)
        assert exc_info.value.details["unansweredCount"] == 2

        record_use_case.record_interaction(ItemKind.FLASHCARD, series_id, 1, 1, RIGHT)
        record_use_case.record_interaction(ItemKind.FLASHCARD, series_id, 1, 3, RIGHT)
        session = complete.complete_session(ItemKind.FLASHCARD, series_id, 1)

        assert session.status is ProgressStatus.COMPLETED
        assert session.completed_at is not None

    def test_state_conflict_wins_over_invalid_payload(
        self, start_use_case, record_use_case, stored_series
    ) -> None:
        series_id = stored_series.id.value
        start_use_case.start_session(ItemKind.FLASHCARD, series_id, [1])
        record_use_case.record_interaction(ItemKind.FLASHCARD, series_id, 1, 1, RIGHT)
        CompleteSessionUseCase(record_use_case.mutation_service).complete_session(
            ItemKind.FLASHCARD, series_id, 1
        )
        invalid = FlashcardAnswer(
            result="Maybe", difficulty="Medium", confidence_while_solving="High", time_spent=1
        )

        with pytest.raises(SessionNotActiveError):
            record_use_case.record_interaction(ItemKind.FLASHCARD, series_id, 1, 1, invalid)

    def test_invalid_payload_is_validation_error(
        self, start_use_case, record_use_case, repository, stored_series
    ) -> None:
        series_id = stored_series.id.value
        start_use_case.start_session(ItemKind.FLASHCARD, series_id, [1])
        invalid = FlashcardAnswer(
            result="Maybe", difficulty="Medium", confidence_while_solving="High", time_spent=1
        )

        with pytest.raises(ValidationError):
            record_use_case.record_interaction(ItemKind.FLASHCARD, series_id, 1, 1, invalid)

        assert repository.rows[series_id].get_session(1).unanswered_count == 1

    def test_payload_of_other_kind_is_rejected(
        self, start_use_case, record_use_case, stored_series
    ) -> None:
        series_id = stored_series.id.value
        start_use_case.start_session(ItemKind.FLASHCARD, series_id, [1])
        answer = McqAnswer(
            selected_answer="A", difficulty="Easy", confidence_while_solving="High", time_spent=2
        )

        with pytest.raises(InteractionKindMismatchError):
            record_use_case.record_interaction(ItemKind.FLASHCARD, series_id, 1, 1, answer)

    @pytest.mark.parametrize(
        ("item_id", "selected", "supplied", "expected"),
        [(1, "B", None, True), (2, "B", None, False), (3, "B", None, False), (3, "B", "B", True)],
    )
    def test_mcq_correctness_uses_answer_key_when_not_supplied(
        self, repository, start_use_case, record_use_case, item_id, selected, supplied, expected
    ) -> None:
        series = CreateSeriesUseCase(repository).create_series(ItemKind.MCQ, "Cells")
        start_use_case.start_session(ItemKind.MCQ, series.id.value, [item_id])
        answer = McqAnswer(
            selected_answer=selected,
            correct_answer=supplied,
            difficulty="Medium",
            confidence_while_solving="Low",
            time_spent=15,
        )

        recorded = record_use_case.record_interaction(
            ItemKind.MCQ, series.id.value, 1, item_id, answer
        )

        assert recorded.item.interaction.is_correct is expected

    def test_table_interaction(self, repository, start_use_case, record_use_case) -> None:
        series = CreateSeriesUseCase(repository).create_series(ItemKind.TABLE, "Organelles")
        start_use_case.start_session(ItemKind.TABLE, series.id.value, [1])
        answer = TableAnswer(
            user_grid=[["Nucleus", "Makes protein"], ["Ribosome", "Stores DNA"]],
            correct_placements=2,
            total_cells=4,
            accuracy=50,
            wrong_placements=[
                TablePlacementData(
                    cell_text="Makes protein",
                    placed_at_row=0,
                    placed_at_column=1,
                    correct_row=1,
                    correct_column=1,
                    correct_cell_text="Stores DNA",
                )
            ],
            difficulty="Hard",
            confidence_while_solving="Low",
            time_spent=120,
        )

        recorded = record_use_case.record_interaction(
            ItemKind.TABLE, series.id.value, 1, 1, answer
        )

        interaction = recorded.item.interaction
        assert interaction.is_correct is False
        assert interaction.results.wrong_placements[0].correct_cell_text == "Stores DNA"
        assert recorded.series.score_totals() == (2, 4)


class TestDeleteAndComplete:
    def test_deleting_only_session_deletes_series(
        self, start_use_case, mutation_service, repository, stored_series
    ) -> None:
        series_id = stored_series.id.value
        start_use_case.start_session(ItemKind.FLASHCARD, series_id, [1])

        deletion = DeleteSessionUseCase(mutation_service).delete_session(
            ItemKind.FLASHCARD, series_id, 1
        )

        assert deletion.series_deleted is True
        assert deletion.remaining_sessions is None
        with pytest.raises(SeriesNotFoundError):
            GetSeriesUseCase(repository).get_series(ItemKind.FLASHCARD, series_id)

    def test_deleting_session_keeps_other_sessions(
        self, mutation_service, catalogs, repository, stored_series
    ) -> None:
        series_id = stored_series.id.value
        start = StartSessionUseCase(mutation_service, catalogs, "auto_complete")
        start.start_session(ItemKind.FLASHCARD, series_id, [1])
        start.start_session(ItemKind.FLASHCARD, series_id, [2])

        deletion = DeleteSessionUseCase(mutation_service).delete_session(
            ItemKind.FLASHCARD, series_id, 2
        )

        assert deletion.series_deleted is False
        assert deletion.remaining_sessions == 1
        assert repository.rows[series_id].next_session_number() == 3

    def test_complete_series(self, mutation_service, stored_series) -> None:
        series = CompleteSeriesUseCase(mutation_service).complete_series(
            ItemKind.FLASHCARD, stored_series.id.value
        )

        assert series.status is ProgressStatus.COMPLETED
        assert series.completed_at is not None

    def test_delete_series(self, repository, stored_series) -> None:
        use_case = DeleteSeriesUseCase(repository)

        use_case.delete_series(ItemKind.FLASHCARD, stored_series.id.value)

        assert repository.rows == {}
        with pytest.raises(SeriesNotFoundError):
            use_case.delete_series(ItemKind.FLASHCARD, stored_series.id.value)
