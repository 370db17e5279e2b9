from dependency_injector import containers, providers
from sqlalchemy.orm import Session

from studyseries.application.study.services.interaction_factory import InteractionFactory
from studyseries.application.study.services.series_mutation_service import SeriesMutationService
from studyseries.application.study.use_cases.series.complete_series_use_case import (
    CompleteSeriesUseCase,
)
from studyseries.application.study.use_cases.series.create_series_use_case import (
    CreateSeriesUseCase,
)
from studyseries.application.study.use_cases.series.delete_series_use_case import (
    DeleteSeriesUseCase,
)
from studyseries.application.study.use_cases.series.get_series_use_case import GetSeriesUseCase
from studyseries.application.study.use_cases.series.list_series_use_case import (
    ListSeriesUseCase,
)
from studyseries.application.study.use_cases.sessions.complete_session_use_case import (
    CompleteSessionUseCase,
)
from studyseries.application.study.use_cases.sessions.delete_session_use_case import (
    DeleteSessionUseCase,
)
from studyseries.application.study.use_cases.sessions.record_interaction_use_case import (
    RecordInteractionUseCase,
)
from studyseries.application.study.use_cases.sessions.start_session_use_case import (
    StartSessionUseCase,
)
from studyseries.config import get_settings
from studyseries.domain.study.item_kind import ItemKind
from studyseries.infrastructure.study.catalogs import FlashcardCatalog, McqCatalog, TableCatalog
from studyseries.infrastructure.study.repositories import SeriesRepository


class Container(containers.DeclarativeContainer):
    """Dependency injection container."""

    # Declare db as a dependency that will be provided at runtime
    db = providers.Dependency(instance_of=Session)

    settings = providers.Callable(get_settings)

    # Repositories
    series_repository = providers.Factory(SeriesRepository, db=db)

    # Catalogs
    flashcard_catalog = providers.Factory(FlashcardCatalog, db=db)
    mcq_catalog = providers.Factory(McqCatalog, db=db)
    table_catalog = providers.Factory(TableCatalog, db=db)
    catalogs = providers.Dict(
        {
            ItemKind.FLASHCARD: flashcard_catalog,
            ItemKind.MCQ: mcq_catalog,
            ItemKind.TABLE: table_catalog,
        }
    )

    # Services
    series_mutation_service = providers.Factory(
        SeriesMutationService,
        series_repository=series_repository,
        max_retries=settings.provided.STORAGE_CONFLICT_MAX_RETRIES,
    )
    interaction_factory = providers.Factory(InteractionFactory, answer_key=mcq_catalog)

    # Series use cases
    create_series_use_case = providers.Factory(
        CreateSeriesUseCase, series_repository=series_repository
    )
    get_series_use_case = providers.Factory(GetSeriesUseCase, series_repository=series_repository)
    list_series_use_case = providers.Factory(
        ListSeriesUseCase,
        series_repository=series_repository,
        catalogs=catalogs,
        max_page_size=settings.provided.MAX_PAGE_SIZE,
    )
    complete_series_use_case = providers.Factory(
        CompleteSeriesUseCase, mutation_service=series_mutation_service
    )
    delete_series_use_case = providers.Factory(
        DeleteSeriesUseCase, series_repository=series_repository
    )

    # Session use cases
    start_session_use_case = providers.Factory(
        StartSessionUseCase,
        mutation_service=series_mutation_service,
        catalogs=catalogs,
        session_start_policy=settings.provided.SESSION_START_POLICY,
    )
    record_interaction_use_case = providers.Factory(
        RecordInteractionUseCase,
        mutation_service=series_mutation_service,
        interaction_factory=interaction_factory,
    )
    complete_session_use_case = providers.Factory(
        CompleteSessionUseCase, mutation_service=series_mutation_service
    )
    delete_session_use_case = providers.Factory(
        DeleteSessionUseCase, mutation_service=series_mutation_service
    )


container = Container()
