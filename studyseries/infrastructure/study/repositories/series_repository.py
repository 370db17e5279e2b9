"""Series repository with compare-and-swap versioning."""

from sqlalchemy import ColumnElement, delete, func, select, update
from sqlalchemy.orm import Session

from studyseries.application.common.pagination import Pagination
from studyseries.application.study.protocols.series_repository import SeriesFilter
from studyseries.domain.common.value_objects.ids import SeriesId
from studyseries.domain.study.entities.series import Series
from studyseries.domain.study.item_kind import ItemKind
from studyseries.exceptions import StorageConflictError
from studyseries.infrastructure.study.mappers.series_mapper import SeriesMapper
from studyseries.models import StudySeries as StudySeriesORM


class SeriesRepository:
    """
    Domain-centric repository for Series aggregates.

    Every write of an already stored series is an UPDATE/DELETE guarded by
    the version the aggregate was loaded with.
    """

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = SeriesMapper()

    def find_by_id(self, series_id: SeriesId, kind: ItemKind) -> Series | None:
        stmt = (
            select(StudySeriesORM)
            .where(StudySeriesORM.id == series_id.value)
            .where(StudySeriesORM.kind == kind.value)
            .execution_options(populate_existing=True)
        )
        orm_model = self.db.execute(stmt).scalar_one_or_none()
        return self.mapper.to_domain(orm_model) if orm_model else None

    def _conditions(self, series_filter: SeriesFilter) -> list[ColumnElement[bool]]:
        conditions = [StudySeriesORM.kind == series_filter.kind.value]
        if series_filter.status is not None:
            conditions.append(StudySeriesORM.status == series_filter.status.value)
        if series_filter.search:
            conditions.append(StudySeriesORM.title.icontains(series_filter.search, autoescape=True))
        return conditions

    def _with_content(self, series_filter: SeriesFilter, item_ids: frozenset[int]) -> list[Series]:
        # Sessions live in a JSON document, so item membership is checked here
        stmt = (
            select(StudySeriesORM)
            .where(*self._conditions(series_filter))
            .order_by(StudySeriesORM.started_at.desc(), StudySeriesORM.id.desc())
        )
        candidates = (self.mapper.to_domain(orm) for orm in self.db.execute(stmt).scalars())
        return [
            series for series in candidates if not series.studied_item_ids().isdisjoint(item_ids)
        ]

    def find_page(
        self, series_filter: SeriesFilter, pagination: Pagination
    ) -> tuple[list[Series], int]:
        if series_filter.item_ids is not None:
            matches = self._with_content(series_filter, series_filter.item_ids)
            end = pagination.offset + pagination.limit
            return matches[pagination.offset : end], len(matches)

        conditions = self._conditions(series_filter)
        stmt = (
            select(StudySeriesORM)
            .where(*conditions)
            .order_by(StudySeriesORM.started_at.desc(), StudySeriesORM.id.desc())
            .offset(pagination.offset)
            .limit(pagination.limit)
        )
        orm_models = self.db.execute(stmt).scalars().all()
        return [self.mapper.to_domain(orm) for orm in orm_models], self.count(series_filter)

    def count(self, series_filter: SeriesFilter) -> int:
        if series_filter.item_ids is not None:
            return len(self._with_content(series_filter, series_filter.item_ids))
        stmt = select(func.count()).select_from(StudySeriesORM).where(
            *self._conditions(series_filter)
        )
        return self.db.execute(stmt).scalar_one()

    def add(self, series: Series) -> Series:
        orm_model = self.mapper.to_orm(series)
        self.db.add(orm_model)
        self.db.commit()
        self.db.refresh(orm_model)
        return self.mapper.to_domain(orm_model)

    def save(self, series: Series) -> Series:
        """
        Write the aggregate back if nobody else wrote it since it was loaded.

        Raises:
            StorageConflictError: If the version moved on or the row is gone
        """
        stmt = (
            update(StudySeriesORM)
            .where(StudySeriesORM.id == series.id.value)
            .where(StudySeriesORM.version == series.version)
            .values(
                title=series.title,
                status=series.status.value,
                sessions=self.mapper.sessions_to_document(series),
                completed_at=series.completed_at,
                last_session_number=series.last_session_number,
                version=StudySeriesORM.version + 1,
            )
            .execution_options(synchronize_session=False)
        )
        result = self.db.execute(stmt)
        if result.rowcount != 1:
            self.db.rollback()
            raise StorageConflictError(series.id.value)
        self.db.commit()
        series.version += 1
        return series

    def delete(self, series: Series) -> None:
        """
        Delete the aggregate if it is still at the loaded version.

        Raises:
            StorageConflictError: If the version moved on or the row is gone
        """
        stmt = (
            delete(StudySeriesORM)
            .where(StudySeriesORM.id == series.id.value)
            .where(StudySeriesORM.version == series.version)
            .execution_options(synchronize_session=False)
        )
        result = self.db.execute(stmt)
        if result.rowcount != 1:
            self.db.rollback()
            raise StorageConflictError(series.id.value)
        self.db.commit()

    def delete_by_id(self, series_id: SeriesId, kind: ItemKind) -> bool:
        stmt = (
            delete(StudySeriesORM)
            .where(StudySeriesORM.id == series_id.value)
            .where(StudySeriesORM.kind == kind.value)
            .execution_options(synchronize_session=False)
        )
        result = self.db.execute(stmt)
        self.db.commit()
        return result.rowcount > 0
