"""
Base repository: one place that decides eager loading, ordering and
soft-delete visibility for each model.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Generic, Sequence, TypeVar

from sqlalchemy import Select
from sqlalchemy.orm import Session

from shared.config.constants import Limits

ModelT = TypeVar("ModelT")


@dataclass
class RepositoryFilters:
    limit: int = Limits.DEFAULT_PAGE_SIZE
    offset: int = 0
    search: str | None = None

    def __post_init__(self):
        self.limit = min(max(1, self.limit), Limits.MAX_PAGE_SIZE)
        self.offset = max(0, self.offset)
        if self.search:
            self.search = self.search.strip()[: Limits.MAX_SEARCH_TERM_LENGTH] or None


class BaseRepository(ABC, Generic[ModelT]):
    """
    Subclasses provide the model and a base query (eager loads + ordering)
    and may narrow it in _apply_filters. Models carrying AuditMixin's
    is_active flag only expose active rows.
    """

    def __init__(self, db: Session):
        self._db = db

    @property
    @abstractmethod
    def model(self) -> type[ModelT]: ...

    @abstractmethod
    def _base_query(self) -> Select: ...

    def _apply_filters(self, query: Select, filters: RepositoryFilters) -> Select:
        return query

    def _visible(self, query: Select) -> Select:
        if hasattr(self.model, "deleted_at"):
            query = query.where(self.model.is_active.is_(True))
        return query

    def find_all(self, filters: RepositoryFilters | None = None) -> Sequence[ModelT]:
        filters = filters or RepositoryFilters()
        query = self._apply_filters(self._visible(self._base_query()), filters)
        query = query.offset(filters.offset).limit(filters.limit)
        return self._db.execute(query).scalars().unique().all()

    def find_by_id(self, entity_id: int) -> ModelT | None:
        query = self._visible(self._base_query().where(self.model.id == entity_id))
        return self._db.execute(query).scalars().unique().one_or_none()

    def find_by_ids(self, entity_ids: list[int]) -> Sequence[ModelT]:
        """Order follows the base query, not the ids."""
        if not entity_ids:
            return []
        query = self._visible(self._base_query().where(self.model.id.in_(entity_ids)))
        return self._db.execute(query).scalars().unique().all()

    def save(self, entity: ModelT) -> ModelT:
        """Add and flush; committing is left to the service."""
        self._db.add(entity)
        self._db.flush()
        self._db.refresh(entity)
        return entity
