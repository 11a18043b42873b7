"""
Generic entity repository.

One `EntityRepository` class serves every catalog entity kind. What differs
between kinds (model class, key columns, searchable columns, sort whitelist,
whether the natural key may change) lives in an `EntitySpec`, so adding an
entity kind means declaring a spec, not writing a new repository.

Every operation opens exactly one session from the injected `Database`, runs
inside `db_error_handler` (rollback + mapping to the public error taxonomy) and
closes the session on every exit path.

Visibility rule: only active rows (`is_active = true`) are ever returned,
counted or considered for code uniqueness.
"""
import time
import logging
from dataclasses import dataclass, field
from typing import Any, Generic, Mapping, Type, TypeVar

from pydantic import BaseModel
from sqlalchemy import exists, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from ..database.base import Base
from ..database.session import Database
from ..exceptions.base import ValidationError
from ..exceptions.mapper import db_error_handler
from ..models.mixins import utc_now
from ..schemas.pagination import PaginationMeta, PaginationQuery
from ..utils.pagination import build_pagination_meta, calculate_offset, validate_pagination
from ..validators.model_validators import find_unknown_model_kwargs, mapped_column_keys
from .merge import apply_patch, patch_to_dict

# Type variable for the model class
ModelType = TypeVar("ModelType", bound=Base)

logger = logging.getLogger(__name__)

# Columns the server owns: never accepted from create/update payloads.
SERVER_MANAGED_FIELDS = frozenset({"is_active", "created_at", "updated_at", "created_by", "updated_by"})

# Identity columns are 32-bit INTEGER; ids outside this range cannot exist.
MIN_IDENTITY = 1
MAX_IDENTITY = 2**31 - 1


def is_storable_id(entity_id: int) -> bool:
    return MIN_IDENTITY <= entity_id <= MAX_IDENTITY


@dataclass(frozen=True)
class EntitySpec(Generic[ModelType]):
    """
    Capability object describing one entity kind to the generic repository.

    Attributes:
        model: SQLAlchemy model class (e.g. Warehouse, not Warehouse()).
        resource_name: human name used in errors and logs ("Warehouse").
        id_field / code_field / name_field: attribute names of the identity,
            natural key and display name columns.
        searchable_fields: columns matched by the list `search` term.
        sortable_fields: public sort key -> column attribute name. Anything
            else falls back to `default_sort`.
        default_sort: sort key used when none (or an unknown one) is given.
        code_mutable: whether the natural key can be changed through update.
    """

    model: Type[ModelType]
    resource_name: str
    id_field: str
    code_field: str
    name_field: str
    searchable_fields: tuple[str, ...]
    sortable_fields: Mapping[str, str] = field(default_factory=dict)
    default_sort: str = "name"
    code_mutable: bool = False

    @property
    def id_column(self):
        return getattr(self.model, self.id_field)

    @property
    def code_column(self):
        return getattr(self.model, self.code_field)

    def sort_column(self, sort_by: str | None):
        """Resolve a caller-supplied sort key through the whitelist."""
        key = (sort_by or "").strip().lower()
        column_name = self.sortable_fields.get(key) or self.sortable_fields.get(self.default_sort) or self.name_field
        return getattr(self.model, column_name)

    @property
    def updatable_fields(self) -> frozenset[str]:
        excluded = set(SERVER_MANAGED_FIELDS) | {self.id_field}
        if not self.code_mutable:
            excluded.add(self.code_field)
        return frozenset(mapped_column_keys(self.model) - excluded)

    @property
    def creatable_fields(self) -> frozenset[str]:
        return frozenset(mapped_column_keys(self.model) - SERVER_MANAGED_FIELDS - {self.id_field})


class EntityRepository(Generic[ModelType]):
    """
    Generic repository providing list/get/create/update/soft-delete for one entity kind.

    Type Parameters:
        ModelType: The SQLAlchemy model class this repository manages.
    """

    def __init__(self, spec: EntitySpec[ModelType], database: Database, *, default_actor_id: int | None = 1):
        """
        Args:
            spec: description of the entity kind.
            database: shared engine/session factory handle.
            default_actor_id: principal written to created_by/updated_by when the caller passes none.
        """
        self.spec = spec
        self.model = spec.model
        self.database = database
        self.default_actor_id = default_actor_id

    @property
    def model_name(self) -> str:
        return self.model.__name__

    def _actor(self, actor_id: int | None) -> int | None:
        return self.default_actor_id if actor_id is None else actor_id

    # =================================================================================================================
    # Query building helpers
    # =================================================================================================================

    def _active_clause(self):
        return self.model.is_active.is_(True)

    def _search_clause(self, term: str | None):
        """
        Case-insensitive substring match over the searchable columns.
        `autoescape=True` makes `%` and `_` in the term match literally.
        """
        if not term:
            return None
        return or_(
            *(getattr(self.model, name).icontains(term, autoescape=True) for name in self.spec.searchable_fields)
        )

    def _filters(self, term: str | None) -> list:
        clauses = [self._active_clause()]
        search = self._search_clause(term)
        if search is not None:
            clauses.append(search)
        return clauses

    async def _get_active(self, session: AsyncSession, column, value) -> ModelType | None:
        result = await session.execute(
            select(self.model).where(column == value, self._active_clause())
        )
        return result.scalar_one_or_none()

    async def _count(self, session: AsyncSession, term: str | None) -> int:
        result = await session.execute(
            select(func.count()).select_from(self.model).where(*self._filters(term))
        )
        return int(result.scalar_one())

    # =================================================================================================================
    # Read operations
    # =================================================================================================================

    async def list(self, query: PaginationQuery | None = None) -> tuple[list[ModelType], PaginationMeta]:
        """
        Return one page of active records plus pagination metadata.

        - `search` (trimmed, non-empty) filters on the searchable columns.
        - `sort_by` goes through the whitelist; unknown keys use the default sort.
        - `sort_order` DESC (any case) sorts descending, anything else ascending.
        - identity is the tie-breaker so pages are stable.
        """
        query = query or PaginationQuery()
        page, limit = validate_pagination(query)
        term = query.search_term

        sort_column = self.spec.sort_column(query.sort_by)
        ordering = [sort_column.desc(), self.spec.id_column.desc()] if query.descending \
            else [sort_column.asc(), self.spec.id_column.asc()]

        logger.debug(
            "repo.list.start",
            extra={
                "model": self.model_name,
                "operation": "list",
                "page": page,
                "limit": limit,
                "search": term,
                "sort": str(sort_column.key),
                "descending": query.descending,
            },
        )

        start = time.perf_counter()
        async with self.database.session() as session:
            async with db_error_handler(session, self.spec.resource_name, "list"):
                total = await self._count(session, term)
                offset = calculate_offset(page, limit)
                # a page past the end is empty; its offset may not fit a storage integer
                if offset >= total:
                    entities = []
                else:
                    result = await session.execute(
                        select(self.model)
                        .where(*self._filters(term))
                        .order_by(*ordering)
                        .offset(offset)
                        .limit(limit)
                    )
                    entities = list(result.scalars().all())

        logger.debug(
            "repo.list.success",
            extra={
                "model": self.model_name,
                "operation": "list",
                "returned": len(entities),
                "total": total,
                "duration_ms": int((time.perf_counter() - start) * 1000),
            },
        )
        return entities, build_pagination_meta(total, page, limit)

    async def count_active(self, search: str | None = None) -> int:
        """Number of active records, optionally restricted by a search term."""
        term = search.strip() if search else None
        async with self.database.session() as session:
            async with db_error_handler(session, self.spec.resource_name, "count"):
                return await self._count(session, term or None)

    async def get_by_id(self, entity_id: int) -> ModelType | None:
        """
        Get an active entity by its identity.

        Returns:
            The entity, or None when it does not exist or is soft-deleted.
        """
        if not is_storable_id(entity_id):
            return None

        async with self.database.session() as session:
            async with db_error_handler(session, self.spec.resource_name, "get"):
                entity = await self._get_active(session, self.spec.id_column, entity_id)

        logger.debug(
            "repo.get.result",
            extra={"model": self.model_name, "operation": "get", "id": entity_id, "found": entity is not None},
        )
        return entity

    async def get_by_code(self, code: str) -> ModelType | None:
        """Get an active entity by its natural key; None when absent or inactive."""
        async with self.database.session() as session:
            async with db_error_handler(session, self.spec.resource_name, "get_by_code"):
                entity = await self._get_active(session, self.spec.code_column, code)

        logger.debug(
            "repo.get_by_code.result",
            extra={"model": self.model_name, "operation": "get_by_code", "found": entity is not None},
        )
        return entity

    async def code_exists(self, code: str, exclude_id: int | None = None) -> bool:
        """
        True iff an active record other than `exclude_id` holds `code`.

        Advisory only: the partial unique index remains the final arbiter when two
        writers pass this check concurrently.
        """
        conditions = [self.spec.code_column == code, self._active_clause()]
        if exclude_id is not None and is_storable_id(exclude_id):
            conditions.append(self.spec.id_column != exclude_id)

        async with self.database.session() as session:
            async with db_error_handler(session, self.spec.resource_name, "code_exists"):
                result = await session.execute(select(exists().where(*conditions)))
                return bool(result.scalar())

    # =================================================================================================================
    # Write operations
    # =================================================================================================================

    async def create(self, payload: BaseModel | Mapping[str, Any], actor_id: int | None = None) -> ModelType:
        """
        Insert a new active record.

        Args:
            payload: creation schema instance or mapping of column values.
            actor_id: principal for created_by/updated_by (repository default when None).

        Returns:
            The created entity, refreshed with server-generated values.

        Raises:
            ValidationError: unknown or server-managed keys in the payload.
            AlreadyExistsError: the natural key is taken by an active record (storage-level check).
            DatabaseError: any other storage failure.
        """
        data = payload.model_dump() if isinstance(payload, BaseModel) else dict(payload)

        logger.debug(
            "repo.create.start",
            extra={
                "model": self.model_name,
                "operation": "create",
                # keys only, values may carry personal data (emails, phones)
                "provided_keys": sorted(data.keys()),
            },
        )

        invalid = sorted(set(find_unknown_model_kwargs(self.model, data.keys()))
                         | {k for k in data if k not in self.spec.creatable_fields})
        if invalid:
            logger.info(
                "repo.create.invalid_fields",
                extra={"model": self.model_name, "operation": "create", "invalid_fields": invalid},
            )
            raise ValidationError(
                f"Unknown field(s) for {self.spec.resource_name}: {', '.join(invalid)}", fields=invalid
            )

        actor = self._actor(actor_id)
        now = utc_now()
        start = time.perf_counter()

        async with self.database.session() as session:
            async with db_error_handler(session, self.spec.resource_name, "create"):
                entity = self.model(
                    **data,
                    is_active=True,
                    created_at=now,
                    updated_at=now,
                    created_by=actor,
                    updated_by=actor,
                )
                session.add(entity)
                await session.flush()
                await session.refresh(entity)
                await session.commit()

        logger.info(
            "repo.create.success",
            extra={
                "model": self.model_name,
                "operation": "create",
                "id": getattr(entity, self.spec.id_field),
                "duration_ms": int((time.perf_counter() - start) * 1000),
            },
        )
        return entity

    async def update(
        self,
        entity_id: int,
        patch: BaseModel | Mapping[str, Any],
        actor_id: int | None = None,
    ) -> ModelType | None:
        """
        Merge a partial update into an active record.

        Returns:
            The updated entity, or None when the record does not exist or is soft-deleted.

        Raises:
            ValidationError: disallowed key (e.g. an immutable code) or null on a NOT NULL column.
            AlreadyExistsError: the new natural key collides with another active record.
        """
        logger.debug(
            "repo.update.start",
            extra={
                "model": self.model_name,
                "operation": "update",
                "id": entity_id,
                "provided_keys": sorted(patch_to_dict(patch).keys()),
            },
        )

        if not is_storable_id(entity_id):
            logger.info(
                "repo.update.not_found",
                extra={"model": self.model_name, "operation": "update", "id": entity_id},
            )
            return None

        start = time.perf_counter()
        async with self.database.session() as session:
            async with db_error_handler(session, self.spec.resource_name, "update"):
                entity = await self._get_active(session, self.spec.id_column, entity_id)
                if entity is None:
                    logger.info(
                        "repo.update.not_found",
                        extra={"model": self.model_name, "operation": "update", "id": entity_id},
                    )
                    return None

                changed = apply_patch(
                    entity,
                    patch,
                    actor_id=self._actor(actor_id),
                    allowed_fields=self.spec.updatable_fields,
                )
                await session.flush()
                await session.refresh(entity)
                await session.commit()

        logger.info(
            "repo.update.success",
            extra={
                "model": self.model_name,
                "operation": "update",
                "id": entity_id,
                "changed_fields": changed,
                "duration_ms": int((time.perf_counter() - start) * 1000),
            },
        )
        return entity

    async def delete(self, entity_id: int, actor_id: int | None = None) -> bool:
        """
        Soft delete: flip `is_active` to false with one conditional UPDATE.

        Returns:
            True if an active row was deactivated, False if there was none
            (missing id or already deleted).
        """
        if not is_storable_id(entity_id):
            logger.info(
                "repo.delete.result",
                extra={"model": self.model_name, "operation": "delete", "id": entity_id, "deleted": False},
            )
            return False

        stmt = (
            update(self.model)
            .where(self.spec.id_column == entity_id, self._active_clause())
            .values(is_active=False, updated_at=utc_now(), updated_by=self._actor(actor_id))
            .execution_options(synchronize_session=False)
        )

        async with self.database.session() as session:
            async with db_error_handler(session, self.spec.resource_name, "delete"):
                result = await session.execute(stmt)
                await session.commit()
                deleted = result.rowcount > 0

        logger.info(
            "repo.delete.result",
            extra={"model": self.model_name, "operation": "delete", "id": entity_id, "deleted": deleted},
        )
        return deleted


__all__ = ["EntitySpec", "EntityRepository", "SERVER_MANAGED_FIELDS", "MAX_IDENTITY", "is_storable_id"]
