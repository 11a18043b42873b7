"""
Entity service: the outcome contract on top of a repository.

The repository reports absence as None/False; this layer turns that into
NotFoundError, validates payloads before anything touches storage, and runs the
code uniqueness pre-check.

| Operation | Failure kinds                              |
| --------- | ------------------------------------------ |
| list      | none                                       |
| get       | NotFound                                   |
| create    | Validation, AlreadyExists                  |
| update    | Validation, NotFound, AlreadyExists        |
| delete    | NotFound                                   |
"""
import logging
from typing import Any, Generic, Mapping, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ..exceptions.base import AlreadyExistsError, NotFoundError, ValidationError
from ..repositories.base_repository import EntityRepository, ModelType
from ..schemas.pagination import Page, PaginationQuery

CreateSchemaType = TypeVar("CreateSchemaType", bound=BaseModel)
UpdateSchemaType = TypeVar("UpdateSchemaType", bound=BaseModel)
ReadSchemaType = TypeVar("ReadSchemaType", bound=BaseModel)

logger = logging.getLogger(__name__)


def _format_pydantic_errors(exc: PydanticValidationError) -> tuple[str, list[str]]:
    fields: list[str] = []
    messages: list[str] = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ())) or "body"
        if loc not in fields:
            fields.append(loc)
        messages.append(f"{loc}: {err.get('msg')}")
    return "; ".join(messages), fields


class EntityService(Generic[ModelType, CreateSchemaType, UpdateSchemaType, ReadSchemaType]):
    def __init__(
        self,
        repository: EntityRepository[ModelType],
        *,
        create_schema: Type[CreateSchemaType],
        update_schema: Type[UpdateSchemaType],
        read_schema: Type[ReadSchemaType],
    ):
        self.repository = repository
        self.spec = repository.spec
        self.create_schema = create_schema
        self.update_schema = update_schema
        self.read_schema = read_schema

    @property
    def resource_name(self) -> str:
        return self.spec.resource_name

    # ------------------------------------------------------------------
    # helpers
    # ------------------------------------------------------------------

    def _validate(self, schema: Type[BaseModel], payload: BaseModel | Mapping[str, Any]) -> BaseModel:
        """Coerce a payload to `schema`, raising the catalog ValidationError on failure."""
        if isinstance(payload, schema):
            return payload
        raw = payload.model_dump(exclude_unset=True) if isinstance(payload, BaseModel) else payload
        try:
            return schema.model_validate(raw)
        except PydanticValidationError as exc:
            message, fields = _format_pydantic_errors(exc)
            logger.info(
                "service.validation_failed",
                extra={"resource": self.resource_name, "fields": fields},
            )
            raise ValidationError(f"Invalid {self.resource_name} payload: {message}", fields=fields) from exc

    async def _ensure_code_available(self, code: str, exclude_id: int | None = None) -> None:
        if await self.repository.code_exists(code, exclude_id=exclude_id):
            logger.info(
                "service.code_conflict",
                extra={"resource": self.resource_name, "field": self.spec.code_field, "exclude_id": exclude_id},
            )
            raise AlreadyExistsError(self.resource_name, fields=[self.spec.code_field])

    def _to_read(self, entity: ModelType) -> ReadSchemaType:
        return self.read_schema.model_validate(entity)

    # ------------------------------------------------------------------
    # operations
    # ------------------------------------------------------------------

    async def list(self, query: PaginationQuery | None = None) -> Page[Any]:
        entities, meta = await self.repository.list(query)
        return Page[self.read_schema](data=[self._to_read(e) for e in entities], pagination=meta)

    async def get(self, entity_id: int) -> ReadSchemaType:
        entity = await self.repository.get_by_id(entity_id)
        if entity is None:
            raise NotFoundError(self.resource_name)
        return self._to_read(entity)

    async def get_by_code(self, code: str) -> ReadSchemaType:
        entity = await self.repository.get_by_code(code)
        if entity is None:
            raise NotFoundError(self.resource_name)
        return self._to_read(entity)

    async def create(self, payload: CreateSchemaType | Mapping[str, Any], actor_id: int | None = None) -> ReadSchemaType:
        data = self._validate(self.create_schema, payload)
        await self._ensure_code_available(getattr(data, self.spec.code_field))
        entity = await self.repository.create(data, actor_id=actor_id)
        return self._to_read(entity)

    async def update(
        self,
        entity_id: int,
        payload: UpdateSchemaType | Mapping[str, Any],
        actor_id: int | None = None,
    ) -> ReadSchemaType:
        patch = self._validate(self.update_schema, payload)
        new_code = patch.model_dump(exclude_unset=True).get(self.spec.code_field)

        if new_code is not None:
            # report a missing record before a code conflict
            if await self.repository.get_by_id(entity_id) is None:
                raise NotFoundError(self.resource_name)
            await self._ensure_code_available(new_code, exclude_id=entity_id)

        entity = await self.repository.update(entity_id, patch, actor_id=actor_id)
        if entity is None:
            raise NotFoundError(self.resource_name)
        return self._to_read(entity)

    async def delete(self, entity_id: int, actor_id: int | None = None) -> None:
        if not await self.repository.delete(entity_id, actor_id=actor_id):
            raise NotFoundError(self.resource_name)


__all__ = ["EntityService"]
