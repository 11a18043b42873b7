"""
Router factory: the six catalog routes for one entity kind.

| Verb + path          | Service call   | Status |
| -------------------- | -------------- | ------ |
| GET    /             | list           | 200    |
| POST   /             | create         | 201    |
| GET    /{id}         | get            | 200    |
| GET    /code/{code}  | get_by_code    | 200    |
| PUT    /{id}         | update         | 200    |
| DELETE /{id}         | delete         | 200    |
"""
from typing import Any, Callable, Type

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel

from ...schemas.envelope import ApiResponse, success_response
from ...schemas.pagination import Page, PaginationQuery
from ...services.entity_service import EntityService


def pagination_query(
    page: str | None = Query(default=None),
    limit: str | None = Query(default=None),
    search: str | None = Query(default=None),
    sort_by: str | None = Query(default=None),
    sort_order: str | None = Query(default=None),
) -> PaginationQuery:
    # page/limit arrive as raw strings; PaginationQuery falls back to defaults
    # for anything that isn't an integer instead of rejecting the request
    return PaginationQuery(page=page, limit=limit, search=search, sort_by=sort_by, sort_order=sort_order)


def build_entity_router(
    *,
    prefix: str,
    resource_name: str,
    get_service: Callable[..., EntityService],
    create_schema: Type[BaseModel],
    update_schema: Type[BaseModel],
    read_schema: Type[BaseModel],
) -> APIRouter:
    router = APIRouter(prefix=prefix, tags=[resource_name])

    @router.get("", response_model=ApiResponse[Page[read_schema]])
    async def list_entities(
        query: PaginationQuery = Depends(pagination_query),
        service: EntityService = Depends(get_service),
    ) -> Any:
        return success_response(await service.list(query))

    @router.post("", response_model=ApiResponse[read_schema], status_code=status.HTTP_201_CREATED)
    async def create_entity(
        payload: create_schema,  # type: ignore[valid-type]
        service: EntityService = Depends(get_service),
    ) -> Any:
        entity = await service.create(payload)
        return success_response(entity, f"{resource_name} created successfully")

    @router.get("/code/{code}", response_model=ApiResponse[read_schema])
    async def get_entity_by_code(code: str, service: EntityService = Depends(get_service)) -> Any:
        return success_response(await service.get_by_code(code))

    @router.get("/{entity_id}", response_model=ApiResponse[read_schema])
    async def get_entity(entity_id: int, service: EntityService = Depends(get_service)) -> Any:
        return success_response(await service.get(entity_id))

    @router.put("/{entity_id}", response_model=ApiResponse[read_schema])
    async def update_entity(
        entity_id: int,
        payload: update_schema,  # type: ignore[valid-type]
        service: EntityService = Depends(get_service),
    ) -> Any:
        entity = await service.update(entity_id, payload)
        return success_response(entity, f"{resource_name} updated successfully")

    @router.delete("/{entity_id}", response_model=ApiResponse[None])
    async def delete_entity(entity_id: int, service: EntityService = Depends(get_service)) -> Any:
        await service.delete(entity_id)
        return success_response(None, f"{resource_name} deleted successfully")

    return router
