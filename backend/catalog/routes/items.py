"""
Generic item routes.

build_item_router() produces the same CRUD surface for any resource:

    GET    /{resource}              list            (anonymous)
    GET    /{resource}/{id}         get by id       (anonymous)
    GET    /{resource}/name/{name}  get by name     (anonymous)
    PUT    /{resource}              create          (admin)
    POST   /{resource}              update          (admin)
    DELETE /{resource}              delete, id in body (admin)

Every route answers 200 with a ResponseEnvelope body; failures are reported
inside the envelope.
"""

from typing import Any, Callable, List, Type

from fastapi import APIRouter, Body, Depends

from catalog.auth import AuthUser, require_admin
from catalog.schemas.envelope import ResponseEnvelope
from catalog.schemas.items import ItemDto
from catalog.services.entity_service import EntityService


def build_item_router(
    resource: str,
    dto_type: Type[ItemDto],
    get_service: Callable[..., EntityService],
) -> APIRouter:
    router = APIRouter()
    path = f"/{resource}"

    @router.get(path, response_model=ResponseEnvelope[List[dto_type]])
    def list_items(service: EntityService = Depends(get_service)):
        return service.list_items()

    @router.get(path + "/{item_id}", response_model=ResponseEnvelope[dto_type])
    def get_item(item_id: int, service: EntityService = Depends(get_service)):
        return service.get_by_id(item_id)

    @router.get(path + "/name/{name}", response_model=ResponseEnvelope[dto_type])
    def get_item_by_name(name: str, service: EntityService = Depends(get_service)):
        return service.get_by_name(name)

    @router.put(path, response_model=ResponseEnvelope[dto_type])
    def create_item(
        payload: Any = Body(None),
        user: AuthUser = Depends(require_admin),
        service: EntityService = Depends(get_service),
    ):
        return service.create(payload)

    @router.post(path, response_model=ResponseEnvelope[dto_type])
    def update_item(
        payload: Any = Body(None),
        user: AuthUser = Depends(require_admin),
        service: EntityService = Depends(get_service),
    ):
        return service.update(payload)

    @router.delete(path, response_model=ResponseEnvelope[None])
    def delete_item(
        item_id: int = Body(...),
        user: AuthUser = Depends(require_admin),
        service: EntityService = Depends(get_service),
    ):
        return service.delete(item_id)

    return router
