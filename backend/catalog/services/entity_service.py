"""
Generic CRUD service over an (entity, transfer object) pair.

Every operation returns a ResponseEnvelope and never raises:
- expected failures (validation, not found) become their own messages
- anything else is rolled back, logged and reported as one fault message
"""

import logging
from typing import Any, Generic, List, TypeVar

from pydantic import ValidationError

from catalog.errors import (
    BODY_REQUIRED,
    NAME_REQUIRED,
    NOT_FOUND,
    NOT_FOUND_TO_DELETE,
    NOT_FOUND_TO_UPDATE,
    CatalogError,
    InvalidPayloadError,
    NotFoundError,
    describe_fault,
    validation_messages,
)
from catalog.mapping import ItemMapper
from catalog.models.base import CatalogItem
from catalog.repository import Repository
from catalog.schemas.envelope import ResponseEnvelope
from catalog.schemas.items import ItemDto

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=CatalogItem)
DtoT = TypeVar("DtoT", bound=ItemDto)


class EntityService(Generic[ModelT, DtoT]):
    def __init__(self, repository: Repository[ModelT], mapper: ItemMapper[ModelT, DtoT]):
        self.repository = repository
        self.mapper = mapper

    @property
    def dto_type(self):
        return self.mapper.dto_type

    @property
    def resource_name(self) -> str:
        return self.repository.model_type.__name__

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def validate(self, dto: DtoT, creating: bool = False) -> List[str]:
        """Business rules for create/update. Returns one message per failing rule."""
        errors = []
        if not dto.name or not dto.name.strip():
            errors.append(NAME_REQUIRED)
        return errors

    def _validated(self, payload: Any, creating: bool = False) -> DtoT:
        if payload is None:
            raise InvalidPayloadError(BODY_REQUIRED)
        if isinstance(payload, self.dto_type):
            dto = payload
        else:
            try:
                dto = self.dto_type.model_validate(payload)
            except ValidationError as e:
                raise InvalidPayloadError(*validation_messages(e))

        errors = self.validate(dto, creating=creating)
        if errors:
            raise InvalidPayloadError(*errors)
        return dto

    def _fault(self, operation: str, exc: Exception) -> ResponseEnvelope:
        logger.exception(f"{self.resource_name} {operation} failed")
        try:
            self.repository.rollback()
        except Exception:
            logger.exception(f"{self.resource_name} rollback after failed {operation} also failed")
        return ResponseEnvelope.fail(describe_fault(exc))

    # ------------------------------------------------------------------
    # Reads (anonymous)
    # ------------------------------------------------------------------

    def list_items(self) -> ResponseEnvelope[List[DtoT]]:
        try:
            models = self.repository.list_all()
            return ResponseEnvelope.ok([self.mapper.to_dto(model) for model in models])
        except Exception as e:
            return self._fault("list", e)

    def get_by_id(self, item_id: int) -> ResponseEnvelope[DtoT]:
        try:
            model = self.repository.get_by_id(item_id)
            if model is None:
                raise NotFoundError(NOT_FOUND)
            return ResponseEnvelope.ok(self.mapper.to_dto(model))
        except CatalogError as e:
            return ResponseEnvelope.fail(*e.messages)
        except Exception as e:
            return self._fault("get", e)

    def get_by_name(self, name: str) -> ResponseEnvelope[DtoT]:
        try:
            model = self.repository.get_by_name(name)
            if model is None:
                raise NotFoundError(NOT_FOUND)
            return ResponseEnvelope.ok(self.mapper.to_dto(model))
        except CatalogError as e:
            return ResponseEnvelope.fail(*e.messages)
        except Exception as e:
            return self._fault("get by name", e)

    # ------------------------------------------------------------------
    # Mutations (admin). One commit per call.
    # ------------------------------------------------------------------

    def create(self, payload: Any) -> ResponseEnvelope[DtoT]:
        try:
            dto = self._validated(payload, creating=True)
            model = self.mapper.to_entity(dto, new=True)
            self.repository.create(model)
            self.repository.save_changes()
            logger.info(f"{self.resource_name} {model.id} created")
            return ResponseEnvelope.ok(self.mapper.to_dto(model))
        except CatalogError as e:
            return ResponseEnvelope.fail(*e.messages)
        except Exception as e:
            return self._fault("create", e)

    def update(self, payload: Any) -> ResponseEnvelope[DtoT]:
        try:
            dto = self._validated(payload)
            if not dto.id or self.repository.get_by_id(dto.id) is None:
                raise NotFoundError(NOT_FOUND_TO_UPDATE)
            model = self.repository.update(self.mapper.to_entity(dto))
            self.repository.save_changes()
            logger.info(f"{self.resource_name} {model.id} updated")
            return ResponseEnvelope.ok(self.mapper.to_dto(model))
        except CatalogError as e:
            return ResponseEnvelope.fail(*e.messages)
        except Exception as e:
            return self._fault("update", e)

    def delete(self, item_id: int) -> ResponseEnvelope[None]:
        try:
            model = self.repository.get_by_id(item_id)
            if model is None:
                raise NotFoundError(NOT_FOUND_TO_DELETE)
            self.repository.delete(model)
            self.repository.save_changes()
            logger.info(f"{self.resource_name} {item_id} deleted")
            return ResponseEnvelope.ok()
        except CatalogError as e:
            return ResponseEnvelope.fail(*e.messages)
        except Exception as e:
            return self._fault("delete", e)
