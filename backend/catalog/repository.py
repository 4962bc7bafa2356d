"""
Generic persistence boundary.

One Repository per entity type, bound to the request's Session. Mutating
calls only stage changes; nothing is durable until save_changes().
"""

from typing import Generic, List, Optional, Type, TypeVar

from sqlmodel import Session, select

from catalog.errors import NOT_FOUND_TO_UPDATE, NotFoundError
from catalog.models.base import CatalogItem

ModelT = TypeVar("ModelT", bound=CatalogItem)


class Repository(Generic[ModelT]):
    def __init__(self, session: Session, model_type: Type[ModelT]):
        self.session = session
        self.model_type = model_type

    def list_all(self) -> List[ModelT]:
        return list(self.session.exec(select(self.model_type).order_by(self.model_type.id)).all())

    def get_by_id(self, item_id: int) -> Optional[ModelT]:
        return self.session.get(self.model_type, item_id)

    def get_by_name(self, name: str) -> Optional[ModelT]:
        return self.session.exec(select(self.model_type).where(self.model_type.name == name)).first()

    def create(self, model: ModelT) -> ModelT:
        self.session.add(model)
        return model

    def update(self, model: ModelT) -> ModelT:
        """Copy column values of a detached model onto the stored row with the same id."""
        existing = self.get_by_id(model.id)
        if existing is None:
            raise NotFoundError(NOT_FOUND_TO_UPDATE)

        for field in self.model_type.model_fields:
            if field == "id":
                continue
            setattr(existing, field, getattr(model, field))

        self.session.add(existing)
        return existing

    def delete(self, model: ModelT) -> None:
        self.session.delete(model)

    def save_changes(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()
