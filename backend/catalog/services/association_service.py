"""
Brand <-> Category association management.

Links are attached and detached here, outside the generic CRUD path.
Each call is validated in full before anything is staged, then committed once.
"""

import logging
from typing import Any, List, Tuple

from pydantic import TypeAdapter, ValidationError
from sqlmodel import Session, select

from catalog.errors import (
    NOT_FOUND,
    CatalogError,
    InvalidPayloadError,
    NotFoundError,
    describe_fault,
    validation_messages,
)
from catalog.mapping import BrandMapper
from catalog.models.brand import Brand
from catalog.models.brand_category import BrandCategory
from catalog.models.category import Category
from catalog.repository import Repository
from catalog.schemas.envelope import ResponseEnvelope
from catalog.schemas.items import BrandDto

logger = logging.getLogger(__name__)

_id_list = TypeAdapter(List[int])


class BrandCategoryService:
    def __init__(self, session: Session):
        self.session = session
        self.brands = Repository(session, Brand)
        self.categories = Repository(session, Category)
        self.mapper = BrandMapper()

    def _load(self, brand_id: int, payload: Any) -> Tuple[Brand, List[int]]:
        try:
            category_ids = list(dict.fromkeys(_id_list.validate_python(payload if payload is not None else [])))
        except ValidationError as e:
            raise InvalidPayloadError(*validation_messages(e))

        brand = self.brands.get_by_id(brand_id)
        if brand is None:
            raise NotFoundError(NOT_FOUND)
        return brand, category_ids

    def _linked_ids(self, brand_id: int) -> List[int]:
        return list(self.session.exec(select(BrandCategory.category_id).where(BrandCategory.brand_id == brand_id)).all())

    def add_categories(self, brand_id: int, payload: Any) -> ResponseEnvelope[BrandDto]:
        try:
            brand, category_ids = self._load(brand_id, payload)

            missing = [cid for cid in category_ids if self.categories.get_by_id(cid) is None]
            if missing:
                raise InvalidPayloadError(*[f"Category {cid} not found." for cid in missing])

            linked = set(self._linked_ids(brand_id))
            added = [cid for cid in category_ids if cid not in linked]
            for category_id in added:
                self.session.add(BrandCategory(brand_id=brand_id, category_id=category_id))

            self.brands.save_changes()
            self.session.refresh(brand)
            logger.info(f"Brand {brand_id}: attached categories {added}")
            return ResponseEnvelope.ok(self.mapper.to_dto(brand))
        except CatalogError as e:
            return ResponseEnvelope.fail(*e.messages)
        except Exception as e:
            return self._fault("add categories", e)

    def remove_categories(self, brand_id: int, payload: Any) -> ResponseEnvelope[BrandDto]:
        try:
            brand, category_ids = self._load(brand_id, payload)

            links = self.session.exec(
                select(BrandCategory).where(
                    BrandCategory.brand_id == brand_id, BrandCategory.category_id.in_(category_ids)
                )
            ).all()
            removed = [link.category_id for link in links]
            for link in links:
                self.session.delete(link)

            self.brands.save_changes()
            self.session.refresh(brand)
            logger.info(f"Brand {brand_id}: detached categories {removed}")
            return ResponseEnvelope.ok(self.mapper.to_dto(brand))
        except CatalogError as e:
            return ResponseEnvelope.fail(*e.messages)
        except Exception as e:
            return self._fault("remove categories", e)

    def _fault(self, operation: str, exc: Exception) -> ResponseEnvelope:
        logger.exception(f"Brand {operation} failed")
        try:
            self.session.rollback()
        except Exception:
            logger.exception(f"Brand rollback after failed {operation} also failed")
        return ResponseEnvelope.fail(describe_fault(exc))
