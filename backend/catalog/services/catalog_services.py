"""Concrete entity services, one per catalog resource."""

from typing import List

from sqlmodel import Session

from catalog.mapping import BrandMapper, ItemMapper
from catalog.models.brand import Brand
from catalog.models.category import Category
from catalog.repository import Repository
from catalog.schemas.items import BrandDto, CategoryDto
from catalog.services.entity_service import EntityService


class CategoryService(EntityService[Category, CategoryDto]):
    def __init__(self, session: Session):
        super().__init__(Repository(session, Category), ItemMapper(Category, CategoryDto))


class BrandService(EntityService[Brand, BrandDto]):
    def __init__(self, session: Session):
        super().__init__(Repository(session, Brand), BrandMapper())
        self.categories = Repository(session, Category)

    def validate(self, dto: BrandDto, creating: bool = False) -> List[str]:
        errors = super().validate(dto, creating=creating)
        if not creating:
            return errors
        # Nested links are only persisted on create; update ignores them
        for category_id in dict.fromkeys(dto.category_ids):
            if self.categories.get_by_id(category_id) is None:
                errors.append(f"Category {category_id} not found.")
        return errors
