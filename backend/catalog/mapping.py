"""
Entity <-> transfer object mapping.

ItemMapper copies the fields the two shapes share by name. Subclasses add
whatever a relational entity needs on top (see BrandMapper).
"""

from typing import Dict, Generic, Type, TypeVar

from catalog.models.base import CatalogItem
from catalog.models.brand import Brand
from catalog.models.brand_category import BrandCategory
from catalog.schemas.items import BrandCategoryDto, BrandDto, ItemDto

ModelT = TypeVar("ModelT", bound=CatalogItem)
DtoT = TypeVar("DtoT", bound=ItemDto)


class ItemMapper(Generic[ModelT, DtoT]):
    def __init__(self, model_type: Type[ModelT], dto_type: Type[DtoT]):
        self.model_type = model_type
        self.dto_type = dto_type

    def to_entity(self, dto: DtoT, new: bool = False) -> ModelT:
        data = dto.model_dump(include=set(self.model_type.model_fields))
        # 0 on the wire means "not persisted yet"
        data["id"] = None if new else (data.get("id") or None)
        return self.model_type(**data)

    def to_dto(self, model: ModelT) -> DtoT:
        data = {name: getattr(model, name) for name in self.dto_type.model_fields if hasattr(model, name)}
        return self.dto_type(**data)


class BrandMapper(ItemMapper[Brand, BrandDto]):
    def __init__(self):
        super().__init__(Brand, BrandDto)

    def to_entity(self, dto: BrandDto, new: bool = False) -> Brand:
        brand = super().to_entity(dto, new=new)
        if new:
            # Dedupe by category id, the link table key is (brand_id, category_id)
            links: Dict[int, BrandCategory] = {}
            for link in dto.brand_categories:
                links.setdefault(link.category_id, BrandCategory(category_id=link.category_id))
            brand.links = list(links.values())
        return brand

    def to_dto(self, model: Brand) -> BrandDto:
        dto = super().to_dto(model)
        dto.brand_categories = [
            BrandCategoryDto(brand_id=link.brand_id, category_id=link.category_id)
            for link in sorted(model.links, key=lambda link: link.category_id)
        ]
        return dto
