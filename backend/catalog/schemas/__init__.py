from catalog.schemas.envelope import ResponseEnvelope
from catalog.schemas.items import BrandCategoryDto, BrandDto, CategoryDto, ItemDto

__all__ = [
    "ResponseEnvelope",
    "ItemDto",
    "BrandDto",
    "BrandCategoryDto",
    "CategoryDto",
]
