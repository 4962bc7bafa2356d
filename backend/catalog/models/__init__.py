from catalog.models.base import CatalogItem
from catalog.models.brand import Brand
from catalog.models.brand_category import BrandCategory
from catalog.models.category import Category

__all__ = [
    "CatalogItem",
    "Brand",
    "BrandCategory",
    "Category",
]
