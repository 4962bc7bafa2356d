from typing import TYPE_CHECKING, List

from sqlmodel import Relationship

from catalog.models.base import CatalogItem

if TYPE_CHECKING:
    from catalog.models.brand_category import BrandCategory


class Brand(CatalogItem, table=True):
    # Relationships
    links: List["BrandCategory"] = Relationship(
        back_populates="brand", sa_relationship_kwargs={"cascade": "all, delete"}
    )
