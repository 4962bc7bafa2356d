"""
Brand <-> Category link table.

Rows are only written by the dedicated add/remove association operations,
or together with a brand in the same commit when it is first created.
"""

from typing import TYPE_CHECKING, Optional

from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:
    from catalog.models.brand import Brand
    from catalog.models.category import Category


class BrandCategory(SQLModel, table=True):
    __tablename__ = "brand_category"

    brand_id: Optional[int] = Field(default=None, foreign_key="brand.id", primary_key=True)
    category_id: Optional[int] = Field(default=None, foreign_key="category.id", primary_key=True)

    # Relationships
    brand: "Brand" = Relationship(back_populates="links")
    category: "Category" = Relationship(back_populates="links")
