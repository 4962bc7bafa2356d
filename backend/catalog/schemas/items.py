"""
Transfer objects for catalog items.

Field names are snake_case in Python and camelCase on the wire. Business
rules (required name, known category ids) are checked by the entity
services, not here, so a web form can round-trip an invalid submission.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ItemDto(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: int = 0  # 0 = not yet persisted
    name: str = ""
    description: Optional[str] = None


class CategoryDto(ItemDto):
    pass


class BrandCategoryDto(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    brand_id: int = 0
    category_id: int


class BrandDto(ItemDto):
    # Edit lists, only meaningful on the way in
    category_id_add: List[int] = Field(default_factory=list)
    category_id_remove: List[int] = Field(default_factory=list)

    brand_categories: List[BrandCategoryDto] = Field(default_factory=list)

    @property
    def category_ids(self) -> List[int]:
        return [link.category_id for link in self.brand_categories]
