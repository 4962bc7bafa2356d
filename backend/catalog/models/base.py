from typing import Optional

from sqlmodel import Field, SQLModel


class CatalogItem(SQLModel):
    """Columns shared by every catalog table. id=None means not yet persisted."""

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(index=True, unique=True)
    description: Optional[str] = None
