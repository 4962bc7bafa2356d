"""
Brand API Routes
Generic item CRUD plus category association management.
"""

from typing import Any

from fastapi import Body, Depends
from sqlmodel import Session

from catalog.auth import AuthUser, require_admin
from catalog.database import get_session
from catalog.routes.items import build_item_router
from catalog.schemas.envelope import ResponseEnvelope
from catalog.schemas.items import BrandDto
from catalog.services.association_service import BrandCategoryService
from catalog.services.catalog_services import BrandService


def get_brand_service(session: Session = Depends(get_session)) -> BrandService:
    return BrandService(session)


def get_brand_category_service(session: Session = Depends(get_session)) -> BrandCategoryService:
    return BrandCategoryService(session)


router = build_item_router("brands", BrandDto, get_brand_service)


@router.post("/brands/addcat/{brand_id}", response_model=ResponseEnvelope[BrandDto])
def add_categories(
    brand_id: int,
    category_ids: Any = Body(None),
    user: AuthUser = Depends(require_admin),
    service: BrandCategoryService = Depends(get_brand_category_service),
):
    """Attach categories (JSON array of ids) to a brand"""
    return service.add_categories(brand_id, category_ids)


@router.post("/brands/remcat/{brand_id}", response_model=ResponseEnvelope[BrandDto])
def remove_categories(
    brand_id: int,
    category_ids: Any = Body(None),
    user: AuthUser = Depends(require_admin),
    service: BrandCategoryService = Depends(get_brand_category_service),
):
    """Detach categories (JSON array of ids) from a brand"""
    return service.remove_categories(brand_id, category_ids)
