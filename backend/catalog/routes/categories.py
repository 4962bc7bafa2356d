from fastapi import Depends
from sqlmodel import Session

from catalog.database import get_session
from catalog.routes.items import build_item_router
from catalog.schemas.items import CategoryDto
from catalog.services.catalog_services import CategoryService


def get_category_service(session: Session = Depends(get_session)) -> CategoryService:
    return CategoryService(session)


router = build_item_router("categories", CategoryDto, get_category_service)
