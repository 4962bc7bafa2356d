"""
Browser-facing catalog pages.

Submissions are decoded into transfer objects and handed to the
controllers. The caller's bearer token is passed through to every item
API call. Success redirects (303) to the details page; failure answers
400 with every error message and the submitted item for redisplay.
"""

from typing import Callable, Generator, List, Optional, Type

from fastapi import APIRouter, Body, Depends, FastAPI, HTTPException
from fastapi.responses import JSONResponse, RedirectResponse
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from catalog.schemas.items import BrandDto, CategoryDto, ItemDto
from catalog.web.controllers import BrandController, CategoryController, ItemController, WorkflowOutcome
from catalog.web.item_client import RemoteItemClient

bearer = HTTPBearer(auto_error=False)


def get_item_client() -> Generator[RemoteItemClient, None, None]:
    """One client per request, its HTTP session released when the request ends"""
    client = RemoteItemClient()
    try:
        yield client
    finally:
        client.close()


def get_access_token(credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer)) -> Optional[str]:
    return credentials.credentials if credentials else None


def get_brand_controller(client: RemoteItemClient = Depends(get_item_client)) -> BrandController:
    return BrandController(client)


def get_category_controller(client: RemoteItemClient = Depends(get_item_client)) -> CategoryController:
    return CategoryController(client)


def render_outcome(outcome: WorkflowOutcome):
    if outcome.success:
        return RedirectResponse(outcome.redirect_to, status_code=303)

    item = outcome.item.model_dump(mode="json", by_alias=True) if outcome.item is not None else None
    return JSONResponse(status_code=400, content={"errorMessages": outcome.error_messages, "item": item})


def build_page_router(page: str, dto_type: Type[ItemDto], get_controller: Callable[..., ItemController]) -> APIRouter:
    router = APIRouter()

    @router.get(f"/{page}", response_model=List[dto_type])
    def index(
        controller: ItemController = Depends(get_controller),
        access_token: Optional[str] = Depends(get_access_token),
    ):
        return controller.index(access_token)

    @router.get(f"/{page}/details/{{item_id}}", response_model=dto_type)
    def details(
        item_id: int,
        controller: ItemController = Depends(get_controller),
        access_token: Optional[str] = Depends(get_access_token),
    ):
        item = controller.details(item_id, access_token)
        if item is None:
            raise HTTPException(status_code=404, detail=f"{page.capitalize()} not found")
        return item

    @router.post(f"/{page}/create")
    def create(
        dto: dto_type,
        controller: ItemController = Depends(get_controller),
        access_token: Optional[str] = Depends(get_access_token),
    ):
        return render_outcome(controller.create(dto, access_token))

    @router.post(f"/{page}/edit")
    def edit(
        dto: dto_type,
        controller: ItemController = Depends(get_controller),
        access_token: Optional[str] = Depends(get_access_token),
    ):
        return render_outcome(controller.edit(dto, access_token))

    @router.post(f"/{page}/delete")
    def delete(
        item_id: int = Body(..., embed=True, alias="id"),
        controller: ItemController = Depends(get_controller),
        access_token: Optional[str] = Depends(get_access_token),
    ):
        return render_outcome(controller.delete(item_id, access_token))

    return router


web_app = FastAPI(title="Catalog Web")

web_app.include_router(build_page_router("brand", BrandDto, get_brand_controller), tags=["brand"])
web_app.include_router(build_page_router("category", CategoryDto, get_category_controller), tags=["category"])
