import logging
import os

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from catalog.database import init_db
from catalog.errors import validation_messages
from catalog.routes import brands, categories
from catalog.schemas.envelope import ResponseEnvelope

logger = logging.getLogger(__name__)

app = FastAPI(title="Catalog Item API")

_cors_origins = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]
_extra = os.getenv("CORS_ORIGINS", "")
if _extra:
    _cors_origins.extend(o.strip() for o in _extra.split(",") if o.strip())

app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(brands.router, prefix="/api", tags=["brands"])
app.include_router(categories.router, prefix="/api", tags=["categories"])


@app.exception_handler(RequestValidationError)
async def envelope_for_invalid_request(request: Request, exc: RequestValidationError):
    """Malformed path ids or bodies still answer with a failed envelope."""
    messages = validation_messages(exc)
    logger.info(f"Rejected {request.method} {request.url.path}: {messages}")
    envelope = ResponseEnvelope.fail(*messages)
    return JSONResponse(
        status_code=422,
        content=envelope.model_dump(mode="json", by_alias=True),
    )


@app.on_event("startup")
def on_startup():
    init_db()

    route_count = 0
    for r in app.routes:
        path = getattr(r, "path", None)
        if path:
            methods = getattr(r, "methods", None)
            methods_str = ", ".join(sorted(methods)) if methods else "N/A"
            logger.debug(f"{methods_str:20} {path}")
            route_count += 1
    logger.info(f"Catalog item API ready: {route_count} routes")


@app.get("/api/health")
def health_check():
    return {"app_name": "Catalog Item API", "status": "healthy"}
