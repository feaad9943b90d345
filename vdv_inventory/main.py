### vdv_inventory/main.py
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.openapi.utils import get_openapi
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from vdv_inventory.api import (
    dashboard_routes,
    machine_routes,
    maintenance_routes,
    public_routes,
    store_routes,
    tag_routes,
)
from vdv_inventory.auth import routes as auth_routes
from vdv_inventory.core.config import settings
from vdv_inventory.core.errors import InventoryError
from vdv_inventory.db import create_db_and_tables

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
log = logging.getLogger(__name__)

SERVER_ERROR_MESSAGE = "Server error"


class ServerErrorMiddleware(BaseHTTPMiddleware):
    """Last line of defence: unexpected exceptions become a generic 500."""

    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)
        except Exception:
            log.exception("unhandled error on %s %s", request.method, request.url.path)
            return JSONResponse(status_code=500, content={"error": SERVER_ERROR_MESSAGE})


def format_validation_errors(errors) -> str:
    messages = []
    for err in errors:
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        field = ".".join(loc)
        messages.append(f"{field}: {err.get('msg')}" if field else err.get("msg", "Invalid request"))
    return "; ".join(messages) or "Invalid request"


# Create the FastAPI app
app = FastAPI(title="VDV Inventory API", version="1.0.0")

app.add_middleware(ServerErrorMiddleware)

# ✅ Allow the dashboard frontend (CORS)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(InventoryError)
async def inventory_error_handler(request: Request, exc: InventoryError):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"error": format_validation_errors(exc.errors())})


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})


# ✅ Swagger Bearer token support for "Authorize" button
def custom_openapi():
    if app.openapi_schema:
        return app.openapi_schema
    openapi_schema = get_openapi(
        title="VDV Inventory API",
        version="1.0.0",
        description="API for managing slot machines, venues, maintenance logs and QR asset tags.",
        routes=app.routes,
    )
    openapi_schema.setdefault("components", {})["securitySchemes"] = {
        "BearerAuth": {
            "type": "http",
            "scheme": "bearer",
            "bearerFormat": "JWT"
        }
    }
    for path in openapi_schema["paths"].values():
        for operation in path.values():
            operation["security"] = [{"BearerAuth": []}]
    app.openapi_schema = openapi_schema
    return app.openapi_schema


app.openapi = custom_openapi


@app.on_event("startup")
async def on_startup():
    log.info("Starting DB setup...")
    await create_db_and_tables()
    log.info("DB schema ready.")
    if not settings.admin_password:
        log.warning("ADMIN_PASSWORD is not set; the dashboard cannot be logged into")


# ✅ Public routes first so /api/machines/by-token/{token} is not shadowed
app.include_router(public_routes.router)
app.include_router(auth_routes.router)
app.include_router(machine_routes.router)
app.include_router(store_routes.router)
app.include_router(maintenance_routes.router)
app.include_router(tag_routes.router)
app.include_router(dashboard_routes.router)
