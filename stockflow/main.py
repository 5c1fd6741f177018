import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from stockflow.config import Settings, get_settings
from stockflow.core.errors import StockFlowError
from stockflow.core.logging import setup_logging
from stockflow.database import create_schema
from stockflow.routers import (
    alerts_router,
    companies_router,
    health_router,
    inventory_router,
    products_router,
)

setup_logging()
settings: Settings = get_settings()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    if settings.CREATE_SCHEMA_ON_STARTUP:
        create_schema()
    yield


app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)


@app.exception_handler(StockFlowError)
async def stockflow_error_handler(request: Request, exc: StockFlowError):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    fields = []
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part != "body"]
        field = ".".join(location)
        if field and field not in fields:
            fields.append(field)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": "Missing or invalid fields: {}".format(", ".join(fields) or "body"),
            "fields": jsonable_encoder(fields),
        },
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "An internal error occurred"},
    )


app.include_router(health_router)
app.include_router(companies_router, prefix=settings.API_PREFIX)
app.include_router(products_router, prefix=settings.API_PREFIX)
app.include_router(alerts_router, prefix=settings.API_PREFIX)
app.include_router(inventory_router, prefix=settings.API_PREFIX)


@app.get("/")
def root():
    return {"message": "StockFlow API is running!"}


__all__ = ["app", "root"]
