import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from api import info_router, orders_router, webhooks_router
from config import settings
from shopify import create_shopify_client

logger = logging.getLogger("order-splitter")

app = FastAPI(title="Order Splitter API")

if settings.allowed_origins == ["*"]:
    allow_origins = ["*"]
else:
    allow_origins = settings.allowed_origins

app.add_middleware(
    CORSMiddleware,
    allow_origins=allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(info_router)
app.include_router(orders_router)
app.include_router(webhooks_router)


@app.exception_handler(StarletteHTTPException)
async def _error_body(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        {"error": exc.detail}, status_code=exc.status_code, headers=exc.headers
    )


@app.on_event("startup")
async def _on_startup() -> None:
    app.state.shopify_client = create_shopify_client(settings)
    if allow_origins == ["*"]:
        logger.warning(
            "CORS is set to allow all origins with credentials; set ALLOWED_ORIGINS to explicit values."
        )


@app.on_event("shutdown")
async def _on_shutdown() -> None:
    await app.state.shopify_client.aclose()
