import logging
from contextlib import asynccontextmanager

import asyncpg
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from auth import router as auth_router
from cart import router as cart_router
from categories import router as categories_router
from core import db, settings
from core.logging_setup import configure_logging
from orders import router as orders_router
from products import router as products_router
from users import router as users_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    configure_logging()
    db.reset_stats()
    yield


app = FastAPI(lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_request(request: Request, call_next):
    logger.info(
        "request method=%s path=%s query=%s origin=%s",
        request.method,
        request.url.path,
        dict(request.query_params),
        request.headers.get("origin"),
    )
    return await call_next(request)


@app.exception_handler(asyncpg.UniqueViolationError)
async def unique_violation(_: Request, exc: asyncpg.UniqueViolationError) -> JSONResponse:
    logger.info("unique_violation constraint=%s", exc.constraint_name)
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={"detail": "Resource already exists."},
    )


@app.exception_handler(asyncpg.ForeignKeyViolationError)
async def foreign_key_violation(_: Request, exc: asyncpg.ForeignKeyViolationError) -> JSONResponse:
    logger.info("foreign_key_violation constraint=%s", exc.constraint_name)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Referenced resource is missing or still in use."},
    )


app.include_router(auth_router.router, tags=["auth"])
app.include_router(users_router.router, tags=["users"])
app.include_router(products_router.router, tags=["products"])
app.include_router(categories_router.router, tags=["categories"])
app.include_router(cart_router.router, tags=["cart"])
app.include_router(orders_router.router, tags=["orders"])


@app.get("/")
def index() -> dict:
    return {
        "users": {
            "users": "/users",
            "user": "/users/{id}",
            "register": "/users/register",
            "login": "/users/login",
            "me": "/users/me",
        },
        "products": {
            "products": "/products?search={query}&category={name}",
            "product": "/products/{id}",
        },
        "categories": "/categories",
        "cart": {
            "cart": "/cart",
            "line": "/cart/line/{id}",
        },
        "orders": {
            "orders": "/orders",
            "order": "/orders/{id}",
        },
    }


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}
