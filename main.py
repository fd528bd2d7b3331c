import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from restor import config
from restor.errors import CatalogError, ErrorKind, invalid_request
from restor.filters import filter_dishes, unified_search
from restor.relations import menu_for, restaurants_serving
from restor.schemas import DishFilter, SearchScope
from restor.store import CatalogStore, get_store

config.configure_logging()
logger = logging.getLogger("restor.api")


class UTF8JSONResponse(JSONResponse):
    media_type = "application/json; charset=utf-8"


@asynccontextmanager
async def lifespan(app: FastAPI):
    store = get_store()
    logger.info("🚀 %s starting on port %s (%s)", config.APP_NAME, config.PORT, config.ENV)
    if store.loaded:
        counts = store.catalog().counts()
        logger.info(
            "📊 Data source: %s (%d restaurants, %d dishes)",
            store.source, counts["restaurants"], counts["dishes"],
        )
    else:
        logger.warning("📄 Data source %s unavailable, serving errors until it recovers", store.source)
    yield


app = FastAPI(
    title=config.APP_NAME,
    version=config.API_VERSION,
    default_response_class=UTF8JSONResponse,
    lifespan=lifespan,
)
app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])


@app.middleware("http")
async def log_requests(request: Request, call_next):
    logger.info("%s %s", request.method, request.url.path)
    return await call_next(request)


# =====================================================
# Error mapping
# =====================================================
@app.exception_handler(CatalogError)
async def catalog_error_handler(request: Request, exc: CatalogError):
    if exc.kind == ErrorKind.NOT_FOUND:
        logger.info("⚠️  %s: %s", exc.message, request.url.path)
    else:
        logger.error("❌ %s %s: %s", request.method, request.url.path, exc.message)
    return UTF8JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    messages = "; ".join(
        f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
    )
    return UTF8JSONResponse(
        status_code=400,
        content={"error": messages, "kind": ErrorKind.INVALID_REQUEST.value},
    )


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code in (404, 405):
        logger.info("⚠️  404 Not Found: %s %s", request.method, request.url.path)
        return UTF8JSONResponse(
            status_code=404,
            content={
                "error": "Endpoint not found",
                "method": request.method,
                "path": request.url.path,
                "hint": "Check /health endpoint for available API routes",
            },
        )
    return UTF8JSONResponse(status_code=exc.status_code, content={"error": exc.detail})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("❌ Server error on %s %s", request.method, request.url.path)
    return UTF8JSONResponse(
        status_code=500,
        content={"error": "Internal server error", "message": str(exc)},
    )


# =====================================================
# Health
# =====================================================
@app.get("/health")
def health(store: CatalogStore = Depends(get_store)):
    try:
        return store.health()
    except CatalogError as e:
        return UTF8JSONResponse(
            status_code=500,
            content={
                "status": "ERROR",
                "timestamp": datetime.now(timezone.utc).isoformat(),
                "database": {"status": "disconnected", "error": e.message},
            },
        )


# =====================================================
# Restaurants
# =====================================================
@app.get("/api/restaurants")
def list_restaurants(store: CatalogStore = Depends(get_store)):
    restaurants = store.catalog().list_restaurants()
    logger.debug("✅ Retrieved %d restaurants", len(restaurants))
    return restaurants


@app.get("/api/restaurants/{restaurant_id}")
def get_restaurant(restaurant_id: str, store: CatalogStore = Depends(get_store)):
    return store.catalog().get_restaurant(restaurant_id)


@app.get("/api/restaurants/{restaurant_id}/menu")
def get_menu(restaurant_id: str, store: CatalogStore = Depends(get_store)):
    menu = menu_for(store.catalog(), restaurant_id)
    logger.debug("✅ Retrieved %d dishes for restaurant %s", len(menu), restaurant_id)
    return menu


# =====================================================
# Dishes
# =====================================================
@app.get("/api/dishes")
def list_dishes(
    search: str | None = None,
    category: str | None = None,
    min_price: str | None = None,
    max_price: str | None = None,
    store: CatalogStore = Depends(get_store),
):
    try:
        predicates = DishFilter(
            search=search,
            category=category,
            min_price=min_price,
            max_price=max_price,
        )
    except ValidationError as e:
        raise invalid_request(
            "; ".join(f"{err['loc'][0]}: {err['msg']}" for err in e.errors())
        )
    if predicates.search:
        logger.debug("🔍 Searching dishes for: %r", predicates.search)
    dishes = filter_dishes(store.catalog().dishes, predicates)
    logger.debug("✅ Found %d dishes", len(dishes))
    return dishes


@app.get("/api/dishes/{dish_id}")
def get_dish(dish_id: str, store: CatalogStore = Depends(get_store)):
    return store.catalog().get_dish(dish_id)


@app.get("/api/dishes/{dish_id}/restaurants")
def get_dish_restaurants(dish_id: str, store: CatalogStore = Depends(get_store)):
    return restaurants_serving(store.catalog(), dish_id)


# =====================================================
# Unified search
# =====================================================
@app.get("/api/search")
def search(
    query: str | None = None,
    # closed set: an unknown scope is a 400, never an empty {}
    type: SearchScope = SearchScope.all,
    store: CatalogStore = Depends(get_store),
):
    logger.debug("🔍 Unified search: %r (type: %s)", query, type.value)
    results = unified_search(store.catalog(), query, type)
    return results.to_payload()


# =====================================================
# Local run
# =====================================================
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=config.PORT,
        log_level=config.LOG_LEVEL.lower(),
    )
