import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from core.auth import current_user_email
from core.config import get_settings
from core.errors import setup_exception_handlers
from core.middleware import RequestLoggingMiddleware
from db.database import create_db_and_tables
from routers.auth import router as auth_router
from routers.health import router as health_router
from routers.inventory import router as inventory_router
from routers.recipe import router as recipe_router

settings = get_settings()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    if not settings.jwt_secret:
        logger.warning("JWT_SECRET is not set; authentication endpoints will fail")
    await create_db_and_tables()
    yield
    logger.info("Shutting down...")


app = FastAPI(
    title=settings.app_name,
    description="API for managing inventory and recipe cost of goods sold",
    version=settings.app_version,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestLoggingMiddleware)

setup_exception_handlers(app)

app.include_router(health_router, tags=["health"])

# Magic-link authentication (no session required)
app.include_router(auth_router, prefix="/auth", tags=["auth"])

# Protected routes
protected = [Depends(current_user_email)]
app.include_router(inventory_router, prefix="/inventory", tags=["inventory"], dependencies=protected)
app.include_router(recipe_router, prefix="/recipe", tags=["recipe"], dependencies=protected)

if __name__ == "__main__":
    uvicorn.run("main:app", host=settings.host, port=settings.port, reload=settings.debug)
