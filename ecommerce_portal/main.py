import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ecommerce_portal.core import config
from ecommerce_portal.core.database import Base, SessionLocal, engine
from ecommerce_portal.core.errors import DomainError, domain_error_handler
from ecommerce_portal.core.logging_setup import configure_logging
from ecommerce_portal.core.startup_checks import ensure_migrations_applied, validate_database_environment
from ecommerce_portal.middleware.observability import ObservabilityMiddleware
import ecommerce_portal.models  # registers every model before create_all

from ecommerce_portal.services.admins import ensure_initial_admin
from ecommerce_portal.routers.activity_logs import router as activity_logs_router
from ecommerce_portal.routers.admins import router as admins_router
from ecommerce_portal.routers.auth import router as auth_router
from ecommerce_portal.routers.categories import router as categories_router
from ecommerce_portal.routers.internal_metrics import router as internal_metrics_router
from ecommerce_portal.routers.products import router as products_router
from ecommerce_portal.routers.sellers import router as sellers_router
from ecommerce_portal.routers.shops import router as shops_router

configure_logging()

logger = logging.getLogger(__name__)
BOOTSTRAP_PREFIX = "[ADMIN_BOOTSTRAP]"
REPO_ROOT = Path(__file__).resolve().parents[1]
ALEMBIC_CONFIG_PATH = Path(
    os.getenv("ALEMBIC_CONFIG", str(REPO_ROOT / "alembic.ini"))
)


@asynccontextmanager
async def lifespan(_: FastAPI):
    _startup_tasks()
    yield


app = FastAPI(
    title="E-commerce Portal API",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(ObservabilityMiddleware)
app.add_exception_handler(DomainError, domain_error_handler)


def _bootstrap_initial_admin() -> None:
    if not config.DEV_ADMIN_PASSWORD:
        logger.warning("%s skipped: configure DEV_ADMIN_PASSWORD.", BOOTSTRAP_PREFIX)
        return

    logger.info("%s start email=%s", BOOTSTRAP_PREFIX, config.DEV_ADMIN_EMAIL)
    db = SessionLocal()
    try:
        admin, created = ensure_initial_admin(
            db,
            email=config.DEV_ADMIN_EMAIL,
            password=config.DEV_ADMIN_PASSWORD,
            first_name=config.DEV_ADMIN_FIRST_NAME,
            last_name=config.DEV_ADMIN_LAST_NAME,
        )
        logger.info(
            "%s %s admin_id=%s email=%s",
            BOOTSTRAP_PREFIX,
            "created" if created else "exists",
            admin.id,
            config.DEV_ADMIN_EMAIL,
        )
    except Exception:
        logger.exception("%s ERROR bootstrap failed", BOOTSTRAP_PREFIX)
        raise
    finally:
        db.close()


def _startup_tasks() -> None:
    try:
        validate_database_environment()
        if config.DATABASE_URL.startswith("sqlite"):
            Base.metadata.create_all(bind=engine)
        ensure_migrations_applied(engine=engine, alembic_config_path=ALEMBIC_CONFIG_PATH)
        _bootstrap_initial_admin()
    except Exception:
        logger.exception("%s ERROR startup failed", BOOTSTRAP_PREFIX)
        raise


# Routers
app.include_router(auth_router)
app.include_router(admins_router)
app.include_router(sellers_router)
app.include_router(products_router)
app.include_router(categories_router)
app.include_router(shops_router)
app.include_router(activity_logs_router)
app.include_router(internal_metrics_router)


@app.get("/")
def root():
    return {"status": "ok"}


@app.get("/health")
def health():
    return {"status": "healthy"}
