import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI

from studio_api.config import DEV_JWT_SECRET, settings
from studio_api.database import SessionLocal, init_db
from studio_api.errors import setup_error_handlers
from studio_api.routers import admin, applications, auth, contact, jobs
from studio_api.services.account_service import account_store

logger = logging.getLogger("studio_api")

VERSION = "1.0.0"


def configure_logging():
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: create schema and the bootstrap account on an empty store
    configure_logging()
    if settings.jwt_secret == DEV_JWT_SECRET:
        logger.warning("STUDIO_JWT_SECRET is not set; using the development default.")
    init_db()
    db = SessionLocal()
    try:
        account_store.ensure_default_account(db)
    except Exception as exc:
        logger.error("Could not create default admin account: %s", exc)
    finally:
        db.close()
    logger.info("Database ready at %s", settings.db_path)
    yield


app = FastAPI(
    title="Studio Hiring API",
    description="Job postings, applications and contact leads with an admin dashboard",
    version=VERSION,
    lifespan=lifespan,
)

setup_error_handlers(app)

app.include_router(jobs.router, prefix=settings.api_prefix)
app.include_router(applications.router, prefix=settings.api_prefix)
app.include_router(contact.router, prefix=settings.api_prefix)
app.include_router(admin.router, prefix=settings.api_prefix)
app.include_router(auth.router, prefix=settings.api_prefix)


@app.get("/health")
@app.get(f"{settings.api_prefix}/health")
async def health():
    return {"status": "ok", "version": VERSION}
