import logging

from fastapi import FastAPI

from app.core.config import get_settings
from app.core.errors import register_error_handlers
from app.core.logging import configure_logging
from app.db.base import Base, engine
from app.db.models import category, professional, review, user  # noqa: F401  registers tables
from app.api.routes import categories as categories_router
from app.api.routes import professionals as professionals_router
from app.api.routes import review as review_router
from app.api.routes import users as users_router

configure_logging()
logger = logging.getLogger(__name__)

settings = get_settings()

app = FastAPI(title=settings.PROJECT_NAME)
register_error_handlers(app)


@app.on_event("startup")
def startup():
    Base.metadata.create_all(bind=engine)
    logger.info("%s started (env=%s)", settings.PROJECT_NAME, settings.ENV)


@app.get("/")
def root():
    return {"message": "Professionals API running"}


app.include_router(users_router.router)
app.include_router(categories_router.router)
app.include_router(professionals_router.router)
app.include_router(review_router.router)
