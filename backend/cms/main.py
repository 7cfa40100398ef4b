"""FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from cms.api.v1.router import api_v1_router
from cms.core.config import Settings, settings
from cms.core.exceptions import register_exception_handlers
from cms.core.logging_config import setup_logging
from cms.core.middleware.cors import get_cors_config
from cms.core.middleware.request_id import RequestIdMiddleware
from cms.repositories.category_repository import SqlCategoryRepository
from cms.services.category_service import CategoryService
from cms.services.list_query import PaginationDefaults


def pagination_defaults(config: Settings) -> PaginationDefaults:
    return PaginationDefaults(
        page_size=config.DEFAULT_PAGE_SIZE,
        max_page_size=config.MAX_PAGE_SIZE,
        order_column=config.DEFAULT_ORDER_COLUMN,
        order_type=config.DEFAULT_ORDER_TYPE,
        total_filtered=config.PAGINATION_TOTAL_FILTERED,
    )


def create_app(
    engine: AsyncEngine | None = None,
    session_factory: async_sessionmaker[AsyncSession] | None = None,
    config: Settings = settings,
) -> FastAPI:
    """Build the app. Without arguments it uses the engine from ``cms.db.session``."""
    setup_logging(config.LOG_LEVEL)

    if engine is None:
        from cms.db.session import async_session_factory, engine

        session_factory = async_session_factory
    elif session_factory is None:
        session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        try:
            yield
        finally:
            await engine.dispose()

    app = FastAPI(
        title="CMS Category API",
        version="0.1.0",
        docs_url="/docs",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.engine = engine
    app.state.category_service = CategoryService(
        SqlCategoryRepository(session_factory),
        pagination_defaults(config),
    )

    # Middleware (last added = first executed)
    app.add_middleware(RequestIdMiddleware)
    app.add_middleware(CORSMiddleware, **get_cors_config())

    register_exception_handlers(app)

    app.include_router(api_v1_router, prefix="/api/v1")
    return app


app = create_app()
