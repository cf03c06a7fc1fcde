import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from fulltext_api.api.cors import add_cors_headers, plain_text_http_error
from fulltext_api.api.deps import get_index_store
from fulltext_api.api.router import api_router
from fulltext_api.config import Settings
from fulltext_api.search.executor import QueryExecutor
from fulltext_api.storage.registry import IndexStore

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings):
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting full-text search API...")
        # 索引登錄只在開始處理請求前執行一次
        store = IndexStore(settings)
        store.discover()
        logger.info("Data dir: %s (%d index(es))", settings.data_root, len(store.descriptors))

        app.state.settings = settings
        app.state.index_store = store
        app.state.executor = QueryExecutor(settings, store)

        yield

        logger.info("Shutting down...")

    app = FastAPI(title="Full-text Search", version="0.1.0", lifespan=lifespan)
    app.middleware("http")(add_cors_headers)
    app.add_exception_handler(StarletteHTTPException, plain_text_http_error)
    app.include_router(api_router)

    @app.get("/health")
    async def health(store: IndexStore = Depends(get_index_store)):
        return {
            "status": store.status,
            "indexes": len(store.descriptors),
            "skipped": len(store.skipped),
        }

    if settings.static_dir:
        app.mount("/", StaticFiles(directory=settings.static_dir, html=True), name="static")

    return app


def run():
    settings = Settings()
    configure_logging(settings)

    import uvicorn

    logger.info("Listening on %s:%d", settings.bind_host, settings.bind_port)
    uvicorn.run(
        create_app(settings),
        host=settings.bind_host,
        port=settings.bind_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
