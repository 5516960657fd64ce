# Uvicorn application factory <https://www.uvicorn.org/#application-factories>
from contextlib import asynccontextmanager

from fastapi import FastAPI

from novels_api.logging import logger
from novels_api.middlewares.correlation_id import CorrelationIDMiddleware
from novels_api.middlewares.logging_context import LoggingContextMiddleware
from novels_api.routing import collect_subrouters
from novels_api.storage.db import close_db, wait_and_init_db
from novels_api.utils.error_handler import register_exception_handlers


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    FastAPI lifespan context manager for startup and shutdown.

    Startup waits for the database (with retries) and creates missing
    tables; if the database never becomes reachable the exception aborts
    startup. Shutdown releases the connection pool.
    """
    logger.info("Application startup: initializing resources")

    await wait_and_init_db()
    logger.info("Initialized database and tables")

    yield  # Application runs here

    logger.info("Application shutdown: cleaning up resources")
    await close_db()
    logger.info("Application shutdown complete")


def application() -> FastAPI:
    """
    Initializes and configures the FastAPI application.

    This function sets up the FastAPI application with:
    - Lifespan: database wait/initialization and pool cleanup
    - Routers collected by ``collect_subrouters()`` (authors, novels,
      characters, health)
    - Exception handlers routing request validation and application
      errors through the error classifier
    - ``LoggingContextMiddleware`` and ``CorrelationIDMiddleware``
    """
    app = FastAPI(
        title="Novels API",
        description="CRUD API for authors, novels and characters",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.include_router(collect_subrouters())
    register_exception_handlers(app)

    # Middlewares (execute in REVERSE order of registration)
    # Execution flow: CorrelationIDMiddleware → LoggingContextMiddleware
    app.add_middleware(LoggingContextMiddleware)
    app.add_middleware(CorrelationIDMiddleware)

    return app


app = application()  # Need for fastapi cli
