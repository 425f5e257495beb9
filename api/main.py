import logging
import sys
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from core import db, schema, settings
from core.log import configure_logging
from customer_sites import router as customer_sites_router
from projects import router as projects_router

# Environment first: settings below are read when the app is built.
load_dotenv()

logger = logging.getLogger(__name__)

HEALTH_MESSAGE = "Bright Club backend is running."


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    # One pool per process; handlers get it through core.db.get_db.
    database = await db.Database.connect(settings.database_settings())
    try:
        await schema.init_schema(database)
    except Exception:
        logger.exception("schema_init_failed")
        await database.close()
        raise
    app.state.db = database
    try:
        yield
    finally:
        app.state.db = None
        await database.close()


async def http_exception_handler(_: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Invalid request body", "details": jsonable_encoder(exc.errors())},
    )


def create_app() -> FastAPI:
    app = FastAPI(title="Bright Club API", lifespan=lifespan)

    # Browser frontends on other origins call this API directly.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins(),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    app.include_router(customer_sites_router.router, tags=["customer-sites"])
    app.include_router(projects_router.router, tags=["projects"])

    @app.get("/", response_class=PlainTextResponse)
    def root() -> str:
        return HEALTH_MESSAGE

    return app


app = create_app()


def run() -> None:
    import uvicorn

    configure_logging()
    try:
        settings.database_url()
    except RuntimeError as exc:
        logger.error("%s", exc)
        sys.exit(1)

    port = settings.port()
    logger.info("Starting server on port %s", port)
    uvicorn.run(app, host=settings.host(), port=port)


if __name__ == "__main__":
    run()
