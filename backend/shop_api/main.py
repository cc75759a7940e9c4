import logging
from contextlib import asynccontextmanager
from importlib.metadata import PackageNotFoundError, version
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from shop_api.config import Settings
from shop_api.database import Store, StoreConnectionError
from shop_api.errors import ApiError, api_error_handler
from shop_api.routes import users

logger = logging.getLogger(__name__)

APP_NAME = "Shop API"
WELCOME_MESSAGE = "Welcome to this awesome API"


def get_build_info() -> str:
    """Installed package version, or 'dev' when running from a checkout"""
    try:
        return version("shop-api")
    except PackageNotFoundError:
        return "dev"


BUILD_VERSION = get_build_info()


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    store: Store = app.state.store
    try:
        store.connect()
    except StoreConnectionError:
        logger.critical("Failed to connect to the database!", exc_info=True)
        raise
    store.migrate()

    for r in app.routes:
        methods = getattr(r, "methods", None)
        path = getattr(r, "path", None)
        if path and methods:
            logger.debug("%-20s %s", ", ".join(sorted(methods)), path)

    yield

    store.dispose()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings.from_env()

    app = FastAPI(title=APP_NAME, lifespan=lifespan)
    app.state.settings = settings
    app.state.store = Store(settings.database_url, echo=settings.sql_echo)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(ApiError, api_error_handler)

    @app.get("/api", response_class=PlainTextResponse)
    def welcome():
        return WELCOME_MESSAGE

    @app.get("/api/health")
    def health_check():
        """Diagnostic endpoint to verify which code is running"""
        return {"app_name": APP_NAME, "version": BUILD_VERSION, "status": "healthy"}

    # Include routers
    app.include_router(users.router, prefix="/api", tags=["users"])

    return app


def run() -> None:
    """Console entry point: serve the API with uvicorn"""
    import uvicorn

    settings = Settings.from_env()
    configure_logging(settings.log_level)
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
