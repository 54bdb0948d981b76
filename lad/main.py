"""
Main FastAPI application module.

The application never builds or looks up configuration on its own: it is
handed a finished ``ConfigNode`` and stores it on ``app.state.config`` for
routes and dependencies to read.
"""

from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from lad import __version__
from lad.config import ConfigNode, build_config, load_environment
from lad.core.error_handlers import register_exception_handlers
from lad.core.logging import logger, setup_logging
from lad.core.settings import Settings


def bootstrap(settings: Optional[Settings] = None) -> ConfigNode:
    """
    Read the environment, configure logging and compose the configuration.

    Raises:
        ConfigurationError: If the deployment is misconfigured.
    """
    env = load_environment(settings)
    setup_logging(app_name=env["APP_NAME"], show_stack=env["SHOW_STACK"])
    return build_config(env)


def get_config(request: Request) -> ConfigNode:
    """Dependency returning the application configuration."""
    return request.app.state.config


def create_app(config: ConfigNode) -> FastAPI:
    """
    Create and configure the FastAPI application.
    """
    logger.info("Creating FastAPI application...", extra={"environment": config["env"]})
    app = FastAPI(
        title=config["app_name"],
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )
    app.state.config = config

    register_exception_handlers(app)

    if config["cors"]:
        app.add_middleware(CORSMiddleware, **config["cors"])

    @app.get("/health")
    async def health() -> dict:
        return {"status": "ok", "app": config["app_name"], "env": config["env"]}

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """
        Middleware to log all HTTP requests and responses with relevant context.
        """
        response = await call_next(request)
        logger.info(
            "Request handled",
            extra={
                "status_code": response.status_code,
                "method": request.method,
                "url": str(request.url),
                "client_host": request.client.host if request.client else None
            }
        )
        return response

    return app


def app_factory() -> FastAPI:
    """Entry point for ``uvicorn --factory``."""
    return create_app(bootstrap())
