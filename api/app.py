import logging
from contextlib import asynccontextmanager
from logging import getLogger
from typing import Optional

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.routers.credentials import create_credentials_router
from api.routers.did import create_did_router
from api.routers.health import create_health_router
from api.routers.moltbook import create_moltbook_router
from api.routers.reputation import create_reputation_router
from clawmark import __version__
from clawmark.config import ClawMarkSettings
from clawmark.exceptions import ClawMarkError, InternalError
from clawmark.services import ClawMarkServices

logger = getLogger("api")


def configure_logging(settings: ClawMarkSettings) -> None:
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def create_app(services: Optional[ClawMarkServices] = None) -> FastAPI:
    services = services or ClawMarkServices.build()
    settings = services.settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        services.start()
        yield
        await services.aclose()

    app = FastAPI(title="ClawMark API", version=__version__, lifespan=lifespan)
    app.state.services = services

    app.include_router(create_did_router(services.did_registry))
    app.include_router(create_credentials_router(services.credential_store))
    app.include_router(create_reputation_router(services.reputation))
    app.include_router(create_moltbook_router(
        services.platform_client,
        services.challenges,
        services.platform_reputation,
    ))
    app.include_router(create_health_router())

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Content-Type", "Authorization"],
    )

    @app.get("/")
    async def root():
        return {
            "name": "ClawMark API",
            "version": __version__,
            "status": "operational",
            "endpoints": {
                "did": "/v1/did",
                "credentials": "/v1/credentials",
                "reputation": "/v1/reputation",
                "moltbook": "/v1/moltbook",
                "health": "/health",
            },
        }

    @app.exception_handler(ClawMarkError)
    async def clawmark_error_handler(request: Request, exc: ClawMarkError):
        if exc.status_code >= 500:
            logger.warning(f"{request.method} {request.url.path} failed: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content=jsonable_encoder(exc.to_dict()))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=400,
            content={"error": "Invalid request", "details": jsonable_encoder(exc.errors())},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            return JSONResponse(status_code=404, content={"error": "Endpoint not found"})
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})

    @app.exception_handler(Exception)
    async def internal_error_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        error = InternalError("Internal server error")
        content = error.to_dict()
        if settings.is_development:
            content["message"] = str(exc)
        return JSONResponse(status_code=error.status_code, content=content)

    return app


def start(host: Optional[str] = None, port: Optional[int] = None):
    load_dotenv()
    settings = ClawMarkSettings.load()
    configure_logging(settings)
    app = create_app(ClawMarkServices.build(settings))
    logger.info(f"ClawMark API running on port {port or settings.port} ({settings.environment})")
    uvicorn.run(app, host=host or settings.host, port=port or settings.port)


if __name__ == "__main__":
    start()
