"""
Profile service - user registration, login and a token-protected profile
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from typing import Optional
import logging

from .auth import TokenAuthenticator
from .config import Settings, settings as default_settings
from .db import build_engine, build_session_factory, init_db
from .middleware import AuthenticationError, authentication_error_handler
from .routes import health, users
from .utils.log_setup import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Initialize database on startup"""
    init_db(_app.state.engine)
    yield
    _app.state.engine.dispose()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or default_settings
    configure_logging(settings)

    if settings.uses_default_secret():
        logger.warning("JWT_SECRET is not set; using the development default")

    app = FastAPI(
        title="Profile Service",
        description="User registration, login and token-protected profile",
        version="1.0.0",
        lifespan=lifespan
    )
    app.state.settings = settings
    app.state.engine = build_engine(settings.DATABASE_URL)
    app.state.SessionLocal = build_session_factory(app.state.engine)
    app.state.authenticator = TokenAuthenticator(
        settings.JWT_SECRET,
        algorithm=settings.JWT_ALGORITHM,
        leeway=settings.JWT_LEEWAY_SECONDS,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(AuthenticationError, authentication_error_handler)

    app.include_router(users.router)
    app.include_router(health.router)

    @app.get("/")
    async def root():
        return {"message": "API is running..."}

    return app


app = create_app()


def run():
    import uvicorn

    logger.info("Server running on port %s", default_settings.PORT)
    uvicorn.run(app, host="0.0.0.0", port=default_settings.PORT)


if __name__ == "__main__":
    run()
