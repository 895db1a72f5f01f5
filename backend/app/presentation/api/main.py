from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config.environment_config import EnvironmentConfig
from app.core.di.service_locator import ServiceLocator
from app.core.utils.logger import configure_logging, get_logger
from app.presentation.api.v1.caption_router import router as caption_router
from app.presentation.api.v1.gateway_router import router as gateway_router


def create_app(config: Optional[EnvironmentConfig] = None, locator: Optional[ServiceLocator] = None) -> FastAPI:
    """Application factory.

    Configuration is resolved here once and injected into the service locator;
    pass `locator` to supply pre-built collaborators.
    """
    if locator is None:
        locator = ServiceLocator(config=config or EnvironmentConfig.from_env())
    cfg = locator.config()
    configure_logging(cfg.log_level)
    logger = get_logger("main")

    app = FastAPI(title="Caption Generator Backend", version="1.0.0")

    # Browsers post data URIs from the upload page; origins come from CORS_ALLOW_ORIGINS.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    locator.warm_up()
    app.state.locator = locator

    @app.get("/")
    def root():
        return {"status": "ok", "message": "Caption Generator Backend running"}

    app.include_router(gateway_router)
    app.include_router(caption_router)
    logger.info("Caption Generator Backend ready (env=%s)", cfg.app_env)
    return app


app = create_app()
