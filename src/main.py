from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from src.api.router import api_router
from src.core.config import get_cors_origins, get_settings
from src.core.errors import AppError, app_error_handler, validation_error_handler
from src.core.logging import configure_logging
from src.shared.response import CALCULATION_VERSION


logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title=settings.app_name, version=CALCULATION_VERSION)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(api_router, prefix=settings.api_prefix)
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    logger.info(
        "%s ready (environment=%s, default_timeframe=%s)",
        settings.app_name,
        settings.environment,
        settings.analytics_default_timeframe,
    )
    return app


app = create_app()
