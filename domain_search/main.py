from typing import List, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .core.config import Settings, get_settings
from .core.logging import configure_logging
from .api.routes_search import router as search_router
from .api.routes_options import router as options_router


def _split_origins(raw: str) -> List[str]:
    return [o.strip() for o in raw.split(",") if o.strip()]


def cors_origins(settings: Settings) -> List[str]:
    """
    Allowed browser origins.

    Prod needs FRONTEND_ORIGIN and never falls back to "*". Elsewhere the
    search form may be served from anywhere unless FRONTEND_ORIGIN pins it.
    """
    if settings.ENV.lower() == "prod":
        origins = _split_origins(settings.FRONTEND_ORIGIN or "")
        if not origins:
            raise RuntimeError(
                "FRONTEND_ORIGIN must be set in production, refusing to start with wide-open CORS."
            )
        return origins

    if settings.CORS_ALLOW_ALL_ORIGINS or not settings.FRONTEND_ORIGIN:
        return ["*"]
    return _split_origins(settings.FRONTEND_ORIGIN)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging()

    app = FastAPI(title="Domain Search API")
    # The search form only reads: POST for the filter body, GET for dropdowns
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins(settings),
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
        allow_credentials=False,
    )

    app.include_router(search_router, prefix=settings.API_PREFIX)
    app.include_router(options_router, prefix=settings.API_PREFIX)
    return app


app = create_app()
