import logging
import os
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from webgen.api.routes import router
from webgen.config import Settings, load_settings, parse_origins
from webgen.db.store import BundleStore
from webgen.inference.config import get_llm_client
from webgen.pipeline.controller import PipelineController


logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    pipeline: Optional[PipelineController] = None,
    store: Optional[BundleStore] = None,
) -> FastAPI:
    app = FastAPI(
        title="AI Web Builder",
        version="0.1.0",
    )

    origins = settings.cors_origins if settings else parse_origins(os.getenv("CORS_ORIGINS"))

    # Middleware FIRST
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(origins),
        allow_credentials="*" not in origins,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["authorization", "x-client-info", "apikey", "content-type"],
        max_age=86400,
    )

    # Routes AFTER middleware
    app.include_router(router)

    app.state.settings = settings
    app.state.pipeline = pipeline
    app.state.store = store

    @app.on_event("startup")
    def startup():
        if app.state.pipeline is not None and app.state.store is not None:
            return

        # ConfigurationError here aborts startup
        if app.state.settings is None:
            app.state.settings = load_settings()
        current = app.state.settings

        logging.basicConfig(
            level=current.log_level,
            format="%(asctime)s %(levelname)s %(name)s %(message)s",
        )

        if app.state.pipeline is None:
            app.state.pipeline = PipelineController(get_llm_client(current))
            logger.info("[Startup] model %s at %s", current.llm_model, current.llm_base_url)

        if app.state.store is None:
            app.state.store = BundleStore.from_url(current.database_url)
            logger.info("[Startup] bundle store ready")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("webgen.main:app", host="0.0.0.0", port=int(os.getenv("PORT", "8000")))
