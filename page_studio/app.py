"""
page_studio — app FastAPI
Démarrer : uvicorn page_studio.app:app --reload --port 8002
"""
import logging

from fastapi import FastAPI

from . import __version__
from .config import get_settings
from .router import router

log = logging.getLogger(__name__)


def create_app() -> FastAPI:
    settings = get_settings()
    logging.basicConfig(level=settings.log_level.upper(), format="%(asctime)s %(levelname)s — %(message)s")

    app = FastAPI(title="page_studio — Page builder", version=__version__, docs_url="/docs")
    app.include_router(router)

    @app.get("/health")
    def health():
        return {"status": "ok", "service": "page_studio", "version": __version__}

    log.info("page_studio %s prêt (historique : %d)", __version__, settings.history_limit)
    return app


app = create_app()
