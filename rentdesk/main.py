"""Application entrypoint."""

from __future__ import annotations

import uvicorn
from fastapi import FastAPI

from rentdesk.api.v1.router import get_api_router
from rentdesk.core.config import get_config
from rentdesk.core.startup import bootstrap


def create_app() -> FastAPI:
    cfg = get_config()
    app = FastAPI(title=cfg.APP_NAME, version=cfg.APP_VERSION)
    app.include_router(get_api_router())

    @app.get("/")
    def root() -> dict:
        return {"service": cfg.APP_NAME, "version": cfg.APP_VERSION, "api_prefix": cfg.API_PREFIX}

    return app


# ASGI app for `uvicorn rentdesk.main:app`.
app = create_app()


if __name__ == "__main__":
    bootstrap()
    cfg = get_config()
    uvicorn.run("rentdesk.main:app", host=cfg.API_HOST, port=cfg.API_PORT)
