from __future__ import annotations

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from fastapi.middleware.cors import CORSMiddleware

from serieshub.common.settings import get_settings
from serieshub.services.api.routers import catalog, health, series

cfg = get_settings()
dev = cfg.app_env.lower() == "development"


def create_app() -> FastAPI:
    app = FastAPI(
        title="Serieshub API",
        version="0.1.0",
        docs_url=f"{cfg.api.prefix}/docs",
        openapi_url=f"{cfg.api.prefix}/openapi.json",
    )

    allow_origins = ["*"] if dev else cfg.api.cors_allow_origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins,
        allow_methods=cfg.api.cors_allow_methods,
        allow_headers=cfg.api.cors_allow_headers,
        allow_credentials=cfg.api.cors_allow_credentials,
    )

    app.include_router(series.router)
    app.include_router(catalog.router)
    app.include_router(health.router)

    # Stored covers: "/img/tarjeta/<file>" lives under <upload_root>/img/tarjeta
    public_root = cfg.images.covers_subdir.strip("/").split("/")[0]
    app.mount(
        f"/{public_root}",
        StaticFiles(directory=str(cfg.images.upload_root / public_root), check_dir=False),
        name="covers",
    )
    return app


app = create_app()
