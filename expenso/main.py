import os
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from loguru import logger

from expenso.categories.router import router as category_router
from expenso.config import Settings, get_settings
from expenso.dashboard.router import router as dashboard_router
from expenso.database import Database
from expenso.expenses.router import router as expenses_router
from expenso.stats.router import router as stats_router
from expenso.users.routers import router as user_router

_log_sinks = []


def configure_logging(settings: Settings) -> None:
    # Replace our own sinks only, so repeated create_app calls don't stack them
    for sink_id in _log_sinks:
        logger.remove(sink_id)
    _log_sinks.clear()

    if settings.LOG_FILE:
        _log_sinks.append(
            logger.add(settings.LOG_FILE, rotation="500 MB", level=settings.LOG_LEVEL)
        )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Application startup")
        db = Database(settings.DATABASE_URL)
        db.create_all()
        app.state.db = db
        yield
        logger.info("Application shutdown")
        db.dispose()

    app = FastAPI(
        title="EXPENSO",
        description="An API for tracking personal expenses by category, with per-user dashboards and statistics.",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(Exception)
    async def unhandled_exception(request: Request, exc: Exception):
        logger.opt(exception=exc).error(
            f"Unhandled error on {request.method} {request.url.path}"
        )
        return JSONResponse(status_code=500, content={"detail": "Server error"})

    # Routers
    api = settings.API_PREFIX
    app.include_router(user_router, prefix=f"{api}/auth", tags=["Auth"])
    app.include_router(category_router, prefix=f"{api}/categories", tags=["Categories"])
    app.include_router(expenses_router, prefix=f"{api}/expenses", tags=["Expenses"])
    app.include_router(dashboard_router, prefix=f"{api}/dashboard", tags=["Dashboard"])
    app.include_router(stats_router, prefix=f"{api}/stats", tags=["Stats"])

    @app.get("/health")
    def health_check():
        return {"status": "ok"}

    build_dir = settings.FRONTEND_BUILD_DIR
    if build_dir and os.path.isdir(build_dir):
        logger.info(f"Serving frontend build from {build_dir}")
        mount_frontend(app, os.path.abspath(build_dir), api)
    elif build_dir:
        logger.warning(f"Frontend build directory not found: {build_dir} - skipping")

    return app


def mount_frontend(app: FastAPI, build_dir: str, api_prefix: str) -> None:
    api_root = api_prefix.strip("/")

    @app.get("/{full_path:path}", include_in_schema=False)
    async def serve_spa(full_path: str):
        if api_root and (full_path == api_root or full_path.startswith(api_root + "/")):
            return JSONResponse(status_code=404, content={"detail": "Not Found"})

        index_file = os.path.join(build_dir, "index.html")
        request_file = os.path.abspath(os.path.join(build_dir, full_path))

        # Static asset from the build (favicon, js chunks, ...)
        if request_file.startswith(build_dir + os.sep) and os.path.isfile(request_file):
            return FileResponse(request_file)

        # Client-side route: hand back the SPA shell
        if os.path.isfile(index_file):
            return FileResponse(index_file)
        return JSONResponse(status_code=404, content={"detail": "Frontend not built or missing."})


app = create_app()


if __name__ == "__main__":
    load_dotenv()
    host = os.getenv("SERVER_IP", "127.0.0.1")
    port = int(os.getenv("PORT", "5000"))
    logger.info(f"Running on {host}:{port}")
    uvicorn.run("expenso.main:app", host=host, port=port)
