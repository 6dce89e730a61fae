from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse

from gradebook.core.config import settings
from gradebook.core.database import dispose_engine, init_db
from gradebook.core.handlers import add_error_handlers
from gradebook.core.logging import logger
from gradebook.api.v1.router import api_router
from gradebook.api.v1.endpoints import health

STATIC_DIR = Path(settings.STATIC_DIR or Path(__file__).parent / "static")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # The schema must exist before the first request; any failure aborts startup
    try:
        init_db()
    except Exception as e:
        logger.critical(f"Database initialization failed, refusing to start: {e}")
        raise
    yield
    dispose_engine()


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.APP_VERSION,
        debug=settings.DEBUG,
        lifespan=lifespan
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    add_error_handlers(app)

    app.include_router(health.router, tags=["health"])
    app.include_router(api_router, prefix=settings.API_PREFIX)

    @app.get("/", include_in_schema=False)
    def homepage():
        """
        Static homepage
        """
        return FileResponse(STATIC_DIR / "index.html")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    logger.info(f"Serveur démarré sur le port {settings.PORT}")
    uvicorn.run("gradebook.main:app", host=settings.HOST, port=settings.PORT)
