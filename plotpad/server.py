from fastapi import FastAPI, HTTPException, status
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
import logging

from .api import sheets_router, charts_router
from .config import get_config
from .database import get_db_engine

config = get_config()

# Configure logging
logging.basicConfig(level=getattr(logging, config.LOG_LEVEL.upper(), logging.INFO))
logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="PlotPad API",
        description="CSV sheets with encryption at rest and suggested charts",
        version="0.1.0",
        docs_url="/docs" if config.is_development_mode() else None,
        redoc_url="/redoc" if config.is_development_mode() else None,
    )

    if config.ENABLE_CORS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    return app


def register_routers(app: FastAPI) -> None:
    """Attach the health check plus the sheet and chart routers."""

    @app.get("/health")
    async def health_check():
        """Report whether the sheet database is reachable."""
        try:
            engine = get_db_engine()
            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return {"status": "ok", "database": "connected"}
        except Exception as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Health check failed: {str(e)}"
            )

    app.include_router(sheets_router)
    app.include_router(charts_router)


# Application instance served by uvicorn
app = create_app()
register_routers(app)
config.log_configuration()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("plotpad.server:app", host="0.0.0.0", port=8000)
