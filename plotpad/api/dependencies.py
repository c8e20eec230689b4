"""
Shared service instances for the API routers.
"""

from typing import Optional
import logging

from ..charts import ChartPipeline, ChartSettings
from ..config import get_config
from ..database import get_db_engine, init_db, SqlSheetRepository, SqlSecretStore
from ..llm import LangChainTextService
from ..sheets import SheetService
from ..vault import VaultCodec

logger = logging.getLogger(__name__)

# Global instances, created on first use
_chart_pipeline: Optional[ChartPipeline] = None
_sheet_service: Optional[SheetService] = None


def get_chart_pipeline() -> ChartPipeline:
    """Get or create the chart pipeline instance."""
    global _chart_pipeline
    if _chart_pipeline is None:
        config = get_config()
        settings = ChartSettings()
        settings.suggestion_timeout = config.SUGGESTION_TIMEOUT
        service = LangChainTextService(app_config=config) if config.ENABLE_CHART_SUGGESTIONS else None
        _chart_pipeline = ChartPipeline(service, settings)
    return _chart_pipeline


def get_sheet_service() -> SheetService:
    """Get or create the sheet service instance."""
    global _sheet_service
    if _sheet_service is None:
        engine = get_db_engine()
        init_db(engine)
        _sheet_service = SheetService(
            repository=SqlSheetRepository(engine),
            codec=VaultCodec(SqlSecretStore(engine)),
            pipeline=get_chart_pipeline()
        )
    return _sheet_service
