"""
Chart API Endpoints

Chart generation for posted CSV that is not stored as a sheet.
"""

from typing import Dict, Any
from fastapi import APIRouter, HTTPException, Depends, status
import logging

from ..charts import ChartPipeline, ChartResponse
from ..models import ChartPreviewRequest
from ..utils import validate_csv
from .dependencies import get_chart_pipeline

logger = logging.getLogger(__name__)

# Create router for chart endpoints
router = APIRouter(prefix="/charts", tags=["charts"])


@router.post("/preview", response_model=ChartResponse)
async def preview_charts(request: ChartPreviewRequest, pipeline: ChartPipeline = Depends(get_chart_pipeline)):
    """
    Generate charts from posted CSV.

    Data problems and model failures degrade to fewer or zero charts rather
    than an error.
    """
    validate_csv(request.csv)
    try:
        specs = await pipeline.generate(request.csv)
        charts = pipeline.render(specs)
        return ChartResponse(charts=charts, recommendations=len(charts))
    except Exception as e:
        logger.error(f"Chart preview error: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Chart generation failed: {str(e)}"
        )


@router.post("/analyze")
async def analyze_csv(request: ChartPreviewRequest, pipeline: ChartPipeline = Depends(get_chart_pipeline)) -> Dict[str, Any]:
    """Profile posted CSV without asking the model for suggestions."""
    validate_csv(request.csv)
    return await pipeline.analyze(request.csv)


@router.get("/capabilities")
async def get_chart_capabilities(pipeline: ChartPipeline = Depends(get_chart_pipeline)) -> Dict[str, Any]:
    """Get supported chart types and settings."""
    return pipeline.get_chart_capabilities()
