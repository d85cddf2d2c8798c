"""Direct AI endpoints: trend analysis, artist insights and raw prompts."""

from typing import Optional

from fastapi import APIRouter, Depends

from afrisight.analysis import PredictiveAnalysis
from afrisight.errors import ValidationError
from afrisight.genai import GenerativeTextGateway
from afrisight.utils.logger import LoggerManager
from app.api.dependencies import get_analysis, get_gateway
from app.api.errors import upstream_failure
from app.api.models import (
    ArtistInsightsRequest,
    ArtistInsightsResponse,
    PromptRequest,
    PromptResponse,
    TrendAnalysisRequest,
    TrendAnalysisResponse,
)

router = APIRouter(tags=["ai"])

logger = LoggerManager.get_logger("api.ai")


@router.post("/api/ai/trend-analysis", response_model=TrendAnalysisResponse)
async def trend_analysis(
    payload: Optional[TrendAnalysisRequest] = None,
    analysis: PredictiveAnalysis = Depends(get_analysis),
):
    """Full trend analysis, including the parsed sections and raw model text."""
    limit = (payload or TrendAnalysisRequest()).limit
    with upstream_failure("Failed to generate trend analysis"):
        insights = await analysis.generate_trend_analysis(limit)
    return TrendAnalysisResponse(
        insights=insights,
        message=f"Analysis generated using top {limit} performing tracks",
    )


@router.post("/api/ai/artist-insights", response_model=ArtistInsightsResponse)
async def artist_insights(
    payload: ArtistInsightsRequest,
    analysis: PredictiveAnalysis = Depends(get_analysis),
):
    if not payload.artist:
        raise ValidationError("Artist name is required")
    with upstream_failure("Failed to generate artist insights"):
        insights = await analysis.generate_artist_insights(payload.artist)
    return ArtistInsightsResponse(artist=payload.artist, insights=insights)


@router.post("/ai/prompt", response_model=PromptResponse)
async def prompt(
    payload: PromptRequest,
    gateway: GenerativeTextGateway = Depends(get_gateway),
):
    """Send a caller-supplied prompt to the model unchanged."""
    if not payload.prompt:
        raise ValidationError("Prompt is required")
    logger.info("Forwarding raw prompt", extra={"extra_data": {"length": len(payload.prompt)}})
    response = await gateway.generate(payload.prompt)
    return PromptResponse(prompt=payload.prompt, response=response)
