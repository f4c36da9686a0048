"""Optimization API endpoints under /api."""
from fastapi import APIRouter, Depends, Request

from app.models.requests import (
    VideoURLRequest, OptimizeRequest, BulkOptimizeRequest, TrendingKeywordsRequest
)
from app.models.responses import (
    MetadataResponse, TranscriptResponse, TranscriptPayload, OptimizeResponse,
    TrendingKeywordsResponse
)
from app.services import VideoService, BatchProcessor
from app.core.dependencies import (
    enforce_rate_limit, get_video_service, get_metadata_service,
    get_transcript_service, get_keyword_service, get_batch_processor
)
from app.core.exceptions import OptimizerBaseException
from app.utils.response_helpers import ResponseHelper

# Create router; every /api route shares the rate limit
router = APIRouter(prefix="/api", tags=["optimization"], dependencies=[Depends(enforce_rate_limit)])


def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", None) or ResponseHelper.generate_request_id()


@router.post("/metadata")
async def get_video_metadata(
    body: VideoURLRequest,
    request: Request,
    video_service: VideoService = Depends(get_metadata_service)
):
    """Fetch metadata for a single video."""
    try:
        video_id, metadata = await video_service.get_metadata(body.url, _request_id(request))
        return ResponseHelper.create_success_response(
            MetadataResponse(video_id=video_id, metadata=metadata)
        )
    except OptimizerBaseException as e:
        return ResponseHelper.create_error_from_exception(e, "Failed to fetch video metadata")


@router.post("/transcript")
async def get_video_transcript(
    body: VideoURLRequest,
    request: Request,
    video_service: VideoService = Depends(get_transcript_service)
):
    """Fetch the flattened transcript for a single video."""
    try:
        video_id, transcript = await video_service.get_transcript(body.url, _request_id(request))
        return ResponseHelper.create_success_response(
            TranscriptResponse(
                video_id=video_id,
                transcript=transcript.text,
                word_count=transcript.word_count
            )
        )
    except OptimizerBaseException as e:
        return ResponseHelper.create_error_from_exception(e, "Failed to fetch transcript")


@router.post("/optimize")
async def optimize_video(
    body: OptimizeRequest,
    request: Request,
    video_service: VideoService = Depends(get_video_service)
):
    """Fetch metadata and transcript, then generate the requested optimization."""
    try:
        outcome = await video_service.optimize_video(
            body.url, body.optimization_type, _request_id(request)
        )
        return ResponseHelper.create_success_response(
            OptimizeResponse(
                video_id=outcome.video_id,
                metadata=outcome.metadata,
                transcript=TranscriptPayload(
                    text=outcome.transcript.text,
                    word_count=outcome.transcript.word_count
                ),
                optimization=outcome.optimization
            )
        )
    except OptimizerBaseException as e:
        return ResponseHelper.create_error_from_exception(e, "Failed to optimize video")


@router.post("/bulk-optimize")
async def bulk_optimize(
    body: BulkOptimizeRequest,
    request: Request,
    batch_processor: BatchProcessor = Depends(get_batch_processor)
):
    """Optimize up to the configured number of videos, one at a time."""
    try:
        batch_result = await batch_processor.process_batch(
            body.urls, body.optimization_type, _request_id(request)
        )
        return ResponseHelper.create_success_response(batch_result)
    except OptimizerBaseException as e:
        return ResponseHelper.create_error_from_exception(e, "Failed to process bulk optimization")


@router.post("/trending-keywords")
async def trending_keywords(
    body: TrendingKeywordsRequest,
    request: Request,
    video_service: VideoService = Depends(get_keyword_service)
):
    """Generate short-tail and long-tail keywords for a topic."""
    try:
        topic, category, keywords = await video_service.trending_keywords(
            body.topic, body.category, _request_id(request)
        )
        return ResponseHelper.create_success_response(
            TrendingKeywordsResponse(topic=topic, category=category, keywords=keywords)
        )
    except OptimizerBaseException as e:
        return ResponseHelper.create_error_from_exception(e, "Failed to generate trending keywords")
