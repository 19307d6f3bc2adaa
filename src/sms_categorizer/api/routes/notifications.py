import asyncio
from typing import Annotated

from fastapi import APIRouter, Depends

from sms_categorizer.api.dependencies import get_pipeline
from sms_categorizer.api.schemas import AnalyzeRequest, ScanRequest, ScanResponse
from sms_categorizer.logger import get_logger
from sms_categorizer.models import AnalysisResult, Notification, ProcessingOutcome
from sms_categorizer.services.processing import NotificationPipeline

logger = get_logger(__name__)

router = APIRouter()


@router.post("/notifications", response_model=ProcessingOutcome)
async def notification_posted(
    notification: Notification,
    pipeline: Annotated[NotificationPipeline, Depends(get_pipeline)],
) -> ProcessingOutcome:
    return await asyncio.wrap_future(pipeline.submit(notification))


@router.post("/notifications/scan", response_model=ScanResponse)
async def scan_notifications(
    req: ScanRequest,
    pipeline: Annotated[NotificationPipeline, Depends(get_pipeline)],
) -> ScanResponse:
    futures = pipeline.scan(req.notifications)
    outcomes = await asyncio.gather(*(asyncio.wrap_future(future) for future in futures))
    logger.info("[SCAN] Processed %d notifications.", len(outcomes))
    return ScanResponse(found=len(req.notifications), outcomes=list(outcomes))


@router.post("/analyze", response_model=AnalysisResult)
async def analyze_message(
    req: AnalyzeRequest,
    pipeline: Annotated[NotificationPipeline, Depends(get_pipeline)],
) -> AnalysisResult:
    return await asyncio.to_thread(pipeline.analyze, req.text)
