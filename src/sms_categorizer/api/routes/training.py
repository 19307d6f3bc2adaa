import asyncio
from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException

from sms_categorizer.api.dependencies import get_training_service
from sms_categorizer.api.schemas import TrainRequest
from sms_categorizer.errors import LoadError
from sms_categorizer.logger import get_logger
from sms_categorizer.services.training import TrainingService

logger = get_logger(__name__)

router = APIRouter()


@router.post("/train")
async def train_model(
    req: TrainRequest,
    training: Annotated[TrainingService, Depends(get_training_service)],
) -> dict[str, Any]:
    if training.active:
        raise HTTPException(status_code=409, detail="Training in progress")
    try:
        return await asyncio.to_thread(training.train, req.examples, reset=req.reset)
    except LoadError as exc:
        logger.warning("[TRAIN] Cannot train: %s", exc.message)
        raise HTTPException(status_code=409, detail=exc.message) from exc
