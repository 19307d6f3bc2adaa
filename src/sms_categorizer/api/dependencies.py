from fastapi import HTTPException, Request

from sms_categorizer.diagnostics import DiagnosticsChannel
from sms_categorizer.manager import ClassifierService
from sms_categorizer.services.processing import NotificationPipeline
from sms_categorizer.services.training import TrainingService
from sms_categorizer.storage.repository import TransactionStore


def get_pipeline(request: Request) -> NotificationPipeline:
    pipeline = getattr(request.app.state, "pipeline", None)
    if not pipeline:
        raise HTTPException(status_code=500, detail="Service not initialized")
    return pipeline


def get_classifier(request: Request) -> ClassifierService:
    classifier = getattr(request.app.state, "classifier", None)
    if not classifier:
        raise HTTPException(status_code=500, detail="Service not initialized")
    return classifier


def get_classifier_optional(request: Request) -> ClassifierService | None:
    return getattr(request.app.state, "classifier", None)


def get_store(request: Request) -> TransactionStore:
    store = getattr(request.app.state, "store", None)
    if not store:
        raise HTTPException(status_code=500, detail="Store not initialized")
    return store


def get_diagnostics(request: Request) -> DiagnosticsChannel:
    diagnostics = getattr(request.app.state, "diagnostics", None)
    if not diagnostics:
        raise HTTPException(status_code=500, detail="Service not initialized")
    return diagnostics


def get_training_service(request: Request) -> TrainingService:
    training = getattr(request.app.state, "training", None)
    if not training:
        raise HTTPException(status_code=500, detail="Service not initialized")
    return training
