from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from sms_categorizer.api.routes import diagnostics, notifications, training, transactions
from sms_categorizer.core import settings
from sms_categorizer.diagnostics import DiagnosticsChannel
from sms_categorizer.logger import get_logger, setup_logging
from sms_categorizer.manager import ClassifierService
from sms_categorizer.services.processing import NotificationPipeline
from sms_categorizer.services.training import TrainingService
from sms_categorizer.storage.repository import TransactionStore

logger = get_logger(__name__)


def create_app() -> FastAPI:
    setup_logging()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        logger.info("Initializing services...")
        settings.log_environment()

        diagnostics_channel = DiagnosticsChannel(max_lines=settings.DIAGNOSTICS_BUFFER_SIZE)
        classifier = ClassifierService.from_paths(
            settings.VOCAB_PATH,
            settings.MODEL_PATH,
            max_len=settings.MAX_LEN,
        )
        if classifier.available:
            diagnostics_channel.emit("AI Model and Tokenizer loaded successfully.")
        else:
            diagnostics_channel.emit("FATAL: Error loading model or vocab. Messages will not be classified.")

        store = TransactionStore(settings.DATABASE_URL)
        store.create_schema()

        pipeline = NotificationPipeline(
            classifier=classifier,
            store=store,
            diagnostics=diagnostics_channel,
            allowed_sources=settings.ALLOWED_SOURCES,
            max_workers=settings.MAX_WORKERS,
        )

        app.state.diagnostics = diagnostics_channel
        app.state.classifier = classifier
        app.state.store = store
        app.state.pipeline = pipeline
        app.state.training = TrainingService(classifier=classifier, model_path=settings.MODEL_PATH)

        logger.info("Services initialized.")
        yield
        logger.info("Service shutting down.")
        pipeline.shutdown()
        store.close()

    app = FastAPI(title="SMS Categorizer", lifespan=lifespan)

    app.include_router(notifications.router)
    app.include_router(transactions.router)
    app.include_router(diagnostics.router)
    app.include_router(training.router)

    return app


app = create_app()
