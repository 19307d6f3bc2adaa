from collections.abc import Iterable
from concurrent.futures import Future, ThreadPoolExecutor
from datetime import date
from time import perf_counter

from sms_categorizer.diagnostics import DiagnosticsChannel
from sms_categorizer.domain.amounts import extract_amount
from sms_categorizer.domain.categories import Category, icon_for
from sms_categorizer.domain.detection import is_financial
from sms_categorizer.domain.sources import DEFAULT_ALLOWED_SOURCES, compose_message, is_allowed_source
from sms_categorizer.domain.summary import summarize
from sms_categorizer.domain.timefmt import format_duration
from sms_categorizer.errors import ClassificationError, LoadError
from sms_categorizer.logger import get_logger
from sms_categorizer.manager import ClassifierService
from sms_categorizer.models import (
    AnalysisResult,
    Notification,
    ProcessingOutcome,
    ProcessingStatus,
    RawMessage,
    Transaction,
)
from sms_categorizer.storage.repository import TransactionStore

logger = get_logger(__name__)


def _completed(outcome: ProcessingOutcome) -> "Future[ProcessingOutcome]":
    future: Future[ProcessingOutcome] = Future()
    future.set_result(outcome)
    return future


class NotificationPipeline:
    """
    Detect → extract → summarize on the caller's thread, then dedupe → encode →
    classify → commit on a bounded worker pool.

    Every notification ends in exactly one ``ProcessingOutcome``. A failure in
    any stage is reported as ``failed`` for that notification only.
    """

    def __init__(
        self,
        classifier: ClassifierService,
        store: TransactionStore,
        diagnostics: DiagnosticsChannel,
        *,
        allowed_sources: Iterable[str] = DEFAULT_ALLOWED_SOURCES,
        max_workers: int = 4,
        today: date | None = None,
    ) -> None:
        self.classifier = classifier
        self.store = store
        self.diagnostics = diagnostics
        self.allowed_sources = frozenset(allowed_sources)
        self.today = today
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="classify")

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)

    def _emit(self, message: str) -> None:
        self.diagnostics.emit(message)

    def _fail(self, stage: str, exc: Exception, **fields: object) -> ProcessingOutcome:
        self._emit(f"  -> FATAL: Error during {stage}: {exc}")
        logger.exception("[PIPELINE] %s failed", stage)
        return ProcessingOutcome(status=ProcessingStatus.FAILED, message=str(exc), **fields)

    def gate(self, notification: Notification) -> RawMessage | ProcessingOutcome:
        """Source filter, empty check and financial detection."""
        self._emit(f"Processing notification from: {notification.source}")

        if not is_allowed_source(notification.source, self.allowed_sources):
            self._emit("  -> INFO: Ignoring notification from non-SMS app.")
            return ProcessingOutcome(status=ProcessingStatus.IGNORED_SOURCE, message="source not allowed")

        if notification.ongoing:
            self._emit("  -> INFO: Ignoring ongoing notification.")
            return ProcessingOutcome(status=ProcessingStatus.IGNORED_ONGOING, message="ongoing notification")

        text = compose_message(notification.title, notification.text)
        if not text.strip():
            self._emit("  -> INFO: Ignoring empty message.")
            return ProcessingOutcome(status=ProcessingStatus.EMPTY, message="empty message")

        self._emit(f"  -> Message Text: '{text}'")
        if not is_financial(text, today=self.today):
            self._emit("  -> INFO: Ignoring non-financial message.")
            return ProcessingOutcome(status=ProcessingStatus.NOT_FINANCIAL, message="not a financial message")

        self._emit("  -> SUCCESS: Found financial SMS! Classifying...")
        return RawMessage(text=text, posted_at=notification.posted_at)

    def submit(self, notification: Notification) -> "Future[ProcessingOutcome]":
        try:
            gated = self.gate(notification)
            if isinstance(gated, ProcessingOutcome):
                return _completed(gated)

            if not self.classifier.available:
                self._emit("  -> ERROR: Model or tokenizer not initialized. Skipping classification.")
                return _completed(ProcessingOutcome(
                    status=ProcessingStatus.UNAVAILABLE,
                    message="classifier unavailable",
                ))

            amount = extract_amount(gated.text)
            summary = summarize(gated.text, amount)
        except Exception as exc:
            return _completed(self._fail("extraction", exc))

        self._emit(f"    -> Summary: '{summary}' (amount {amount})")
        return self._executor.submit(self.classify_and_commit, gated, summary, amount)

    def process(self, notification: Notification) -> ProcessingOutcome:
        return self.submit(notification).result()

    def scan(self, notifications: Iterable[Notification]) -> list["Future[ProcessingOutcome]"]:
        """Process a batch of active notifications; each one succeeds or fails alone."""
        batch = list(notifications)
        self._emit("Scan initiated...")
        self._emit(f"Found {len(batch)} notifications.")
        return [self.submit(notification) for notification in batch]

    def classify_and_commit(self, message: RawMessage, summary: str, amount: float) -> ProcessingOutcome:
        fields: dict[str, object] = {"summary": summary, "amount": amount}
        try:
            if self.store.count_matching(summary, message.posted_at) > 0:
                self._emit("  -> INFO: Ignoring duplicate transaction.")
                return ProcessingOutcome(status=ProcessingStatus.DUPLICATE, message="duplicate", **fields)

            start = perf_counter()
            result = self.classifier.classify(summary)
            category = result.category
            self._emit(
                f"    -> AI Model classified as: {category.value} "
                f"({format_duration(perf_counter() - start)})"
            )
            fields["category"] = category

            if category is Category.SPAM:
                self._emit("    -> INFO: Ignored Spam Message.")
                return ProcessingOutcome(status=ProcessingStatus.SPAM, message="spam", **fields)

            transaction = Transaction(
                description=summary,
                category=category,
                amount=amount,
                icon=icon_for(category, amount < 0),
                occurred_at=message.posted_at,
            )
            stored = self.store.insert(transaction)
        except LoadError as exc:
            self._emit(f"  -> ERROR: {exc.message}")
            return ProcessingOutcome(status=ProcessingStatus.UNAVAILABLE, message=exc.message, **fields)
        except Exception as exc:
            return self._fail("classification", exc, **fields)

        if stored is None:
            self._emit("  -> INFO: Ignoring duplicate transaction.")
            return ProcessingOutcome(status=ProcessingStatus.DUPLICATE, message="duplicate", **fields)

        self._emit("  -> SUCCESS: Transaction Saved!")
        return ProcessingOutcome(
            status=ProcessingStatus.COMMITTED,
            message="saved",
            transaction_id=stored.id,
            **fields,
        )

    def analyze(self, text: str) -> AnalysisResult:
        """Run the text heuristics and the classifier without touching the store."""
        amount = extract_amount(text)
        summary = summarize(text, amount)
        analysis = AnalysisResult(
            text=text,
            is_financial=is_financial(text, today=self.today),
            amount=amount,
            summary=summary,
            token_count=0,
        )
        if self.classifier.vocabulary is not None:
            analysis.token_count = self.classifier.encode(summary).token_count
        if self.classifier.available:
            try:
                result = self.classifier.classify(summary)
            except (LoadError, ClassificationError) as exc:
                logger.warning("[PIPELINE] Analysis left unclassified: %s", exc.message)
                return analysis
            analysis.category = result.category
            analysis.scores = result.scores
        return analysis
