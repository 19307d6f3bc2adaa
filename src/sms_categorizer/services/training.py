import os
import threading
from time import perf_counter
from typing import Any

from sms_categorizer.classifiers.token_bag import TokenBagModel
from sms_categorizer.domain.amounts import extract_amount
from sms_categorizer.domain.summary import summarize
from sms_categorizer.domain.timefmt import format_duration
from sms_categorizer.errors import LoadError
from sms_categorizer.logger import get_logger
from sms_categorizer.manager import ClassifierService
from sms_categorizer.models import LabeledMessage

logger = get_logger(__name__)


class TrainingService:
    """Fit the bundled token-bag model on labelled messages and hot-swap it in."""

    def __init__(self, classifier: ClassifierService, model_path: str) -> None:
        self.classifier = classifier
        self.model_path = model_path
        self._lock = threading.Lock()

    @property
    def active(self) -> bool:
        return self._lock.locked()

    def _base_model(self, reset: bool) -> TokenBagModel:
        if reset or not os.path.exists(self.model_path):
            return TokenBagModel(data_path=self.model_path)
        try:
            return TokenBagModel.load(self.model_path)
        except LoadError as exc:
            logger.warning("[TRAIN] Starting from an empty model: %s", exc.message)
            return TokenBagModel(data_path=self.model_path)

    def train(self, examples: list[LabeledMessage], *, reset: bool = False) -> dict[str, Any]:
        if self.classifier.vocabulary is None:
            raise LoadError("Vocabulary not loaded; cannot train")

        with self._lock:
            start = perf_counter()
            logger.info("[TRAIN] Training on %d labelled messages (reset=%s)...", len(examples), reset)

            model = self._base_model(reset)
            # Train on the same summary text the pipeline classifies.
            encoded = []
            for example in examples:
                summary = summarize(example.text, extract_amount(example.text))
                tokens = self.classifier.encode(summary)
                encoded.append((tokens.ids, tokens.mask))
            model.learn_many(encoded, [example.category for example in examples])

            if not model.is_fitted:
                logger.warning("[TRAIN] Need examples of at least two categories; model not saved.")
                return {
                    "status": "insufficient",
                    "trained": len(examples),
                    "total": len(model.examples),
                }

            model.save()
            self.classifier.install_model(model)
            elapsed = perf_counter() - start
            logger.info("[TRAIN] Complete in %s. Total examples: %d", format_duration(elapsed), len(model.examples))
            return {
                "status": "success",
                "trained": len(examples),
                "total": len(model.examples),
                "duration": format_duration(elapsed),
            }
