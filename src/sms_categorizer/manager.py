from sms_categorizer.classifiers.base import ScoringModel, argmax
from sms_categorizer.classifiers.token_bag import TokenBagModel
from sms_categorizer.classifiers.tokenizer import MAX_LEN, EncodedInput, tokenize
from sms_categorizer.classifiers.vocabulary import Vocabulary
from sms_categorizer.domain.categories import CATEGORY_ORDER
from sms_categorizer.errors import ClassificationError, LoadError
from sms_categorizer.logger import get_logger
from sms_categorizer.models import ClassificationResult

logger = get_logger(__name__)


class ClassifierService:
    """
    Vocabulary plus scoring model, shared read-only by every classification task.

    When either part failed to load the service stays up in a degraded mode:
    ``available`` is False and ``classify`` raises ``LoadError``.
    """

    def __init__(
        self,
        vocabulary: Vocabulary | None,
        model: ScoringModel | None,
        max_len: int = MAX_LEN,
    ):
        self.vocabulary = vocabulary
        self.model = model
        self.max_len = max_len

    @classmethod
    def from_paths(cls, vocab_path: str, model_path: str, max_len: int = MAX_LEN) -> "ClassifierService":
        vocabulary: Vocabulary | None = None
        model: ScoringModel | None = None
        try:
            vocabulary = Vocabulary.from_file(vocab_path)
        except (OSError, ValueError) as exc:
            logger.error("FATAL: Error loading vocabulary from %s: %s", vocab_path, exc)

        try:
            model = TokenBagModel.load(model_path)
            logger.info("Scoring model loaded from %s", model_path)
        except LoadError as exc:
            logger.error("FATAL: Error loading model: %s", exc.message)

        return cls(vocabulary=vocabulary, model=model, max_len=max_len)

    @property
    def available(self) -> bool:
        return self.vocabulary is not None and self.model is not None

    def install_model(self, model: ScoringModel) -> None:
        # Attribute assignment is atomic; in-flight tasks finish on the old model.
        self.model = model
        logger.info("Scoring model replaced with %s", model.__class__.__name__)

    def encode(self, text: str) -> EncodedInput:
        if self.vocabulary is None:
            raise LoadError("Vocabulary not loaded")
        return tokenize(self.vocabulary, text, max_len=self.max_len)

    def classify(self, text: str) -> ClassificationResult:
        model = self.model
        if model is None or self.vocabulary is None:
            raise LoadError("Model or tokenizer not initialized")

        encoded = self.encode(text)
        scores = [float(score) for score in model.infer(encoded.ids, encoded.mask)]
        if len(scores) != len(CATEGORY_ORDER):
            raise ClassificationError(
                f"Expected {len(CATEGORY_ORDER)} scores, model returned {len(scores)}"
            )

        best = argmax(scores)
        if best < 0:
            raise ClassificationError("Model returned no usable scores")

        result = ClassificationResult(category_index=best, scores=scores)
        logger.debug(
            "Classified '%s...' as %s (score %.3f)",
            text[:50],
            result.category.value,
            scores[best],
        )
        return result
