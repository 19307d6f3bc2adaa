import os
import pickle
from collections.abc import Sequence

from sklearn.feature_extraction.text import TfidfVectorizer
from sklearn.linear_model import SGDClassifier
from sklearn.pipeline import Pipeline

from sms_categorizer.classifiers.base import ScoringModel
from sms_categorizer.domain.categories import CATEGORY_ORDER, Category
from sms_categorizer.errors import LoadError
from sms_categorizer.logger import get_logger

logger = get_logger(__name__)


def _build_pipeline() -> Pipeline:
    return Pipeline([
        ('tfidf', TfidfVectorizer(token_pattern=r"\d+", lowercase=False, ngram_range=(1, 2), min_df=1)),
        ('clf', SGDClassifier(loss='log_loss', random_state=42))
    ])


def ids_to_document(ids: Sequence[int], mask: Sequence[int]) -> str:
    return " ".join(str(token_id) for token_id, keep in zip(ids, mask) if keep)


class TokenBagModel(ScoringModel):
    """
    Linear model over the encoded token ids.

    Only the training examples are persisted; the pipeline is refitted on load.
    """

    def __init__(self, data_path: str = "sms_model.pkl"):
        self.data_path = data_path
        self.pipeline = _build_pipeline()
        self.examples: list[str] = []
        self.labels: list[str] = []
        self.is_fitted = False

    @classmethod
    def load(cls, data_path: str) -> "TokenBagModel":
        model = cls(data_path=data_path)
        if not os.path.exists(data_path):
            raise LoadError(f"Model file not found: {data_path}")
        try:
            with open(data_path, "rb") as f:
                data = pickle.load(f)
            if not isinstance(data, dict):
                raise TypeError(f"expected a dict, got {type(data).__name__}")
            model.examples = list(data.get("examples", []))
            model.labels = list(data.get("labels", []))
            model.fit()
        except Exception as exc:
            raise LoadError(f"Model file unreadable: {data_path}: {exc}") from exc

        if not model.is_fitted:
            raise LoadError(f"Model file {data_path} needs examples of at least two categories")
        return model

    def save(self) -> None:
        with open(self.data_path, "wb") as f:
            pickle.dump({
                "examples": self.examples,
                "labels": self.labels
            }, f)

    def fit(self) -> None:
        if len(set(self.labels)) >= 2:
            self.pipeline.fit(self.examples, self.labels)
            self.is_fitted = True
        else:
            self.is_fitted = False

    def learn_many(self, encoded: Sequence[tuple[Sequence[int], Sequence[int]]], categories: Sequence[Category]) -> None:
        for (ids, mask), category in zip(encoded, categories):
            self.examples.append(ids_to_document(ids, mask))
            self.labels.append(category.value)
        self.fit()
        logger.info(
            "[TRAIN] Model holds %d examples across %d categories (fitted=%s).",
            len(self.examples),
            len(set(self.labels)),
            self.is_fitted,
        )

    def infer(self, ids: Sequence[int], mask: Sequence[int]) -> list[float]:
        if not self.is_fitted:
            raise LoadError("Model is not fitted")

        probs = self.pipeline.predict_proba([ids_to_document(ids, mask)])[0]
        by_name = {name: float(prob) for name, prob in zip(self.pipeline.classes_, probs)}
        # Categories never seen in training score zero.
        return [by_name.get(category.value, 0.0) for category in CATEGORY_ORDER]
