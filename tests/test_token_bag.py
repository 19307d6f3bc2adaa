import pickle
from pathlib import Path

import pytest

from sms_categorizer.classifiers.base import argmax
from sms_categorizer.classifiers.token_bag import TokenBagModel, ids_to_document
from sms_categorizer.classifiers.tokenizer import tokenize
from sms_categorizer.classifiers.vocabulary import Vocabulary
from sms_categorizer.domain.categories import CATEGORY_ORDER, Category
from sms_categorizer.errors import LoadError
from sms_categorizer.manager import ClassifierService
from sms_categorizer.models import LabeledMessage
from sms_categorizer.services.training import TrainingService


def _encode(vocabulary: Vocabulary, texts: list[str]) -> list[tuple[tuple[int, ...], tuple[int, ...]]]:
    return [(e.ids, e.mask) for e in (tokenize(vocabulary, t) for t in texts)]


def test_ids_to_document_drops_padding() -> None:
    assert ids_to_document([2, 4, 3, 0, 0], [1, 1, 1, 0, 0]) == "2 4 3"


def test_learn_and_infer(vocabulary: Vocabulary, tmp_path: Path) -> None:
    model = TokenBagModel(data_path=str(tmp_path / "model.pkl"))
    texts = ["sent to swiggy dinner", "sent to zomato dinner", "received from acme salary", "received salary acme"]
    labels = [Category.FOOD, Category.FOOD, Category.INCOME, Category.INCOME]
    model.learn_many(_encode(vocabulary, texts * 3), labels * 3)

    assert model.is_fitted
    [(ids, mask)] = _encode(vocabulary, ["sent swiggy dinner"])
    scores = model.infer(ids, mask)

    assert len(scores) == len(CATEGORY_ORDER)
    assert sum(scores) == pytest.approx(1.0)
    assert scores[CATEGORY_ORDER.index(Category.SPAM)] == 0.0
    assert CATEGORY_ORDER[argmax(scores)] is Category.FOOD


def test_persistence_round_trip(vocabulary: Vocabulary, tmp_path: Path) -> None:
    data_file = tmp_path / "model.pkl"
    model = TokenBagModel(data_path=str(data_file))
    model.learn_many(_encode(vocabulary, ["sent swiggy", "received salary"]), [Category.FOOD, Category.INCOME])
    model.save()

    reloaded = TokenBagModel.load(str(data_file))

    assert reloaded.is_fitted
    assert len(reloaded.examples) == 2


def test_load_missing_or_single_category(vocabulary: Vocabulary, tmp_path: Path) -> None:
    with pytest.raises(LoadError):
        TokenBagModel.load(str(tmp_path / "missing.pkl"))

    data_file = tmp_path / "single.pkl"
    model = TokenBagModel(data_path=str(data_file))
    model.learn_many(_encode(vocabulary, ["sent swiggy"]), [Category.FOOD])
    assert not model.is_fitted
    model.save()
    with pytest.raises(LoadError):
        TokenBagModel.load(str(data_file))


def test_infer_before_fit_raises() -> None:
    with pytest.raises(LoadError):
        TokenBagModel().infer([2, 3], [1, 1])


def test_training_service_installs_model(vocabulary: Vocabulary, tmp_path: Path) -> None:
    model_path = tmp_path / "sms_model.pkl"
    classifier = ClassifierService(vocabulary=vocabulary, model=None)
    training = TrainingService(classifier=classifier, model_path=str(model_path))

    result = training.train([
        LabeledMessage(text="Rs.250 spent To Swiggy", category=Category.FOOD),
        LabeledMessage(text="Rs.500 credited From Acme", category=Category.INCOME),
    ])

    assert result["status"] == "success"
    assert result["total"] == 2
    assert model_path.exists()
    assert classifier.available
    assert classifier.classify("Sent Rs.250 to Swiggy").category in CATEGORY_ORDER


def test_training_service_needs_two_categories(vocabulary: Vocabulary, tmp_path: Path) -> None:
    classifier = ClassifierService(vocabulary=vocabulary, model=None)
    training = TrainingService(classifier=classifier, model_path=str(tmp_path / "sms_model.pkl"))

    result = training.train([LabeledMessage(text="Rs.250 spent To Swiggy", category=Category.FOOD)])

    assert result["status"] == "insufficient"
    assert not classifier.available


def test_training_service_without_vocabulary(tmp_path: Path) -> None:
    classifier = ClassifierService(vocabulary=None, model=None)
    training = TrainingService(classifier=classifier, model_path=str(tmp_path / "sms_model.pkl"))

    with pytest.raises(LoadError):
        training.train([LabeledMessage(text="Rs.250 spent", category=Category.FOOD)])


@pytest.mark.parametrize(
    "payload",
    [b"I abc\n.", pickle.dumps(["not", "a", "dict"]), pickle.dumps({"examples": ["2 3"], "labels": ["Food", "Income"]})],
)
def test_load_rejects_corrupt_files(tmp_path: Path, payload: bytes) -> None:
    data_file = tmp_path / "model.pkl"
    data_file.write_bytes(payload)

    with pytest.raises(LoadError):
        TokenBagModel.load(str(data_file))
