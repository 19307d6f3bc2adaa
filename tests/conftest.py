from collections.abc import Generator
from datetime import date
from pathlib import Path

import pytest

from sms_categorizer.classifiers.vocabulary import Vocabulary
from sms_categorizer.diagnostics import DiagnosticsChannel
from sms_categorizer.manager import ClassifierService
from sms_categorizer.services.processing import NotificationPipeline
from sms_categorizer.storage.repository import TransactionStore

from stubs import VOCAB_LINES, StubModel


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def vocabulary() -> Vocabulary:
    return Vocabulary.from_lines(VOCAB_LINES)


@pytest.fixture
def store(tmp_path: Path) -> Generator[TransactionStore, None, None]:
    s = TransactionStore(f"sqlite:///{tmp_path / 'transactions.db'}")
    s.create_schema()
    yield s
    s.close()


@pytest.fixture
def diagnostics() -> DiagnosticsChannel:
    return DiagnosticsChannel(max_lines=200)


@pytest.fixture
def stub_model() -> StubModel:
    return StubModel()


@pytest.fixture
def classifier(vocabulary: Vocabulary, stub_model: StubModel) -> ClassifierService:
    return ClassifierService(vocabulary=vocabulary, model=stub_model)


@pytest.fixture
def pipeline(
    classifier: ClassifierService,
    store: TransactionStore,
    diagnostics: DiagnosticsChannel,
) -> Generator[NotificationPipeline, None, None]:
    p = NotificationPipeline(
        classifier=classifier,
        store=store,
        diagnostics=diagnostics,
        max_workers=4,
        today=date(2025, 12, 2),
    )
    yield p
    p.shutdown()
