from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from sms_categorizer.domain.categories import Category, Icon


class Notification(BaseModel):
    source: str
    title: str | None = None
    text: str | None = None
    posted_at: datetime
    ongoing: bool = False


class RawMessage(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str
    posted_at: datetime


class ClassificationResult(BaseModel):
    category_index: int
    scores: list[float]

    @property
    def category(self) -> Category:
        return Category.from_index(self.category_index)


class Transaction(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int | None = None
    description: str
    category: Category
    amount: float  # negative = debit
    icon: Icon
    occurred_at: datetime


class ProcessingStatus(str, Enum):
    IGNORED_SOURCE = "ignored_source"
    IGNORED_ONGOING = "ignored_ongoing"
    EMPTY = "empty"
    NOT_FINANCIAL = "not_financial"
    UNAVAILABLE = "unavailable"
    DUPLICATE = "duplicate"
    SPAM = "spam"
    COMMITTED = "committed"
    FAILED = "failed"


class ProcessingOutcome(BaseModel):
    status: ProcessingStatus
    message: str = ""
    summary: str | None = None
    amount: float | None = None
    category: Category | None = None
    transaction_id: int | None = None


class LabeledMessage(BaseModel):
    text: str
    category: Category


class AnalysisResult(BaseModel):
    text: str
    is_financial: bool
    amount: float
    summary: str
    token_count: int = Field(description="Non-padding positions in the encoded input")
    category: Category | None = None
    scores: list[float] | None = None
