from pydantic import BaseModel, Field

from sms_categorizer.models import LabeledMessage, Notification, ProcessingOutcome


class ScanRequest(BaseModel):
    notifications: list[Notification]


class ScanResponse(BaseModel):
    found: int
    outcomes: list[ProcessingOutcome]


class AnalyzeRequest(BaseModel):
    text: str


class TrainRequest(BaseModel):
    examples: list[LabeledMessage] = Field(min_length=1)
    reset: bool = False
