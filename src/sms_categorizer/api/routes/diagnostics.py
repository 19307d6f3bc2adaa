import asyncio
import json
from typing import Annotated, Any

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from sms_categorizer.api.dependencies import get_classifier_optional, get_diagnostics
from sms_categorizer.core import settings
from sms_categorizer.diagnostics import DiagnosticLine, DiagnosticsChannel
from sms_categorizer.manager import ClassifierService

router = APIRouter()


@router.get("/api/diagnostics", response_model=list[DiagnosticLine])
async def get_diagnostics_lines(
    diagnostics: Annotated[DiagnosticsChannel, Depends(get_diagnostics)],
    after: int = 0,
) -> list[DiagnosticLine]:
    return diagnostics.since(after)


@router.get("/api/diagnostics/stream")
async def diagnostics_stream(
    diagnostics: Annotated[DiagnosticsChannel, Depends(get_diagnostics)],
    after: int | None = None,
    max_events: int | None = None,
) -> StreamingResponse:
    async def generate() -> Any:
        last_seq = diagnostics.last_seq if after is None else after
        sent = 0
        while max_events is None or sent < max_events:
            lines = diagnostics.since(last_seq)
            if not lines:
                await asyncio.sleep(settings.DIAGNOSTICS_POLL_SECONDS)
                continue
            for line in lines[: None if max_events is None else max_events - sent]:
                last_seq = line.seq
                sent += 1
                yield f"data: {json.dumps(line.model_dump(mode='json'))}\n\n"
        yield "event: done\ndata: {}\n\n"

    return StreamingResponse(generate(), media_type="text/event-stream", headers=settings.SSE_HEADERS)


@router.get("/health")
async def health(
    classifier: Annotated[ClassifierService | None, Depends(get_classifier_optional)],
) -> dict[str, str]:
    state = "ready" if classifier and classifier.available else "unavailable"
    return {"status": "ok", "classifier": state}
