import threading
from collections import deque
from datetime import datetime

from pydantic import BaseModel

from sms_categorizer.logger import get_logger

logger = get_logger(__name__)


class DiagnosticLine(BaseModel):
    seq: int
    at: datetime
    message: str


class DiagnosticsChannel:
    """
    Advisory debug stream: every pipeline decision as a human-readable line.

    Lines go to the ``sms_categorizer.diagnostics`` logger and into a bounded
    buffer that readers poll with ``since(seq)``. Nothing in the pipeline reads
    them back.
    """

    def __init__(self, max_lines: int = 500):
        self._lines: deque[DiagnosticLine] = deque(maxlen=max_lines)
        self._lock = threading.Lock()
        self._seq = 0

    def emit(self, message: str) -> None:
        with self._lock:
            self._seq += 1
            self._lines.append(DiagnosticLine(seq=self._seq, at=datetime.now(), message=message))
        logger.info(message)

    @property
    def last_seq(self) -> int:
        return self._seq

    def since(self, seq: int = 0) -> list[DiagnosticLine]:
        with self._lock:
            return [line for line in self._lines if line.seq > seq]

    def clear(self) -> None:
        with self._lock:
            self._lines.clear()
