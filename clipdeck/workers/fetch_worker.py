"""QThread worker for fetching the clip payload."""

from __future__ import annotations

import logging

from PySide6.QtCore import QThread, Signal

from clipdeck.api.client import FetchError, fetch_payload

logger = logging.getLogger(__name__)


class FetchWorker(QThread):
    """Runs the HTTP fetch in a background thread.

    The worker never touches catalog state; results travel back to the
    GUI thread through queued signals. Exactly one of ``complete`` or
    ``error`` is emitted per run.

    Signals:
        complete: decoded JSON payload
        error: error message
    """

    complete = Signal(object)
    error = Signal(str)

    def __init__(self, endpoint: str, timeout: float | None = None, parent=None):
        super().__init__(parent)
        self.endpoint = endpoint
        self.timeout = timeout

    def run(self) -> None:
        try:
            payload = fetch_payload(self.endpoint, timeout=self.timeout)
        except FetchError as e:
            self.error.emit(str(e))
            return
        except Exception as e:
            logger.exception("Unexpected failure fetching clips from %s", self.endpoint)
            self.error.emit(str(e) or type(e).__name__)
            return
        self.complete.emit(payload)
