"""
Submission Worker Module

Runs a submission in its own thread so confirming a selection never blocks
the viewer. The outcome is only reported through a signal.
"""

import logging

from PyQt6.QtCore import QThread, pyqtSignal

from page_selector.submission_service import (
    NougatSubmissionService,
    SubmissionPayload,
    SubmissionResult,
)

logger = logging.getLogger(__name__)


class SubmissionWorker(QThread):
    """
    {
        "name": "SubmissionWorker",
        "version": "1.0.0",
        "description": "A QThread subclass that posts one payload to the Nougat endpoint.",
        "dependencies": ["NougatSubmissionService"]
    }
    """

    submission_finished = pyqtSignal(object)  # Emits the SubmissionResult

    def __init__(self, service: NougatSubmissionService, payload: SubmissionPayload, parent=None):
        """
        @param {NougatSubmissionService} service - Service used to post the payload.
        @param {SubmissionPayload} payload - The immutable payload to send.
        @param {QObject} parent - The parent QObject.
        @raises {ValueError} - If the service or payload is missing.
        """
        super().__init__(parent)
        if service is None:
            raise ValueError("Submission service is required")
        if payload is None:
            raise ValueError("Submission payload is required")
        self.service = service
        self.payload = payload

    def run(self):
        try:
            result = self.service.send(self.payload)
        except Exception as e:
            # send() reports its own failures; this only catches bugs below it.
            logger.error(f"Unexpected submission error: {type(e).__name__}: {e}")
            result = SubmissionResult(
                self.payload.start, self.payload.stop, ok=False, error=f"{type(e).__name__}: {e}"
            )
        self.submission_finished.emit(result)
