"""
Submission Service

Packages the open document and the confirmed page range into a multipart
request for the local Nougat API and posts it. Sending never raises: transport
errors and non-2xx responses are logged and reported back as a failed
SubmissionResult. There is no retry.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

import requests

import config
from page_selector.exceptions import SubmissionError, ValidationError
from page_selector.pdf_document import PDFDocument

logger = logging.getLogger(__name__)

DEFAULT_ENDPOINT = config.NOUGAT_ENDPOINT
PDF_MEDIA_TYPE = "application/pdf"


@dataclass(frozen=True)
class SubmissionPayload:
    """
    What gets posted for one confirmation. start and stop are 1-based and
    inclusive.
    """

    file_bytes: bytes
    filename: str
    start: int
    stop: int
    media_type: str = PDF_MEDIA_TYPE

    def to_form_fields(self) -> Dict[str, str]:
        return {"start": str(self.start), "stop": str(self.stop)}

    def to_files(self) -> Dict[str, Tuple[str, bytes, str]]:
        return {"file": (self.filename, self.file_bytes, self.media_type)}


@dataclass(frozen=True)
class SubmissionResult:
    payload_start: int
    payload_stop: int
    ok: bool
    status_code: Optional[int] = None
    body: str = ""
    error: Optional[str] = None


def build_payload(document: PDFDocument, start: int, stop: int) -> SubmissionPayload:
    """
    Build the payload from the document and the then-current range.

    Raises:
        ValidationError: If the range is not a valid range of the document.
        DocumentUnreadableError: If the document bytes cannot be read.
    """
    if not 1 <= start <= stop <= document.page_count:
        raise ValidationError(
            f"Range {start}-{stop} is not valid for {document.page_count} pages",
            field="range",
            value=f"{start}-{stop}",
        )
    return SubmissionPayload(
        file_bytes=document.read_bytes(),
        filename=document.name,
        start=start,
        stop=stop,
    )


class NougatSubmissionService:
    """
    {
        "name": "NougatSubmissionService",
        "version": "1.0.0",
        "description": "Posts a SubmissionPayload to the Nougat predict endpoint as multipart form data.",
        "dependencies": ["requests"],
        "interface": {
            "inputs": [
                {"name": "endpoint", "type": "string"},
                {"name": "timeout", "type": "float | None"}
            ],
            "outputs": "SubmissionResult"
        }
    }
    """

    def __init__(
        self,
        endpoint: str = DEFAULT_ENDPOINT,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        if not endpoint or not endpoint.strip():
            raise ValueError("Endpoint URL cannot be empty")
        self.endpoint = endpoint.strip()
        self.timeout = timeout
        self.session = session or requests.Session()
        logger.info(f"Submission endpoint configured: {self.endpoint}")

    def send(self, payload: SubmissionPayload) -> SubmissionResult:
        logger.info(
            f"Submitting '{payload.filename}' pages {payload.start}-{payload.stop} to {self.endpoint}"
        )
        try:
            response = self.session.post(
                self.endpoint,
                data=payload.to_form_fields(),
                files=payload.to_files(),
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            error = SubmissionError(f"API request error: {e}", endpoint=self.endpoint)
            return SubmissionResult(payload.start, payload.stop, ok=False, error=str(error))

        if not response.ok:
            error = SubmissionError(
                f"API request failed with status: {response.status_code}",
                endpoint=self.endpoint,
                status_code=response.status_code,
            )
            return SubmissionResult(
                payload.start,
                payload.stop,
                ok=False,
                status_code=response.status_code,
                body=response.text,
                error=str(error),
            )

        logger.info(f"API Response: {response.text}")
        return SubmissionResult(
            payload.start, payload.stop, ok=True, status_code=response.status_code, body=response.text
        )
