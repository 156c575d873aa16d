"""
Selection Controller - orchestration of one page-range selection session

Wires the document loader, the RangeController, the PageRenderer and the
submission service together. The RangeController stays the only holder of
page/range state; this controller just reacts to its signals.
"""

import logging
from typing import Optional, Set

from PyQt6.QtCore import QObject, QThread, pyqtSignal, pyqtSlot

from page_selector.core.config_manager import ConfigManager
from page_selector.core.range_controller import RangeController
from page_selector.document_loader import DocumentLoadWorker
from page_selector.exceptions import DocumentUnreadableError, ValidationError
from page_selector.page_renderer import DEFAULT_RENDER_SCALE, PageRenderer, RenderSurface
from page_selector.pdf_document import DocumentReference, PDFDocument
from page_selector.submission_service import (
    DEFAULT_ENDPOINT,
    NougatSubmissionService,
    SubmissionPayload,
    SubmissionResult,
    build_payload,
)
from page_selector.submission_worker import SubmissionWorker

logger = logging.getLogger(__name__)


class SelectionController(QObject):
    """
    {
        "name": "SelectionController",
        "version": "1.0.0",
        "description": "Coordinates document loading, range selection, page rendering and submission.",
        "dependencies": ["RangeController", "PageRenderer", "NougatSubmissionService", "DocumentLoadWorker"],
        "interface": {
            "inputs": ["open_document", "confirm", "close"],
            "outputs": "Session lifecycle and selection signals"
        }
    }
    """

    document_loaded = pyqtSignal(str, int)  # document name, page_count
    document_load_failed = pyqtSignal(str)  # error_message
    selection_confirmed = pyqtSignal(int, int)  # start_page, end_page
    page_range_changed = pyqtSignal(int, int)  # start_page, end_page
    submission_finished = pyqtSignal(object)  # SubmissionResult
    session_closed = pyqtSignal()

    def __init__(
        self,
        surface: RenderSurface,
        range_controller: Optional[RangeController] = None,
        renderer: Optional[PageRenderer] = None,
        submission_service: Optional[NougatSubmissionService] = None,
        parent=None,
    ):
        super().__init__(parent)
        self._surface = surface
        self._range = range_controller or RangeController(self)
        self._renderer = renderer or PageRenderer(parent=self)
        self._service = submission_service or NougatSubmissionService()

        self.document: Optional[PDFDocument] = None
        self._load_worker: Optional[DocumentLoadWorker] = None
        self._threads: Set[QThread] = set()

        self._range.current_page_changed.connect(self._on_current_page_changed)
        self._range.range_changed.connect(self.page_range_changed)

        logger.info("SelectionController initialized")

    @classmethod
    def from_config(cls, config_manager: ConfigManager, surface: RenderSurface, parent=None):
        """Build a controller whose renderer and submission service follow the configuration."""
        scale = config_manager.get_float("render.scale", DEFAULT_RENDER_SCALE)
        endpoint = config_manager.get("submission.endpoint", DEFAULT_ENDPOINT)
        timeout = config_manager.get_float("submission.timeout")
        return cls(
            surface,
            renderer=PageRenderer(scale=scale),
            submission_service=NougatSubmissionService(endpoint=endpoint, timeout=timeout),
            parent=parent,
        )

    @property
    def range_controller(self) -> RangeController:
        return self._range

    @property
    def renderer(self) -> PageRenderer:
        return self._renderer

    @property
    def is_loading(self) -> bool:
        return self._load_worker is not None

    # --- Document lifecycle ---

    def open_document(self, reference: DocumentReference) -> None:
        """Start loading a document in the background, replacing any open one."""
        if self._load_worker is not None:
            logger.warning("A document is already loading; ignoring open request")
            return

        self._close_document()
        label = "<bytes>" if isinstance(reference, (bytes, bytearray)) else reference
        logger.info(f"Loading PDF document: {label}")

        worker = DocumentLoadWorker(reference)
        worker.document_loaded.connect(self._on_document_loaded)
        worker.load_failed.connect(self._on_document_load_failed)
        self._load_worker = worker
        self._start(worker)

    def load_document(self, document: PDFDocument) -> None:
        """Adopt an already opened document and start the session on it."""
        self._close_document()
        self.document = document
        self._range.initialize(document.page_count)
        self.document_loaded.emit(document.name, document.page_count)
        logger.info(f"PDF loaded successfully: {document.page_count} pages")

    @pyqtSlot(object)
    def _on_document_loaded(self, document: PDFDocument) -> None:
        if self.sender() is not self._load_worker:
            # Session was closed while the load was in flight.
            document.close()
            return
        self._load_worker = None
        self.load_document(document)

    @pyqtSlot(str)
    def _on_document_load_failed(self, error_message: str) -> None:
        if self.sender() is not self._load_worker:
            return
        self._load_worker = None
        logger.error(f"Failed to load PDF: {error_message}")
        self.document_load_failed.emit(error_message)

    def close(self) -> None:
        """Tear the session down. Renders and loads still in flight become no-ops."""
        self._load_worker = None
        self._renderer.release(self._surface)
        self._renderer.shutdown()
        self._close_document()
        self.session_closed.emit()
        logger.info("Selection session closed")

    def _close_document(self) -> None:
        if self.document is not None:
            self.document.close()
            self.document = None
        self._range.clear()

    # --- Rendering ---

    @pyqtSlot(int)
    def _on_current_page_changed(self, page_number: int) -> None:
        self._renderer.request_render(self.document, page_number, self._surface, self._range.state)

    # --- Submission ---

    def confirm(self) -> Optional[SubmissionPayload]:
        """
        Confirm the current range: notify listeners and dispatch the submission.

        Returns immediately with the payload that was dispatched, or None if
        there was nothing to submit.
        """
        state = self._range.state
        if self.document is None or state.is_empty:
            logger.warning("Nothing to confirm: no document with pages is open")
            return None

        try:
            payload = build_payload(self.document, state.start, state.end)
        except (ValidationError, DocumentUnreadableError) as e:
            logger.error(f"Could not build submission: {e}")
            return None

        self.selection_confirmed.emit(payload.start, payload.stop)

        worker = SubmissionWorker(self._service, payload)
        worker.submission_finished.connect(self._on_submission_finished)
        self._start(worker)
        return payload

    @pyqtSlot(object)
    def _on_submission_finished(self, result: SubmissionResult) -> None:
        # Failures were logged where they happened.
        if result.ok:
            logger.info(f"Pages {result.payload_start}-{result.payload_stop} submitted")
        self.submission_finished.emit(result)

    # --- Thread bookkeeping ---

    def _start(self, worker: QThread) -> None:
        self._threads.add(worker)
        worker.finished.connect(self._on_thread_finished)
        worker.start()

    @pyqtSlot()
    def _on_thread_finished(self) -> None:
        worker = self.sender()
        if worker in self._threads:
            worker.wait()
            self._threads.discard(worker)
