import logging

from PyQt6.QtCore import QThread, pyqtSignal

from page_selector.exceptions import RenderError
from page_selector.pdf_document import PDFDocument

logger = logging.getLogger(__name__)


class PageRenderWorker(QThread):
    """
    {
        "name": "PageRenderWorker",
        "version": "1.0.0",
        "description": "A QThread subclass that renders one PDF page off the GUI thread.",
        "dependencies": ["PDFDocument"]
    }
    Emits the frame or an error message together with the render token it was
    started with, so the receiver can tell stale results apart.
    """
    frame_ready = pyqtSignal(int, object)  # token, RenderedFrame
    render_failed = pyqtSignal(int, int, str)  # token, page_number, error message

    def __init__(self, document: PDFDocument, page_number: int, scale: float, token: int, parent=None):
        super().__init__(parent)
        self.document = document
        self.page_number = page_number
        self.scale = scale
        self.token = token

    def run(self):
        try:
            frame = self.document.render_page(self.page_number, self.scale)
        except RenderError as e:
            # Already logged when raised.
            self.render_failed.emit(self.token, self.page_number, f"{type(e).__name__}: {e}")
            return
        except Exception as e:
            logger.error(f"Unexpected error rendering page {self.page_number}: {e}", exc_info=True)
            self.render_failed.emit(self.token, self.page_number, f"{type(e).__name__}: {e}")
            return
        self.frame_ready.emit(self.token, frame)
