"""
Document Loader Module

Opens a PDF off the GUI thread so the viewer stays responsive while
PyMuPDF parses the file far enough to know its page count.
"""

import logging

from PyQt6.QtCore import QThread, pyqtSignal

from page_selector.exceptions import DocumentUnreadableError
from page_selector.pdf_document import DocumentReference, PDFDocument

logger = logging.getLogger(__name__)


class DocumentLoadWorker(QThread):
    """
    {
        "name": "DocumentLoadWorker",
        "version": "1.0.0",
        "description": "A QThread subclass that opens a PDF document asynchronously.",
        "dependencies": ["PDFDocument"],
        "interface": {
            "inputs": [{"name": "reference", "type": "path | bytes"}],
            "outputs": "Emits document_loaded(PDFDocument) or load_failed(str)"
        }
    }
    """

    document_loaded = pyqtSignal(object)  # Emits the opened PDFDocument
    load_failed = pyqtSignal(str)  # Emits an error message string

    def __init__(self, reference: DocumentReference, parent=None):
        """
        @param {path|bytes} reference - The document to open.
        @param {QObject} parent - The parent QObject.
        @raises {ValueError} - If the reference is empty.
        """
        super().__init__(parent)
        if not reference:
            raise ValueError("A document path or PDF bytes are required")
        self.reference = reference

    def run(self):
        try:
            document = PDFDocument(self.reference)
        except DocumentUnreadableError as e:
            self.load_failed.emit(str(e))
            return
        except Exception as e:
            logger.error(f"Unexpected error opening document: {e}")
            self.load_failed.emit(f"{type(e).__name__}: {e}")
            return
        self.document_loaded.emit(document)
