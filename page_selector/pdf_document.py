import logging
import os
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

import fitz  # PyMuPDF

from page_selector.exceptions import DocumentUnreadableError, RenderError

logger = logging.getLogger(__name__)

DocumentReference = Union[str, os.PathLike, bytes, bytearray]


@dataclass(frozen=True)
class RenderedFrame:
    """Raw RGB pixels of one rendered page, sized at the render scale."""

    page_number: int
    width: int
    height: int
    stride: int
    samples: bytes
    scale: float = 1.0


class PDFDocument:
    """
    {
        "name": "PDFDocument",
        "version": "2.0.0",
        "description": "Opens a PDF with PyMuPDF (fitz) and exposes page count, raw bytes and page rendering. UI-agnostic.",
        "dependencies": ["PyMuPDF"],
        "interface": {
            "inputs": [{"name": "reference", "type": "path | bytes"}],
            "outputs": "page_count, read_bytes(), render_page()"
        }
    }
    The document handle shared read-only by the renderer and the submission
    builder. Page numbers are 1-based throughout.
    """

    DEFAULT_NAME = "document"

    def __init__(self, reference: DocumentReference):
        """
        @param {path|bytes} reference - A filesystem path or the raw bytes of a PDF.
        @raises {DocumentUnreadableError} - If the document cannot be opened or parsed.
        """
        self._data: Optional[bytes] = None
        self.file_path: Optional[str] = None

        if isinstance(reference, (bytes, bytearray)):
            self._data = bytes(reference)
            label = "<bytes>"
        else:
            self.file_path = os.fspath(reference)
            label = self.file_path

        try:
            if self._data is not None:
                self._doc: fitz.Document = fitz.open(stream=self._data, filetype="pdf")
            else:
                self._doc = fitz.open(self.file_path)
        except Exception as e:
            raise DocumentUnreadableError(
                f"Failed to load PDF from '{label}': {e}", file_path=self.file_path
            ) from e

        if self._doc.needs_pass and not self._doc.authenticate(""):
            self._doc.close()
            raise DocumentUnreadableError(
                f"PDF '{label}' is encrypted", file_path=self.file_path
            )

        self._lock = threading.Lock()
        self._closed = False
        logger.info(f"Opened PDF '{label}' with {self._doc.page_count} pages")

    @property
    def page_count(self) -> int:
        return self._doc.page_count

    @property
    def name(self) -> str:
        """Base name of the document without its extension."""
        if self.file_path:
            return Path(self.file_path).stem
        return self.DEFAULT_NAME

    @property
    def closed(self) -> bool:
        return self._closed

    def read_bytes(self) -> bytes:
        """
        Returns the original bytes of the document, as opened.
        @raises {DocumentUnreadableError} - If the backing file can no longer be read.
        """
        if self._data is not None:
            return self._data
        try:
            return Path(self.file_path).read_bytes()
        except OSError as e:
            raise DocumentUnreadableError(
                f"Failed to read '{self.file_path}': {e}", file_path=self.file_path
            ) from e

    def render_page(self, page_number: int, scale: float = 1.0) -> RenderedFrame:
        """
        Renders one page to RGB pixels at the given scale.
        @param {int} page_number - The 1-based page number.
        @param {float} scale - Zoom factor relative to 72 dpi.
        @returns {RenderedFrame}
        @raises {RenderError} - If the page is out of range or PyMuPDF fails to draw it.
        """
        if not 1 <= page_number <= self.page_count:
            raise RenderError(
                f"Page number {page_number} is out of range (1-{self.page_count}).",
                page_number=page_number,
            )

        with self._lock:
            if self._closed:
                raise RenderError("Document is closed", page_number=page_number)
            try:
                page = self._doc.load_page(page_number - 1)
                pix = page.get_pixmap(matrix=fitz.Matrix(scale, scale), alpha=False)
            except Exception as e:
                raise RenderError(
                    f"Failed to render page {page_number}: {e}", page_number=page_number
                ) from e

        return RenderedFrame(
            page_number=page_number,
            width=pix.width,
            height=pix.height,
            stride=pix.stride,
            samples=bytes(pix.samples),
            scale=scale,
        )

    def close(self):
        """Closes the document. Safe to call more than once."""
        with self._lock:
            if self._closed:
                return
            self._doc.close()
            self._closed = True

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


def open_document(reference: DocumentReference) -> tuple[PDFDocument, int]:
    """Opens a document and reports its page count."""
    document = PDFDocument(reference)
    return document, document.page_count
