"""
Page Renderer

Draws single pages of the open document onto display surfaces. Each request
gets a token from a monotonically increasing counter and only the most
recently issued token for a surface may draw on it, so a slow render of an
old page can never overwrite a newer one.
"""

import logging
from typing import Any, Dict, Optional, Protocol

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

import config
from page_selector.core.range_controller import RangeState
from page_selector.pdf_document import PDFDocument, RenderedFrame
from page_selector.render_worker import PageRenderWorker

logger = logging.getLogger(__name__)

DEFAULT_RENDER_SCALE = config.RENDER_SCALE


class RenderSurface(Protocol):
    def prepare_frame(self, width: int, height: int) -> None: ...

    def draw_frame(self, frame: RenderedFrame) -> None: ...


def can_render(page_number: Any, state: RangeState) -> bool:
    """Guard applied before a render is issued."""
    return not state.is_empty and state.contains(page_number)


class PageRenderer(QObject):
    """
    {
        "name": "PageRenderer",
        "version": "1.0.0",
        "description": "Asynchronous single-page rendering with stale-result suppression.",
        "dependencies": ["PageRenderWorker", "PDFDocument"],
        "interface": {
            "inputs": ["document", "page_number", "surface", "state"],
            "outputs": "page_rendered / render_failed signals"
        }
    }
    Completions arrive on the thread that owns the renderer (the GUI thread);
    surfaces are only ever touched from there.
    """

    page_rendered = pyqtSignal(int)  # page number drawn
    render_failed = pyqtSignal(int, str)  # page number, error message

    def __init__(self, scale: float = DEFAULT_RENDER_SCALE, parent=None):
        super().__init__(parent)
        if scale <= 0:
            raise ValueError(f"Render scale must be positive, got {scale}")
        self.scale = scale
        self._last_token = 0
        self._latest: Dict[int, int] = {}  # surface key -> newest token
        self._surfaces: Dict[int, RenderSurface] = {}
        self._pending: Dict[int, int] = {}  # token -> surface key
        self._workers: Dict[int, PageRenderWorker] = {}

    def latest_token(self, surface: RenderSurface) -> Optional[int]:
        return self._latest.get(id(surface))

    def request_render(
        self,
        document: Optional[PDFDocument],
        page_number: int,
        surface: RenderSurface,
        state: Optional[RangeState] = None,
    ) -> Optional[int]:
        """
        Start rendering a page onto a surface. Returns immediately.

        Args:
            document: The open document
            page_number: 1-based page to render
            surface: Where the frame is drawn
            state: Range state used as the guard; requests outside it are dropped

        Returns:
            The render token, or None if no render was issued.
        """
        if state is not None and not can_render(page_number, state):
            logger.debug(f"Not rendering page {page_number!r} for state {state}")
            return None
        if document is None or document.closed:
            logger.debug("Not rendering: no open document")
            return None

        self._last_token += 1
        token = self._last_token
        key = id(surface)
        self._latest[key] = token
        self._surfaces[key] = surface
        self._pending[token] = key

        worker = PageRenderWorker(document, page_number, self.scale, token)
        worker.frame_ready.connect(self._on_frame_ready)
        worker.render_failed.connect(self._on_render_failed)
        worker.finished.connect(self._on_worker_finished)
        self._workers[token] = worker
        worker.start()

        logger.debug(f"Render {token} issued for page {page_number}")
        return token

    def release(self, surface: RenderSurface) -> None:
        """Forget a surface. Renders still in flight for it complete as no-ops."""
        key = id(surface)
        self._latest.pop(key, None)
        self._surfaces.pop(key, None)

    def shutdown(self, timeout_ms: int = 2000) -> None:
        """Release every surface and wait for in-flight workers."""
        self._latest.clear()
        self._surfaces.clear()
        self._pending.clear()
        for token, worker in list(self._workers.items()):
            if worker.wait(timeout_ms):
                del self._workers[token]
            else:
                # Keep the reference; _on_worker_finished drops it later.
                logger.warning(f"Render {token} still running after {timeout_ms} ms")

    def _take_current(self, token: int) -> Optional[RenderSurface]:
        """Pop a finished token; return its surface only if the token is still the newest."""
        key = self._pending.pop(token, None)
        if key is None or self._latest.get(key) != token:
            logger.debug(f"Discarding stale render {token}")
            return None
        return self._surfaces.get(key)

    @pyqtSlot(int, object)
    def _on_frame_ready(self, token: int, frame: RenderedFrame) -> None:
        surface = self._take_current(token)
        if surface is None:
            return
        try:
            # Size the surface first so the draw is never clipped.
            surface.prepare_frame(frame.width, frame.height)
            surface.draw_frame(frame)
        except Exception as e:
            logger.error(f"Failed to draw page {frame.page_number}: {e}")
            self.render_failed.emit(frame.page_number, str(e))
            return
        self.page_rendered.emit(frame.page_number)

    @pyqtSlot(int, int, str)
    def _on_render_failed(self, token: int, page_number: int, message: str) -> None:
        if self._take_current(token) is None:
            return
        logger.debug(f"Render {token} for page {page_number} failed")
        self.render_failed.emit(page_number, message)

    @pyqtSlot()
    def _on_worker_finished(self) -> None:
        worker = self.sender()
        if worker is None:
            return
        # finished fires just before the thread exits; let it exit before the
        # last reference goes away.
        worker.wait()
        self._workers.pop(worker.token, None)
