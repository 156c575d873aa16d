import logging
from typing import Optional

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtWidgets import (
    QDialog, QHBoxLayout, QLabel, QLineEdit, QPushButton, QScrollArea, QVBoxLayout
)

from page_selector.controllers.selection_controller import SelectionController
from page_selector.core.config_manager import ConfigManager
from page_selector.core.range_controller import RangeBound, RangeState
from page_selector.page_canvas import PageCanvas
from page_selector.pdf_document import DocumentReference
from page_selector.submission_service import SubmissionResult

logger = logging.getLogger(__name__)

MAX_PAGE_DIGITS = 5


class PageRangeDialog(QDialog):
    """
    Modal viewer for picking a contiguous page range and sending it to Nougat.

    All displayed values are re-derived from RangeController.state_changed;
    the dialog keeps no page state of its own. Text fields commit when they
    lose focus or Enter is pressed.
    """
    # Emits (start_page, end_page) when the user confirms the selection
    selection_confirmed = pyqtSignal(int, int)
    # Emits (start_page, end_page) on every committed range change
    page_range_changed = pyqtSignal(int, int)
    error_occurred = pyqtSignal(str)

    def __init__(self, config_manager: Optional[ConfigManager] = None,
                 controller: Optional[SelectionController] = None, parent=None):
        super().__init__(parent)
        self.config_manager = config_manager or ConfigManager()
        self.setWindowTitle(self.config_manager.get("ui.window_title", "Select pages"))
        self.resize(
            int(self.config_manager.get("ui.default_width", 900)),
            int(self.config_manager.get("ui.default_height", 1000)),
        )

        self.canvas = PageCanvas()
        self.controller = controller or SelectionController.from_config(
            self.config_manager, self.canvas, parent=self
        )

        self._setup_ui()
        self._connect_signals()
        self._refresh(self.controller.range_controller.state)

    def _setup_ui(self):
        layout = QVBoxLayout(self)

        # -- Range row --
        range_row = QHBoxLayout()
        self.start_edit = self._page_field()
        self.end_edit = self._page_field()
        self.selected_label = QLabel("")
        range_row.addWidget(QLabel("From page"))
        range_row.addWidget(self.start_edit)
        range_row.addWidget(QLabel("to"))
        range_row.addWidget(self.end_edit)
        range_row.addWidget(self.selected_label)
        range_row.addStretch(1)
        layout.addLayout(range_row)

        # -- Page view --
        self.scroll_area = QScrollArea()
        self.scroll_area.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.scroll_area.setWidget(self.canvas)
        layout.addWidget(self.scroll_area, 1)

        # -- Navigation row --
        nav_row = QHBoxLayout()
        self.prev_button = QPushButton("Previous")
        self.next_button = QPushButton("Next")
        self.current_page_edit = self._page_field()
        self.page_count_label = QLabel("")
        nav_row.addWidget(self.prev_button)
        nav_row.addWidget(QLabel("Page"))
        nav_row.addWidget(self.current_page_edit)
        nav_row.addWidget(self.page_count_label)
        nav_row.addWidget(self.next_button)
        nav_row.addStretch(1)
        self.confirm_button = QPushButton(self.config_manager.get("ui.confirm_label", "Confirm"))
        nav_row.addWidget(self.confirm_button)
        layout.addLayout(nav_row)
        # Enter in a page field commits the field only.
        for button in (self.prev_button, self.next_button, self.confirm_button):
            button.setAutoDefault(False)

        self.status_label = QLabel("")
        layout.addWidget(self.status_label)

    def _page_field(self) -> QLineEdit:
        # Empty and non-numeric text must still commit; the controller rejects it.
        field = QLineEdit()
        field.setMaxLength(MAX_PAGE_DIGITS)
        field.setMaximumWidth(70)
        return field

    def _connect_signals(self):
        range_controller = self.controller.range_controller
        range_controller.state_changed.connect(self._refresh)

        self.start_edit.editingFinished.connect(
            lambda: self._commit_range_bound(RangeBound.START, self.start_edit)
        )
        self.end_edit.editingFinished.connect(
            lambda: self._commit_range_bound(RangeBound.END, self.end_edit)
        )
        self.current_page_edit.editingFinished.connect(self._commit_current_page)
        self.prev_button.clicked.connect(range_controller.retreat)
        self.next_button.clicked.connect(range_controller.advance)
        self.canvas.page_step_requested.connect(self._step_page)
        self.confirm_button.clicked.connect(self.confirm)

        self.controller.page_range_changed.connect(self.page_range_changed)
        self.controller.selection_confirmed.connect(self.selection_confirmed)
        self.controller.document_loaded.connect(self._on_document_loaded)
        self.controller.document_load_failed.connect(self._on_document_load_failed)
        self.controller.submission_finished.connect(self._on_submission_finished)
        self.controller.renderer.render_failed.connect(
            lambda page, _message: self.status_label.setText(f"Page {page} could not be displayed")
        )

    def open_document(self, reference: DocumentReference):
        self.status_label.setText("Loading document...")
        self.controller.open_document(reference)

    def confirm(self):
        payload = self.controller.confirm()
        if payload is not None:
            self.status_label.setText(f"Sending pages {payload.start}-{payload.stop}...")

    def _commit_range_bound(self, bound: RangeBound, field: QLineEdit):
        range_controller = self.controller.range_controller
        range_controller.set_range_bound(bound, field.text())
        # A reset that lands on the current range emits nothing.
        self._refresh(range_controller.state)

    def _commit_current_page(self):
        range_controller = self.controller.range_controller
        range_controller.set_current_page(self.current_page_edit.text())
        range_controller.commit_current_page()
        # Unparseable text leaves the state untouched; put the real value back.
        self._refresh(range_controller.state)

    def _step_page(self, step: int):
        if step > 0:
            self.controller.range_controller.advance()
        else:
            self.controller.range_controller.retreat()

    def _refresh(self, state: RangeState):
        has_pages = not state.is_empty
        for field, value in (
            (self.start_edit, state.start),
            (self.end_edit, state.end),
            (self.current_page_edit, state.current_page),
        ):
            field.blockSignals(True)
            field.setText(str(value) if has_pages else "")
            field.setEnabled(has_pages)
            field.blockSignals(False)

        self.page_count_label.setText(f"of {state.page_count}")
        self.selected_label.setText(f"({state.selected_page_count} pages selected)")
        self.prev_button.setEnabled(has_pages and state.current_page > state.start)
        self.next_button.setEnabled(has_pages and state.current_page < state.end)
        self.confirm_button.setEnabled(has_pages)
        if not has_pages:
            self.canvas.clear()

    def _on_document_loaded(self, name: str, page_count: int):
        self.setWindowTitle(f"{name} - {self.config_manager.get('app.name', 'Select pages')}")
        if page_count == 0:
            self.status_label.setText("The document has no pages")
        else:
            self.status_label.setText("")

    def _on_document_load_failed(self, error_message: str):
        self.status_label.setText("The document could not be opened")
        self.error_occurred.emit(f"Failed to load PDF: {error_message}")

    def _on_submission_finished(self, result: SubmissionResult):
        if result.ok:
            self.status_label.setText(f"Pages {result.payload_start}-{result.payload_stop} sent to Nougat")
        else:
            self.status_label.setText(f"Sending failed: {result.error}")

    def done(self, result):
        # Accept, reject, Escape and the window close button all end up here.
        self.controller.close()
        super().done(result)
