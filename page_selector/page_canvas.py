from typing import Optional

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtGui import QColor, QImage, QPainter
from PyQt6.QtWidgets import QSizePolicy, QWidget

from page_selector.pdf_document import RenderedFrame


class PageCanvas(QWidget):
    """
    Display surface for one rendered page. The widget takes the natural size
    of the frame; scrolling the mouse wheel asks for the next or previous page.
    """
    page_step_requested = pyqtSignal(int)  # +1 next page, -1 previous page

    def __init__(self, parent=None):
        super().__init__(parent)
        self.image: Optional[QImage] = None
        self.page_number: Optional[int] = None
        self.setSizePolicy(QSizePolicy.Policy.Fixed, QSizePolicy.Policy.Fixed)
        self.setMinimumSize(200, 260)

    def prepare_frame(self, width: int, height: int):
        self.setFixedSize(width, height)

    def draw_frame(self, frame: RenderedFrame):
        # copy() detaches the QImage from the sample buffer
        self.image = QImage(
            frame.samples, frame.width, frame.height, frame.stride, QImage.Format.Format_RGB888
        ).copy()
        self.page_number = frame.page_number
        self.update()

    def clear(self):
        self.image = None
        self.page_number = None
        self.update()

    def paintEvent(self, event):
        painter = QPainter(self)
        if self.image is None:
            painter.setPen(QColor("#a0a0a0"))
            painter.drawText(self.rect(), Qt.AlignmentFlag.AlignCenter, "No page to display")
            return
        painter.drawImage(0, 0, self.image)

    def wheelEvent(self, event):
        angle = event.angleDelta().y()
        if angle > 0:
            self.page_step_requested.emit(-1)
        elif angle < 0:
            self.page_step_requested.emit(1)
        event.accept()
