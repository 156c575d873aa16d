"""Shared fixtures for the page selector test suite."""

from __future__ import annotations

import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import fitz
import pytest
from PyQt6.QtCore import QSettings

from page_selector.core.config_manager import ConfigManager
from page_selector.pdf_document import PDFDocument

PAGE_WIDTH = 200
PAGE_HEIGHT = 300


def make_pdf_bytes(page_count: int) -> bytes:
    """Build a small real PDF with one line of text per page."""
    doc = fitz.open()
    for number in range(1, page_count + 1):
        page = doc.new_page(width=PAGE_WIDTH, height=PAGE_HEIGHT)
        page.insert_text((20, 40), f"Page {number}")
    data = doc.tobytes()
    doc.close()
    return data


class FakeSurface:
    """Records what the renderer does to it, in order."""

    def __init__(self):
        self.events: list[tuple] = []

    def prepare_frame(self, width: int, height: int) -> None:
        self.events.append(("prepare", width, height))

    def draw_frame(self, frame) -> None:
        self.events.append(("draw", frame.page_number))

    @property
    def drawn_pages(self) -> list[int]:
        return [event[1] for event in self.events if event[0] == "draw"]


@pytest.fixture
def pdf_bytes() -> bytes:
    return make_pdf_bytes(10)


@pytest.fixture
def pdf_file(tmp_path, pdf_bytes):
    path = tmp_path / "paper.pdf"
    path.write_bytes(pdf_bytes)
    return path


@pytest.fixture
def pdf_document(pdf_file):
    document = PDFDocument(pdf_file)
    yield document
    document.close()


@pytest.fixture
def surface() -> FakeSurface:
    return FakeSurface()


@pytest.fixture
def settings(tmp_path, qapp):
    return QSettings(str(tmp_path / "settings.ini"), QSettings.Format.IniFormat)


@pytest.fixture
def config_manager(settings) -> ConfigManager:
    return ConfigManager(settings=settings)
