"""
Nougat Page Selector

A PyQt6 tool for picking a contiguous page range from a PDF, previewing the
pages inside it and sending the range to a local Nougat OCR server.
"""

import argparse
import logging
import os
import sys

from PyQt6.QtWidgets import QApplication, QFileDialog, QMessageBox

import config
from page_selector.core.config_manager import ConfigManager
from page_selector.page_range_dialog import PageRangeDialog

logger = logging.getLogger(__name__)


def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.FileHandler(config.LOG_FILE),
            logging.StreamHandler()
        ]
    )


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="nougat-page-selector",
        description="Select a page range from a PDF and send it to a Nougat server.",
    )
    parser.add_argument("pdf", nargs="?", help="PDF file to open (asks when omitted)")
    parser.add_argument("--endpoint", help=f"Nougat predict URL (default: {config.NOUGAT_ENDPOINT})")
    parser.add_argument("--scale", type=float, help=f"Page render scale (default: {config.RENDER_SCALE})")
    parser.add_argument("--log-level", default=config.LOG_LEVEL, help="Logging level")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging(args.log_level)

    app = QApplication.instance() or QApplication(sys.argv[:1])
    app.setApplicationName(config.APP_NAME)

    config_manager = ConfigManager()
    if args.endpoint:
        config_manager.set("submission.endpoint", args.endpoint)
    if args.scale:
        config_manager.set("render.scale", args.scale)

    pdf_path = args.pdf
    if not pdf_path:
        start_dir = config_manager.get("ui.last_directory", "")
        pdf_path, _ = QFileDialog.getOpenFileName(None, "Open PDF", start_dir, "PDF Files (*.pdf)")
        if not pdf_path:
            logger.info("No document selected, exiting")
            return 0
        config_manager.set("ui.last_directory", os.path.dirname(pdf_path), persist=True)

    dialog = PageRangeDialog(config_manager)

    def _on_error(message: str) -> None:
        QMessageBox.critical(dialog, "Error", message)
        dialog.reject()

    dialog.error_occurred.connect(_on_error)
    dialog.selection_confirmed.connect(
        lambda start, end: logger.info(f"Selection confirmed: pages {start}-{end}")
    )
    dialog.open_document(pdf_path)
    dialog.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
