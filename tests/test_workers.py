"""
Unit tests for the QThread workers: DocumentLoadWorker and SubmissionWorker.
run() is called directly so signals are delivered synchronously.
"""

import pytest

from page_selector.document_loader import DocumentLoadWorker
from page_selector.pdf_document import PDFDocument
from page_selector.submission_service import SubmissionPayload, SubmissionResult
from page_selector.submission_worker import SubmissionWorker

PAYLOAD = SubmissionPayload(file_bytes=b"%PDF", filename="paper", start=2, stop=4)


class DummyServiceSuccess:
    def send(self, payload):
        return SubmissionResult(payload.start, payload.stop, ok=True, status_code=200, body="ok")


class DummyServiceError:
    def send(self, payload):
        raise RuntimeError("failure occurred")


def test_load_worker_emits_document(qtbot, pdf_file):
    worker = DocumentLoadWorker(str(pdf_file))

    with qtbot.waitSignal(worker.document_loaded, timeout=1000) as blocker:
        worker.run()

    document = blocker.args[0]
    try:
        assert isinstance(document, PDFDocument)
        assert document.page_count == 10
    finally:
        document.close()


def test_load_worker_accepts_bytes(qtbot, pdf_bytes):
    worker = DocumentLoadWorker(pdf_bytes)

    with qtbot.waitSignal(worker.document_loaded, timeout=1000) as blocker:
        worker.run()

    blocker.args[0].close()


def test_load_worker_reports_unreadable_document(qtbot, tmp_path):
    broken = tmp_path / "broken.pdf"
    broken.write_bytes(b"not a pdf at all")
    worker = DocumentLoadWorker(str(broken))

    with qtbot.waitSignal(worker.load_failed, timeout=1000) as blocker:
        worker.run()

    assert "Failed to load PDF" in blocker.args[0]


@pytest.mark.parametrize("reference", ["", b"", None])
def test_load_worker_requires_reference(qapp, reference):
    with pytest.raises(ValueError):
        DocumentLoadWorker(reference)


def test_submission_worker_emits_result(qtbot):
    worker = SubmissionWorker(DummyServiceSuccess(), PAYLOAD)

    with qtbot.waitSignal(worker.submission_finished, timeout=1000) as blocker:
        worker.run()

    result = blocker.args[0]
    assert result.ok is True
    assert (result.payload_start, result.payload_stop) == (2, 4)


def test_submission_worker_never_raises(qtbot, caplog):
    worker = SubmissionWorker(DummyServiceError(), PAYLOAD)

    with qtbot.waitSignal(worker.submission_finished, timeout=1000) as blocker:
        worker.run()

    result = blocker.args[0]
    assert result.ok is False
    assert result.error.startswith("RuntimeError: failure occurred")
    assert "Unexpected submission error" in caplog.text


def test_submission_worker_requires_service_and_payload(qapp):
    with pytest.raises(ValueError):
        SubmissionWorker(None, PAYLOAD)
    with pytest.raises(ValueError):
        SubmissionWorker(DummyServiceSuccess(), None)
