import io

import fitz  # PyMuPDF
import pytest
from rich.console import Console

import pdf_to_png


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """Run the test from an empty directory so relative paths stay dot-free."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def make_pdf(workdir):
    def _make(name="report.pdf", pages=3, size=100):
        doc = fitz.open()
        for i in range(pages):
            page = doc.new_page(width=size, height=size)
            page.insert_text((10, 50), f"Page {i + 1}")
        doc.save(name)
        doc.close()
        return name

    return _make


@pytest.fixture
def output(monkeypatch):
    """Capture everything the converter prints."""
    buffer = io.StringIO()
    test_console = Console(file=buffer, width=300, color_system=None, force_terminal=False)
    monkeypatch.setattr(pdf_to_png, "console", test_console)
    return buffer
