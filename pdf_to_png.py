#!/usr/bin/env python3
"""
PDF to PNG Converter
====================

This script converts every page of a single PDF file into a separate PNG image.
It asks for the PDF path interactively, renders each page at 500 DPI and saves
the images into a folder created next to the source file.

Requirements:
    - pymupdf (fitz): For PDF rendering and PNG encoding
    - rich: For colored console output

Usage:
    python pdf_to_png.py

    The script will:
    - Ask for a PDF path (quotes around the path are accepted)
    - Create "<name>-Images" beside the PDF
    - Save one "<name>_Page<N>.png" per page
"""

from pathlib import Path
from typing import Any, Dict, Optional, TextIO, Tuple

import fitz  # PyMuPDF
from rich.console import Console

from console_helpers import print_styled, prompt_line, strip_surrounding_quotes


# ============================================================================
# Configuration
# ============================================================================

# Initialize rich console for colored output
console = Console()

# Output resolution, used for both axes
DPI = 500

# Standard PDF resolution is 72 DPI, zoom = DPI / 72
PDF_BASE_DPI = 72

PDF_EXTENSION = ".pdf"
OUTPUT_DIR_SUFFIX = "-Images"
PAGE_FILENAME_TEMPLATE = "{stem}_Page{number}.png"

PATH_PROMPT = "Enter PDF file path:"
RETRY_PROMPT = "Enter PDF path:"


# ============================================================================
# Path Utilities
# ============================================================================

def is_valid_pdf_path(path: Optional[str]) -> bool:
    """
    Check that a path points to an existing entry with a ".pdf" extension.

    The extension check is case-insensitive, so "REPORT.PDF" is accepted.
    """
    if not path:
        return False

    candidate = Path(path)
    return candidate.exists() and candidate.suffix.lower() == PDF_EXTENSION


def output_dir_for(pdf_path: str) -> Path:
    """
    Derive the output directory from the PDF path.

    Everything before the first "." of the path is kept and "-Images" is
    appended, so "v1.2.final.pdf" exports to "v1-Images".

    Args:
        pdf_path: Path to the source PDF as entered by the user

    Returns:
        Path of the output directory
    """
    return Path(pdf_path.split(".")[0] + OUTPUT_DIR_SUFFIX)


def page_filename(stem: str, page_number: int) -> str:
    """Name of the PNG written for a 1-based page number."""
    return PAGE_FILENAME_TEMPLATE.format(stem=stem, number=page_number)


# ============================================================================
# PDF Engine Wrappers
# ============================================================================

def open_document(pdf_path: str) -> Tuple[Optional[fitz.Document], Optional[str]]:
    """
    Open a PDF document with PyMuPDF.

    Args:
        pdf_path: Path to the PDF file

    Returns:
        Tuple of (document or None, error message or None)
    """
    try:
        doc = fitz.open(pdf_path)
    except Exception as e:
        return None, str(e)

    # Encrypted files open fine but no page can be rendered without a password
    if doc.needs_pass:
        doc.close()
        return None, "document is password protected"

    return doc, None


def render_page(
    doc: fitz.Document,
    page_index: int,
    dpi: int = DPI,
) -> Tuple[Optional[fitz.Pixmap], Optional[str]]:
    """
    Render one page to a pixmap at the given resolution.

    Args:
        doc: Opened PDF document
        page_index: Zero-based page index
        dpi: Resolution for both axes

    Returns:
        Tuple of (pixmap or None, error message or None)
    """
    try:
        zoom = dpi / PDF_BASE_DPI
        mat = fitz.Matrix(zoom, zoom)
        pix = doc[page_index].get_pixmap(matrix=mat)
        return pix, None
    except Exception as e:
        return None, str(e)


def encode_png(pix: fitz.Pixmap) -> Tuple[Optional[bytes], Optional[str]]:
    try:
        return pix.tobytes("png"), None
    except Exception as e:
        return None, str(e)


def write_image(data: bytes, output_path: Path) -> Optional[str]:
    """Write encoded image bytes, replacing any existing file. Returns an error message on failure."""
    try:
        output_path.write_bytes(data)
        return None
    except OSError as e:
        return str(e)


def ensure_output_dir(output_dir: Path) -> Tuple[bool, Optional[str]]:
    """
    Create the output directory and any missing parents.

    An existing directory is reused as is.

    Returns:
        Tuple of (success: bool, error message or None)
    """
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
        return True, None
    except OSError as e:
        return False, str(e)


# ============================================================================
# Page Conversion
# ============================================================================

def convert_page(
    doc: fitz.Document,
    page_index: int,
    output_dir: Path,
    stem: str,
    dpi: int = DPI,
) -> Tuple[bool, str]:
    """
    Render, encode and save a single page.

    This function:
    1. Renders the page at the requested DPI
    2. Encodes the pixmap as PNG
    3. Writes the bytes to "<stem>_Page<N>.png" in the output directory

    The pixmap only lives for the duration of this call.

    Args:
        doc: Opened PDF document
        page_index: Zero-based page index
        output_dir: Directory where the PNG is written
        stem: Source file name without extension
        dpi: Rendering resolution

    Returns:
        Tuple of (success: bool, file name on success or error message on failure)
    """
    filename = page_filename(stem, page_index + 1)

    pix, error = render_page(doc, page_index, dpi)
    if pix is None:
        return False, error

    try:
        data, error = encode_png(pix)
        if data is None:
            return False, error

        error = write_image(data, output_dir / filename)
        if error is not None:
            return False, error

        return True, filename
    finally:
        del pix


# ============================================================================
# Interactive Steps
# ============================================================================

def acquire_pdf_path(prompt: str, stream: Optional[TextIO] = None) -> str:
    """
    Keep prompting until the user enters an existing ".pdf" path.

    Surrounding double quotes are stripped before the check. Once a valid
    path is entered the screen is cleared and the path is echoed back.

    Args:
        prompt: Prompt shown for every attempt
        stream: Optional input stream (defaults to the terminal)

    Returns:
        The validated path
    """
    pdf_path = strip_surrounding_quotes(prompt_line(console, prompt, stream))

    while not is_valid_pdf_path(pdf_path):
        print_styled(
            console,
            "⚠️ The file does not exist or is not a PDF. Please enter a valid PDF file path.",
            "yellow",
        )
        console.print()
        pdf_path = strip_surrounding_quotes(prompt_line(console, prompt, stream))

    console.clear()
    console.print("📄 Source file: ")
    print_styled(console, pdf_path, "cyan")
    console.print()

    return pdf_path


def load_document(pdf_path: str, stream: Optional[TextIO] = None) -> Tuple[fitz.Document, str]:
    """
    Open the PDF, asking for another path each time loading fails.

    A path entered after a failure goes through the same validation as the
    first one before loading is retried.

    Returns:
        Tuple of (opened document, path it was loaded from)
    """
    while True:
        doc, error = open_document(pdf_path)
        if doc is not None:
            return doc, pdf_path

        print_styled(console, "⚠️ Invalid file path or file does not exist. Please try again.", "yellow")
        console.print(error, style="dim", markup=False, highlight=False)
        pdf_path = acquire_pdf_path(RETRY_PROMPT, stream)


# ============================================================================
# Main Function
# ============================================================================

def run(stream: Optional[TextIO] = None, dpi: int = DPI) -> Dict[str, Any]:
    """
    Run one interactive conversion from prompt to completion banner.

    This orchestrates the whole conversion:
    1. Ask for and validate the PDF path
    2. Load the document (re-prompting on failure)
    3. Create the output directory (fatal on failure)
    4. Convert each page, reporting success or failure per page
    5. Display the completion banner and summary

    Args:
        stream: Optional input stream (defaults to the terminal)
        dpi: Rendering resolution

    Returns:
        Dictionary with run statistics
    """
    console.clear()
    console.print()

    # Step 1: Ask for the PDF path
    pdf_path = acquire_pdf_path(PATH_PROMPT, stream)

    # Step 2: Load the document, closed when the block exits on every path
    doc, pdf_path = load_document(pdf_path, stream)

    with doc:
        stem = Path(pdf_path).stem
        output_dir = output_dir_for(pdf_path)

        console.print("📁 Export to folder: ")
        print_styled(console, str(output_dir), "cyan")
        console.print()

        # Step 3: Create the output directory
        created, error = ensure_output_dir(output_dir)
        if not created:
            print_styled(console, f"Failed to create directory {output_dir}: {error}", "red")
            return {
                "pdf_path": pdf_path,
                "output_dir": output_dir,
                "success": False,
                "pages_processed": 0,
                "pages_total": len(doc),
            }

        # Step 4: Convert each page in order
        num_pages = len(doc)
        pages_processed = 0

        for page_idx in range(num_pages):
            page_number = page_idx + 1
            success, detail = convert_page(doc, page_idx, output_dir, stem, dpi)

            if success:
                pages_processed += 1
                print_styled(console, f"Page {page_number} saved as ", "green", end="")
                console.print(detail, markup=False, highlight=False)
            else:
                print_styled(console, f"Failed to save Page {page_number} as an image: {detail}", "red")

        # Step 5: Display completion banner and summary
        console.print()
        print_styled(console, "✅ PDF pages extracted and saved as PNG images.", "green")
        console.print(f"  • Pages converted: {pages_processed}/{num_pages}", highlight=False)
        console.print(f"  • Output directory: {output_dir}", markup=False, highlight=False)
        console.print()

        return {
            "pdf_path": pdf_path,
            "output_dir": output_dir,
            "success": pages_processed == num_pages,
            "pages_processed": pages_processed,
            "pages_total": num_pages,
        }


def main():
    """Console entry point. Ctrl+C or end of input at a prompt ends the run quietly."""
    try:
        run()
    except (KeyboardInterrupt, EOFError):
        console.print()
        print_styled(console, "Cancelled.", "yellow")


if __name__ == "__main__":
    main()
