"""
OCR functionality for turning receipt images and PDFs into text.
"""

import io
from pathlib import Path

from .utils import IMAGE_EXTS, PDF_EXTS


class OCRUnavailableError(RuntimeError):
    """The Tesseract binary could not be found."""


def ocr_image(img) -> str:
    """OCR a PIL image to text."""
    import pytesseract

    # Improve OCR: convert to grayscale
    if img.mode != "L":
        img = img.convert("L")
    try:
        return pytesseract.image_to_string(img)
    except pytesseract.TesseractNotFoundError as e:
        raise OCRUnavailableError(str(e)) from e
    except pytesseract.TesseractError as e:
        print(f"[WARN] Tesseract failed: {e}")
        return ""


def ocr_image_to_text(img_path: Path) -> str:
    """OCR an image file to text."""
    from PIL import Image

    with Image.open(img_path) as img:
        return ocr_image(img)


def pdf_to_text(pdf_path: Path) -> str:
    """
    Extract text from a PDF using PyMuPDF.

    Pages without a text layer are rasterized and run through Tesseract.
    """
    import fitz  # pymupdf
    from PIL import Image

    chunks = []
    with fitz.open(pdf_path.as_posix()) as doc:
        for page in doc:
            text = page.get_text()
            if not text.strip():
                pix = page.get_pixmap(matrix=fitz.Matrix(2, 2), alpha=False)
                with Image.open(io.BytesIO(pix.tobytes("png"))) as img:
                    text = ocr_image(img)
            chunks.append(text)
    return "\n".join(chunks)


def extract_text(path: Path) -> str:
    """
    OCR a receipt file (image or PDF) to plain text.

    This is a single blocking call; the parsers take over from its result.
    """
    ext = path.suffix.lower()
    if ext in IMAGE_EXTS:
        return ocr_image_to_text(path)
    if ext in PDF_EXTS:
        return pdf_to_text(path)
    raise ValueError(f"Unsupported file type: {path}")
