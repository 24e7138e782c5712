"""
OCR service.
Extracts raw text from uploaded screenshots and photos with Tesseract.
"""

import logging
from io import BytesIO
from typing import Optional

import pytesseract
from PIL import Image, UnidentifiedImageError

from scamguard.config import settings

logger = logging.getLogger(__name__)

if settings.tesseract_cmd:
    pytesseract.pytesseract.tesseract_cmd = settings.tesseract_cmd


class OCRError(RuntimeError):
    """The image could not be read or the OCR engine failed."""


def validate_image_upload(content_type: Optional[str], size: int) -> Optional[str]:
    """
    Check an upload against the accepted types and size limit.

    Returns an error message, or None when the upload is acceptable.
    """
    if (content_type or "").lower() not in settings.accepted_image_types_list:
        return "Unsupported file type. Please upload a PNG, JPG, WebP, BMP, or GIF image."
    if size > settings.max_upload_bytes:
        return f"File too large. Maximum size is {settings.max_upload_megabytes} MB."
    return None


def _prepare_image(image: Image.Image) -> Image.Image:
    # Animated GIFs: only the first frame is scanned
    if getattr(image, "is_animated", False):
        image.seek(0)
    if image.mode not in ("RGB", "L"):
        image = image.convert("RGB")
    return image


def extract_text_from_image(image_bytes: bytes, language: Optional[str] = None) -> str:
    """
    Run OCR over an image and return the recognised text, stripped.

    Raises:
        OCRError: the bytes are not a readable image, or Tesseract failed.
    """
    lang = language or settings.ocr_language

    try:
        with Image.open(BytesIO(image_bytes)) as image:
            image.load()
            prepared = _prepare_image(image)
            text = pytesseract.image_to_string(prepared, lang=lang)
    except UnidentifiedImageError as e:
        raise OCRError("Uploaded file is not a readable image.") from e
    except pytesseract.TesseractNotFoundError as e:
        logger.error("Tesseract binary not found; set TESSERACT_CMD")
        raise OCRError("OCR engine is not installed.") from e
    except (pytesseract.TesseractError, OSError) as e:
        logger.warning(f"OCR failed: {e}")
        raise OCRError(f"OCR failed: {e}") from e

    text = (text or "").strip()
    logger.debug(f"OCR extracted {len(text)} characters")
    return text
