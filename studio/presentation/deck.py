"""
Inspection of downloaded PPTX decks.
"""

from __future__ import annotations

import io
import logging
import zipfile
from typing import Any, Dict, Optional

from pptx import Presentation
from pptx.exc import PackageNotFoundError

logger = logging.getLogger(__name__)

ZIP_MAGIC = b"PK\x03\x04"


def inspect_deck(data: bytes) -> Optional[Dict[str, Any]]:
    """Slide count and titles of a PPTX payload, or None when it is not a readable deck."""
    if not data or data[:4] != ZIP_MAGIC:
        return None
    try:
        prs = Presentation(io.BytesIO(data))
    except (PackageNotFoundError, zipfile.BadZipFile, KeyError, ValueError) as e:
        logger.warning(f"[Deck] Could not open PPTX for inspection: {e}")
        return None

    titles = []
    for i, slide in enumerate(prs.slides):
        title_shape = slide.shapes.title
        title = title_shape.text.strip() if title_shape is not None else ""
        titles.append(title or f"Slide {i + 1}")
    return {"slideCount": len(titles), "slideTitles": titles}
