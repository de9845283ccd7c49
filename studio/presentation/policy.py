"""
Slide-count policy for generated decks.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional

from .errors import InvalidInput

logger = logging.getLogger(__name__)

MIN_SLIDES = 1
MAX_SLIDES = 10
DEFAULT_MAX_SLIDES = MAX_SLIDES

EVENT_SLIDE_LIMIT_EXCEEDED = "slide_limit_exceeded"
EVENT_SLIDE_MINIMUM_ENFORCED = "slide_minimum_enforced"

EventSink = Callable[[Dict[str, Any]], None]


def log_event(event: Dict[str, Any]) -> None:
    logger.warning(f"[PresentationAdapter] {event.get('event')}: {event}")


def coerce_slide_count(value: Any) -> int:
    if value is None:
        return DEFAULT_MAX_SLIDES
    if isinstance(value, bool):
        raise InvalidInput(f"maxSlides must be an integer, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        raise InvalidInput(f"maxSlides must be an integer, got {value!r}")


def enforce_slide_limit(requested: Any, on_event: Optional[EventSink] = None) -> int:
    """Clamp the requested slide count into [MIN_SLIDES, MAX_SLIDES]."""
    sink = on_event or log_event
    count = coerce_slide_count(requested)

    if count > MAX_SLIDES:
        sink({"event": EVENT_SLIDE_LIMIT_EXCEEDED, "requested": count, "enforced": MAX_SLIDES})
        return MAX_SLIDES
    if count < MIN_SLIDES:
        sink({"event": EVENT_SLIDE_MINIMUM_ENFORCED, "requested": count, "enforced": MIN_SLIDES})
        return MIN_SLIDES
    return count
