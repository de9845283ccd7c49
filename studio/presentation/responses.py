"""
Classification of Gamma responses into a closed set of shapes.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union

PPTX_MIME = "application/vnd.openxmlformats-officedocument.presentationml.presentation"
PDF_MIME = "application/pdf"

DIRECT_URL_KEYS = ("url", "presentationUrl", "viewUrl", "gammaUrl")
JOB_ID_KEYS = ("generationId", "jobId")
DECK_ID_KEYS = ("deckId", "gammaId", "id")

FILE_CONTENT_MARKERS = (
    "pdf",
    "officedocument",
    "presentation",
    "powerpoint",
    "octet-stream",
)


@dataclass(frozen=True)
class DirectUrl:
    url: str
    payload: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class DeckExport:
    deck_id: str
    payload: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class FileBytes:
    data: bytes
    content_type: str

    def describe(self) -> Dict[str, Any]:
        return {"type": "file", "contentType": self.content_type, "size": len(self.data)}


@dataclass(frozen=True)
class JobPending:
    generation_id: str
    payload: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Unrecognized:
    payload: Any = None


ResponseShape = Union[DirectUrl, DeckExport, FileBytes, JobPending, Unrecognized]


def is_file_content_type(content_type: Optional[str]) -> bool:
    ctype = (content_type or "").lower()
    return any(marker in ctype for marker in FILE_CONTENT_MARKERS)


def _first_str(data: Dict[str, Any], keys: Tuple[str, ...]) -> Optional[str]:
    for key in keys:
        value = data.get(key)
        if isinstance(value, (str, int)) and not isinstance(value, bool) and str(value).strip():
            return str(value).strip()
    return None


def classify_response(content_type: Optional[str], body: bytes) -> ResponseShape:
    """
    Decide what the generation service handed back.

    Order matters: a file content type wins over JSON, a direct URL wins over
    ids, and a job id wins over a deck id.
    """
    if is_file_content_type(content_type):
        if not body:
            return Unrecognized(payload={"contentType": content_type, "size": 0})
        return FileBytes(data=body, content_type=content_type or PPTX_MIME)

    try:
        data = json.loads(body.decode("utf-8")) if body else None
    except (UnicodeDecodeError, ValueError):
        return FileBytes(data=body, content_type=content_type or PPTX_MIME)

    if not isinstance(data, dict):
        return Unrecognized(payload=data)

    url = _first_str(data, DIRECT_URL_KEYS)
    if url and url.startswith(("http://", "https://")):
        return DirectUrl(url=url, payload=data)

    generation_id = _first_str(data, JOB_ID_KEYS)
    if generation_id:
        return JobPending(generation_id=generation_id, payload=data)

    deck_id = _first_str(data, DECK_ID_KEYS)
    if deck_id:
        return DeckExport(deck_id=deck_id, payload=data)

    return Unrecognized(payload=data)


def _collect_urls(obj: Any, out: List[str]) -> None:
    if isinstance(obj, dict):
        for v in obj.values():
            _collect_urls(v, out)
    elif isinstance(obj, list):
        for v in obj:
            _collect_urls(v, out)
    elif isinstance(obj, str):
        if obj.startswith("http://") or obj.startswith("https://"):
            out.append(obj)


def _rank_url(url: str) -> int:
    if re.search(r"\.pptx($|[?#])", url, re.IGNORECASE):
        return 2
    if "pptx" in url.lower() or "/export" in url.lower():
        return 1
    return 0


def find_export_urls(obj: Any) -> List[str]:
    urls: List[str] = []
    _collect_urls(obj, urls)
    ranked: List[Tuple[int, str]] = []
    seen = set()
    for u in urls:
        if u in seen:
            continue
        seen.add(u)
        rank = _rank_url(u)
        if rank > 0:
            ranked.append((rank, u))
    ranked.sort(key=lambda x: x[0], reverse=True)
    return [u for _, u in ranked]


def choose_export_url(result: Dict[str, Any]) -> Optional[str]:
    """Export download URL of a completed job (these URLs are temporary)."""
    url = result.get("exportUrl")
    if isinstance(url, str) and url:
        return url

    export = result.get("export")
    if isinstance(export, dict):
        for key in ("pptx", "pdf"):
            value = export.get(key)
            if isinstance(value, str) and value:
                return value
    elif isinstance(export, str) and export:
        return export

    candidates = find_export_urls(result)
    return candidates[0] if candidates else None


def choose_view_url(result: Dict[str, Any]) -> Optional[str]:
    url = _first_str(result, DIRECT_URL_KEYS)
    if url and url.startswith(("http://", "https://")):
        return url
    return None


def choose_deck_id(result: Dict[str, Any]) -> Optional[str]:
    return _first_str(result, DECK_ID_KEYS)
