"""
Gamma API client helpers.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional, Tuple

import requests

from .errors import ServiceError
from .responses import PDF_MIME, PPTX_MIME, is_file_content_type

logger = logging.getLogger(__name__)

BASE_URL = "https://public-api.gamma.app"

SUBMIT_PATH = "/v2/generate"
STATUS_PATH = "/v1.0/generations/{generation_id}"
DECK_EXPORT_PATH = "/v1/decks/{deck_id}/export"

SUBMIT_TIMEOUT_SEC = 120
STATUS_TIMEOUT_SEC = 30
EXPORT_TIMEOUT_SEC = 60


def _headers(api_key: str, accept: str = "application/json") -> Dict[str, str]:
    return {
        "Content-Type": "application/json",
        "Authorization": f"Bearer {api_key}",
        "X-API-KEY": api_key,
        "accept": accept,
    }


def build_generation_payload(
    input_text: str,
    language: str,
    num_cards: int,
    theme_id: Optional[str] = None,
) -> Dict[str, Any]:
    options: Dict[str, Any] = {
        "language": language,
        "numCards": int(num_cards),
        "exportAs": "pptx",
    }
    if theme_id and theme_id.strip():
        options["themeId"] = theme_id.strip()

    return {"prompt": input_text, "options": options}


def submit_generation(
    session: requests.Session,
    base_url: str,
    api_key: str,
    payload: Dict[str, Any],
) -> Tuple[str, bytes]:
    """POST the generation request; returns (content type, raw body)."""
    url = f"{base_url}{SUBMIT_PATH}"
    try:
        resp = session.post(
            url,
            headers=_headers(api_key, accept="*/*"),
            data=json.dumps(payload, ensure_ascii=False).encode("utf-8"),
            timeout=SUBMIT_TIMEOUT_SEC,
        )
    except requests.RequestException as e:
        raise ServiceError(f"Gamma API request failed: {e}") from e

    if resp.status_code >= 400:
        raise ServiceError("Gamma API error", status_code=resp.status_code, body=resp.text)
    return resp.headers.get("Content-Type", ""), resp.content


def get_generation(
    session: requests.Session,
    base_url: str,
    api_key: str,
    generation_id: str,
) -> requests.Response:
    url = f"{base_url}{STATUS_PATH.format(generation_id=generation_id)}"
    try:
        return session.get(url, headers=_headers(api_key), timeout=STATUS_TIMEOUT_SEC)
    except requests.RequestException as e:
        raise ServiceError(f"Gamma status request failed: {e}") from e


def _download(session: requests.Session, url: str, headers: Optional[Dict[str, str]]) -> Optional[Tuple[bytes, str]]:
    try:
        resp = session.get(url, headers=headers, timeout=EXPORT_TIMEOUT_SEC)
        resp.raise_for_status()
    except requests.RequestException as e:
        logger.warning(f"[GammaClient] Export download failed ({url[:100]}): {e}")
        return None

    data = resp.content
    if not data:
        logger.warning(f"[GammaClient] Export download returned an empty body ({url[:100]})")
        return None

    ctype = resp.headers.get("Content-Type", "")
    if not is_file_content_type(ctype):
        # Temporary export links are sometimes served without a useful type.
        if data[:4] == b"%PDF":
            ctype = PDF_MIME
        elif data[:4] == b"PK\x03\x04" or not ctype:
            ctype = PPTX_MIME
        else:
            logger.warning(f"[GammaClient] Export download is not a deck file ({ctype}): {url[:100]}")
            return None
    return data, ctype


def download_export(session: requests.Session, url: str) -> Optional[Tuple[bytes, str]]:
    return _download(session, url, headers=None)


def download_deck_export(
    session: requests.Session,
    base_url: str,
    api_key: str,
    deck_id: str,
) -> Optional[Tuple[bytes, str]]:
    url = f"{base_url}{DECK_EXPORT_PATH.format(deck_id=deck_id)}"
    return _download(session, url, headers=_headers(api_key, accept="*/*"))
