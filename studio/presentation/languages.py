"""
Lesson language normalisation and text direction.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List

DEFAULT_LANGUAGE = "en"

RTL_LANGUAGES: List[str] = ["ar", "he", "fa", "ur"]

DIRECTION_RTL = "RIGHT-TO-LEFT"
DIRECTION_LTR = "LEFT-TO-RIGHT"

LANGUAGE_MAP: Dict[str, str] = {
    # English
    "english": "en",
    "en": "en",
    "eng": "en",
    "en-us": "en",
    "en-gb": "en",
    # Hebrew
    "hebrew": "he",
    "he": "he",
    "heb": "he",
    "he-il": "he",
    "iw": "he",
    # Arabic
    "arabic": "ar",
    "ar": "ar",
    "ara": "ar",
    "ar-sa": "ar",
    "ar-eg": "ar",
    # Persian / Farsi
    "persian": "fa",
    "farsi": "fa",
    "fa": "fa",
    "fas": "fa",
    "fa-ir": "fa",
    # Urdu
    "urdu": "ur",
    "ur": "ur",
    "urd": "ur",
    "ur-pk": "ur",
    # Spanish
    "spanish": "es",
    "es": "es",
    "spa": "es",
    "es-es": "es",
    "es-mx": "es",
    # French
    "french": "fr",
    "fr": "fr",
    "fra": "fr",
    "fr-fr": "fr",
    # German
    "german": "de",
    "de": "de",
    "deu": "de",
    "de-de": "de",
    # Italian
    "italian": "it",
    "it": "it",
    "ita": "it",
    "it-it": "it",
    # Russian
    "russian": "ru",
    "ru": "ru",
    "rus": "ru",
    "ru-ru": "ru",
    # Japanese
    "japanese": "ja",
    "ja": "ja",
    "jpn": "ja",
    "ja-jp": "ja",
    # Chinese
    "chinese": "zh",
    "zh": "zh",
    "zho": "zh",
    "zh-cn": "zh",
    "zh-tw": "zh",
    # Korean
    "korean": "ko",
    "ko": "ko",
    "kor": "ko",
    "ko-kr": "ko",
}


@dataclass(frozen=True)
class LanguageProfile:
    normalized_code: str
    is_rtl: bool

    @property
    def direction(self) -> str:
        return DIRECTION_RTL if self.is_rtl else DIRECTION_LTR


def normalize_language(language: Any) -> str:
    """
    Map "English", "he-IL", "EN-US", "Arabic" ... to a 2-3 letter code.

    Unknown base codes of 2-3 characters are passed through, anything else
    falls back to English.
    """
    if not language or not isinstance(language, str):
        return DEFAULT_LANGUAGE

    normalized = language.strip().lower()
    if normalized in LANGUAGE_MAP:
        return LANGUAGE_MAP[normalized]

    base_code = normalized.split("-")[0].split("_")[0]
    if base_code in LANGUAGE_MAP:
        return LANGUAGE_MAP[base_code]

    if 2 <= len(base_code) <= 3:
        return base_code

    return DEFAULT_LANGUAGE


def is_rtl(language: Any) -> bool:
    if not language or not isinstance(language, str):
        return False
    return normalize_language(language) in RTL_LANGUAGES


def register_rtl_language(code: str) -> None:
    normalized = normalize_language(code)
    if normalized not in RTL_LANGUAGES:
        RTL_LANGUAGES.append(normalized)


def resolve_language(language: Any) -> LanguageProfile:
    return LanguageProfile(
        normalized_code=normalize_language(language),
        is_rtl=is_rtl(language),
    )
