"""
Instruction text prepended to the trainer's content before it is sent to Gamma.
"""

from __future__ import annotations

from .languages import LanguageProfile

LANGUAGE_RULES_HEADER = "IMPORTANT - LANGUAGE RULES:"

CONTENT_SEPARATOR = "---"


def build_language_rules(profile: LanguageProfile, slide_count: int) -> str:
    lang = profile.normalized_code
    direction = profile.direction
    rules = [
        "1) Do NOT translate the text. Keep all content in the exact original language.",
        (
            f"2) The presentation MUST be fully written in {lang} and MUST contain "
            f"exactly {slide_count} slides (no more than {slide_count} slides)."
        ),
        f"3) The presentation MUST use {direction} layout for {lang}.",
        (
            "4) All elements (titles, bullets, paragraphs, tables) MUST follow "
            f"the {direction} direction."
        ),
        (
            "5) Do NOT mix in words from other languages unless they are "
            "programming syntax or technical names."
        ),
        "6) The tone must stay educational and clear, suitable for teaching.",
    ]
    return LANGUAGE_RULES_HEADER + "\n\n" + "\n\n".join(rules)


def compose_input_text(prompt: str, profile: LanguageProfile, slide_count: int) -> str:
    """Rules, then the separator, then the trainer's text exactly as given."""
    rules = build_language_rules(profile, slide_count)
    return f"{rules}\n\n{CONTENT_SEPARATOR}\n\n{prompt}"
