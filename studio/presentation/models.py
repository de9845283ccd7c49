from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from .policy import DEFAULT_MAX_SLIDES


class GenerationRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    prompt: str
    topic_name: str = "presentation"
    language: str = "en"
    max_slides: int = DEFAULT_MAX_SLIDES


class GenerationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    presentation_url: Optional[str] = None
    storage_path: Optional[str] = None
    raw_response: Dict[str, Any] = Field(default_factory=dict)

    def to_payload(self) -> Dict[str, Any]:
        """Shape stored by the content layer."""
        return {
            "presentationUrl": self.presentation_url,
            "storagePath": self.storage_path,
            "rawResponse": self.raw_response,
        }
