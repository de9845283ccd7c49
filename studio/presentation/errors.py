"""
Errors raised by the presentation-generation adapter.
"""

from __future__ import annotations

from typing import Optional

MAX_BODY_EXCERPT = 500


class PresentationError(RuntimeError):
    pass


class AdapterDisabled(PresentationError):
    def __init__(self, message: str = "Gamma client not enabled: GAMMA_API_KEY is not set.") -> None:
        super().__init__(message)


class InvalidInput(PresentationError, ValueError):
    pass


class ServiceError(PresentationError):
    """Non-success answer (or no answer) from the generation service."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
    ) -> None:
        self.status_code = status_code
        self.body_excerpt = (body or "")[:MAX_BODY_EXCERPT]
        if status_code is not None:
            message = f"{message}: {status_code} {self.body_excerpt}".rstrip()
        super().__init__(message)


class GenerationFailed(ServiceError):
    pass


class GenerationTimeout(PresentationError):
    pass


class NoArtifactProduced(PresentationError):
    pass


class StorageUploadFailed(PresentationError):
    pass
