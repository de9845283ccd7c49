"""
Presentation-generation adapter: trainer text -> Gamma deck -> storage mirror.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

import requests

from studio.config import Settings

from .deck import inspect_deck
from .errors import AdapterDisabled, InvalidInput, NoArtifactProduced, StorageUploadFailed
from .gamma_client import (
    BASE_URL,
    build_generation_payload,
    download_deck_export,
    download_export,
    submit_generation,
)
from .languages import LanguageProfile, resolve_language
from .models import GenerationRequest, GenerationResult
from .policy import DEFAULT_MAX_SLIDES, EventSink, coerce_slide_count, enforce_slide_limit, log_event
from .polling import DEFAULT_INTERVAL_SEC, DEFAULT_MAX_ATTEMPTS, GenerationPoller
from .prompts import compose_input_text
from .responses import (
    PPTX_MIME,
    DeckExport,
    DirectUrl,
    FileBytes,
    JobPending,
    Unrecognized,
    choose_deck_id,
    choose_export_url,
    choose_view_url,
    classify_response,
)
from .storage import StorageClient, StorageUploadResult, as_upload_result, build_storage_key

logger = logging.getLogger(__name__)

EVENT_EXPORTED_SLIDES_EXCEEDED = "exported_slide_count_exceeded"


@dataclass
class DeckArtifact:
    data: bytes
    content_type: str


class PresentationAdapter:
    def __init__(
        self,
        api_key: Optional[str],
        storage_client: Optional[StorageClient] = None,
        base_url: Optional[str] = None,
        *,
        session: Optional[requests.Session] = None,
        theme_id: Optional[str] = None,
        poll_attempts: int = DEFAULT_MAX_ATTEMPTS,
        poll_interval_sec: float = DEFAULT_INTERVAL_SEC,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.time,
        on_event: Optional[EventSink] = None,
    ) -> None:
        self.api_key = api_key
        self.enabled = bool(api_key)
        if not self.enabled:
            logger.warning("[PresentationAdapter] API key not provided. Gamma integration disabled.")

        self.storage_client = storage_client
        self.base_url = (base_url or BASE_URL).rstrip("/")
        self.session = session or requests.Session()
        self.theme_id = theme_id
        self.poll_attempts = poll_attempts
        self.poll_interval_sec = poll_interval_sec
        self.sleep = sleep
        self.clock = clock
        self.on_event = on_event or log_event

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        storage_client: Optional[StorageClient] = None,
        **kwargs: Any,
    ) -> "PresentationAdapter":
        return cls(
            settings.gamma_api_key,
            storage_client,
            settings.gamma_api_url,
            theme_id=settings.gamma_theme_id,
            poll_attempts=settings.poll_attempts,
            poll_interval_sec=settings.poll_interval_sec,
            **kwargs,
        )

    def is_enabled(self) -> bool:
        return self.enabled

    def generate_presentation(
        self,
        prompt: Any,
        topic_name: Optional[str] = None,
        language: Optional[str] = None,
        max_slides: Any = DEFAULT_MAX_SLIDES,
    ) -> GenerationResult:
        if not self.enabled:
            raise AdapterDisabled()

        if not isinstance(prompt, str) or not prompt.strip():
            raise InvalidInput("Input text is required for presentation generation")

        requested_slides = coerce_slide_count(max_slides)
        slide_count = enforce_slide_limit(requested_slides, self.on_event)
        request = GenerationRequest(
            prompt=prompt,
            topic_name=topic_name if isinstance(topic_name, str) and topic_name else "presentation",
            language=language if isinstance(language, str) and language else "en",
            max_slides=requested_slides,
        )
        profile = resolve_language(request.language)

        logger.info(
            f"[PresentationAdapter] Generating presentation: topic={request.topic_name!r} "
            f"language={request.language!r} normalized={profile.normalized_code} "
            f"rtl={profile.is_rtl} requestedSlides={request.max_slides} maxSlides={slide_count} "
            f"inputTextLength={len(prompt)}"
        )

        input_text = compose_input_text(request.prompt, profile, slide_count)
        payload = build_generation_payload(input_text, profile.normalized_code, slide_count, self.theme_id)
        content_type, body = submit_generation(self.session, self.base_url, self.api_key, payload)

        shape = classify_response(content_type, body)
        view_url, artifact, raw_response = self._resolve(shape)

        if artifact is not None:
            raw_response = dict(raw_response)
            deck_info = self._check_deck(artifact, slide_count)
            if deck_info:
                raw_response["deck"] = deck_info

        upload = StorageUploadResult()
        if artifact is not None:
            upload = self._upload(artifact, request.topic_name, profile, has_fallback=bool(view_url))

        presentation_url = upload.url or view_url
        if not presentation_url:
            raise NoArtifactProduced(
                "Gamma acknowledged the request but no presentation URL or stored file could be obtained"
            )

        logger.info(
            f"[PresentationAdapter] Presentation generated: url={presentation_url} "
            f"storagePath={upload.path}"
        )
        return GenerationResult(
            presentation_url=presentation_url,
            storage_path=upload.path,
            raw_response=raw_response,
        )

    def _resolve(self, shape: Any):
        """Returns (view URL, downloaded artifact, raw response descriptor)."""
        if isinstance(shape, DirectUrl):
            return shape.url, None, shape.payload

        if isinstance(shape, FileBytes):
            artifact = DeckArtifact(data=shape.data, content_type=shape.content_type)
            return None, artifact, shape.describe()

        if isinstance(shape, DeckExport):
            logger.info(f"[PresentationAdapter] No URL in response, exporting deck {shape.deck_id}")
            artifact = self._fetch_deck(shape.deck_id)
            return None, artifact, shape.payload

        if isinstance(shape, JobPending):
            return self._resolve_job(shape)

        if isinstance(shape, Unrecognized):
            logger.warning(f"[PresentationAdapter] Unrecognized Gamma response: {str(shape.payload)[:500]}")
            payload = shape.payload if isinstance(shape.payload, dict) else {"payload": shape.payload}
            return None, None, payload

        raise TypeError(f"Unhandled response shape: {type(shape).__name__}")

    def _resolve_job(self, shape: JobPending):
        logger.info(f"[PresentationAdapter] Generation job created: {shape.generation_id}")
        poller = GenerationPoller(
            self.session,
            self.base_url,
            self.api_key,
            max_attempts=self.poll_attempts,
            interval_sec=self.poll_interval_sec,
            sleep=self.sleep,
            clock=self.clock,
        )
        data = poller.run(shape.generation_id)

        result = data.get("result") if isinstance(data.get("result"), dict) else data
        view_url = choose_view_url(result)
        raw_response = {
            "generationId": shape.generation_id,
            "status": data.get("status") or data.get("state"),
            "result": result,
        }

        artifact: Optional[DeckArtifact] = None
        export_url = choose_export_url(result)
        if export_url:
            downloaded = download_export(self.session, export_url)
            if downloaded:
                artifact = DeckArtifact(data=downloaded[0], content_type=downloaded[1])

        if artifact is None:
            deck_id = choose_deck_id(result)
            if deck_id:
                artifact = self._fetch_deck(deck_id)

        if artifact is None and not view_url:
            logger.warning(
                f"[PresentationAdapter] Generation {shape.generation_id} completed without a usable export"
            )
        return view_url, artifact, raw_response

    def _fetch_deck(self, deck_id: str) -> Optional[DeckArtifact]:
        downloaded = download_deck_export(self.session, self.base_url, self.api_key, deck_id)
        if not downloaded:
            return None
        return DeckArtifact(data=downloaded[0], content_type=downloaded[1])

    def _check_deck(self, artifact: DeckArtifact, slide_count: int) -> Optional[Dict[str, Any]]:
        if "pdf" in artifact.content_type.lower():
            return None
        try:
            info = inspect_deck(artifact.data)
        except Exception as e:
            logger.warning(f"[PresentationAdapter] Deck inspection failed, storing file as-is: {e}")
            return None
        if info and info["slideCount"] > slide_count:
            self.on_event(
                {
                    "event": EVENT_EXPORTED_SLIDES_EXCEEDED,
                    "requested": slide_count,
                    "received": info["slideCount"],
                }
            )
        return info

    def _upload(
        self,
        artifact: DeckArtifact,
        topic_name: str,
        profile: LanguageProfile,
        has_fallback: bool,
    ) -> StorageUploadResult:
        if self.storage_client is None or not self.storage_client.is_configured():
            logger.warning("[PresentationAdapter] Storage client not configured, skipping upload")
            return StorageUploadResult()

        content_type = artifact.content_type or PPTX_MIME
        timestamp_ms = int(self.clock() * 1000)
        path = build_storage_key(profile.normalized_code, topic_name, timestamp_ms, content_type)
        try:
            result = as_upload_result(self.storage_client.upload_file(artifact.data, path, content_type))
        except Exception as e:
            if not has_fallback:
                raise StorageUploadFailed(f"Failed to upload presentation to storage ({path}): {e}") from e
            logger.error(f"[PresentationAdapter] Storage upload failed ({path}), keeping Gamma URL: {e}")
            return StorageUploadResult()

        logger.info(
            f"[PresentationAdapter] Presentation uploaded to storage: path={result.path} "
            f"size={len(artifact.data)} contentType={content_type}"
        )
        return result
