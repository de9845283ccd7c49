import logging
from functools import lru_cache
from typing import Optional

from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, ConfigDict, Field

from studio.config import Settings
from studio.presentation.adapter import PresentationAdapter
from studio.presentation.errors import (
    AdapterDisabled,
    GenerationTimeout,
    InvalidInput,
    NoArtifactProduced,
    PresentationError,
    ServiceError,
    StorageUploadFailed,
)
from studio.presentation.storage import LocalStorageClient

settings = Settings.from_env()

logging.basicConfig(level=getattr(logging, settings.log_level, logging.INFO))
logger = logging.getLogger(__name__)

app = FastAPI(title="Content Studio API", description="Lesson presentation generation")

# [CORS] frontend dev servers
origins = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    "http://localhost:5173",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class PresentationRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    prompt: Optional[str] = None
    topic_name: Optional[str] = Field(default=None, alias="topicName")
    language: Optional[str] = None
    max_slides: Optional[int] = Field(default=None, alias="maxSlides")


@lru_cache(maxsize=1)
def get_adapter() -> PresentationAdapter:
    storage = LocalStorageClient(settings.storage_dir, settings.public_base_url)
    return PresentationAdapter.from_settings(settings, storage)


def _status_for(error: PresentationError) -> int:
    if isinstance(error, InvalidInput):
        return 400
    if isinstance(error, AdapterDisabled):
        return 503
    if isinstance(error, GenerationTimeout):
        return 504
    if isinstance(error, (ServiceError, NoArtifactProduced, StorageUploadFailed)):
        return 502
    return 500


@app.get("/health")
def health(adapter: PresentationAdapter = Depends(get_adapter)):
    return {"status": "ok", "gammaEnabled": adapter.is_enabled()}


# =================================================================
# Presentation generation
# =================================================================
@app.post("/ai-generation/generate/presentation", status_code=201)
def generate_presentation(
    body: PresentationRequest,
    adapter: PresentationAdapter = Depends(get_adapter),
):
    """
    Generates a deck from the trainer's text and returns the normalized result
    for the content layer to store.
    """
    try:
        result = adapter.generate_presentation(
            body.prompt,
            topic_name=body.topic_name,
            language=body.language,
            max_slides=body.max_slides,
        )
    except PresentationError as e:
        logger.error(f"[API] Presentation generation failed: {e}")
        raise HTTPException(status_code=_status_for(e), detail=str(e))

    return {
        "success": True,
        "data": result.to_payload(),
        "message": "Presentation generated successfully",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
