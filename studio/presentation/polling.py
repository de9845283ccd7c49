"""
Polling of asynchronous Gamma generation jobs.

SUBMITTED -> POLLING -> COMPLETED | FAILED | TIMED_OUT
"""

from __future__ import annotations

import logging
import time
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

import requests

from .errors import GenerationFailed, GenerationTimeout, ServiceError
from .gamma_client import get_generation

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 60
DEFAULT_INTERVAL_SEC = 5

COMPLETED_STATUSES = {"completed", "success"}
FAILED_STATUSES = {"failed", "error"}


class JobState(str, Enum):
    SUBMITTED = "submitted"
    POLLING = "polling"
    COMPLETED = "completed"
    FAILED = "failed"
    TIMED_OUT = "timed_out"


TERMINAL_STATES = {JobState.COMPLETED, JobState.FAILED, JobState.TIMED_OUT}


class GenerationPoller:
    """
    Polls one generation job until it reaches a terminal state.

    The total wait is bounded twice: by max_attempts and by
    max_attempts * interval_sec measured on the injected clock.
    """

    def __init__(
        self,
        session: requests.Session,
        base_url: str,
        api_key: str,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        interval_sec: float = DEFAULT_INTERVAL_SEC,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.session = session
        self.base_url = base_url
        self.api_key = api_key
        self.max_attempts = max(1, int(max_attempts))
        self.interval_sec = max(0.0, float(interval_sec))
        self.sleep = sleep
        self.clock = clock
        self.state = JobState.SUBMITTED
        self.history: List[JobState] = [JobState.SUBMITTED]
        self.attempts = 0

    @property
    def budget_sec(self) -> float:
        return self.max_attempts * self.interval_sec

    def _move(self, state: JobState) -> None:
        if self.state in TERMINAL_STATES:
            raise RuntimeError(f"Job already finished in state {self.state.value}")
        if state != self.state:
            self.history.append(state)
        self.state = state

    def _pause(self) -> None:
        if self.attempts < self.max_attempts:
            self.sleep(self.interval_sec)

    def run(self, generation_id: str) -> Dict[str, Any]:
        self._move(JobState.POLLING)
        start = self.clock()
        last_status: Optional[str] = None

        while self.attempts < self.max_attempts:
            if self.attempts and self.budget_sec and self.clock() - start >= self.budget_sec:
                break
            self.attempts += 1

            resp = get_generation(self.session, self.base_url, self.api_key, generation_id)
            if resp.status_code == 404:
                logger.warning(
                    f"[GammaClient] Generation {generation_id} not found yet "
                    f"(attempt {self.attempts}/{self.max_attempts})"
                )
                self._pause()
                continue
            if resp.status_code >= 400:
                self._move(JobState.FAILED)
                raise ServiceError("Gamma status error", status_code=resp.status_code, body=resp.text)

            try:
                data = resp.json()
            except ValueError:
                data = {}
            if not isinstance(data, dict):
                data = {}

            last_status = str(data.get("status") or data.get("state") or "").lower()
            logger.info(
                f"[GammaClient] Polling generation {generation_id}: "
                f"status={last_status or 'unknown'} attempt={self.attempts}"
            )

            if last_status in COMPLETED_STATUSES:
                self._move(JobState.COMPLETED)
                return data
            if last_status in FAILED_STATUSES:
                self._move(JobState.FAILED)
                reason = data.get("error") or data.get("message") or "Unknown error"
                raise GenerationFailed(f"Generation {generation_id} failed: {reason}")

            self._pause()

        self._move(JobState.TIMED_OUT)
        raise GenerationTimeout(
            f"Generation {generation_id} did not complete after {self.attempts} polling attempts "
            f"({self.budget_sec:.0f}s budget, last status: {last_status or 'unknown'})"
        )
