"""
Boundary between speech capture and expense extraction.

Capture itself (microphone, interim results, vendor APIs) lives outside this
service. The extractor only depends on a source that resolves to the final
transcript of one utterance, or to None when capture was aborted.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Protocol, runtime_checkable

from expense_extractor import build_expense_record
from expense_model import ExtractionResult

logger = logging.getLogger(__name__)


@runtime_checkable
class TranscriptSource(Protocol):
    async def final_transcript(self) -> str | None:
        """Resolve once with the final transcript, or None if capture was aborted."""
        ...


class StaticTranscriptSource:
    """Source that replays a transcript already captured elsewhere (e.g. posted by a client)."""

    def __init__(self, transcript: str | None) -> None:
        self._transcript = transcript

    async def final_transcript(self) -> str | None:
        return self._transcript


async def capture_expense(source: TranscriptSource, today: date) -> ExtractionResult | None:
    """
    Await one final transcript and run extraction on it exactly once.

    Returns None without extracting when capture was aborted.
    """
    transcript = await source.final_transcript()
    if transcript is None:
        logger.info({"event": "speech_capture_aborted"})
        return None
    return build_expense_record(transcript, today)
