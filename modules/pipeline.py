"""
Note pipeline: PDF bytes -> normalized text -> summarization -> NoteResult.

One pipeline instance runs one generation at a time. Each step's output is
the next step's entire input, so the steps simply run in sequence.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable, Optional

from loguru import logger

from config import MAX_PDF_SIZE_MB
from modules.errors import (
    ExtractionError,
    GenerationInProgress,
    NotesError,
    SummarizationError,
)
from modules.models import NoteResult, ProcessingOptions
from modules.pdf_extractor import extract_text, validate_upload

Extractor = Callable[[bytes], "tuple[str, list[str]]"]
Summarizer = Callable[[str, ProcessingOptions], NoteResult]


class PipelineState(str, Enum):
    IDLE = "idle"
    EXTRACTING = "extracting"
    SUMMARIZING = "summarizing"
    READY = "ready"
    FAILED = "failed"


_STEP_LABELS = {
    PipelineState.EXTRACTING: "Extracting text from PDF...",
    PipelineState.SUMMARIZING: "Analyzing with AI & Generating Notes...",
}

# Errors raised by a step that are not NotesError get wrapped per step.
_STEP_ERRORS = {
    PipelineState.EXTRACTING: ExtractionError,
    PipelineState.SUMMARIZING: SummarizationError,
}


class NotePipeline:
    """
    Orchestrates a single in-flight generation request.

    States: ``IDLE -> EXTRACTING -> SUMMARIZING -> READY``; any step failure
    moves to ``FAILED`` and re-raises the typed error. Partial results are
    never kept.
    """

    def __init__(
        self,
        summarizer: Summarizer,
        extractor: Extractor = extract_text,
        max_size_mb: float = MAX_PDF_SIZE_MB,
        on_state: Optional[Callable[[PipelineState, str], None]] = None,
    ) -> None:
        self.summarizer = summarizer
        self.extractor = extractor
        self.max_size_mb = max_size_mb
        self.on_state = on_state
        self.state = PipelineState.IDLE
        self.result: Optional[NoteResult] = None
        self.error: Optional[str] = None

    @property
    def busy(self) -> bool:
        return self.state in (PipelineState.EXTRACTING, PipelineState.SUMMARIZING)

    def run(
        self,
        data: bytes,
        options: ProcessingOptions,
        filename: str | None = None,
    ) -> NoteResult:
        """
        Generate notes for an uploaded PDF.

        Raises
        ------
        InputRejected
            Not a PDF (or too large); raised before any state change.
        GenerationInProgress
            Another generation is still running on this pipeline.
        ExtractionError, SummarizationError
            The corresponding step failed; state is ``FAILED``.
        """
        self._check_idle()
        validate_upload(data, filename, self.max_size_mb)
        self._begin()

        text, _pages = self._step(PipelineState.EXTRACTING, self.extractor, data)
        return self._summarize(text, options)

    def run_text(self, text: str, options: ProcessingOptions) -> NoteResult:
        """Generate notes for text that was already extracted and normalized."""
        self._check_idle()
        self._begin()
        return self._summarize(text, options)

    def reset(self) -> None:
        if not self.busy:
            self.state = PipelineState.IDLE
            self.result = None
            self.error = None

    # ── internals ────────────────────────────────────────────────────────

    def _check_idle(self) -> None:
        if self.busy:
            raise GenerationInProgress()

    def _begin(self) -> None:
        self.result = None
        self.error = None

    def _summarize(self, text: str, options: ProcessingOptions) -> NoteResult:
        result = self._step(PipelineState.SUMMARIZING, self.summarizer, text, options)
        self.result = result
        self._enter(PipelineState.READY)
        return result

    def _step(self, state: PipelineState, func: Callable, *args):
        self._enter(state)
        try:
            return func(*args)
        except NotesError as exc:
            self._fail(exc)
            raise
        except Exception as exc:
            wrapped = _STEP_ERRORS[state]()
            self._fail(wrapped)
            raise wrapped from exc

    def _fail(self, exc: NotesError) -> None:
        self.error = exc.user_message
        logger.warning(f"Generation failed while {self.state.value}: {exc.user_message}")
        self._enter(PipelineState.FAILED)

    def _enter(self, state: PipelineState) -> None:
        logger.debug(f"Pipeline {self.state.value} -> {state.value}")
        self.state = state
        if self.on_state is not None:
            self.on_state(state, _STEP_LABELS.get(state, ""))
