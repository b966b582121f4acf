"""
Summarization collaborator: document text + options -> NoteResult.
"""

from __future__ import annotations

from pydantic import ValidationError
from loguru import logger

from config import DEFAULT_MODEL, DEFAULT_TEMPERATURE, GEMINI_API_KEY, MAX_TEXT_CHARS
from modules import gemini_client
from modules.errors import SummarizationError
from modules.models import NoteResult, ProcessingOptions
from modules.prompt_engine import NOTE_SCHEMA, build_notes_prompt


def parse_note(raw: str) -> NoteResult:
    """Validate the model's JSON reply. No partial-parse fallback."""
    try:
        return NoteResult.model_validate_json(raw)
    except ValidationError as exc:
        logger.error(f"AI reply does not match the note schema: {exc.error_count()} errors")
        raise SummarizationError() from exc


class GeminiSummarizer:
    """Callable summarizer bound to one model, key and truncation budget."""

    def __init__(
        self,
        api_key: str = GEMINI_API_KEY,
        model: str = DEFAULT_MODEL,
        max_chars: int = MAX_TEXT_CHARS,
        temperature: float = DEFAULT_TEMPERATURE,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self.max_chars = max_chars
        self.temperature = temperature

    def __call__(self, text: str, options: ProcessingOptions) -> NoteResult:
        prompt = build_notes_prompt(text, options, self.max_chars)
        raw = gemini_client.generate_json(
            prompt,
            self.model,
            self.api_key,
            NOTE_SCHEMA,
            temperature=self.temperature,
        )
        return parse_note(raw)
