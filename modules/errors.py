"""
Error taxonomy for the notes pipeline.

Every error carries one human-readable ``user_message``; callers show that
message and return to an idle state.
"""

from __future__ import annotations


class NotesError(Exception):
    """Base class for all pipeline and storage failures."""

    default_message = "Something went wrong. Please try again."

    def __init__(self, user_message: str | None = None) -> None:
        self.user_message = user_message or self.default_message
        super().__init__(self.user_message)


class InputRejected(NotesError):
    """The upload (or import document) was refused before processing."""

    default_message = "Please upload a PDF file."


class GenerationInProgress(InputRejected):
    """A generation request arrived while another one is still running."""

    default_message = "Notes are already being generated. Please wait."


class ExtractionError(NotesError):
    """The PDF could not be read."""

    default_message = (
        "Failed to extract text from PDF. Please ensure it is a valid PDF file."
    )


class SummarizationError(NotesError):
    """The summarization service failed or returned an unusable reply."""

    default_message = "Failed to generate notes. Please try again."


class StorageReadError(NotesError):
    """A persisted blob could not be decoded. Recovered locally."""

    default_message = "Stored data is unreadable."
