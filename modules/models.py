"""
Value objects shared by the pipeline, the storage layer and both UIs.

Wire names are camelCase (``keywordsFound``, ``createdAt`` ...) to match the
summarization schema and the stored JSON blobs; Python code uses snake_case.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from modules.keywords import parse_custom_keywords


# ═════════════════════════════════════════════════════════════════════════════
# Generation request
# ═════════════════════════════════════════════════════════════════════════════

class ProcessingOptions(BaseModel):
    """What the user asked the summarizer to extract."""
    extract_introduction: bool = Field(True, alias="extractIntroduction")
    extract_summary: bool = Field(True, alias="extractSummary")
    extract_conclusion: bool = Field(True, alias="extractConclusion")
    custom_keywords: str = Field("", alias="customKeywords")
    summarization_level: Literal["brief", "detailed"] = Field(
        "detailed", alias="summarizationLevel"
    )

    class Config:
        populate_by_name = True

    @property
    def user_keywords(self) -> list[str]:
        return parse_custom_keywords(self.custom_keywords)


# ═════════════════════════════════════════════════════════════════════════════
# Notes
# ═════════════════════════════════════════════════════════════════════════════

class NoteSection(BaseModel):
    heading: str
    content: str

    class Config:
        frozen = True


class NoteResult(BaseModel):
    """Structured notes produced by one summarization call."""
    title: str
    sections: list[NoteSection]
    keywords_found: list[str] = Field(alias="keywordsFound")

    class Config:
        populate_by_name = True
        frozen = True

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True)


class SavedNote(NoteResult):
    """A NoteResult after the library attached an id and timestamp."""
    id: str
    created_at: int = Field(alias="createdAt")          # epoch milliseconds
    reading_time_minutes: int = Field(0, alias="readingTimeMinutes")

    def as_note(self) -> NoteResult:
        return NoteResult(
            title=self.title,
            sections=list(self.sections),
            keywords_found=list(self.keywords_found),
        )


# ═════════════════════════════════════════════════════════════════════════════
# Settings & session
# ═════════════════════════════════════════════════════════════════════════════

class AppSettings(BaseModel):
    auto_save: bool = Field(False, alias="autoSave")
    theme: Literal["light", "dark"] = "light"

    class Config:
        populate_by_name = True


class BackupDocument(BaseModel):
    """Single-file export of the whole library."""
    notes: list[SavedNote]
    settings: AppSettings
    exported_at: str = Field(alias="exportedAt")

    class Config:
        populate_by_name = True


class User(BaseModel):
    email: str
    name: str
