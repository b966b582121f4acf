"""
Pydantic schemas for request / response validation.
"""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field

from modules.models import NoteResult, SavedNote


# ═════════════════════════════════════════════════════════════════════════════
# Notes
# ═════════════════════════════════════════════════════════════════════════════

class KeywordFrequencySchema(BaseModel):
    keyword: str
    count: int
    provenance: Optional[str] = None

    class Config:
        from_attributes = True


class GenerateResponse(BaseModel):
    """Result of a generation run."""
    note: NoteResult
    saved_note: Optional[SavedNote] = Field(None, alias="savedNote")
    reading_time_minutes: int = Field(alias="readingTimeMinutes")
    keyword_stats: list[KeywordFrequencySchema] = Field(alias="keywordStats")

    class Config:
        populate_by_name = True


class NoteSummary(BaseModel):
    """Lightweight note listing for the library view."""
    id: str
    title: str
    keywords_found: list[str] = Field(alias="keywordsFound")
    created_at: int = Field(alias="createdAt")
    reading_time_minutes: int = Field(alias="readingTimeMinutes")

    class Config:
        from_attributes = True
        populate_by_name = True


# ═════════════════════════════════════════════════════════════════════════════
# Keyword analysis
# ═════════════════════════════════════════════════════════════════════════════

class AnnotateRequest(BaseModel):
    text: str
    user_keywords: list[str] = Field(default_factory=list, alias="userKeywords")
    ai_keywords: list[str] = Field(default_factory=list, alias="aiKeywords")

    class Config:
        populate_by_name = True


class SegmentSchema(BaseModel):
    kind: Literal["text", "match"]
    text: str
    keyword: Optional[str] = None
    provenance: Optional[str] = None
    is_acronym: bool = Field(False, alias="isAcronym")

    class Config:
        populate_by_name = True


class AnnotateResponse(BaseModel):
    segments: list[SegmentSchema]


class FrequencyRequest(BaseModel):
    corpus: str
    keywords: list[str]


# ═════════════════════════════════════════════════════════════════════════════
# Health
# ═════════════════════════════════════════════════════════════════════════════

class HealthResponse(BaseModel):
    """Health check response."""
    status: str = "ok"
    gemini_configured: bool = False
    database: str = "connected"
